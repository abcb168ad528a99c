from sqlalchemy import Column, BigInteger, String
from models.base import Base


class Book(Base):
    """
    Relational landing table for books loaded from the input file.

    The primary key is the book id taken from the source, so loading the
    same file twice fails on the second insert instead of duplicating rows.
    """
    __tablename__ = "books"

    id = Column(BigInteger, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
