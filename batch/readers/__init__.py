from batch.readers.csv_reader import CSVItemReader
from batch.readers.sql_reader import SQLItemReader
from batch.readers.mongo_reader import MongoItemReader

__all__ = ["CSVItemReader", "SQLItemReader", "MongoItemReader"]
