from batch.writers.csv_writer import CSVItemWriter
from batch.writers.sql_writer import SQLItemWriter
from batch.writers.mongo_writer import MongoItemWriter

__all__ = ["CSVItemWriter", "SQLItemWriter", "MongoItemWriter"]
