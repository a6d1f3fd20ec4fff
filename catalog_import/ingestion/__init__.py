"""
Data Ingestion Package
Handles CSV reading and mapping of records onto product entities.
"""

from .csv_reader import CsvRecordReader, RawRecord, detect_csv_encoding
from .product_mapper import CsvProductMapper
from .importer import CsvProductImporter

__all__ = [
    "CsvRecordReader",
    "RawRecord",
    "detect_csv_encoding",
    "CsvProductMapper",
    "CsvProductImporter",
]
