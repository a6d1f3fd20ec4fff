"""
CSV Product Import Pipeline
Streams a CSV file through the record mapper and tracks statistics.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from catalog_import.config.settings import ImportSettings, get_settings
from catalog_import.errors import CatalogImportError
from catalog_import.ingestion.csv_reader import CsvRecordReader
from catalog_import.ingestion.product_mapper import CsvProductMapper
from catalog_import.models.mapping import ImportInfo
from catalog_import.models.product import CsvProduct

logger = logging.getLogger(__name__)


class CsvProductImporter:
    """
    Main CSV import pipeline.
    Handles chunked reading, header checks, and per-record mapping.
    """

    def __init__(
        self,
        import_info: ImportInfo,
        settings: Optional[ImportSettings] = None,
        encoding: Optional[str] = None,
    ):
        """
        Initialize the importer.

        Args:
            import_info: Source file and mapping configuration
            settings: Import settings; the cached environment settings when None
            encoding: File encoding override
        """
        if not import_info.file_path:
            raise CatalogImportError("Import info has no file path")

        self.import_info = import_info
        self.settings = settings or get_settings()

        configuration = import_info.configuration
        self.reader = CsvRecordReader(
            import_info.file_path,
            delimiter=configuration.delimiter,
            encoding=encoding or self.settings.encoding,
            chunk_size=self.settings.chunk_size,
        )
        self.mapper = CsvProductMapper(configuration)

        # Statistics tracking
        self.stats: Dict[str, Any] = {
            "total_rows": 0,
            "mapped": 0,
            "properties": 0,
            "missing_columns": [],
            "processing_time": 0.0,
        }

    def check_columns(self) -> List[str]:
        """Return configured csv_columns that are absent from the file header."""
        header = set(self.reader.columns())
        missing = [
            column for column in self.import_info.configuration.csv_columns if column not in header
        ]
        if missing:
            logger.warning(f"Columns missing from {self.reader.file_path.name}: {missing}")
        self.stats["missing_columns"] = missing
        return missing

    def read_products(self) -> Iterator[CsvProduct]:
        """
        Stream products from the file.

        Yields:
            One CsvProduct per record, in file order
        """
        start_time = datetime.now()
        logger.info(f"Starting import for {self.import_info.file_path}")

        self.check_columns()

        for record in self.reader:
            self.stats["total_rows"] += 1
            product = self.mapper.map_record(record)
            self.stats["mapped"] += 1
            self.stats["properties"] += len(product.property_values)

            if self.stats["total_rows"] % self.settings.chunk_size == 0:
                logger.info(f"Progress: {self.stats['total_rows']} rows mapped")

            yield product

        self.stats["processing_time"] = (datetime.now() - start_time).total_seconds()
        logger.info(f"Import completed in {self.stats['processing_time']:.1f} seconds")
        self.log_statistics()

    def import_all(self) -> List[CsvProduct]:
        """Read every product into a list."""
        return list(self.read_products())

    def log_statistics(self):
        """Log current statistics."""
        logger.info("=== Import Statistics ===")
        logger.info(f"Rows: {self.stats['total_rows']}")
        logger.info(f"Mapped: {self.stats['mapped']}")
        logger.info(f"Property values: {self.stats['properties']}")

        if self.stats["missing_columns"]:
            logger.warning(f"Missing columns: {self.stats['missing_columns']}")
