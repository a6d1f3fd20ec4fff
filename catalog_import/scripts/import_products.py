#!/usr/bin/env python3
"""
Product Import Script
Maps a product CSV file onto catalog products and writes them as JSON lines.

Usage:
    python -m catalog_import.scripts.import_products data/products.csv --output products.jsonl
    python -m catalog_import.scripts.import_products data/products.csv --mapping mapping.json
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from catalog_import.config.settings import get_settings
from catalog_import.errors import CatalogImportError
from catalog_import.ingestion.csv_reader import CsvRecordReader
from catalog_import.ingestion.importer import CsvProductImporter
from catalog_import.models.mapping import ImportInfo, MappingConfiguration

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import catalog products from CSV")
    parser.add_argument("csv_path", type=str, help="Path to CSV file containing product data")
    parser.add_argument(
        "--mapping",
        type=str,
        default=None,
        help="JSON mapping configuration (default: built-in default mapping)",
    )
    parser.add_argument(
        "--delimiter", type=str, default=None, help="Field delimiter (default: from settings)"
    )
    parser.add_argument(
        "--encoding", type=str, default=None, help="File encoding (default: auto-detect)"
    )
    parser.add_argument(
        "--auto-map",
        action="store_true",
        help="Bind fields to header columns by name; other columns become properties",
    )
    parser.add_argument(
        "--output", type=str, default=None, help="Write products as JSON lines to this file"
    )
    return parser


def load_configuration(args, default_delimiter: str) -> MappingConfiguration:
    if args.mapping:
        configuration = MappingConfiguration.from_json_file(args.mapping)
    else:
        configuration = MappingConfiguration.get_default_configuration()
        configuration.delimiter = default_delimiter

    if args.delimiter:
        configuration.delimiter = args.delimiter
    return configuration


def main(argv=None) -> int:
    """Main function to run CSV import."""
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error(f"Invalid import settings: {e}")
        return 1

    # Configure logging
    logging.basicConfig(
        level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Validate CSV file exists
    csv_path = Path(args.csv_path)
    if not csv_path.exists():
        logger.error(f"CSV file not found: {csv_path}")
        return 1

    try:
        configuration = load_configuration(args, settings.default_delimiter)
        configuration.validate_mappings()

        if args.auto_map:
            reader = CsvRecordReader(
                csv_path,
                delimiter=configuration.delimiter,
                encoding=args.encoding or settings.encoding,
            )
            configuration.auto_map(reader.columns())
            logger.info(f"CSV layout etag: {configuration.etag}")

        importer = CsvProductImporter(
            ImportInfo(configuration=configuration, file_path=str(csv_path)),
            settings=settings,
            encoding=args.encoding,
        )

        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as handle:
                for product in importer.read_products():
                    handle.write(product.model_dump_json() + "\n")
            logger.info(f"Wrote {importer.stats['mapped']} products to {output_path}")
        else:
            for product in importer.read_products():
                logger.info(f"Row {importer.stats['total_rows']}: {product.sku} {product.name}")

    except (CatalogImportError, FileNotFoundError, ValidationError) as e:
        logger.error(f"Import failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
