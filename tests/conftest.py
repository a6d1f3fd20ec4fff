"""
Pytest configuration and shared fixtures
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_import.config.settings import ImportSettings
from catalog_import.ingestion.csv_reader import CsvRecordReader
from catalog_import.ingestion.product_mapper import CsvProductMapper
from catalog_import.models.mapping import MappingConfiguration


@pytest.fixture(scope="session")
def test_data_dir():
    """Return path to test data directory."""
    return Path(__file__).parent / "data"


@pytest.fixture
def default_configuration():
    """Fresh default mapping configuration."""
    return MappingConfiguration.get_default_configuration()


@pytest.fixture
def import_settings():
    """Settings that ignore the environment's .env file."""
    return ImportSettings(_env_file=None, encoding="utf-8", chunk_size=2)


@pytest.fixture
def read_products(test_data_dir):
    """Map every record of a test data file with the given configuration."""

    def _read(file_name, configuration):
        reader = CsvRecordReader(
            test_data_dir / file_name,
            delimiter=configuration.delimiter,
            encoding="utf-8",
        )
        return list(CsvProductMapper(configuration).map_records(reader))

    return _read


@pytest.fixture
def sample_csv_data():
    """Sample CSV data for testing."""
    return """Sku,Name,ListPrice,Currency,Color
SKU-1,Product A,10.99,EUR,Red
SKU-2,Product B,20.99,EUR,
SKU-3,Product C,30.99,USD,Blue
"""
