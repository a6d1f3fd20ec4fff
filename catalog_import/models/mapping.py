"""
Mapping configuration models.
Declarative description of how CSV columns correspond to product fields.
"""

import hashlib
import json
import logging
from collections import Counter
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from catalog_import.errors import MappingConfigurationError
from catalog_import.models.product import CsvProduct

logger = logging.getLogger(__name__)

# Suffix marking a property column whose value is a delimiter-joined list
MULTIVALUE_MARKER = "_Multivalue"

# Fixed fields flagged as required in the default configuration
REQUIRED_COLUMNS = ["Sku", "Name", "CategoryPath"]


def is_multivalue_column(column_name: str) -> bool:
    """Check whether a property column carries a delimiter-joined list."""
    return column_name.endswith(MULTIVALUE_MARKER)


class PropertyMap(BaseModel):
    """
    Binding of one fixed product field to its source.

    The source column wins when it has a non-empty value; custom_value is
    the fallback.
    """

    entity_column_name: str
    csv_column_name: Optional[str] = None
    custom_value: Optional[str] = None
    is_required: bool = False


class MappingConfiguration(BaseModel):
    """
    Mapping rules for one import.

    Example:
        config = MappingConfiguration.get_default_configuration()
        config.property_csv_columns = ["Color", "Sizes_Multivalue"]
        config.get_property_map("CategoryPath").custom_value = "Shoes"
    """

    delimiter: str = ","
    csv_columns: List[str] = Field(default_factory=list)
    property_csv_columns: List[str] = Field(default_factory=list)
    property_maps: List[PropertyMap] = Field(default_factory=list)
    etag: Optional[str] = None

    @classmethod
    def get_default_configuration(cls) -> "MappingConfiguration":
        """
        Build a configuration with one entry per fixed field.
        Every entry reads the CSV column named after the field.
        """
        property_maps = [
            PropertyMap(
                entity_column_name=column,
                csv_column_name=column,
                is_required=column in REQUIRED_COLUMNS,
            )
            for column in CsvProduct.fixed_field_names()
        ]
        return cls(property_maps=property_maps)

    def get_property_map(self, entity_column_name: str) -> Optional[PropertyMap]:
        """Find the mapping entry for a fixed field."""
        for property_map in self.property_maps:
            if property_map.entity_column_name == entity_column_name:
                return property_map
        return None

    def auto_map(self, csv_columns: Sequence[str]) -> None:
        """
        Bind fixed fields to the CSV header.

        A field is bound to the column with exactly its name; otherwise it
        loses its column binding and keeps only its custom value. Columns not
        bound to a fixed field become property columns, in header order.
        """
        self.csv_columns = list(csv_columns)

        for property_map in self.property_maps:
            if property_map.entity_column_name in self.csv_columns:
                property_map.csv_column_name = property_map.entity_column_name
                property_map.custom_value = None
            else:
                property_map.csv_column_name = None

        mapped_columns = {
            property_map.csv_column_name
            for property_map in self.property_maps
            if property_map.csv_column_name
        }
        self.property_csv_columns = [
            column for column in self.csv_columns if column not in mapped_columns
        ]
        self.etag = self.compute_etag(self.csv_columns)

        logger.info(
            f"Auto-mapped {len(mapped_columns)} fixed fields, "
            f"{len(self.property_csv_columns)} property columns"
        )

    @staticmethod
    def compute_etag(csv_columns: Sequence[str]) -> str:
        """Identify a CSV layout by hashing its column names."""
        return hashlib.md5(";".join(csv_columns).encode("utf-8")).hexdigest()

    def validate_mappings(self) -> None:
        """
        Check the configuration for programming errors.

        Not called during mapping; callers that want fail-fast behaviour
        invoke it once after building the configuration.

        Raises:
            MappingConfigurationError: On a bad delimiter or a missing,
                duplicate, or unknown fixed-field entry.
        """
        if len(self.delimiter) != 1:
            raise MappingConfigurationError(
                f"Delimiter must be a single character, got {self.delimiter!r}",
                details={"delimiter": self.delimiter},
            )

        fixed_fields = CsvProduct.fixed_field_names()
        counts = Counter(property_map.entity_column_name for property_map in self.property_maps)

        unknown = [name for name in counts if name not in fixed_fields]
        if unknown:
            raise MappingConfigurationError(
                f"Unknown entity columns: {unknown}", details={"unknown": unknown}
            )

        duplicates = [name for name, count in counts.items() if count > 1]
        if duplicates:
            raise MappingConfigurationError(
                f"Duplicate mapping entries: {duplicates}", details={"duplicates": duplicates}
            )

        missing = [name for name in fixed_fields if name not in counts]
        if missing:
            raise MappingConfigurationError(
                f"Missing mapping entries: {missing}", details={"missing": missing}
            )

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "MappingConfiguration":
        """Load a configuration saved with to_json_file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Mapping configuration file not found: {path}")

        with open(path, "r", encoding="utf-8") as handle:
            return cls.model_validate_json(handle.read())

    def to_json_file(self, path: Union[str, Path]) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(self.model_dump(), handle, indent=2, ensure_ascii=False)


class ImportInfo(BaseModel):
    """A source file together with the configuration used to import it."""

    configuration: MappingConfiguration = Field(
        default_factory=MappingConfiguration.get_default_configuration
    )
    file_path: Optional[str] = None
