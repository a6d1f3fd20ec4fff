"""
Product Record Mapper
Turns one raw CSV record into a fully populated CsvProduct.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Union

from catalog_import.ingestion.csv_reader import RawRecord
from catalog_import.models.mapping import MappingConfiguration, is_multivalue_column
from catalog_import.models.product import (
    Category,
    CsvProduct,
    EditorialReview,
    Inventory,
    Price,
    PropertyValue,
    SeoInfo,
)

logger = logging.getLogger(__name__)

RecordLike = Union[RawRecord, Mapping[str, Any]]


class CsvProductMapper:
    """
    Maps raw records to products according to a MappingConfiguration.

    Mapping is a pure function of configuration and record: it does no I/O,
    keeps no state between records, and never raises for bad data.
    Unparseable numbers and flags fall back to zero/False.
    """

    def __init__(self, configuration: MappingConfiguration):
        """
        Initialize the mapper.

        Args:
            configuration: Mapping rules. A private copy is kept, so later
                changes by the caller do not affect this mapper.
        """
        self.configuration = configuration.model_copy(deep=True)
        self._fixed_fields = set(CsvProduct.fixed_field_names())

        unknown = [
            property_map.entity_column_name
            for property_map in self.configuration.property_maps
            if property_map.entity_column_name not in self._fixed_fields
        ]
        if unknown:
            logger.debug(f"Ignoring mapping entries for unknown fields: {unknown}")

    def map_record(self, record: RecordLike) -> CsvProduct:
        """
        Map a single record.

        Args:
            record: RawRecord or plain column -> value mapping

        Returns:
            Product with flat fields, nested objects and property values
        """
        if not isinstance(record, RawRecord):
            record = RawRecord(row_number=0, data=dict(record))

        # Pass 1: flat fields
        product = CsvProduct(**self._resolve_fixed_fields(record))

        # Pass 2: nested objects from the resolved flat fields
        return product.model_copy(
            update={
                **self._derive_nested(product),
                "property_values": self._collect_properties(record),
            }
        )

    def map_records(self, records: Iterable[RecordLike]) -> Iterator[CsvProduct]:
        """Lazily map records in source order."""
        for record in records:
            yield self.map_record(record)

    def _resolve_fixed_fields(self, record: RawRecord) -> Dict[str, str]:
        """
        Resolve each fixed field: source value first, then custom value.
        Fields with neither keep their zero value. For duplicate entries
        the last one wins, even when it resolves to nothing.
        """
        values = {}
        for property_map in self.configuration.property_maps:
            if property_map.entity_column_name not in self._fixed_fields:
                continue

            value = record.value(property_map.csv_column_name)
            if value is None and property_map.custom_value is not None:
                value = property_map.custom_value

            values[property_map.entity_column_name] = value

        return {name: value for name, value in values.items() if value is not None}

    def _derive_nested(self, product: CsvProduct) -> Dict[str, Any]:
        """Build nested objects from flat fields already on the product."""
        return {
            "price": Price(
                list=product.list_price,
                sale=product.sale_price,
                currency=product.currency,
            ),
            "inventory": Inventory(in_stock_quantity=product.quantity),
            "seo_info": SeoInfo(
                semantic_url=product.seo_url,
                page_title=product.seo_title,
                meta_description=product.seo_description,
            ),
            "editorial_review": EditorialReview(
                content=product.review,
                review_type=product.review_type,
            ),
            "category": Category(path=product.category_path),
        }

    def _collect_properties(self, record: RawRecord) -> List[PropertyValue]:
        """Collect non-empty property columns in configured order."""
        property_values = []
        for column in self.configuration.property_csv_columns:
            value = record.value(column)
            if value is None:
                continue

            # Multivalue content is kept as the joined source text
            property_values.append(
                PropertyValue(
                    property_name=column,
                    value=value,
                    is_multivalue=is_multivalue_column(column),
                )
            )

        return property_values
