"""
Data Models Package
Product entities and mapping configuration.
"""

from .product import (
    CsvProduct,
    Price,
    Inventory,
    SeoInfo,
    EditorialReview,
    Category,
    PropertyValue,
)
from .mapping import MappingConfiguration, PropertyMap, ImportInfo, MULTIVALUE_MARKER

__all__ = [
    "CsvProduct",
    "Price",
    "Inventory",
    "SeoInfo",
    "EditorialReview",
    "Category",
    "PropertyValue",
    "MappingConfiguration",
    "PropertyMap",
    "ImportInfo",
    "MULTIVALUE_MARKER",
]
