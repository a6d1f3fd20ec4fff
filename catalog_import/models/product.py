"""
Product entity models for catalog CSV import.
Flat fields mirror CSV columns; nested objects are derived from them.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import List
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

TRUE_VALUES = ["1", "true", "yes", "y", "on"]


def parse_decimal(v) -> Decimal:
    """
    Parse a price using '.' as the decimal separator.
    Empty or unparseable input yields Decimal("0").
    """
    if v is None or v == "":
        return Decimal("0")

    if isinstance(v, Decimal):
        return v if v.is_finite() else Decimal("0")

    # Remove currency symbols and whitespace
    text = re.sub(r"[£$€\s]", "", str(v))
    if not text:
        return Decimal("0")

    try:
        value = Decimal(text)
    except InvalidOperation:
        logger.debug(f"Unparseable decimal {v!r}, using 0")
        return Decimal("0")

    if not value.is_finite():
        logger.debug(f"Non-finite decimal {v!r}, using 0")
        return Decimal("0")
    return value


def parse_int(v) -> int:
    """Parse an integer quantity. Empty or unparseable input yields 0."""
    if v is None or v == "":
        return 0

    if isinstance(v, bool):
        return int(v)

    try:
        return int(str(v).strip())
    except ValueError:
        logger.debug(f"Unparseable integer {v!r}, using 0")
        return 0


def parse_bool(v) -> bool:
    """Parse various boolean representations. Anything unrecognised is False."""
    if isinstance(v, bool):
        return v
    if v is None:
        return False
    return str(v).strip().lower() in TRUE_VALUES


class Price(BaseModel):
    """List/sale price pair in one currency."""

    list: Decimal = Decimal("0")
    sale: Decimal = Decimal("0")
    currency: str = ""

    @field_validator("list", "sale", mode="before")
    @classmethod
    def clean_price(cls, v):
        return parse_decimal(v)


class Inventory(BaseModel):
    """Stock level for the product."""

    in_stock_quantity: int = 0

    @field_validator("in_stock_quantity", mode="before")
    @classmethod
    def parse_stock_quantity(cls, v):
        return parse_int(v)


class SeoInfo(BaseModel):
    semantic_url: str = ""
    page_title: str = ""
    meta_description: str = ""


class EditorialReview(BaseModel):
    content: str = ""
    review_type: str = ""


class Category(BaseModel):
    path: str = ""


class PropertyValue(BaseModel):
    """
    Named custom property collected from a property column.
    Multivalue properties keep their delimiter-joined text verbatim.
    """

    property_name: str
    value: str
    is_multivalue: bool = False

    def split(self, delimiter: str = ",") -> List[str]:
        """Return the individual tokens of a multivalue property."""
        if not self.is_multivalue:
            return [self.value]
        return [token.strip() for token in self.value.split(delimiter) if token.strip()]


class CsvProduct(BaseModel):
    """
    Product entity produced from one CSV record.
    Field aliases are the entity column names used by mapping configurations.
    """

    model_config = ConfigDict(
        populate_by_name=True,  # Allow field names as well as aliases
    )

    # === IDENTITY ===
    id: str = Field(default="", alias="Id")
    sku: str = Field(default="", alias="Sku")
    name: str = Field(default="", alias="Name")
    category_id: str = Field(default="", alias="CategoryId")
    gtin: str = Field(default="", alias="Gtin")
    main_product_id: str = Field(default="", alias="MainProductId")

    # === CLASSIFICATION ===
    vendor: str = Field(default="", alias="Vendor")
    product_type: str = Field(default="", alias="ProductType")
    shipping_type: str = Field(default="", alias="ShippingType")
    download_type: str = Field(default="", alias="DownloadType")

    # === FLAGS ===
    has_user_agreement: bool = Field(default=False, alias="HasUserAgreement")
    is_buyable: bool = Field(default=False, alias="IsBuyable")
    track_inventory: bool = Field(default=False, alias="TrackInventory")

    # === PRICING & STOCK (raw text, parsed into price/inventory) ===
    list_price: str = Field(default="", alias="ListPrice")
    sale_price: str = Field(default="", alias="SalePrice")
    currency: str = Field(default="", alias="Currency")
    quantity: str = Field(default="", alias="Quantity")

    # === SEO ===
    seo_url: str = Field(default="", alias="SeoUrl")
    seo_title: str = Field(default="", alias="SeoTitle")
    seo_description: str = Field(default="", alias="SeoDescription")

    # === REVIEW ===
    review: str = Field(default="", alias="Review")
    review_type: str = Field(default="", alias="ReviewType")

    # === CATEGORIZATION ===
    category_path: str = Field(default="", alias="CategoryPath")

    # === DERIVED (not in CSV) ===
    price: Price = Field(default_factory=Price)
    inventory: Inventory = Field(default_factory=Inventory)
    seo_info: SeoInfo = Field(default_factory=SeoInfo)
    editorial_review: EditorialReview = Field(default_factory=EditorialReview)
    category: Category = Field(default_factory=Category)
    property_values: List[PropertyValue] = Field(default_factory=list)

    @field_validator("has_user_agreement", "is_buyable", "track_inventory", mode="before")
    @classmethod
    def convert_to_bool(cls, v):
        return parse_bool(v)

    @classmethod
    def fixed_field_names(cls) -> List[str]:
        """Entity column names of every fixed field, in declaration order."""
        return [info.alias for info in cls.model_fields.values() if info.alias]

    def get_property(self, property_name: str):
        """Find a collected property value by name."""
        for property_value in self.property_values:
            if property_value.property_name == property_name:
                return property_value
        return None
