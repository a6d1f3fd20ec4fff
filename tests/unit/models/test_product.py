"""
Tests for product entity models and value coercion.
"""

from decimal import Decimal

from catalog_import.models.product import (
    CsvProduct,
    Price,
    PropertyValue,
    parse_bool,
    parse_decimal,
    parse_int,
)


def test_parse_decimal():
    assert parse_decimal("123.4") == Decimal("123.4")
    assert parse_decimal(" $ 5 ") == Decimal("5")
    assert parse_decimal("") == Decimal("0")
    assert parse_decimal(None) == Decimal("0")
    assert parse_decimal("abc") == Decimal("0")
    assert parse_decimal("Infinity") == Decimal("0")


def test_parse_int():
    assert parse_int("5") == 5
    assert parse_int(" 7 ") == 7
    assert parse_int("5.5") == 0
    assert parse_int("") == 0
    assert parse_int(None) == 0


def test_parse_bool():
    assert parse_bool("TRUE") is True
    assert parse_bool("Y") is True
    assert parse_bool("0") is False
    assert parse_bool(None) is False


def test_product_accepts_entity_column_names():
    product = CsvProduct(**{"Sku": "X1", "CategoryPath": "A", "TrackInventory": "yes"})

    assert product.sku == "X1"
    assert product.category_path == "A"
    assert product.track_inventory is True


def test_product_accepts_field_names():
    product = CsvProduct(sku="X1", is_buyable="1")

    assert product.sku == "X1"
    assert product.is_buyable is True


def test_fixed_field_names_exclude_nested_objects():
    names = CsvProduct.fixed_field_names()

    assert names[:3] == ["Id", "Sku", "Name"]
    assert "CategoryPath" in names
    assert "price" not in names
    assert "property_values" not in names


def test_price_coerces_text():
    assert Price(list="10.5", sale="", currency="EUR") == Price(
        list=Decimal("10.5"), sale=Decimal("0"), currency="EUR"
    )


def test_single_value_property_split():
    assert PropertyValue(property_name="Color", value="Red, Blue").split() == ["Red, Blue"]


def test_get_property():
    product = CsvProduct(property_values=[PropertyValue(property_name="Color", value="Red")])

    assert product.get_property("Color").value == "Red"
    assert product.get_property("Size") is None


def test_product_json_uses_field_names():
    payload = CsvProduct(sku="X1", list_price="2.5").model_dump(mode="json")

    assert payload["sku"] == "X1"
    assert payload["price"]["list"] == "0"
