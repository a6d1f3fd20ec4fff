"""
Tests for streaming CSV records.
"""

import pytest

from catalog_import.errors import CsvSourceError
from catalog_import.ingestion.csv_reader import CsvRecordReader, RawRecord, detect_csv_encoding


def test_raw_record_value_trims_and_treats_empty_as_absent():
    record = RawRecord(row_number=1, data={"Sku": "  X1 ", "Name": "", "Price": float("nan")})

    assert record.value("Sku") == "X1"
    assert record.value("Name") is None
    assert record.value("Price") is None
    assert record.value("Missing") is None
    assert record.value(None) is None
    assert record.columns == ["Sku", "Name", "Price"]


def test_reader_yields_records_in_file_order(test_data_dir):
    reader = CsvRecordReader(
        test_data_dir / "product-propertyvalues.csv", encoding="utf-8", chunk_size=1
    )

    records = list(reader)

    assert [r.row_number for r in records] == [1, 2]
    assert [r.value("Sku") for r in records] == ["CBLK21113", "CBLK21114"]
    assert records[0].value("ProductProperty_Multivalue") == (
        "Product-1-multivalue-1, Product-1-multivalue-2"
    )


def test_reader_keeps_values_as_text(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text("Sku,Quantity,Gtin\n001,5,NA\n", encoding="utf-8")

    record = next(iter(CsvRecordReader(path, encoding="utf-8")))

    assert record.value("Sku") == "001"
    assert record.value("Quantity") == "5"
    assert record.value("Gtin") == "NA"


def test_reader_uses_configured_delimiter(test_data_dir):
    reader = CsvRecordReader(test_data_dir / "product-semicolon.csv", delimiter=";", encoding="utf-8")

    records = list(reader)

    assert reader.columns() == ["Sku", "Name", "ListPrice", "Color", "Sizes_Multivalue"]
    assert records[0].value("Sku") == "SKU-1"
    assert records[0].value("Name") == "Trail Runner"
    assert records[0].value("Sizes_Multivalue") == "S, M, L"
    assert records[1].value("Color") is None


def test_reader_missing_file(tmp_path):
    reader = CsvRecordReader(tmp_path / "missing.csv")

    with pytest.raises(CsvSourceError, match="file not found"):
        list(reader)
    with pytest.raises(CsvSourceError):
        reader.columns()


def test_reader_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(CsvSourceError) as exc_info:
        CsvRecordReader(path, encoding="utf-8").columns()

    assert exc_info.value.details == {"path": str(path)}


def test_detect_ascii_as_utf8(tmp_path):
    path = tmp_path / "ascii.csv"
    path.write_bytes(b"Sku,Name\nX1,Plain\n")

    assert detect_csv_encoding(path) == "utf-8"


def test_detect_utf8_bom(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes("Sku,Name\nX1,Café\n".encode("utf-8-sig"))

    assert detect_csv_encoding(path).lower() == "utf-8-sig"


def test_reader_detects_encoding_when_not_given(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes("Sku,Name\nX1,Café\n".encode("utf-8-sig"))

    reader = CsvRecordReader(path)
    records = list(reader)

    assert reader.columns() == ["Sku", "Name"]
    assert records[0].value("Name") == "Café"


def test_extra_field_in_first_row_is_an_error(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text("Sku,Name,ListPrice\nSKU-1,Acme, Inc.,10.99\nSKU-2,Other,5\n", encoding="utf-8")

    with pytest.raises(CsvSourceError):
        list(CsvRecordReader(path, encoding="utf-8"))


def test_extra_field_in_later_row_is_an_error(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text("Sku,Name,ListPrice\nSKU-1,Acme,10.99\nSKU-2,Other, Ltd.,5\n", encoding="utf-8")

    with pytest.raises(CsvSourceError):
        list(CsvRecordReader(path, encoding="utf-8"))


def test_quoted_delimiter_keeps_columns_aligned(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text('Sku,Name,ListPrice\nSKU-1,"Acme, Inc.",10.99\n', encoding="utf-8")

    record = next(iter(CsvRecordReader(path, encoding="utf-8")))

    assert record.value("Sku") == "SKU-1"
    assert record.value("Name") == "Acme, Inc."
    assert record.value("ListPrice") == "10.99"


def test_raw_record_value_accepts_non_scalar_values():
    record = RawRecord(row_number=1, data={"Sizes_Multivalue": ["S", "M"], "Quantity": 5})

    assert record.value("Sizes_Multivalue") == str(["S", "M"])
    assert record.value("Quantity") == "5"
