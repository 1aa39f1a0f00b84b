"""Tests for CSV reports."""

import csv
import io
from datetime import UTC, datetime

from stockledger.core.entities.inventory import ItemType, TransactionType
from stockledger.infrastructure.exports import movement_history, report_filename, stock_report


def _rows(text: str) -> list[list[str]]:
    assert text.startswith("\ufeff")
    return list(csv.reader(io.StringIO(text[1:], newline="")))


class TestStockReport:
    def test_parts(self, make_item, make_transaction):
        part = make_item(
            code="CT1",
            name="BOLT",
            drawing_number="D-1",
            transactions=[make_transaction(TransactionType.INBOUND, 5)],
        )
        product = make_item(type=ItemType.PRODUCT, code="P1")

        text = stock_report([part, product], ItemType.PART)

        assert _rows(text) == [["Code", "Name", "Drawing No.", "Stock"], ["CT1", "BOLT", "D-1", "5"]]

    def test_products_and_quoting(self, make_item):
        product = make_item(type=ItemType.PRODUCT, code="P1", name='PUMP, "XL"')

        text = stock_report([product], ItemType.PRODUCT)

        assert '"PUMP, ""XL"""' in text
        assert "\r\n" in text
        assert _rows(text)[1] == ["P1", 'PUMP, "XL"', "0"]


class TestMovementHistory:
    def test_product_history_newest_first(self, make_item, make_transaction):
        item = make_item(
            type=ItemType.PRODUCT,
            transactions=[
                make_transaction(
                    TransactionType.INBOUND,
                    when=datetime(2024, 3, 1, 8, 0, tzinfo=UTC),
                    serial_number="SN00001",
                ),
                make_transaction(
                    TransactionType.OUTBOUND,
                    when=datetime(2024, 3, 2, 14, 5, 9, tzinfo=UTC),
                    serial_number="SN00001",
                    customer_name="ACME",
                ),
            ],
        )

        rows = _rows(movement_history(item))

        assert rows[0][:4] == ["Date", "Time", "Type", "Quantity"]
        assert rows[0][4:] == ["User ID", "Serial No.", "Customer", "Phone", "Address", "Remarks"]
        assert rows[1][:3] == ["2024-03-02", "14:05:09", "Outbound"]
        assert rows[1][5:7] == ["SN00001", "ACME"]
        assert rows[2][:3] == ["2024-03-01", "08:00:00", "Inbound"]

    def test_part_history_columns(self, make_item, make_transaction):
        item = make_item(transactions=[make_transaction(model_name="MX-1", quantity=3)])

        rows = _rows(movement_history(item))

        assert rows[0][4:] == ["Model", "Remarks"]
        assert rows[1][3:] == ["3", "MX-1", ""]


def test_report_filename():
    name = report_filename("parts stock/2024")
    assert name.startswith("parts_stock_2024_")
    assert name.endswith(".csv")
