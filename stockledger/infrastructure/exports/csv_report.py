"""
CSV reports for spreadsheet use.

Output starts with a UTF-8 byte order mark. Every field is quoted and
rows end with CRLF.
"""

import csv
import io
from collections.abc import Iterable
from datetime import date

from stockledger.core.entities.inventory import Item, ItemType, TransactionType
from stockledger.core.services.ledger import derive_stock, sorted_history

BOM = "\ufeff"

PART_STOCK_HEADERS = ["Code", "Name", "Drawing No.", "Stock"]
PRODUCT_STOCK_HEADERS = ["Code", "Name", "Stock"]

HISTORY_BASE_HEADERS = ["Date", "Time", "Type", "Quantity"]
PART_HISTORY_HEADERS = ["Model", "Remarks"]
PRODUCT_HISTORY_HEADERS = ["User ID", "Serial No.", "Customer", "Phone", "Address", "Remarks"]

MOVEMENT_LABELS = {
    TransactionType.INBOUND: "Inbound",
    TransactionType.OUTBOUND: "Outbound",
}


def _render(header: list[str], rows: Iterable[list]) -> str:
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow(header)
    writer.writerows(rows)
    return BOM + output.getvalue()


def stock_report(items: Iterable[Item], item_type: ItemType) -> str:
    """Current stock of every item of one category."""
    rows = []
    for item in items:
        if item.type != item_type:
            continue
        if item_type == ItemType.PART:
            rows.append([item.code, item.name, item.drawing_number or "", derive_stock(item)])
        else:
            rows.append([item.code, item.name, derive_stock(item)])

    header = PART_STOCK_HEADERS if item_type == ItemType.PART else PRODUCT_STOCK_HEADERS
    return _render(header, rows)


def movement_history(item: Item) -> str:
    """All movements of one item, newest first."""
    rows = []
    for t in sorted_history(item):
        row = [
            t.date.strftime("%Y-%m-%d"),
            t.date.strftime("%H:%M:%S"),
            MOVEMENT_LABELS[t.type],
            t.quantity,
        ]
        if item.type == ItemType.PART:
            row += [t.model_name or "", t.remarks or ""]
        else:
            row += [
                t.user_id or "",
                t.serial_number or "",
                t.customer_name or "",
                t.phone_number or "",
                t.address or "",
                t.remarks or "",
            ]
        rows.append(row)

    detail = PART_HISTORY_HEADERS if item.type == ItemType.PART else PRODUCT_HISTORY_HEADERS
    return _render(HISTORY_BASE_HEADERS + detail, rows)


def report_filename(stem: str, ext: str = "csv") -> str:
    """Download filename with today's date appended."""
    safe = "".join(c if c.isalnum() or c in "-_" else "_" for c in stem).strip("_") or "export"
    return f"{safe}_{date.today().isoformat()}.{ext}"
