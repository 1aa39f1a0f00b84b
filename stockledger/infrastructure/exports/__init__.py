"""Backup and report exports."""

from stockledger.infrastructure.exports.csv_report import (
    movement_history,
    report_filename,
    stock_report,
)
from stockledger.infrastructure.exports.json_backup import (
    BACKUP_VERSION,
    dump_backup,
    export_backup,
    parse_backup,
)

__all__ = [
    "stock_report",
    "movement_history",
    "report_filename",
    "BACKUP_VERSION",
    "export_backup",
    "dump_backup",
    "parse_backup",
]
