"""StockLedger: part and product stock ledger with serial tracking."""

__version__ = "2.0.0"
