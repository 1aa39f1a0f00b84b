"""
In-memory inventory book.

Owns the single item collection of a running instance. Every mutation
builds the new item first through the ledger rules and swaps it in only
after validation passes, so a failed operation leaves the book as it
was. Items are never modified in place.
"""

from collections import Counter
from datetime import UTC, datetime
from typing import Any

from stockledger.config import get_logger
from stockledger.config.settings import LedgerSettings
from stockledger.core.entities.inventory import (
    InventorySnapshot,
    Item,
    ItemType,
    Transaction,
    TransactionType,
)
from stockledger.core.exceptions import ItemNotFoundError, TransactionNotFoundError
from stockledger.core.services import ledger
from stockledger.core.services.serial_allocator import (
    allocate_serials,
    build_serial_registry,
    suggest_next_serial,
)

logger = get_logger(__name__)

SNAPSHOT_VERSION = "2.0"


class InventoryBook:
    """The authoritative in-memory item collection."""

    def __init__(
        self,
        items: list[Item] | None = None,
        settings: LedgerSettings | None = None,
    ):
        self._items: list[Item] = list(items or [])
        self._settings = settings or LedgerSettings()
        self.revision = 0

    # Queries
    @property
    def items(self) -> list[Item]:
        """Current items, newest first. Treat as read-only."""
        return list(self._items)

    def get_item(self, item_id: str) -> Item:
        """Get item by ID."""
        for item in self._items:
            if item.id == item_id:
                return item
        raise ItemNotFoundError(item_id)

    def list_items(
        self,
        item_type: ItemType | None = None,
        search: str | None = None,
    ) -> list[Item]:
        """
        Filter items by category and search term.

        Name and code are matched by substring; for products the serial
        numbers of their transactions are searched as well.
        """
        term = (search or "").strip().lower()
        results = []
        for item in self._items:
            if item_type is not None and item.type != item_type:
                continue
            if not term or self._matches(item, term):
                results.append(item)
        return results

    @staticmethod
    def _matches(item: Item, term: str) -> bool:
        if term in item.name.lower() or term in item.code.lower():
            return True
        if item.type == ItemType.PRODUCT:
            return any(
                t.serial_number and term in t.serial_number.lower()
                for t in item.transactions
            )
        return False

    def counts(self) -> dict[ItemType, int]:
        """Number of items per category."""
        counter = Counter(item.type for item in self._items)
        return {item_type: counter.get(item_type, 0) for item_type in ItemType}

    def serial_registry(self) -> set[str]:
        """All serial numbers in use, upper-cased."""
        return build_serial_registry(self._items)

    def suggest_serial(self) -> str:
        """Next serial number to offer for a product movement."""
        return suggest_next_serial(
            self.serial_registry(),
            seed=self._settings.serial_seed,
            pad=self._settings.serial_pad,
        )

    def suggest_code(self, prefix: str) -> str:
        """Next free code for a prefix."""
        return ledger.suggest_next_code(prefix, (item.code for item in self._items))

    def stock_of(self, item_id: str) -> int:
        """Derived stock for one item."""
        return ledger.derive_stock(self.get_item(item_id))

    def snapshot(self) -> InventorySnapshot:
        """Full collection for persistence or export."""
        return InventorySnapshot(
            items=list(self._items),
            updated_at=datetime.now(UTC),
            version=SNAPSHOT_VERSION,
        )

    # Item mutations
    def create_item(
        self,
        *,
        item_type: ItemType,
        code: str,
        name: str,
        initial_quantity: int = 0,
        **fields: Any,
    ) -> Item:
        """Register a new item, optionally seeding its initial stock."""
        item = ledger.create_item(
            item_type=item_type,
            code=code,
            name=name,
            existing=self._items,
            initial_quantity=initial_quantity,
            initial_remark=self._settings.initial_stock_remark,
            **fields,
        )
        self._items.insert(0, item)
        self._touch()
        logger.info(
            "item_created",
            item_id=item.id,
            code=item.code,
            type=item.type.value,
            initial_quantity=initial_quantity,
        )
        return item

    def update_item(self, item_id: str, changes: dict[str, Any]) -> Item:
        """Replace editable item fields."""
        current = self.get_item(item_id)
        updated = ledger.update_item(current, changes, self._items)
        self._replace(updated)
        logger.info("item_updated", item_id=item_id, fields=sorted(changes))
        return updated

    def delete_item(self, item_id: str) -> Item:
        """Remove an item and its entire history. Irreversible."""
        item = self.get_item(item_id)
        self._items = [i for i in self._items if i.id != item_id]
        self._touch()
        logger.info(
            "item_deleted",
            item_id=item_id,
            code=item.code,
            transactions=len(item.transactions),
        )
        return item

    # Transaction mutations
    def record_movement(
        self,
        item_id: str,
        *,
        transaction_type: TransactionType,
        quantity: int = 0,
        serial_input: str | None = None,
        when: datetime | None = None,
        **details: Any,
    ) -> list[Transaction]:
        """
        Record an inbound or outbound movement.

        For products the serial input is expanded and checked against
        the registry first; each serial becomes its own transaction of
        quantity 1. Nothing is recorded if any check fails.
        """
        item = self.get_item(item_id)

        serials: list[str] = []
        if item.type == ItemType.PRODUCT and serial_input:
            serials = allocate_serials(
                serial_input,
                self.serial_registry(),
                max_size=self._settings.max_range_size,
                report_limit=self._settings.duplicate_report_limit,
            )

        transactions = ledger.build_transactions(
            item,
            transaction_type=transaction_type,
            quantity=quantity,
            serials=serials,
            when=when,
            details=details,
        )
        updated = ledger.append_transactions(item, transactions)
        self._replace(updated)
        logger.info(
            "movement_recorded",
            item_id=item_id,
            type=transaction_type.value,
            transactions=len(transactions),
            quantity=sum(t.quantity for t in transactions),
            stock=ledger.derive_stock(updated),
        )
        return transactions

    def update_transaction(
        self,
        item_id: str,
        transaction_id: str,
        changes: dict[str, Any],
    ) -> Transaction:
        """Replace fields of one transaction."""
        item = self.get_item(item_id)
        updated = ledger.update_transaction(item, transaction_id, changes, self._items)
        self._replace(updated)
        logger.info(
            "transaction_updated",
            item_id=item_id,
            transaction_id=transaction_id,
            fields=sorted(changes),
        )
        transaction = updated.find_transaction(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(item_id, transaction_id)
        return transaction

    def delete_transaction(self, item_id: str, transaction_id: str) -> None:
        """Remove one transaction from an item."""
        item = self.get_item(item_id)
        updated = ledger.remove_transaction(item, transaction_id)
        self._replace(updated)
        logger.info("transaction_deleted", item_id=item_id, transaction_id=transaction_id)

    # Bulk
    def replace_all(self, items: list[Item]) -> None:
        """Replace the whole collection unconditionally."""
        self._items = list(items)
        self._touch()
        logger.info("inventory_replaced", items=len(self._items))

    def _replace(self, updated: Item) -> None:
        self._items = [updated if i.id == updated.id else i for i in self._items]
        self._touch()

    def _touch(self) -> None:
        self.revision += 1
