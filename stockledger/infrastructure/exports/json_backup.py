"""JSON backup files of the whole collection."""

import json
from datetime import UTC, datetime

from pydantic import ValidationError as PydanticValidationError

from stockledger.core.entities.inventory import InventorySnapshot, Item
from stockledger.core.exceptions import ValidationError

BACKUP_VERSION = "2.0"


def export_backup(items: list[Item], exported_at: datetime | None = None) -> InventorySnapshot:
    """Backup document for the given items."""
    return InventorySnapshot(
        items=items,
        version=BACKUP_VERSION,
        export_date=exported_at or datetime.now(UTC),
    )


def dump_backup(snapshot: InventorySnapshot) -> str:
    """Render a backup as indented JSON."""
    wire = snapshot.to_wire()
    document = {
        "items": wire["items"],
        "version": wire.get("version", BACKUP_VERSION),
        "exportDate": wire.get("exportDate"),
    }
    return json.dumps(document, ensure_ascii=False, indent=2)


def parse_backup(raw: str | bytes | dict) -> InventorySnapshot:
    """
    Parse a backup document.

    Accepts the raw file content or an already-decoded mapping. Only the
    items list is required; unknown keys are ignored.

    Raises:
        ValidationError: Not JSON, no items list, or malformed items.
    """
    if isinstance(raw, str | bytes):
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise ValidationError("backup", "File is not valid JSON") from e
    else:
        data = raw

    if not isinstance(data, dict) or not isinstance(data.get("items"), list):
        raise ValidationError("backup", "Backup has no items list")

    try:
        return InventorySnapshot.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ValidationError("backup", f"Invalid backup at {location}: {first['msg']}") from e
