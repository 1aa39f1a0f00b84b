"""
Serial number allocation.

Suggests the next serial, expands `A00001~A00010` style ranges and
checks candidates against the global serial registry. Serial numbers
are compared upper-cased; the registry spans every transaction of
every product. Parts never carry serials.
"""

import re
from collections.abc import Iterable

from stockledger.config import get_logger
from stockledger.core.entities.inventory import Item, ItemType
from stockledger.core.exceptions import DuplicateSerialError, RangeTooLargeError

logger = get_logger(__name__)

RANGE_DELIMITER = "~"

DEFAULT_SEED = "SN00001"
DEFAULT_PAD = 5
DEFAULT_MAX_RANGE = 100
DEFAULT_REPORT_LIMIT = 5

# <letters><digits>, e.g. SN00042
SERIAL_PATTERN = re.compile(r"^([a-zA-Z]+)(\d+)$", re.ASCII)

# <prefix><digits>~[<prefix>]<digits>, e.g. SN00001~00010 or SN00001~SN00010
RANGE_PATTERN = re.compile(r"^(.+?)(\d+)\s*~\s*(\D*)(\d+)$", re.ASCII)


def normalize_serial(value: str | None) -> str:
    """Trim and upper-case a serial number."""
    return (value or "").strip().upper()


def suggest_next_serial(
    used_serials: Iterable[str],
    seed: str = DEFAULT_SEED,
    pad: int = DEFAULT_PAD,
) -> str:
    """
    Suggest the serial following the highest one in use.

    The prefix is taken from whichever serial carries the maximum
    numeric suffix. Mixed prefixes are not reconciled.

    Args:
        used_serials: Serials already registered.
        seed: Value returned when nothing is registered yet.
        pad: Minimum digit width of the numeric part.

    Returns:
        prefix + (max + 1), zero-padded to at least `pad` digits.
    """
    used = [s for s in used_serials if s]
    if not used:
        return seed

    seed_match = SERIAL_PATTERN.match(seed)
    prefix = seed_match.group(1) if seed_match else "SN"
    max_num: int | None = None

    for serial in used:
        match = SERIAL_PATTERN.match(serial)
        if not match:
            continue
        num = int(match.group(2))
        if max_num is None or num > max_num:
            max_num = num
            prefix = match.group(1)

    next_num = (max_num or 0) + 1
    width = max(pad, len(str(next_num)))
    return f"{prefix}{next_num:0{width}d}"


def expand_serial_range(text: str, max_size: int = DEFAULT_MAX_RANGE) -> list[str]:
    """
    Expand a serial range into its members.

    Input that is not a range, or whose start exceeds its end, is
    returned as a single literal serial. Every generated value uses
    the start token's digit width.

    Raises:
        RangeTooLargeError: The range has more than `max_size` members.
    """
    literal = text.strip()
    match = RANGE_PATTERN.match(literal)
    if not match:
        return [literal]

    prefix, start_str, _end_prefix, end_str = match.groups()
    start, end = int(start_str), int(end_str)
    if start > end:
        return [literal]

    count = end - start + 1
    if count > max_size:
        raise RangeTooLargeError(literal, count, max_size)

    width = len(start_str)
    return [f"{prefix}{num:0{width}d}" for num in range(start, end + 1)]


def build_serial_registry(items: Iterable[Item]) -> set[str]:
    """Collect every non-empty serial number across all products."""
    registry: set[str] = set()
    for item in items:
        if item.type != ItemType.PRODUCT:
            continue
        for transaction in item.transactions:
            serial = normalize_serial(transaction.serial_number)
            if serial:
                registry.add(serial)
    return registry


def is_duplicate_serial(serial: str, registry: set[str]) -> bool:
    """
    Check a single serial against the registry.

    Range input is never reported here; expand it first and check
    each member.
    """
    candidate = normalize_serial(serial)
    if not candidate or RANGE_DELIMITER in candidate:
        return False
    return candidate in registry


def find_collisions(candidates: Iterable[str], registry: set[str]) -> list[str]:
    """Return candidates already present in the registry, in input order."""
    return [s for s in candidates if s and s in registry]


def allocate_serials(
    serial_input: str,
    registry: set[str],
    max_size: int = DEFAULT_MAX_RANGE,
    report_limit: int = DEFAULT_REPORT_LIMIT,
) -> list[str]:
    """
    Expand a serial submission and reject it whole on any collision.

    Returns:
        Upper-cased serials to record, one transaction each. An empty
        input yields an empty list.

    Raises:
        RangeTooLargeError: The range is too large.
        DuplicateSerialError: Any member is already registered.
    """
    normalized = normalize_serial(serial_input)
    if not normalized:
        return []

    if RANGE_DELIMITER in normalized:
        serials = expand_serial_range(normalized, max_size=max_size)
    else:
        serials = [normalized]

    collisions = find_collisions(serials, registry)
    if collisions:
        logger.info(
            "serial_collision_rejected",
            submitted=len(serials),
            collisions=len(collisions),
        )
        raise DuplicateSerialError(collisions[:report_limit], total=len(collisions))

    return serials
