"""Tests for serial number allocation."""

import pytest

from stockledger.core.entities.inventory import ItemType
from stockledger.core.exceptions import DuplicateSerialError, RangeTooLargeError
from stockledger.core.services.serial_allocator import (
    allocate_serials,
    build_serial_registry,
    expand_serial_range,
    find_collisions,
    is_duplicate_serial,
    suggest_next_serial,
)


class TestSuggestNextSerial:
    def test_empty_registry_returns_seed(self):
        assert suggest_next_serial([]) == "SN00001"

    def test_follows_highest(self):
        assert suggest_next_serial(["SN00001", "SN00007", "SN00003"]) == "SN00008"

    def test_prefix_of_highest_wins(self):
        assert suggest_next_serial(["AB00009", "SN00002"]) == "AB00010"

    def test_widens_past_pad(self):
        assert suggest_next_serial(["SN99999"]) == "SN100000"

    def test_non_matching_serials_only(self):
        assert suggest_next_serial(["X-1", "12345"]) == "SN00001"

    def test_custom_seed_and_pad(self):
        assert suggest_next_serial([], seed="PX001", pad=3) == "PX001"
        assert suggest_next_serial(["PX001"], seed="PX001", pad=3) == "PX002"


class TestExpandSerialRange:
    def test_short_end_token(self):
        serials = expand_serial_range("SN00001~00010")
        assert len(serials) == 10
        assert serials[0] == "SN00001"
        assert serials[-1] == "SN00010"

    def test_full_end_token(self):
        assert expand_serial_range("SN00001~SN00003") == ["SN00001", "SN00002", "SN00003"]

    def test_spaces_around_delimiter(self):
        assert expand_serial_range("SN00008 ~ 00010") == ["SN00008", "SN00009", "SN00010"]

    def test_start_width_is_kept(self):
        assert expand_serial_range("A098~102") == ["A098", "A099", "A100", "A101", "A102"]

    def test_too_large(self):
        with pytest.raises(RangeTooLargeError) as exc_info:
            expand_serial_range("SN00001~00105")
        assert exc_info.value.details["count"] == 105

    def test_exactly_at_limit(self):
        assert len(expand_serial_range("SN00001~00100")) == 100

    def test_custom_limit(self):
        with pytest.raises(RangeTooLargeError):
            expand_serial_range("SN00001~00011", max_size=10)

    def test_reversed_range_is_literal(self):
        assert expand_serial_range("SN00010~00001") == ["SN00010~00001"]

    def test_non_range_is_literal(self):
        assert expand_serial_range(" SN00001 ") == ["SN00001"]


class TestRegistry:
    def test_collects_across_items(self, make_item, make_transaction):
        a = make_item(
            type=ItemType.PRODUCT,
            transactions=[make_transaction(serial_number="sn00001"), make_transaction()],
        )
        b = make_item(type=ItemType.PRODUCT, transactions=[make_transaction(serial_number="SN00002")])

        assert build_serial_registry([a, b]) == {"SN00001", "SN00002"}

    def test_ignores_part_serials(self, make_item, make_transaction):
        part = make_item(type=ItemType.PART, transactions=[make_transaction(serial_number="SN00001")])
        product = make_item(
            type=ItemType.PRODUCT, transactions=[make_transaction(serial_number="SN00002")]
        )

        assert build_serial_registry([part, product]) == {"SN00002"}

    def test_is_duplicate_serial(self):
        registry = {"SN00001"}
        assert is_duplicate_serial("sn00001", registry)
        assert not is_duplicate_serial("SN00002", registry)
        assert not is_duplicate_serial("", registry)
        assert not is_duplicate_serial("SN00001~00002", registry)

    def test_find_collisions_keeps_order(self):
        assert find_collisions(["C", "A", "B"], {"A", "C"}) == ["C", "A"]


class TestAllocateSerials:
    def test_single_serial_upper_cased(self):
        assert allocate_serials(" sn00001 ", set()) == ["SN00001"]

    def test_empty_input(self):
        assert allocate_serials("  ", set()) == []

    def test_range(self):
        assert allocate_serials("sn00001~00003", set()) == ["SN00001", "SN00002", "SN00003"]

    def test_any_collision_rejects_whole_range(self):
        with pytest.raises(DuplicateSerialError) as exc_info:
            allocate_serials("SN00001~00005", {"SN00003"})
        assert exc_info.value.details["serials"] == ["SN00003"]

    def test_collision_report_is_truncated(self):
        registry = {f"SN{n:05d}" for n in range(1, 9)}
        with pytest.raises(DuplicateSerialError) as exc_info:
            allocate_serials("SN00001~00010", registry, report_limit=5)
        assert exc_info.value.details["serials"] == [f"SN{n:05d}" for n in range(1, 6)]
        assert exc_info.value.details["total"] == 8
