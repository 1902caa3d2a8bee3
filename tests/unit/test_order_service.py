"""
Unit tests for OrderList.

Run: pytest tests/unit/test_order_service.py -v
"""

import pytest

from exceptions import OrderEntryExistsError
from models.mercuriale import SourceTag
from services.order_service import OrderList, find_record, order_columns
from tests.factories import RecordFactory


@pytest.fixture
def order() -> OrderList:
    return OrderList()


class TestOrderListAdd:
    """Tests for OrderList.add()"""

    def test_add_appends_record_with_source(self, order, folkestone_records):
        entry = order.add("A1", SourceTag.FOLKESTONE, folkestone_records)

        assert entry == {"Code Produit": "A1", "Libellé produit": "Pain", "Prix HT": 1.2, "source": "folkestone"}
        assert order.entries == [entry]

    def test_add_does_not_mutate_dataset(self, order, folkestone_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        assert "source" not in folkestone_records[0]

    def test_add_numeric_code_by_string(self, order, folkestone_records):
        entry = order.add("10452", SourceTag.FOLKESTONE, folkestone_records)
        assert entry["Code Produit"] == 10452

    def test_add_integral_float_code(self, order):
        records = [RecordFactory.create(code=12.0, label="Sel")]
        assert order.add("12", SourceTag.WASHINGTON, records) is not None

    def test_add_unknown_code_is_noop(self, order, folkestone_records):
        assert order.add("NOPE", SourceTag.FOLKESTONE, folkestone_records) is None
        assert len(order) == 0

    def test_add_takes_first_match(self, order):
        records = [
            RecordFactory.create(code="D1", label="Premier"),
            RecordFactory.create(code="D1", label="Second"),
        ]
        entry = order.add("D1", SourceTag.FOLKESTONE, records)
        assert entry["Libellé produit"] == "Premier"

    def test_duplicate_add_raises_and_leaves_list_unchanged(self, order, folkestone_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        before = order.entries

        with pytest.raises(OrderEntryExistsError) as exc_info:
            order.add("A1", SourceTag.FOLKESTONE, folkestone_records)

        assert exc_info.value.status_code == 409
        assert exc_info.value.code == "ORDER_ENTRY_EXISTS"
        assert 'mercuriale "folkestone"' in exc_info.value.message
        assert order.entries == before

    def test_duplicate_checked_before_lookup(self, order, folkestone_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        with pytest.raises(OrderEntryExistsError):
            order.add("A1", SourceTag.FOLKESTONE, [])

    def test_same_code_from_other_source_is_allowed(self, order, folkestone_records, vendome_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        order.add("A1", SourceTag.VENDOME, vendome_records)

        assert [(e["Code Produit"], e["source"]) for e in order.entries] == [
            ("A1", "folkestone"),
            ("A1", "vendome"),
        ]

    def test_entries_are_copies(self, order, folkestone_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        order.entries[0]["Libellé produit"] = "changed"
        assert order.entries[0]["Libellé produit"] == "Pain"


class TestOrderListRemove:
    """Tests for OrderList.remove()"""

    def test_remove_restores_previous_state(self, order, folkestone_records, vendome_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        order.add("V11", SourceTag.VENDOME, vendome_records)
        before = order.entries

        order.add("C7", SourceTag.FOLKESTONE, folkestone_records)
        assert order.remove("C7", SourceTag.FOLKESTONE) == 1

        assert order.entries == before

    def test_remove_keeps_order_of_remaining(self, order, folkestone_records):
        for code in ("A1", "10452", "C7"):
            order.add(code, SourceTag.FOLKESTONE, folkestone_records)

        order.remove("10452", SourceTag.FOLKESTONE)

        assert [e["Code Produit"] for e in order.entries] == ["A1", "C7"]

    def test_remove_matches_source(self, order, folkestone_records, vendome_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        order.add("A1", SourceTag.VENDOME, vendome_records)

        order.remove("A1", SourceTag.VENDOME)

        assert [e["source"] for e in order.entries] == ["folkestone"]

    def test_remove_absent_is_noop(self, order, folkestone_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        assert order.remove("A1", SourceTag.WASHINGTON) == 0
        assert order.remove("ZZ", SourceTag.FOLKESTONE) == 0
        assert len(order) == 1

    def test_remove_on_empty_list(self, order):
        assert order.remove("A1", "folkestone") == 0

    def test_readd_after_remove(self, order, folkestone_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        order.remove("A1", SourceTag.FOLKESTONE)
        assert order.add("A1", SourceTag.FOLKESTONE, folkestone_records) is not None


class TestOrderListColumns:
    """Tests for OrderList.columns()"""

    def test_empty_list_has_no_columns(self, order):
        assert order.columns() == []

    def test_union_in_first_seen_order(self, order, folkestone_records, vendome_records):
        order.add("A1", SourceTag.VENDOME, vendome_records)
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)

        assert order.columns() == ["Code Produit", "Libellé produit", "Fournisseur", "Prix HT"]

    def test_columns_follow_removals(self, order, folkestone_records, vendome_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        order.add("V11", SourceTag.VENDOME, vendome_records)
        order.remove("V11", SourceTag.VENDOME)

        assert "Fournisseur" not in order.columns()

    def test_source_field_excluded(self):
        assert order_columns([{"Code Produit": "A1", "source": "vendome"}]) == ["Code Produit"]

    def test_clear(self, order, folkestone_records):
        order.add("A1", SourceTag.FOLKESTONE, folkestone_records)
        order.clear()
        assert order.is_empty
        assert order.columns() == []


class TestFindRecord:

    def test_missing_code_field_never_matches_real_code(self):
        assert find_record("A1", [{"Libellé produit": "Sans code"}]) is None

    def test_returns_none_on_empty_dataset(self):
        assert find_record("A1", []) is None
