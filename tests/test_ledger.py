"""
Tests for the Ledger Store

All tests run against InMemoryStorage; nothing touches the filesystem.
"""

import json
from datetime import date

import pytest

from expense_tracker.ledger import (
    CORRUPT_STORAGE_MESSAGE,
    TABLE_HEADER,
    ExpenseNotFoundError,
    LedgerStore,
    render_table,
)
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage import CorruptStorageError, InMemoryStorage
from expense_tracker.validation import InvalidInputError


SAMPLE = [
    {"id": 1, "description": "Coffee", "amount": 3.5, "date": "2024-05-02"},
    {"id": 2, "description": "Rent", "amount": 900, "date": "2024-04-01"},
    {"id": 3, "description": "Books", "amount": 20.25, "date": "2024-05-20"},
]


@pytest.fixture
def sample_storage(store_text):
    return InMemoryStorage(store_text(*SAMPLE))


@pytest.fixture
def sample_ledger(sample_storage, today):
    return LedgerStore(sample_storage, today=lambda: today)


class TestLoad:
    """Tests for reading the backing store."""

    def test_missing_store_is_created_empty(self, today):
        """Test that a missing store is created holding []."""
        storage = InMemoryStorage(None)
        ledger = LedgerStore(storage, today=lambda: today)

        assert ledger.load() == []
        assert storage.read_text() == "[]"
        assert storage.write_count == 1

    def test_blank_store_is_empty(self):
        """Test that whitespace-only content loads as an empty collection."""
        storage = InMemoryStorage("  \n\t ")
        assert LedgerStore(storage).load() == []
        assert storage.write_count == 0

    def test_invalid_json_is_fatal(self):
        """Test that unparsable content raises instead of returning data."""
        ledger = LedgerStore(InMemoryStorage("{not json"))
        with pytest.raises(CorruptStorageError, match=CORRUPT_STORAGE_MESSAGE):
            ledger.load()

    def test_wrong_shape_is_fatal(self):
        """Test that valid JSON that is not a list of expenses is rejected."""
        ledger = LedgerStore(InMemoryStorage('{"id": 1}'))
        with pytest.raises(CorruptStorageError):
            ledger.load()

    def test_invalid_record_is_fatal(self, store_text):
        """Test that a stored negative amount counts as corruption."""
        text = store_text({"id": 1, "description": "x", "amount": -1, "date": "2024-05-02"})
        with pytest.raises(CorruptStorageError):
            LedgerStore(InMemoryStorage(text)).load()

    def test_duplicate_ids_are_fatal(self, store_text):
        """Test that the id uniqueness invariant is checked on load."""
        record = {"id": 1, "description": "x", "amount": 1, "date": "2024-05-02"}
        with pytest.raises(CorruptStorageError):
            LedgerStore(InMemoryStorage(store_text(record, record))).load()

    def test_load_keeps_stored_order(self, sample_ledger):
        """Test that no sorting is applied."""
        assert [e.id for e in sample_ledger.load()] == [1, 2, 3]


class TestSave:
    """Tests for writing the backing store."""

    def test_save_load_round_trip_is_stable(self, sample_ledger, sample_storage):
        """Test that save(load()) is content-stable."""
        first = sample_ledger.load()
        sample_ledger.save(first)
        written = sample_storage.read_text()

        second = sample_ledger.load()
        sample_ledger.save(second)

        assert second == first
        assert sample_storage.read_text() == written

    def test_save_is_pretty_printed(self, ledger, memory_storage, today):
        """Test the on-disk format: indented array, contract field order."""
        ledger.save([Expense(id=1, description="Coffee", amount=3.5, date=today)])
        text = memory_storage.read_text()

        assert text.startswith("[\n  {\n")
        data = json.loads(text)
        assert data == [
            {"id": 1, "description": "Coffee", "amount": 3.5, "date": "2024-05-02"}
        ]
        assert list(data[0].keys()) == ["id", "description", "amount", "date"]

    def test_save_empty_collection(self, ledger, memory_storage):
        ledger.save([])
        assert json.loads(memory_storage.read_text()) == []


class TestAdd:
    """Tests for adding expenses."""

    def test_first_expense_gets_id_1(self, ledger, today):
        """Test add on an empty store."""
        expense = ledger.add("Coffee", 3.5)
        assert expense.id == 1
        assert expense.date == today
        assert ledger.load() == [expense]

    def test_ids_increase_without_gaps(self, ledger):
        """Test that sequential adds yield 1, 2, 3."""
        ids = [ledger.add(f"item {n}", 1.0).id for n in range(3)]
        assert ids == [1, 2, 3]

    def test_ids_are_not_reused_after_delete(self, ledger):
        """Test that deleting id 2 never causes a later add to reuse it."""
        for n in range(3):
            ledger.add(f"item {n}", 1.0)
        ledger.delete(2)

        assert ledger.add("next", 1.0).id == 4

    def test_id_follows_max_not_position(self, store_text):
        """Test that the new id is max + 1 even when the last record is not the max."""
        text = store_text(
            {"id": 5, "description": "a", "amount": 1, "date": "2024-01-01"},
            {"id": 2, "description": "b", "amount": 1, "date": "2024-01-01"},
        )
        ledger = LedgerStore(InMemoryStorage(text), today=lambda: date(2024, 1, 2))
        assert ledger.add("c", 1.0).id == 6

    @pytest.mark.parametrize(
        "description,amount",
        [
            ("", 3.5),
            ("Coffee", 0),
            ("Coffee", -1),
            ("Coffee", float("nan")),
            ("Coffee", float("inf")),
        ],
    )
    def test_invalid_input_writes_nothing(self, ledger, memory_storage, description, amount):
        """Test that invalid add input fails before any write."""
        with pytest.raises(InvalidInputError):
            ledger.add(description, amount)
        assert memory_storage.write_count == 0

    def test_add_on_corrupt_store_does_not_write(self):
        storage = InMemoryStorage("garbage")
        with pytest.raises(CorruptStorageError):
            LedgerStore(storage).add("Coffee", 3.5)
        assert storage.read_text() == "garbage"
        assert storage.write_count == 0


class TestListExpenses:
    """Tests for listing."""

    def test_empty_list_performs_no_write(self, ledger, memory_storage):
        assert ledger.list_expenses() == []
        assert memory_storage.write_count == 0

    def test_render_table(self):
        """Test the fixed-width layout."""
        expenses = [
            Expense(id=1, description="Coffee", amount=3.5, date=date(2024, 5, 2)),
            Expense(id=12, description="Rent", amount=900, date=date(2024, 4, 1)),
        ]
        lines = render_table(expenses).splitlines()

        assert lines[0] == TABLE_HEADER
        assert lines[1] == "1   2024-05-02  Coffee          $3.5"
        assert lines[2] == "12  2024-04-01  Rent            $900"

    def test_long_description_is_not_truncated(self):
        expense = Expense(
            id=1,
            description="A very long description",
            amount=1,
            date=date(2024, 5, 2),
        )
        assert "A very long description $1" in render_table([expense])


class TestDelete:
    """Tests for deleting expenses."""

    def test_delete_removes_record(self, sample_ledger, sample_storage):
        removed = sample_ledger.delete(2)
        assert removed.description == "Rent"
        assert [e.id for e in sample_ledger.load()] == [1, 3]
        assert sample_storage.write_count == 1

    def test_delete_missing_id_leaves_store_unchanged(self, sample_ledger, sample_storage):
        """Test that deleting an unknown id raises and writes nothing."""
        before = sample_storage.read_text()
        with pytest.raises(ExpenseNotFoundError) as exc_info:
            sample_ledger.delete(999)

        assert str(exc_info.value) == "Expense not found."
        assert exc_info.value.expense_id == 999
        assert sample_storage.read_text() == before
        assert sample_storage.write_count == 0

    def test_delete_without_id_loads_then_fails(self, today):
        """Test that a None id still creates a missing store before failing."""
        storage = InMemoryStorage(None)
        ledger = LedgerStore(storage, today=lambda: today)

        with pytest.raises(ExpenseNotFoundError) as exc_info:
            ledger.delete(None)
        assert exc_info.value.expense_id is None
        assert storage.read_text() == "[]"

    def test_delete_without_id_on_corrupt_store(self):
        with pytest.raises(CorruptStorageError):
            LedgerStore(InMemoryStorage("[{")).delete(None)


class TestUpdate:
    """Tests for partial updates."""

    def test_update_description_and_amount(self, sample_ledger):
        updated = sample_ledger.update(1, description="Latte", amount=4.25)
        assert updated.description == "Latte"
        assert updated.amount == 4.25
        stored = sample_ledger.load()[0]
        assert (stored.description, stored.amount) == ("Latte", 4.25)

    def test_update_keeps_id_and_date(self, sample_ledger):
        updated = sample_ledger.update(2, description="Rent May")
        assert updated.id == 2
        assert updated.date == date(2024, 4, 1)

    def test_negative_amount_is_silently_ignored(self, sample_ledger, sample_storage):
        """Test that update --amount -5 keeps the amount but still writes."""
        updated = sample_ledger.update(1, amount=-5)
        assert updated.amount == 3.5
        assert sample_ledger.load()[0].amount == 3.5
        assert sample_storage.write_count == 1

    def test_nan_amount_is_silently_ignored(self, sample_ledger):
        assert sample_ledger.update(1, amount=float("nan")).amount == 3.5

    def test_empty_description_is_ignored(self, sample_ledger):
        assert sample_ledger.update(1, description="").description == "Coffee"

    def test_no_changes_still_saves(self, sample_ledger, sample_storage):
        sample_ledger.update(3)
        assert sample_storage.write_count == 1

    def test_update_missing_id_writes_nothing(self, sample_ledger, sample_storage):
        with pytest.raises(ExpenseNotFoundError):
            sample_ledger.update(42, description="x")
        assert sample_storage.write_count == 0

    def test_update_without_id_matches_nothing(self, sample_ledger, sample_storage):
        with pytest.raises(ExpenseNotFoundError):
            sample_ledger.update(None, description="x")
        assert sample_storage.write_count == 0


class TestSummary:
    """Tests for totals."""

    def test_total_of_all_expenses(self, sample_ledger):
        assert sample_ledger.summary() == 3.5 + 900 + 20.25

    def test_total_for_month(self, sample_ledger):
        """Test that only expenses dated in May are summed."""
        assert sample_ledger.summary(5) == 3.5 + 20.25
        assert sample_ledger.summary(4) == 900

    def test_out_of_range_month_matches_nothing(self, sample_ledger):
        assert sample_ledger.summary(13) == 0

    def test_empty_store_totals_zero(self, ledger):
        assert ledger.summary() == 0

    def test_summary_does_not_write(self, sample_ledger, sample_storage):
        sample_ledger.summary(5)
        assert sample_storage.write_count == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
