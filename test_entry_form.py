# test_entry_form.py
import unittest
from datetime import date
from decimal import Decimal

from entry_form import EntryForm, EntryState, EntryStateError
from ledger import TransactionStore
from summaries import get_totals

TODAY = date(2026, 1, 10)


class TestEntryForm(unittest.TestCase):
    def setUp(self):
        self.store = TransactionStore()
        self.form = EntryForm(self.store, today=lambda: TODAY)

    # ---------- begin ----------

    def test_starts_idle(self):
        self.assertEqual(self.form.state, EntryState.IDLE)
        self.assertFalse(self.form.can_save)

    def test_begin_defaults(self):
        draft = self.form.begin()
        self.assertEqual(self.form.state, EntryState.EDITING)
        self.assertEqual(draft.date, TODAY)
        self.assertFalse(draft.is_income)
        self.assertEqual(draft.category, "食費")
        self.assertEqual(draft.amount_text, "")
        self.assertEqual(draft.memo, "")

    def test_begin_twice_raises(self):
        self.form.begin()
        with self.assertRaises(EntryStateError):
            self.form.begin()

    def test_actions_while_idle_raise(self):
        with self.assertRaises(EntryStateError):
            self.form.save()
        with self.assertRaises(EntryStateError):
            self.form.cancel()
        with self.assertRaises(EntryStateError):
            self.form.set_income(True)

    # ---------- income toggle ----------

    def test_toggle_switches_choices_and_keeps_category(self):
        self.form.begin()
        self.assertEqual(self.form.category_choices, ["食費", "交通費", "娯楽", "光熱費", "通信費", "その他"])
        self.form.set_income(True)
        self.assertEqual(self.form.category_choices, ["給与", "賞与", "副業", "その他"])
        self.assertEqual(self.form.draft.category, "食費")

    def test_custom_category_lists(self):
        form = EntryForm(self.store, expense_categories=["Rent"], income_categories=["Salary"])
        form.begin()
        self.assertEqual(form.draft.category, "Rent")
        form.set_income(True)
        self.assertEqual(form.category_choices, ["Salary"])

    # ---------- save ----------

    def test_save_requires_category_and_amount(self):
        self.form.begin()
        self.assertFalse(self.form.can_save)
        self.assertIsNone(self.form.save())
        self.form.draft.amount_text = "500"
        self.form.draft.category = ""
        self.assertFalse(self.form.can_save)
        self.assertIsNone(self.form.save())
        self.assertEqual(len(self.store), 0)
        self.assertTrue(self.form.is_editing)

    def test_save_appends_and_returns_to_idle(self):
        draft = self.form.begin()
        draft.amount_text = "400"
        draft.memo = "lunch"
        tx = self.form.save()
        self.assertIsNotNone(tx)
        self.assertEqual(self.form.state, EntryState.IDLE)
        self.assertEqual(self.store.list(), [tx])
        self.assertEqual(tx.amount, Decimal("400"))
        self.assertEqual(tx.category, "食費")
        self.assertFalse(tx.is_income)
        self.assertEqual(tx.date, TODAY)
        self.assertEqual(tx.memo, "lunch")

    def test_save_income_with_changed_category(self):
        draft = self.form.begin()
        self.form.set_income(True)
        draft.category = "給与"
        draft.amount_text = "1000"
        tx = self.form.save()
        self.assertTrue(tx.is_income)
        self.assertEqual(tx.category, "給与")

    def test_save_with_non_numeric_amount_does_nothing(self):
        draft = self.form.begin()
        draft.amount_text = "abc"
        self.assertTrue(self.form.can_save)
        self.assertIsNone(self.form.save())
        self.assertEqual(len(self.store), 0)
        self.assertEqual(self.form.state, EntryState.EDITING)
        # fixing the text lets the same draft be saved
        draft.amount_text = "12"
        self.assertIsNotNone(self.form.save())
        self.assertEqual(len(self.store), 1)

    def test_save_with_huge_exponent_does_nothing(self):
        draft = self.form.begin()
        draft.amount_text = "1e1000000"
        self.assertIsNone(self.form.save())
        self.assertEqual(len(self.store), 0)
        self.assertEqual(self.form.state, EntryState.EDITING)
        # totals stay computable after the rejected save
        draft.amount_text = "400"
        self.form.save()
        self.assertEqual(get_totals(self.store.list())["expense"], Decimal("400"))

    def test_each_save_gets_a_new_id(self):
        ids = set()
        for amount in ("1", "2"):
            self.form.begin().amount_text = amount
            ids.add(self.form.save().id)
        self.assertEqual(len(ids), 2)

    # ---------- cancel ----------

    def test_cancel_discards_draft(self):
        draft = self.form.begin()
        draft.amount_text = "999"
        self.form.cancel()
        self.assertEqual(self.form.state, EntryState.IDLE)
        self.assertIsNone(self.form.draft)
        self.assertEqual(len(self.store), 0)
        # a new draft starts from the defaults again
        self.assertEqual(self.form.begin().amount_text, "")


if __name__ == "__main__":
    unittest.main(verbosity=2)
