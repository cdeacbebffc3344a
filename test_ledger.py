# test_ledger.py
import unittest
from datetime import date
from decimal import Decimal

from ledger import (
    Transaction, TransactionStore, format_currency, format_signed,
    parse_amount, parse_date,
)


class TestTransactionStore(unittest.TestCase):
    def setUp(self):
        self.store = TransactionStore()

    def _seed_sample_data(self):
        """
        Add a few transactions:
          + 1000 income  (給与)   2026-01-05
          -  400 expense (食費)   2026-01-10
          -  150 expense (交通費) 2026-02-01
        """
        t1 = self.store.add(Transaction(date(2026, 1, 5), "給与", Decimal("1000"), True, "January pay"))
        t2 = self.store.add(Transaction(date(2026, 1, 10), "食費", Decimal("400"), False, "Groceries"))
        t3 = self.store.add(Transaction(date(2026, 2, 1), "交通費", Decimal("150"), False))
        return t1, t2, t3

    # ---------- add / list / get ----------

    def test_add_and_list_keeps_insertion_order(self):
        t1, t2, t3 = self._seed_sample_data()
        self.assertEqual(len(self.store), 3)
        self.assertEqual([t.id for t in self.store.list()], [t1.id, t2.id, t3.id])

    def test_ids_are_unique(self):
        t1, t2, t3 = self._seed_sample_data()
        self.assertEqual(len({t1.id, t2.id, t3.id}), 3)

    def test_list_returns_a_copy(self):
        self._seed_sample_data()
        rows = self.store.list()
        rows.clear()
        self.assertEqual(len(self.store), 3)

    def test_get_transaction(self):
        t1, _, _ = self._seed_sample_data()
        self.assertEqual(self.store.get(t1.id), t1)
        self.assertIsNone(self.store.get("does-not-exist"))

    def test_add_does_not_validate_category(self):
        tx = self.store.add(Transaction(date(2026, 3, 1), "anything at all", Decimal("1"), False))
        self.assertIn(tx, self.store.list())

    # ---------- remove ----------

    def test_remove_by_id_keeps_order_of_others(self):
        t1, t2, t3 = self._seed_sample_data()
        removed = self.store.remove([t2.id])
        self.assertEqual(removed, 1)
        self.assertEqual([t.id for t in self.store.list()], [t1.id, t3.id])

    def test_remove_unknown_id_is_noop(self):
        self._seed_sample_data()
        self.assertEqual(self.store.remove(["nope"]), 0)
        self.assertEqual(len(self.store), 3)

    def test_remove_at_positions(self):
        t1, t2, t3 = self._seed_sample_data()
        removed = self.store.remove_at([0, 2, 99, -1])
        self.assertEqual(removed, 2)
        self.assertEqual(self.store.list(), [t2])

    def test_newest_first(self):
        t1, t2, t3 = self._seed_sample_data()
        same_day = self.store.add(Transaction(date(2026, 2, 1), "娯楽", Decimal("50"), False))
        ordered = self.store.newest_first()
        self.assertEqual([t.id for t in ordered], [same_day.id, t3.id, t2.id, t1.id])


class TestParsingAndFormatting(unittest.TestCase):
    def test_parse_amount_valid(self):
        self.assertEqual(parse_amount("1000"), (Decimal("1000"), None))
        self.assertEqual(parse_amount("12.5")[0], Decimal("12.5"))
        self.assertEqual(parse_amount("-5")[0], Decimal("-5"))
        self.assertEqual(parse_amount("1e3")[0], Decimal("1000"))

    def test_parse_amount_invalid(self):
        for text in ["abc", "", " 5", "5\n", "5 ", "1,000", "inf", "NaN", "1_000"]:
            value, err = parse_amount(text)
            self.assertIsNone(value, text)
            self.assertIn("valid number", err.lower())

    def test_parse_amount_out_of_range(self):
        for text in ["1e1000000", "1e16", "1e-1000000", "0.0000000000000001"]:
            value, err = parse_amount(text)
            self.assertIsNone(value, text)
            self.assertIn("out of range", err.lower())
        self.assertEqual(parse_amount("999999999999999")[0], Decimal("999999999999999"))

    def test_parse_date(self):
        self.assertEqual(parse_date("2026-01-05"), (date(2026, 1, 5), None))
        self.assertEqual(parse_date("2026/01/05")[0], date(2026, 1, 5))
        self.assertEqual(parse_date("2026-01-05 10:30:00")[0], date(2026, 1, 5))
        value, err = parse_date("2026-02-30")
        self.assertIsNone(value)
        self.assertIn("invalid date", err.lower())

    def test_format_currency(self):
        self.assertEqual(format_currency(Decimal("1000")), "¥1,000")
        self.assertEqual(format_currency(Decimal("0")), "¥0")
        self.assertEqual(format_currency(Decimal("-600")), "-¥600")
        self.assertEqual(format_currency(Decimal("12.4")), "¥12")
        self.assertEqual(format_currency(Decimal("5"), "$"), "$5")

    def test_format_signed(self):
        income = Transaction(date(2026, 1, 5), "給与", Decimal("1000"), True)
        expense = Transaction(date(2026, 1, 10), "食費", Decimal("400"), False)
        self.assertEqual(format_signed(income), "+¥1,000")
        self.assertEqual(format_signed(expense), "-¥400")

    def test_format_signed_follows_balance_effect(self):
        negative_income = Transaction(date(2026, 1, 5), "給与", Decimal("-5"), True)
        negative_expense = Transaction(date(2026, 1, 5), "食費", Decimal("-5"), False)
        self.assertEqual(format_signed(negative_income), "-¥5")
        self.assertEqual(format_signed(negative_expense), "+¥5")
        self.assertEqual(format_signed(Transaction(date(2026, 1, 5), "食費", Decimal("0"), False)), "-¥0")


if __name__ == "__main__":
    unittest.main(verbosity=2)
