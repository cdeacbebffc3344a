# summaries.py
# Totals, monthly summaries, and expense-by-category summaries.
# Every function takes the transaction list as an argument and recomputes
# from scratch; nothing here is cached or stored.

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from ledger import Transaction

ZERO = Decimal("0")


@dataclass(frozen=True)
class MonthlySummary:
    year: int
    month: int
    income: Decimal
    expense: Decimal

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class ExpenseCategorySummary:
    category: str
    amount: Decimal


# ---------- Reporting (overall) ----------

def total_income(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of amounts over income transactions."""
    return sum((t.amount for t in transactions if t.is_income), ZERO)


def total_expense(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of amounts over expense transactions."""
    return sum((t.amount for t in transactions if not t.is_income), ZERO)


def balance(transactions: Iterable[Transaction]) -> Decimal:
    """Income minus expense."""
    txs = list(transactions)
    return total_income(txs) - total_expense(txs)


def get_totals(transactions: Iterable[Transaction]) -> Dict[str, Decimal]:
    """
    Compute totals from all transactions.
    Returns a dict with keys: 'income', 'expense', 'balance'.
    """
    txs = list(transactions)
    income = total_income(txs)
    expense = total_expense(txs)
    return {"income": income, "expense": expense, "balance": income - expense}


# ---------- Monthly / Category Reporting ----------

def monthly_summaries(transactions: Iterable[Transaction]) -> List[MonthlySummary]:
    """
    Income and expense per calendar month, oldest month first.
    Months without transactions are not listed.
    """
    buckets: Dict[Tuple[int, int], Dict[str, Decimal]] = defaultdict(
        lambda: {"income": ZERO, "expense": ZERO}
    )
    for t in transactions:
        key = (t.date.year, t.date.month)
        if t.is_income:
            buckets[key]["income"] += t.amount
        else:
            buckets[key]["expense"] += t.amount

    return [
        MonthlySummary(year=y, month=m, income=v["income"], expense=v["expense"])
        for (y, m), v in sorted(buckets.items())
    ]


def expense_category_summaries(transactions: Iterable[Transaction]) -> List[ExpenseCategorySummary]:
    """
    Expense totals per category, largest first.
    Categories with equal totals are listed alphabetically.
    """
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for t in transactions:
        if not t.is_income:
            totals[t.category] += t.amount

    ordered = sorted(totals.items(), key=lambda kv: kv[0])
    ordered.sort(key=lambda kv: kv[1], reverse=True)
    return [ExpenseCategorySummary(category=c, amount=a) for c, a in ordered]


# ---------- DataFrames for tables and charts ----------

def monthly_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """
    Monthly summaries as a DataFrame indexed by month start.
    Columns: income, expense, balance (floats).
    """
    rows = monthly_summaries(transactions)
    df = pd.DataFrame(
        {
            "month": [pd.Timestamp(year=r.year, month=r.month, day=1) for r in rows],
            "income": [float(r.income) for r in rows],
            "expense": [float(r.expense) for r in rows],
        },
        columns=["month", "income", "expense"],
    )
    df["balance"] = df["income"] - df["expense"]
    return df.set_index("month")


def category_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Expense-by-category summaries as a DataFrame (category, amount, share)."""
    rows = expense_category_summaries(transactions)
    df = pd.DataFrame(
        {
            "category": [r.category for r in rows],
            "amount": [float(r.amount) for r in rows],
        },
        columns=["category", "amount"],
    )
    total = df["amount"].sum()
    df["share"] = df["amount"] / total if total else 0.0
    return df
