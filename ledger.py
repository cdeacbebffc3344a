# PROGRAM:      Kakeibo household ledger
# PURPOSE:      Holds the transactions recorded during a session
# INPUT:        Transactions built by the entry form
# PROCESS:      Adds, lists, and deletes transactions in memory
# OUTPUT:       Transaction records for the summaries and the front ends

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Iterator, List, Optional, Tuple

from app_settings import DEFAULT_CURRENCY_SYMBOL
from logging_setup import get_logger

log = get_logger("kakeibo.ledger")

# Plain decimal or exponent notation, no spaces, no thousands separators.
AMOUNT_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

# Largest power of ten (and smallest fraction) an amount may use
MAX_AMOUNT_DIGITS = 15

# Date formats accepted by the front ends
DATE_FORMATS = ["%Y-%m-%d", "%Y/%m/%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]


class NoDataError(Exception):
    pass


# A single recorded income or expense.  Records are never edited after
# creation; they are only added and deleted.
@dataclass(frozen=True)
class Transaction:
    date: date
    category: str
    amount: Decimal
    is_income: bool
    memo: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


# ---------- Parsing ----------

def parse_amount(amount_str: str) -> Tuple[Optional[Decimal], Optional[str]]:
    """
    Parse amount text into a finite Decimal.
    Returns (value, error) where one will be None.
    """
    s = amount_str or ""
    if not AMOUNT_PATTERN.fullmatch(s):
        return None, f"Amount is not a valid number: '{amount_str}'."
    try:
        d = Decimal(s)
    except (InvalidOperation, ValueError):
        return None, f"Amount is not a valid number: '{amount_str}'."
    if not d.is_finite():
        return None, f"Amount must be finite: '{amount_str}'."
    # keep amounts inside what the totals can add without overflowing
    if d.adjusted() > MAX_AMOUNT_DIGITS or d.as_tuple().exponent < -MAX_AMOUNT_DIGITS:
        return None, f"Amount is out of range: '{amount_str}'."
    return d, None


def parse_date(date_str: str) -> Tuple[Optional[date], Optional[str]]:
    """
    Accept a few common formats and return the calendar date.
    Returns (date, error) where one will be None.
    """
    s = (date_str or "").strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date(), None
        except ValueError:
            continue
    return None, f"Invalid date: '{date_str}'. Expected YYYY-MM-DD (e.g., 2026-01-05)."


# ---------- Formatting ----------

def format_currency(amount: Decimal, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Whole currency units with thousands separators, e.g. ¥1,000 or -¥600."""
    amount = Decimal(amount)
    whole = f"{abs(amount):,.0f}"
    if amount < 0 and whole != "0":
        return f"-{symbol}{whole}"
    return f"{symbol}{whole}"


def format_signed(tx: Transaction, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """
    Row amount signed by its effect on the balance: +¥1,000 or -¥400.
    A negative income shows as -, a negative expense as +.
    """
    effect = tx.amount if tx.is_income else -tx.amount
    if effect == 0:
        sign = "+" if tx.is_income else "-"
    else:
        sign = "+" if effect > 0 else "-"
    return f"{sign}{format_currency(abs(tx.amount), symbol)}"


# ---------- Store ----------

class TransactionStore:
    """
    Ordered, in-memory collection of transactions for one session.
    No validation is done here; callers build valid Transactions.
    """

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._items: List[Transaction] = list(transactions or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(list(self._items))

    def add(self, tx: Transaction) -> Transaction:
        self._items.append(tx)
        log.debug("added transaction %s (%s %s)", tx.id, tx.category, tx.amount)
        return tx

    def list(self) -> List[Transaction]:
        """Return all transactions in insertion order (a copy)."""
        return list(self._items)

    def get(self, tx_id: str) -> Optional[Transaction]:
        """Return a transaction by id, or None if not found."""
        for tx in self._items:
            if tx.id == tx_id:
                return tx
        return None

    def remove(self, tx_ids: Iterable[str]) -> int:
        """
        Delete every transaction whose id is in tx_ids.
        Returns how many were removed (0 when nothing matched).
        """
        doomed = set(tx_ids)
        kept = [t for t in self._items if t.id not in doomed]
        removed = len(self._items) - len(kept)
        self._items = kept
        if removed:
            log.debug("removed %d transaction(s)", removed)
        return removed

    def remove_at(self, positions: Iterable[int]) -> int:
        """
        Delete by position in insertion order.
        Positions out of range are ignored.
        """
        doomed = {p for p in positions if 0 <= p < len(self._items)}
        return self.remove([self._items[p].id for p in doomed])

    def newest_first(self) -> List[Transaction]:
        """Transactions by date, newest first; on the same day the latest added comes first."""
        return sorted(reversed(self._items), key=lambda t: t.date, reverse=True)
