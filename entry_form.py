# entry_form.py
# Add-transaction form: a draft that is either saved into the store or
# discarded.  Used by both the terminal menu and the desktop window.

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, Sequence

from app_settings import DEFAULT_EXPENSE_CATEGORIES, DEFAULT_INCOME_CATEGORIES
from ledger import Transaction, TransactionStore, parse_amount
from logging_setup import get_logger

log = get_logger("kakeibo.entry_form")


class EntryState(enum.Enum):
    IDLE = "idle"
    EDITING = "editing"


class EntryStateError(RuntimeError):
    """Raised when a form action is used in the wrong state."""


@dataclass
class Draft:
    date: date
    category: str
    is_income: bool = False
    amount_text: str = ""
    memo: str = ""


@dataclass
class EntryForm:
    """
    Two-state entry flow.

    IDLE --begin()--> EDITING --save() ok / cancel()--> IDLE

    A save whose amount text does not parse leaves the form in EDITING and
    the store untouched, without reporting an error.
    """

    store: TransactionStore
    expense_categories: Sequence[str] = DEFAULT_EXPENSE_CATEGORIES
    income_categories: Sequence[str] = DEFAULT_INCOME_CATEGORIES
    today: Callable[[], date] = date.today
    draft: Optional[Draft] = field(default=None, init=False)

    @property
    def state(self) -> EntryState:
        return EntryState.IDLE if self.draft is None else EntryState.EDITING

    @property
    def is_editing(self) -> bool:
        return self.draft is not None

    def _require_draft(self) -> Draft:
        if self.draft is None:
            raise EntryStateError("No transaction is being entered.")
        return self.draft

    def begin(self) -> Draft:
        """Open a fresh draft: today, expense, first expense category."""
        if self.draft is not None:
            raise EntryStateError("A transaction is already being entered.")
        first = self.expense_categories[0] if self.expense_categories else ""
        self.draft = Draft(date=self.today(), category=first)
        return self.draft

    def set_income(self, is_income: bool) -> None:
        # the chosen category is kept even if it is not in the new list
        self._require_draft().is_income = bool(is_income)

    @property
    def category_choices(self) -> List[str]:
        draft = self._require_draft()
        return list(self.income_categories if draft.is_income else self.expense_categories)

    @property
    def can_save(self) -> bool:
        if self.draft is None:
            return False
        return bool(self.draft.category) and bool(self.draft.amount_text)

    def save(self) -> Optional[Transaction]:
        """
        Store the draft as a new Transaction and return it.
        Returns None (and keeps editing) when saving is disabled or the
        amount text is not a number.
        """
        draft = self._require_draft()
        if not self.can_save:
            return None

        amount, err = parse_amount(draft.amount_text)
        if err:
            log.debug("save ignored: %s", err)
            return None

        tx = self.store.add(
            Transaction(
                date=draft.date,
                category=draft.category,
                amount=amount,
                is_income=draft.is_income,
                memo=draft.memo,
            )
        )
        self.draft = None
        return tx

    def cancel(self) -> None:
        self._require_draft()
        self.draft = None
