# PROGRAM:      Kakeibo household ledger (terminal menu)
# PURPOSE:      Lets the user record income and expenses for this session
# INPUT:        Menu choices and transaction fields typed at the prompt
# PROCESS:      Adds and deletes transactions, computes summaries
# OUTPUT:       Tabulate aligned lists and reports

from __future__ import annotations

from typing import List

from tabulate import tabulate

from app_settings import AppSettings, load_settings
from entry_form import EntryForm
from ledger import Transaction, TransactionStore, format_currency, format_signed, parse_date
from logging_setup import configure_logging
from summaries import expense_category_summaries, get_totals, monthly_summaries


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    run_cli_menu(TransactionStore(), settings)


# ---------- Rendering ----------

# prints the three summary figures: income, expense, balance
def _render_summary(store: TransactionStore, settings: AppSettings) -> None:
    totals = get_totals(store.list())
    sym = settings.currency_symbol
    rows = [[
        format_currency(totals["income"], sym),
        format_currency(totals["expense"], sym),
        format_currency(totals["balance"], sym),
    ]]
    print(tabulate(rows, headers=["収入 Income", "支出 Expense", "残高 Balance"]))


# renders the transaction list newest first, numbered from 1
def _render_transactions_table(rows: List[Transaction], settings: AppSettings) -> None:
    if not rows:
        print("No transactions found.")
        return
    table = []
    for n, t in enumerate(rows, start=1):
        memo = t.memo if len(t.memo) <= 40 else t.memo[:37] + "..."
        table.append([n, t.date.isoformat(), t.category, format_signed(t, settings.currency_symbol), memo])
    print(tabulate(table, headers=["#", "Date", "Category", "Amount", "Memo"]))


def _render_monthly(store: TransactionStore, settings: AppSettings) -> None:
    rows = monthly_summaries(store.list())
    if not rows:
        print("No transactions found.")
        return
    sym = settings.currency_symbol
    table = [
        [r.label, format_currency(r.income, sym), format_currency(r.expense, sym), format_currency(r.balance, sym)]
        for r in rows
    ]
    print(tabulate(table, headers=["Month", "Income", "Expense", "Balance"]))


def _render_categories(store: TransactionStore, settings: AppSettings) -> None:
    rows = expense_category_summaries(store.list())
    if not rows:
        print("No expenses found.")
        return
    table = [[r.category, format_currency(r.amount, settings.currency_symbol)] for r in rows]
    print(tabulate(table, headers=["Category", "Expense"]))


# ---------- Add transaction ----------

def _render_draft(form: EntryForm) -> None:
    d = form.draft
    rows = [
        ["Type", "収入 Income" if d.is_income else "支出 Expense"],
        ["Date", d.date.isoformat()],
        ["Category", d.category],
        ["Amount", d.amount_text],
        ["Memo", d.memo],
    ]
    print(tabulate(rows, tablefmt="plain"))


def _select_category(form: EntryForm) -> None:
    cats = form.category_choices
    print("Select a category by number:")
    for idx, name in enumerate(cats, start=1):
        print(f"{idx} - {name}")
    choice = input("Choice: ").strip()
    if choice.isdigit() and 1 <= int(choice) <= len(cats):
        form.draft.category = cats[int(choice) - 1]
    else:
        print("Invalid choice. Keeping current category.")


def _enter_transaction_flow(store: TransactionStore, settings: AppSettings) -> None:
    """Interactive entry for a single transaction."""
    form = EntryForm(
        store,
        expense_categories=settings.expense_categories,
        income_categories=settings.income_categories,
    )
    form.begin()

    while form.is_editing:
        print("\n=== 取引を追加 Add Transaction ===")
        _render_draft(form)
        save_label = "Save" if form.can_save else "Save (needs category and amount)"
        choice = input(
            "1) Toggle expense / income\n"
            "2) Date\n"
            "3) Category\n"
            "4) Amount\n"
            "5) Memo\n"
            f"6) {save_label}\n"
            "0) Cancel\n"
            "Choose an option: "
        ).strip()

        if choice == "1":
            form.set_income(not form.draft.is_income)
        elif choice == "2":
            value, err = parse_date(input("Date (YYYY-MM-DD): "))
            if err:
                print(err)
            else:
                form.draft.date = value
        elif choice == "3":
            _select_category(form)
        elif choice == "4":
            # not checked here; save() ignores text that is not a number
            form.draft.amount_text = input("Amount: ").strip()
        elif choice == "5":
            form.draft.memo = input("Memo: ").strip()
        elif choice == "6":
            if form.save() is not None:
                print("✔ Transaction saved.")
        elif choice == "0":
            form.cancel()
            print("Entry cancelled.")
        else:
            print("Invalid option. Please choose 0–6.")


# ---------- Delete transaction ----------

def _delete_transaction_flow(store: TransactionStore, settings: AppSettings) -> None:
    rows = store.newest_first()
    if not rows:
        print("No transactions to delete.")
        return
    _render_transactions_table(rows, settings)
    raw = input("Number of the transaction to delete (blank = cancel): ").strip()
    if not raw:
        return
    if not raw.isdigit() or not (1 <= int(raw) <= len(rows)):
        print("Invalid choice.")
        return
    victim = rows[int(raw) - 1]
    confirmed = input("Are you sure you want to delete this transaction? (y/n): ").strip().lower()
    if confirmed == "y":
        store.remove([victim.id])
        print("Transaction deleted.")
    else:
        print("Deletion cancelled.")


# ---------- Menu ----------

def run_cli_menu(store: TransactionStore, settings: AppSettings) -> None:
    MENU = (
        f"\n=== {settings.title} ===\n"
        "1) View transactions\n"
        "2) Add transaction\n"
        "3) Delete transaction\n"
        "4) Monthly summary\n"
        "5) Expense by category\n"
        "0) Exit\n"
        "Choose an option: "
    )

    while True:
        print()
        _render_summary(store, settings)
        choice = input(MENU).strip()
        if choice == "1":
            _render_transactions_table(store.newest_first(), settings)
        elif choice == "2":
            _enter_transaction_flow(store, settings)
        elif choice == "3":
            _delete_transaction_flow(store, settings)
        elif choice == "4":
            _render_monthly(store, settings)
        elif choice == "5":
            _render_categories(store, settings)
        elif choice == "0":
            print("さようなら!")
            break
        else:
            print("Invalid option. Please choose 0–5.")


if __name__ == "__main__":
    main()
