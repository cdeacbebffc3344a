# gui_app.py
# Tkinter GUI for the Kakeibo household ledger. Uses the in-memory ledger,
# the entry form and the summaries.
# Run with: python gui_app.py

import tkinter as tk
from tkinter import ttk, messagebox
from typing import Callable, Optional

# Matplotlib embedding
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from app_settings import AppSettings, load_settings
from charts import category_pie_figure, monthly_line_figure
from entry_form import EntryForm
from ledger import NoDataError, Transaction, TransactionStore, format_currency, format_signed, parse_date
from logging_setup import configure_logging, get_logger
from summaries import expense_category_summaries, get_totals, monthly_summaries

log = get_logger("kakeibo.gui_app")


class AddTransactionDialog(tk.Toplevel):
    """Modal 取引を追加 dialog driven by an EntryForm."""

    def __init__(self, parent, form: EntryForm, on_saved: Callable[[Transaction], None]):
        super().__init__(parent)
        self.title("取引を追加")
        self.resizable(False, False)
        self.transient(parent)

        self.form = form
        self.on_saved = on_saved
        draft = form.begin()

        self.v_income = tk.BooleanVar(value=draft.is_income)
        self.v_date = tk.StringVar(value=draft.date.isoformat())
        self.v_cat = tk.StringVar(value=draft.category)
        self.v_amount = tk.StringVar(value=draft.amount_text)
        self.v_memo = tk.StringVar(value=draft.memo)

        self._build_ui()

        self.v_cat.trace_add("write", lambda *_: self._sync_save_state())
        self.v_amount.trace_add("write", lambda *_: self._sync_save_state())
        self._sync_save_state()

        self.protocol("WM_DELETE_WINDOW", self._cancel)
        self.grab_set()

    def _build_ui(self):
        kind = ttk.LabelFrame(self, text="種類")
        kind.pack(fill="x", padx=10, pady=6)
        ttk.Radiobutton(kind, text="支出", variable=self.v_income, value=False,
                        command=self._sync_categories_to_type).pack(side="left", padx=6, pady=4)
        ttk.Radiobutton(kind, text="収入", variable=self.v_income, value=True,
                        command=self._sync_categories_to_type).pack(side="left", padx=6, pady=4)

        details = ttk.LabelFrame(self, text="詳細")
        details.pack(fill="x", padx=10, pady=6)

        def row(label):
            f = ttk.Frame(details)
            ttk.Label(f, text=label, width=10, anchor="e").pack(side="left")
            f.pack(fill="x", padx=6, pady=4)
            return f

        ttk.Entry(row("日付"), width=14, textvariable=self.v_date).pack(side="left", padx=6)

        self.e_cat = ttk.Combobox(row("カテゴリ"), width=18, state="readonly",
                                  textvariable=self.v_cat, values=self.form.category_choices)
        self.e_cat.pack(side="left", padx=6)

        # number pad: digits only
        digits_only = (self.register(lambda p: p == "" or p.isdigit()), "%P")
        ttk.Entry(row("金額"), width=14, textvariable=self.v_amount,
                  validate="key", validatecommand=digits_only).pack(side="left", padx=6)

        ttk.Entry(row("メモ"), width=30, textvariable=self.v_memo).pack(side="left", padx=6)

        btns = ttk.Frame(self)
        btns.pack(fill="x", padx=10, pady=(0, 10))
        ttk.Button(btns, text="キャンセル", command=self._cancel).pack(side="left")
        self.b_save = ttk.Button(btns, text="保存", command=self._save)
        self.b_save.pack(side="right")

    def _sync_categories_to_type(self):
        self.form.set_income(self.v_income.get())
        self.e_cat.configure(values=self.form.category_choices)

    def _push_to_draft(self):
        d = self.form.draft
        d.category = self.v_cat.get()
        d.amount_text = self.v_amount.get()
        d.memo = self.v_memo.get()

    def _sync_save_state(self):
        if not self.form.is_editing:
            return
        self._push_to_draft()
        self.b_save.state(["!disabled"] if self.form.can_save else ["disabled"])

    def _save(self):
        value, err = parse_date(self.v_date.get())
        if err:
            messagebox.showerror("Error", err, parent=self)
            return
        self.form.draft.date = value
        self._push_to_draft()
        tx = self.form.save()
        if tx is None:
            return
        self.grab_release()
        self.destroy()
        self.on_saved(tx)

    def _cancel(self):
        if self.form.is_editing:
            self.form.cancel()
        self.grab_release()
        self.destroy()


class App(tk.Tk):
    def __init__(self, store: Optional[TransactionStore] = None, settings: Optional[AppSettings] = None):
        super().__init__()
        self.settings = settings or load_settings()
        self.store = store if store is not None else TransactionStore()

        self.title(self.settings.title)
        self.geometry("1000x680")

        self._build_ui()
        self.refresh()

    # ---------- helpers ----------
    def warn(self, msg: str):
        messagebox.showwarning("Warning", msg, parent=self)

    def confirm(self, msg: str) -> bool:
        return messagebox.askyesno("Confirm", msg, parent=self)

    def money(self, amount) -> str:
        return format_currency(amount, self.settings.currency_symbol)

    # ---------- UI ----------
    def _build_ui(self):
        # summary cards
        cards = ttk.Frame(self)
        cards.pack(fill="x", padx=10, pady=10)
        self.v_income = tk.StringVar()
        self.v_expense = tk.StringVar()
        self.v_balance = tk.StringVar()
        for title, var, color in [("収入", self.v_income, "green"),
                                  ("支出", self.v_expense, "red"),
                                  ("残高", self.v_balance, "blue")]:
            card = ttk.Frame(cards, relief="groove", padding=10)
            ttk.Label(card, text=title, font=("TkDefaultFont", 11)).pack()
            tk.Label(card, textvariable=var, fg=color, font=("TkDefaultFont", 18, "bold")).pack()
            card.pack(side="left", fill="x", expand=True, padx=8)

        # tabs
        self.nb = ttk.Notebook(self)
        self.tab_tx = ttk.Frame(self.nb)
        self.tab_rep = ttk.Frame(self.nb)
        self.nb.add(self.tab_tx, text="Transactions")
        self.nb.add(self.tab_rep, text="Reports")
        self.nb.pack(fill="both", expand=True)

        self._build_transactions_tab()
        self._build_reports_tab()

    # ===== Transactions tab =====
    def _build_transactions_tab(self):
        top = ttk.Frame(self.tab_tx)
        top.pack(fill="x", padx=10, pady=6)

        ttk.Label(top, text="Type:").pack(side="left")
        self.tx_filter_type = ttk.Combobox(top, width=10, state="readonly", values=["All", "income", "expense"])
        self.tx_filter_type.current(0)
        self.tx_filter_type.pack(side="left", padx=(4, 12))
        self.tx_filter_type.bind("<<ComboboxSelected>>", lambda e: self.refresh_tx_table())

        ttk.Button(top, text="＋ Add…", command=self.open_add_dialog).pack(side="right")

        self.tx_tree = ttk.Treeview(
            self.tab_tx,
            columns=("date", "category", "amount", "memo"),
            show="headings",
            selectmode="extended",
        )
        for c, w, anchor in [("date", 120, "w"), ("category", 160, "w"), ("amount", 120, "e"), ("memo", 420, "w")]:
            self.tx_tree.heading(c, text=c.capitalize())
            self.tx_tree.column(c, width=w, anchor=anchor)
        self.tx_tree.tag_configure("income", foreground="green")
        self.tx_tree.tag_configure("expense", foreground="red")
        self.tx_tree.pack(fill="both", expand=True, padx=10, pady=6)
        self.tx_tree.bind("<Delete>", lambda e: self._tx_delete_selected())

        btns = ttk.Frame(self.tab_tx)
        btns.pack(fill="x", padx=10, pady=(0, 10))
        ttk.Button(btns, text="Delete Selected", command=self._tx_delete_selected).pack(side="left")

    def open_add_dialog(self):
        form = EntryForm(
            self.store,
            expense_categories=self.settings.expense_categories,
            income_categories=self.settings.income_categories,
        )
        AddTransactionDialog(self, form, on_saved=lambda tx: self.refresh())

    def _tx_delete_selected(self):
        # row iids are transaction ids, so deletion never depends on display order
        sel = self.tx_tree.selection()
        if not sel:
            self.warn("Select a transaction first.")
            return
        if self.confirm("Delete the selected transaction(s)? This cannot be undone."):
            removed = self.store.remove(sel)
            log.debug("deleted %d transaction(s) from the list view", removed)
            self.refresh()

    def refresh_tx_table(self):
        for r in self.tx_tree.get_children():
            self.tx_tree.delete(r)
        f_type = self.tx_filter_type.get()
        for t in self.store.newest_first():
            kind = "income" if t.is_income else "expense"
            if f_type != "All" and kind != f_type:
                continue
            self.tx_tree.insert(
                "", "end", iid=t.id, tags=(kind,),
                values=(t.date.isoformat(), t.category, format_signed(t, self.settings.currency_symbol), t.memo),
            )

    def refresh_summary(self):
        totals = get_totals(self.store.list())
        self.v_income.set(self.money(totals["income"]))
        self.v_expense.set(self.money(totals["expense"]))
        self.v_balance.set(self.money(totals["balance"]))

    def refresh(self):
        self.refresh_summary()
        self.refresh_tx_table()

    # ===== Reports tab =====
    def _build_reports_tab(self):
        top = ttk.Frame(self.tab_rep)
        top.pack(fill="x", padx=10, pady=8)

        ttk.Button(top, text="Monthly Summary (Table)", command=self.show_monthly_table).pack(side="left")
        ttk.Button(top, text="Expense by Category (Table)", command=self.show_category_table).pack(side="left", padx=8)
        ttk.Button(top, text="Line Chart (Monthly)", command=self.draw_line_chart).pack(side="left", padx=8)
        ttk.Button(top, text="Pie Chart (Categories)", command=self.draw_category_pie).pack(side="left", padx=8)

        self.rep_body = ttk.Frame(self.tab_rep)
        self.rep_body.pack(fill="both", expand=True, padx=10, pady=6)

    def _rep_clear(self):
        for w in self.rep_body.winfo_children():
            w.destroy()

    def _rep_table(self, rows: list):
        self._rep_clear()
        if not rows:
            ttk.Label(self.rep_body, text="No data.").pack()
            return
        columns = list(rows[0].keys())
        tv = ttk.Treeview(self.rep_body, columns=columns, show="headings")
        for c in columns:
            tv.heading(c, text=c.capitalize())
            tv.column(c, width=max(100, int(900 / len(columns))), anchor="w")
        tv.pack(fill="both", expand=True)
        for r in rows:
            tv.insert("", "end", values=[r[c] for c in columns])

    def _embed_fig(self, fig: Figure):
        self._rep_clear()
        canvas = FigureCanvasTkAgg(fig, master=self.rep_body)
        canvas.draw()
        canvas.get_tk_widget().pack(fill="both", expand=True)

    def show_monthly_table(self):
        self._rep_table([
            {
                "month": m.label,
                "income": self.money(m.income),
                "expense": self.money(m.expense),
                "balance": self.money(m.balance),
            }
            for m in monthly_summaries(self.store.list())
        ])

    def show_category_table(self):
        self._rep_table([
            {"category": c.category, "expense": self.money(c.amount)}
            for c in expense_category_summaries(self.store.list())
        ])

    def draw_line_chart(self):
        try:
            fig = monthly_line_figure(self.store.list(), self.settings.currency_symbol)
        except NoDataError as ex:
            self.warn(str(ex))
            return
        self._embed_fig(fig)

    def draw_category_pie(self):
        try:
            fig = category_pie_figure(self.store.list())
        except NoDataError as ex:
            self.warn(str(ex))
            return
        self._embed_fig(fig)


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    app = App(settings=settings)
    app.mainloop()


if __name__ == "__main__":
    main()
