# charts.py
# Matplotlib figures for the Reports tab.  Figures are built with
# matplotlib.figure.Figure (no pyplot) so they can be embedded in Tk or
# created headless.

from __future__ import annotations

from typing import Iterable

from matplotlib.figure import Figure

from app_settings import DEFAULT_CURRENCY_SYMBOL
from ledger import NoDataError, Transaction
from summaries import category_frame, monthly_frame


def monthly_line_figure(
    transactions: Iterable[Transaction],
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> Figure:
    """Income and expense per month as a line chart."""
    summary = monthly_frame(transactions)
    if summary.empty:
        raise NoDataError("No transactions to plot.")

    fig = Figure(figsize=(8.8, 5.2))
    ax = fig.add_subplot(111)
    ax.plot(summary.index, summary["income"], marker="o", label="Income", color="green")
    ax.plot(summary.index, summary["expense"], marker="o", label="Expense", color="red")
    ax.set_title("Monthly Income & Expense")
    ax.set_xlabel("Month")
    ax.set_ylabel(f"Amount ({symbol})")
    ax.grid(True)
    ax.legend()
    fig.autofmt_xdate()
    fig.subplots_adjust(bottom=0.2)
    return fig


def category_pie_figure(transactions: Iterable[Transaction]) -> Figure:
    """Share of total expense per category as a pie chart."""
    df = category_frame(transactions)
    df = df[df["amount"] > 0]
    if df.empty:
        raise NoDataError("No expenses to plot.")

    fig = Figure(figsize=(6, 6))
    ax = fig.add_subplot(111)
    ax.pie(df["amount"], labels=df["category"], autopct="%1.1f%%", startangle=90, counterclock=False)
    ax.set_title("Expense by Category")
    ax.axis("equal")
    return fig
