# app_settings.py
# Runtime settings for Kakeibo, read from KAKEIBO_* environment variables
# (or a .env file) with pydantic-settings.

from __future__ import annotations

from typing import Annotated, Any, Tuple

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Suggested categories shown by the entry form.
# These are suggestions only: the ledger accepts any category string.
DEFAULT_EXPENSE_CATEGORIES: Tuple[str, ...] = ("食費", "交通費", "娯楽", "光熱費", "通信費", "その他")
DEFAULT_INCOME_CATEGORIES: Tuple[str, ...] = ("給与", "賞与", "副業", "その他")

DEFAULT_CURRENCY_SYMBOL = "¥"
DEFAULT_LOG_LEVEL = "WARNING"
APP_TITLE = "家計簿"

ENV_PREFIX = "KAKEIBO_"


class AppSettings(BaseSettings):
    """
    Settings shared by the terminal menu and the desktop window.

    Recognised variables:
        KAKEIBO_CURRENCY_SYMBOL     symbol printed before amounts
        KAKEIBO_LOG_LEVEL           logging level name (DEBUG, INFO, ...)
        KAKEIBO_EXPENSE_CATEGORIES  comma-separated expense suggestions
        KAKEIBO_INCOME_CATEGORIES   comma-separated income suggestions
        KAKEIBO_TITLE               window / menu title
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    currency_symbol: str = Field(
        default=DEFAULT_CURRENCY_SYMBOL,
        description="Symbol printed before amounts",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Level for the kakeibo logger",
    )
    expense_categories: Annotated[Tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_EXPENSE_CATEGORIES,
        description="Suggested expense categories, first one is the form default",
    )
    income_categories: Annotated[Tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_INCOME_CATEGORIES,
        description="Suggested income categories",
    )
    title: str = Field(
        default=APP_TITLE,
        description="Window / menu title",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper() or DEFAULT_LOG_LEVEL
        return v

    @field_validator("expense_categories", "income_categories", mode="before")
    @classmethod
    def split_categories(cls, v: Any, info: ValidationInfo) -> Any:
        """Accept "a, b ,c" from the environment; an empty list keeps the defaults."""
        if isinstance(v, str):
            v = [part.strip() for part in v.split(",") if part.strip()]
        names = tuple(v)
        # the form always needs a first choice
        return names or cls.model_fields[info.field_name].default


def load_settings() -> AppSettings:
    """Read settings from the environment."""
    return AppSettings()
