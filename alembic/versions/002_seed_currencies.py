"""Seed currencies - the API updates currencies but never creates them.

Revision ID: 002_seed_currencies
Revises: 001_initial
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_seed_currencies"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# (code, symbol, symbol_native, name)
CURRENCIES = [
    ("usd", "$", "$", "US Dollar"),
    ("eur", "€", "€", "Euro"),
    ("gbp", "£", "£", "British Pound Sterling"),
    ("cad", "CA$", "$", "Canadian Dollar"),
    ("aud", "AU$", "$", "Australian Dollar"),
    ("jpy", "¥", "￥", "Japanese Yen"),
    ("chf", "CHF", "CHF", "Swiss Franc"),
    ("sek", "Skr", "kr", "Swedish Krona"),
    ("nok", "Nkr", "kr", "Norwegian Krone"),
    ("dkk", "Dkr", "kr", "Danish Krone"),
    ("pln", "zł", "zł", "Polish Zloty"),
    ("brl", "R$", "R$", "Brazilian Real"),
    ("mxn", "MX$", "$", "Mexican Peso"),
    ("inr", "Rs", "₹", "Indian Rupee"),
    ("cny", "CN¥", "CN¥", "Chinese Yuan"),
]

currencies_table = sa.table(
    "currencies",
    sa.column("code", sa.String),
    sa.column("symbol", sa.String),
    sa.column("symbol_native", sa.String),
    sa.column("name", sa.String),
    sa.column("includes_tax", sa.Boolean),
)


def upgrade() -> None:
    op.bulk_insert(currencies_table, [
        {
            "code": code, "symbol": symbol, "symbol_native": native,
            "name": name, "includes_tax": False,
        }
        for code, symbol, native, name in CURRENCIES
    ])


def downgrade() -> None:
    codes = [code for code, *_ in CURRENCIES]
    op.execute(currencies_table.delete().where(currencies_table.c.code.in_(codes)))
