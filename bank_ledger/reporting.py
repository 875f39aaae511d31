"""
Reporting Module

Read-only view over a ledger's accounts. Builds a structured snapshot
(pydantic models, exportable as JSON) and renders the plain-text bank
report. Only account_number, holder_name, balance and product_type are read.
"""

from decimal import Decimal
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable, List

from pydantic import BaseModel, Field, computed_field

from .money import ZERO, format_amount

if TYPE_CHECKING:
    from .accounts import Account


REPORT_HEADER = "\n Bank Report:"
REPORT_FOOTER = "-----------------------------------"


class AccountSummary(BaseModel):
    account_number: str
    holder_name: str
    product_type: str
    balance: Decimal

    @classmethod
    def from_account(cls, account: 'Account') -> 'AccountSummary':
        return cls(
            account_number=account.account_number,
            holder_name=account.holder_name,
            product_type=account.product_type.value,
            balance=account.balance
        )

    def display_line(self, symbol: str = "$", precision: int = 2) -> str:
        return f"{self.holder_name} ({self.account_number}): {format_amount(self.balance, symbol, precision)}"


class LedgerReport(BaseModel):
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    accounts: List[AccountSummary] = Field(default_factory=list)

    @computed_field
    @property
    def account_count(self) -> int:
        return len(self.accounts)

    @computed_field
    @property
    def total_balance(self) -> Decimal:
        return sum((summary.balance for summary in self.accounts), ZERO)


def build_report(accounts: Iterable['Account']) -> LedgerReport:
    """
    Snapshot account state in iteration order

    Args:
        accounts: A Ledger or any iterable of accounts

    Returns:
        LedgerReport with one AccountSummary per account
    """
    return LedgerReport(accounts=[AccountSummary.from_account(acc) for acc in accounts])


def render_report(report: LedgerReport, symbol: str = "$", precision: int = 2) -> str:
    """Render the text bank report: header, one line per account, footer"""
    lines = [REPORT_HEADER]
    lines.extend(summary.display_line(symbol, precision) for summary in report.accounts)
    lines.append(REPORT_FOOTER)
    return "\n".join(lines)


def export_json(report: LedgerReport, indent: int = 2) -> str:
    """Serialize a report to JSON (Decimal balances become strings)"""
    return report.model_dump_json(indent=indent)
