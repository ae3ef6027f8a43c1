"""
Reporting Module

Read-only statements and customer portfolios. Reports are built from an
account snapshot so balance and history always agree, and are rendered as
text, JSON or plain dictionaries.
"""

from typing import Any, Dict, List, Union
from enum import Enum
from pydantic import BaseModel, Field

from .accounts import Account
from .amounts import format_amount
from .config import get_config
from .customers import Customer


SEPARATOR = "-" * 35


class ReportFormat(Enum):
    """Output formats for reports"""
    TEXT = "text"
    JSON = "json"
    DICT = "dict"


class TransactionLine(BaseModel):
    date: str
    label: str
    amount: str = Field(..., description="Decimal amount as string")
    note: str = ""
    balance_after: str = Field(..., description="Decimal balance as string")


class AccountStatement(BaseModel):
    customer_short_id: str
    account_number: str
    owner_name: str
    kind: str
    starting_balance: str
    lines: List[TransactionLine] = Field(default_factory=list)
    final_balance: str


class PortfolioReport(BaseModel):
    customer_short_id: str
    customer_name: str
    statements: List[AccountStatement] = Field(default_factory=list)
    total_balance: str


def build_statement(account: Account, customer_short_id: str) -> AccountStatement:
    """Build the statement of one account as seen by one customer"""
    precision = get_config().statement_precision
    snapshot = account.snapshot()

    lines = [
        TransactionLine(
            date=t.date,
            label=t.label,
            amount=format_amount(t.amount, precision),
            note=t.note,
            balance_after=format_amount(t.balance_after, precision),
        )
        for t in snapshot.history
    ]

    return AccountStatement(
        customer_short_id=customer_short_id,
        account_number=snapshot.account_number,
        owner_name=snapshot.owner_name,
        kind=snapshot.kind.value,
        starting_balance=format_amount(snapshot.starting_balance, precision),
        lines=lines,
        final_balance=format_amount(snapshot.balance, precision),
    )


def build_portfolio(customer: Customer) -> PortfolioReport:
    """Build statements for every account of a customer"""
    precision = get_config().statement_precision
    statements = [build_statement(account, customer.short_id) for account in customer.accounts]
    return PortfolioReport(
        customer_short_id=customer.short_id,
        customer_name=customer.name,
        statements=statements,
        total_balance=format_amount(customer.total_balance(), precision),
    )


def _statement_text(statement: AccountStatement) -> str:
    out = [
        f"{statement.owner_name} (ID: {statement.customer_short_id}, "
        f"Account: {statement.account_number}, "
        f"Starting Balance: {statement.starting_balance})"
    ]
    for line in statement.lines:
        out.append(
            f"  [{line.date}] {line.label} {line.amount} ({line.note})"
            f" → Balance: {line.balance_after}"
        )
    out.append(f"Final Balance: {statement.final_balance}")
    out.append(SEPARATOR)
    return "\n".join(out) + "\n\n"


def format_statement(account: Account, customer_short_id: str) -> str:
    """Text statement in the classic layout"""
    return _statement_text(build_statement(account, customer_short_id))


def format_portfolio(customer: Customer) -> str:
    """Customer header followed by the statement of each account"""
    report = build_portfolio(customer)
    header = f"Customer {report.customer_name} (ID: {report.customer_short_id})\n"
    return header + "".join(_statement_text(s) for s in report.statements)


def render_portfolio(
    customer: Customer,
    fmt: ReportFormat = ReportFormat.TEXT
) -> Union[str, Dict[str, Any]]:
    """Render a customer portfolio in the requested format"""
    if fmt == ReportFormat.TEXT:
        return format_portfolio(customer)

    report = build_portfolio(customer)
    if fmt == ReportFormat.JSON:
        return report.model_dump_json(indent=2)
    if fmt == ReportFormat.DICT:
        return report.model_dump()

    raise ValueError(f"Unsupported report format: {fmt}")
