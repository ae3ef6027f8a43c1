"""
Transaction Record Module

Immutable records describing one balance-affecting event on an account.
Amounts are always non-negative magnitudes; the sign comes from the kind.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Any, Dict
from enum import Enum


class TransactionKind(Enum):
    """Kinds of balance-affecting events"""
    DEPOSIT = ("deposit", "Deposit", True)
    WITHDRAWAL = ("withdrawal", "Withdrawal", False)   # Includes withdrawal fees
    TRANSFER_IN = ("transfer_in", "Transfer In", True)
    TRANSFER_OUT = ("transfer_out", "Transfer Out", False)
    INTEREST = ("interest", "Interest", True)

    def __init__(self, code: str, label: str, is_credit: bool):
        self.code = code
        self.label = label
        self.is_credit = is_credit


@dataclass(frozen=True)
class Transaction:
    """
    One entry in an account's ledger

    balance_after is the account balance at the moment the record was
    appended, after every deduction of the operation that produced it.
    Amounts are magnitudes, except INTEREST on an overdrawn balance, which
    records the (negative) delta actually applied.
    """
    amount: Decimal
    kind: TransactionKind
    date: str = "N/A"
    note: str = ""
    balance_after: Decimal = Decimal('0')

    @property
    def label(self) -> str:
        """Human-readable kind, e.g. 'Transfer In'"""
        return self.kind.label

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by the kind (credits positive)"""
        return self.amount if self.kind.is_credit else -self.amount

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary"""
        return {
            "amount": str(self.amount),
            "kind": self.kind.code,
            "label": self.label,
            "date": self.date,
            "note": self.note,
            "balance_after": str(self.balance_after),
        }
