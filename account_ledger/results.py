"""
Operation Results Module

Ledger operations report rejections as values, not exceptions. A rejected
operation leaves the account untouched: no balance change, no record, no
quota increment.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
from enum import Enum

from .transactions import Transaction


class RejectionReason(Enum):
    """Why an operation was rejected"""
    INVALID_AMOUNT = "invalid_amount"          # Amount <= 0
    INSUFFICIENT_FUNDS = "insufficient_funds"  # Amount (plus fee) exceeds balance


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a deposit, withdrawal, transfer or interest run"""
    success: bool
    reason: Optional[RejectionReason] = None
    transactions: Tuple[Transaction, ...] = ()

    def __post_init__(self):
        if self.success and self.reason is not None:
            raise ValueError("Successful result cannot carry a rejection reason")
        if not self.success and self.reason is None:
            raise ValueError("Rejected result must carry a rejection reason")

    def __bool__(self) -> bool:
        return self.success

    @property
    def rejected(self) -> bool:
        return not self.success

    @classmethod
    def accepted(cls, *transactions: Transaction) -> 'OperationResult':
        return cls(success=True, transactions=tuple(transactions))

    @classmethod
    def rejection(cls, reason: RejectionReason) -> 'OperationResult':
        return cls(success=False, reason=reason)
