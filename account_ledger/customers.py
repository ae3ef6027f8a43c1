"""
Customer Module

Groups accounts under the customer that owns them. A customer only holds
references for reporting; it takes no part in balance bookkeeping.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import List, Optional

from .accounts import Account
from .amounts import ZERO


@dataclass
class Customer:
    """Customer with an ordered portfolio of accounts"""
    short_id: str
    name: str
    accounts: List[Account] = field(default_factory=list)

    def __post_init__(self):
        if not self.short_id:
            raise ValueError("Customer short ID is required")

    def add_account(self, account: Account) -> None:
        """Link an account to this customer"""
        if account in self.accounts:
            raise ValueError(
                f"Account {account.account_number} already linked to customer {self.short_id}"
            )
        self.accounts.append(account)

    def get_account(self, account_number: str) -> Optional[Account]:
        """Find one of this customer's accounts by number"""
        for account in self.accounts:
            if account.account_number == account_number:
                return account
        return None

    def total_balance(self) -> Decimal:
        """Sum of current balances across the portfolio"""
        return sum((account.balance for account in self.accounts), ZERO)
