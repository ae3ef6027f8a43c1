"""
Account Module

Accounts hold a balance and an append-only ledger of transactions. The
withdrawal and interest behaviour of an account is selected by its kind
through a policy table:

- STANDARD: plain withdrawals, no interest.
- SAVINGS: a monthly quota of free withdrawals, a fixed fee once the quota
  is used up, and interest accrual at a fixed percentage.

Transfers move money with raw debit/credit primitives that never go through
the withdrawal policy, so a transfer never consumes quota or pays a fee.

Every mutation holds the account's lock for the whole balance change and
record append. Transfers take both accounts' locks in a fixed order.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Tuple
from enum import Enum
from contextlib import ExitStack, contextmanager
import threading

from .amounts import AmountLike, ZERO, to_decimal
from .config import get_config
from .results import OperationResult, RejectionReason
from .transactions import Transaction, TransactionKind


class AccountKind(Enum):
    """Account product kinds"""
    STANDARD = "standard"  # Plain transactional account
    SAVINGS = "savings"    # Quota, withdrawal fee and interest


@dataclass(frozen=True)
class SavingsTerms:
    """Withdrawal quota, fee and interest rate of a savings account"""
    interest_rate_percent: Decimal
    withdraw_limit_per_month: int
    withdrawal_fee: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'interest_rate_percent', to_decimal(self.interest_rate_percent))
        object.__setattr__(self, 'withdrawal_fee', to_decimal(self.withdrawal_fee))

        if self.interest_rate_percent < ZERO:
            raise ValueError("Interest rate cannot be negative")

        if isinstance(self.withdraw_limit_per_month, bool) or not isinstance(self.withdraw_limit_per_month, int):
            raise ValueError("Withdrawal limit must be an integer")

        if self.withdraw_limit_per_month < 0:
            raise ValueError("Withdrawal limit cannot be negative")

        if self.withdrawal_fee < ZERO:
            raise ValueError("Withdrawal fee cannot be negative")

    @classmethod
    def from_config(
        cls,
        interest_rate_percent: Optional[AmountLike] = None,
        withdraw_limit_per_month: Optional[int] = None,
        withdrawal_fee: Optional[AmountLike] = None
    ) -> 'SavingsTerms':
        """Build terms, filling unspecified values from configuration defaults"""
        settings = get_config()
        return cls(
            interest_rate_percent=(
                settings.default_interest_rate_percent
                if interest_rate_percent is None else interest_rate_percent
            ),
            withdraw_limit_per_month=(
                settings.default_withdraw_limit_per_month
                if withdraw_limit_per_month is None else withdraw_limit_per_month
            ),
            withdrawal_fee=(
                settings.default_withdrawal_fee
                if withdrawal_fee is None else withdrawal_fee
            ),
        )


@dataclass(frozen=True)
class AccountSnapshot:
    """Balance and history read together under the account lock"""
    account_number: str
    owner_name: str
    kind: AccountKind
    starting_balance: Decimal
    balance: Decimal
    history: Tuple[Transaction, ...]


def _join_note(note: str, suffix: str) -> str:
    return f"{note} {suffix}" if note else suffix


def _date_label(date: Optional[str]) -> str:
    return get_config().default_date_label if date is None else date


class Account:
    """
    Bank account with an append-only transaction ledger

    Identity is the account number: two accounts are equal iff their numbers
    match, whatever their balances or histories.
    """

    def __init__(
        self,
        account_number: str,
        owner_name: str,
        opening_balance: AmountLike = ZERO,
        kind: AccountKind = AccountKind.STANDARD,
        savings_terms: Optional[SavingsTerms] = None
    ):
        if not account_number:
            raise ValueError("Account number is required")

        if kind == AccountKind.SAVINGS and savings_terms is None:
            raise ValueError("Savings accounts require savings terms")

        if kind != AccountKind.SAVINGS and savings_terms is not None:
            raise ValueError("Only savings accounts carry savings terms")

        self._account_number = account_number
        self.owner_name = owner_name
        self._kind = kind
        self._savings_terms = savings_terms

        # Opening balance is taken as given, including negative values
        self._starting_balance = to_decimal(opening_balance)
        self._balance = self._starting_balance
        self._history: List[Transaction] = []
        self._withdraw_count = 0

        self._lock = threading.RLock()

    @classmethod
    def open_standard(
        cls,
        account_number: str,
        owner_name: str,
        opening_balance: AmountLike = ZERO
    ) -> 'Account':
        """Open a standard account"""
        return cls(account_number, owner_name, opening_balance)

    @classmethod
    def open_savings(
        cls,
        account_number: str,
        owner_name: str,
        opening_balance: AmountLike = ZERO,
        interest_rate_percent: Optional[AmountLike] = None,
        withdraw_limit_per_month: Optional[int] = None,
        withdrawal_fee: Optional[AmountLike] = None
    ) -> 'Account':
        """
        Open a savings account

        Unspecified terms come from configuration (by default 0% interest,
        3 free withdrawals per month, 2.00 fee).
        """
        terms = SavingsTerms.from_config(
            interest_rate_percent=interest_rate_percent,
            withdraw_limit_per_month=withdraw_limit_per_month,
            withdrawal_fee=withdrawal_fee,
        )
        return cls(
            account_number,
            owner_name,
            opening_balance,
            kind=AccountKind.SAVINGS,
            savings_terms=terms,
        )

    # Read-only state

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def kind(self) -> AccountKind:
        return self._kind

    @property
    def savings_terms(self) -> Optional[SavingsTerms]:
        return self._savings_terms

    @property
    def is_savings(self) -> bool:
        return self._kind == AccountKind.SAVINGS

    @property
    def balance(self) -> Decimal:
        with self._lock:
            return self._balance

    @property
    def starting_balance(self) -> Decimal:
        return self._starting_balance

    @property
    def history(self) -> Tuple[Transaction, ...]:
        """Ledger in the order operations completed"""
        with self._lock:
            return tuple(self._history)

    @property
    def withdraw_count_this_month(self) -> int:
        with self._lock:
            return self._withdraw_count

    @property
    def is_over_quota(self) -> bool:
        """True once the free withdrawals of the current period are used up"""
        if not self.is_savings:
            return False
        with self._lock:
            return self._withdraw_count >= self._savings_terms.withdraw_limit_per_month

    def snapshot(self) -> AccountSnapshot:
        """Consistent view of balance and history for reporting"""
        with self._lock:
            return AccountSnapshot(
                account_number=self._account_number,
                owner_name=self.owner_name,
                kind=self._kind,
                starting_balance=self._starting_balance,
                balance=self._balance,
                history=tuple(self._history),
            )

    def reconstructed_balance(self) -> Decimal:
        """Starting balance plus the signed sum of every recorded transaction"""
        with self._lock:
            return self._starting_balance + sum(
                (t.signed_amount for t in self._history), ZERO
            )

    # Operations

    def deposit(self, amount: AmountLike, date: Optional[str] = None, note: str = "") -> OperationResult:
        """Credit a positive amount and record a deposit"""
        amount = to_decimal(amount)
        if amount <= ZERO:
            return OperationResult.rejection(RejectionReason.INVALID_AMOUNT)

        with self._lock:
            record = self._raw_credit(amount, TransactionKind.DEPOSIT, _date_label(date), note)
        return OperationResult.accepted(record)

    def withdraw(self, amount: AmountLike, date: Optional[str] = None, note: str = "") -> OperationResult:
        """Withdraw using the policy of this account's kind"""
        amount = to_decimal(amount)
        if amount <= ZERO:
            return OperationResult.rejection(RejectionReason.INVALID_AMOUNT)

        with self._lock:
            return _WITHDRAW_POLICIES[self._kind](self, amount, _date_label(date), note)

    def transfer_to(
        self,
        target: 'Account',
        amount: AmountLike,
        date: Optional[str] = None,
        note: str = ""
    ) -> OperationResult:
        """Move money to another account; see transfer()"""
        return transfer(self, target, amount, date, note)

    def apply_interest(self, date: Optional[str] = None) -> OperationResult:
        """Accrue interest using the policy of this account's kind"""
        with self._lock:
            return _INTEREST_POLICIES[self._kind](self, _date_label(date))

    def reset_withdraw_count(self) -> None:
        """Start a new accounting period for the withdrawal quota"""
        with self._lock:
            self._withdraw_count = 0

    # Raw primitives. Only policies and transfer() call these, with the lock held.

    def _append(self, amount: Decimal, kind: TransactionKind, date: str, note: str) -> Transaction:
        record = Transaction(
            amount=amount,
            kind=kind,
            date=date,
            note=note,
            balance_after=self._balance,
        )
        self._history.append(record)
        return record

    def _raw_credit(self, amount: Decimal, kind: TransactionKind, date: str, note: str) -> Transaction:
        self._balance += amount
        return self._append(amount, kind, date, note)

    def _raw_debit(self, amount: Decimal, kind: TransactionKind, date: str, note: str) -> Transaction:
        self._balance -= amount
        return self._append(amount, kind, date, note)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._account_number == other._account_number

    def __hash__(self) -> int:
        return hash(self._account_number)

    def __repr__(self) -> str:
        return (
            f"Account(account_number={self._account_number!r}, "
            f"owner_name={self.owner_name!r}, kind={self._kind.value}, "
            f"balance={self.balance})"
        )


# Withdrawal policies

def _standard_withdraw(account: Account, amount: Decimal, date: str, note: str) -> OperationResult:
    if amount > account._balance:
        return OperationResult.rejection(RejectionReason.INSUFFICIENT_FUNDS)

    record = account._raw_debit(amount, TransactionKind.WITHDRAWAL, date, note)
    return OperationResult.accepted(record)


def _savings_withdraw(account: Account, amount: Decimal, date: str, note: str) -> OperationResult:
    terms = account._savings_terms
    fee_applied = account._withdraw_count >= terms.withdraw_limit_per_month

    # Principal and fee are checked together; a fee is never charged alone
    total_deduct = amount + terms.withdrawal_fee if fee_applied else amount
    if total_deduct > account._balance:
        return OperationResult.rejection(RejectionReason.INSUFFICIENT_FUNDS)

    # Both records carry the balance after the full deduction
    account._balance -= total_deduct
    records = [
        account._append(
            amount,
            TransactionKind.WITHDRAWAL,
            date,
            note + " (fee applied)" if fee_applied else note,
        )
    ]
    if fee_applied:
        records.append(
            account._append(terms.withdrawal_fee, TransactionKind.WITHDRAWAL, date, "Withdrawal fee")
        )

    account._withdraw_count += 1
    return OperationResult.accepted(*records)


# Interest policies

def _no_interest(account: Account, date: str) -> OperationResult:
    return OperationResult.accepted()


def _savings_interest(account: Account, date: str) -> OperationResult:
    rate = account._savings_terms.interest_rate_percent / Decimal('100')
    # Unconditional; an overdrawn balance accrues a negative interest delta
    interest = account._balance * rate
    record = account._raw_credit(interest, TransactionKind.INTEREST, date, "Interest Applied")
    return OperationResult.accepted(record)


_WITHDRAW_POLICIES: Dict[AccountKind, Callable[[Account, Decimal, str, str], OperationResult]] = {
    AccountKind.STANDARD: _standard_withdraw,
    AccountKind.SAVINGS: _savings_withdraw,
}

_INTEREST_POLICIES: Dict[AccountKind, Callable[[Account, str], OperationResult]] = {
    AccountKind.STANDARD: _no_interest,
    AccountKind.SAVINGS: _savings_interest,
}


# Transfers

@contextmanager
def _locked(*accounts: Account) -> Iterator[None]:
    """Hold the locks of all given accounts, acquired in account-number order"""
    ordered = sorted(accounts, key=lambda a: (a._account_number, id(a)))
    with ExitStack() as stack:
        for account in ordered:
            stack.enter_context(account._lock)
        yield


def transfer(
    source: Account,
    target: Account,
    amount: AmountLike,
    date: Optional[str] = None,
    note: str = ""
) -> OperationResult:
    """
    Move money from source to target as one unit

    Args:
        source: Account to debit
        target: Account to credit
        amount: Positive amount, at most the source balance
        date: Opaque date label recorded on both legs
        note: Caller note; each leg appends its counterparty

    Returns:
        OperationResult holding the TRANSFER_OUT and TRANSFER_IN records,
        or a rejection with neither account touched
    """
    if not isinstance(source, Account) or not isinstance(target, Account):
        raise TypeError("Transfers require two Account instances")

    amount = to_decimal(amount)
    if amount <= ZERO:
        return OperationResult.rejection(RejectionReason.INVALID_AMOUNT)

    date = _date_label(date)
    with _locked(source, target):
        if amount > source._balance:
            return OperationResult.rejection(RejectionReason.INSUFFICIENT_FUNDS)

        debit = source._raw_debit(
            amount,
            TransactionKind.TRANSFER_OUT,
            date,
            _join_note(note, f"(to {target.account_number})"),
        )
        credit = target._raw_credit(
            amount,
            TransactionKind.TRANSFER_IN,
            date,
            _join_note(note, f"(from {source.account_number})"),
        )
    return OperationResult.accepted(debit, credit)
