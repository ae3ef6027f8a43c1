"""
Demo Scenario

Three customers, one standard and two savings accounts, a month of activity
and a round of transfers, followed by each customer's portfolio.

Run with: python -m account_ledger
"""

from typing import List

from .accounts import Account
from .customers import Customer
from .logging_config import get_logger, log_action, setup_logging
from .reporting import format_portfolio
from .results import OperationResult


logger = get_logger("account_ledger.demo")


def _check(result: OperationResult, action: str, account: Account) -> None:
    if result.rejected:
        log_action(
            logger, "warning", f"{action} rejected: {result.reason.value}",
            action=action, resource=account.account_number
        )


def build_demo() -> List[Customer]:
    """Run the scripted activity and return the customers"""
    phuc_acc = Account.open_standard("10001", "Phuc", "800.0")
    loc_acc = Account.open_savings(
        "20001", "Loc", "1200.0",
        interest_rate_percent="3.0", withdraw_limit_per_month=2, withdrawal_fee="5.0"
    )
    tho_acc = Account.open_savings(
        "30001", "Tho", "2000.0",
        interest_rate_percent="3.0", withdraw_limit_per_month=3, withdrawal_fee="2.0"
    )

    phuc = Customer("01", "Phuc")
    loc = Customer("02", "Loc")
    tho = Customer("03", "Tho")

    phuc.add_account(phuc_acc)
    loc.add_account(loc_acc)
    tho.add_account(tho_acc)

    _check(phuc_acc.deposit(200, "2025-09-17", "Paycheck"), "deposit", phuc_acc)
    _check(phuc_acc.withdraw(100, "2025-09-17", "ATM"), "withdraw", phuc_acc)
    _check(phuc_acc.transfer_to(loc_acc, 150, "2025-09-17", "Pay Loc"), "transfer", phuc_acc)

    _check(loc_acc.deposit(300, "2025-09-19", "Bonus"), "deposit", loc_acc)
    _check(loc_acc.withdraw(50, "2025-09-20", "Groceries"), "withdraw", loc_acc)
    _check(loc_acc.withdraw(25, "2025-09-21", "Extra1"), "withdraw", loc_acc)
    _check(loc_acc.withdraw(30, "2025-09-22", "Extra2"), "withdraw", loc_acc)
    _check(loc_acc.apply_interest("2025-09-30"), "apply_interest", loc_acc)

    _check(tho_acc.deposit(500, "2025-09-17", "Bonus"), "deposit", tho_acc)
    _check(tho_acc.withdraw(250, "2025-09-17", "Shopping"), "withdraw", tho_acc)
    _check(tho_acc.apply_interest("2025-09-30"), "apply_interest", tho_acc)

    _check(
        phuc_acc.transfer_to(loc_acc, 300, "2025-10-01", "Phuc sends money to Loc"),
        "transfer", phuc_acc
    )
    _check(
        loc_acc.transfer_to(tho_acc, 100, "2025-10-01", "Loc sends money to Tho"),
        "transfer", loc_acc
    )

    return [phuc, loc, tho]


def main() -> None:
    """Print every demo portfolio"""
    setup_logging()
    for customer in build_demo():
        print(format_portfolio(customer), end="")
