"""
Accounting Period Module

Period rollover for a set of accounts: accrue interest, then start a fresh
withdrawal quota. Nothing here runs on a clock; the caller decides when a
period ends.
"""

from typing import Dict, Iterable, Optional

from .accounts import Account
from .logging_config import get_logger, log_action
from .results import OperationResult


logger = get_logger("account_ledger.periods")


def close_period(accounts: Iterable[Account], date: Optional[str] = None) -> Dict[str, OperationResult]:
    """
    Close the current accounting period

    Args:
        accounts: Accounts to roll over (each processed once, in order)
        date: Date label recorded on interest entries

    Returns:
        Interest result per account number
    """
    results: Dict[str, OperationResult] = {}

    for account in accounts:
        if account.account_number in results:
            continue

        result = account.apply_interest(date)
        account.reset_withdraw_count()
        results[account.account_number] = result

        if result.transactions:
            log_action(
                logger, "info", "Interest applied",
                action="apply_interest",
                resource=account.account_number,
                extra={
                    "amount": str(result.transactions[0].amount),
                    "balance": str(result.transactions[0].balance_after),
                }
            )

    log_action(
        logger, "info", f"Accounting period closed for {len(results)} accounts",
        action="close_period",
        extra={"date": date}
    )
    return results
