"""
Account Ledger

Bank accounts with an append-only transaction history, atomic transfers,
and a savings variant with a monthly free-withdrawal quota. All balances
use Decimal precision.
"""

__version__ = "1.0.0"
