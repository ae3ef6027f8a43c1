"""
Test suite for reporting module

Tests statement and portfolio rendering in text, JSON and dict formats.
Reports must never mutate the accounts they describe.
"""

import json

import pytest
from decimal import Decimal

from account_ledger.accounts import Account
from account_ledger.customers import Customer
from account_ledger.reporting import (
    ReportFormat, build_statement, build_portfolio,
    format_statement, format_portfolio, render_portfolio, SEPARATOR
)


class TestStatements:
    """Test single-account statements"""

    def setup_method(self):
        """Set up test fixtures"""
        self.account = Account.open_standard("10001", "Phuc", "800.0")
        self.other = Account.open_standard("20001", "Loc", "0")
        self.account.deposit(200, "2025-09-17", "Paycheck")
        self.account.withdraw(100, "2025-09-17", "ATM")
        self.account.transfer_to(self.other, 150, "2025-09-17", "Pay Loc")

    def test_build_statement(self):
        """Test statement view model fields"""
        statement = build_statement(self.account, "01")

        assert statement.customer_short_id == "01"
        assert statement.account_number == "10001"
        assert statement.owner_name == "Phuc"
        assert statement.kind == "standard"
        assert statement.starting_balance == "800.00"
        assert statement.final_balance == "750.00"
        assert len(statement.lines) == 3

        line = statement.lines[2]
        assert line.date == "2025-09-17"
        assert line.label == "Transfer Out"
        assert line.amount == "150.00"
        assert line.note == "Pay Loc (to 20001)"
        assert line.balance_after == "750.00"

    def test_format_statement(self):
        """Test classic text layout"""
        text = format_statement(self.account, "01")

        expected = (
            "Phuc (ID: 01, Account: 10001, Starting Balance: 800.00)\n"
            "  [2025-09-17] Deposit 200.00 (Paycheck) → Balance: 1000.00\n"
            "  [2025-09-17] Withdrawal 100.00 (ATM) → Balance: 900.00\n"
            "  [2025-09-17] Transfer Out 150.00 (Pay Loc (to 20001)) → Balance: 750.00\n"
            "Final Balance: 750.00\n"
            f"{SEPARATOR}\n\n"
        )
        assert text == expected

    def test_amounts_rounded_for_display_only(self):
        """Test statement rounding leaves the ledger exact"""
        account = Account.open_savings("20002", "Saver", "100.005", interest_rate_percent="1")
        account.apply_interest("2025-09-30")

        statement = build_statement(account, "02")

        assert statement.lines[0].amount == "1.00"
        assert statement.final_balance == "101.01"
        assert account.balance == Decimal('101.00505')

    def test_reporting_is_read_only(self):
        """Test rendering leaves balance and history unchanged"""
        balance = self.account.balance
        history = self.account.history

        format_statement(self.account, "01")
        build_statement(self.account, "01")

        assert self.account.balance == balance
        assert self.account.history == history


class TestPortfolios:
    """Test customer portfolios"""

    def setup_method(self):
        """Set up test fixtures"""
        self.customer = Customer("02", "Loc")
        self.savings = Account.open_savings(
            "20001", "Loc", "1200.0",
            interest_rate_percent="3.0", withdraw_limit_per_month=2, withdrawal_fee="5.0"
        )
        self.customer.add_account(self.savings)
        self.savings.deposit(300, "2025-09-19", "Bonus")

    def test_format_portfolio(self):
        """Test customer header precedes each statement"""
        text = format_portfolio(self.customer)

        assert text.startswith("Customer Loc (ID: 02)\n")
        assert "Loc (ID: 02, Account: 20001, Starting Balance: 1200.00)" in text
        assert "  [2025-09-19] Deposit 300.00 (Bonus) → Balance: 1500.00" in text
        assert text.endswith(f"Final Balance: 1500.00\n{SEPARATOR}\n\n")

    def test_build_portfolio(self):
        """Test portfolio view model"""
        report = build_portfolio(self.customer)

        assert report.customer_short_id == "02"
        assert report.customer_name == "Loc"
        assert report.total_balance == "1500.00"
        assert [s.account_number for s in report.statements] == ["20001"]

    def test_render_text(self):
        """Test text rendering matches format_portfolio"""
        assert render_portfolio(self.customer) == format_portfolio(self.customer)

    def test_render_json(self):
        """Test JSON rendering"""
        data = json.loads(render_portfolio(self.customer, ReportFormat.JSON))

        assert data["customer_short_id"] == "02"
        assert data["statements"][0]["lines"][0]["label"] == "Deposit"
        assert data["statements"][0]["final_balance"] == "1500.00"

    def test_render_dict(self):
        """Test dict rendering"""
        data = render_portfolio(self.customer, ReportFormat.DICT)

        assert isinstance(data, dict)
        assert data["total_balance"] == "1500.00"
        assert data["statements"][0]["kind"] == "savings"

    def test_render_unknown_format(self):
        """Test unsupported formats are refused"""
        with pytest.raises(ValueError, match="Unsupported report format"):
            render_portfolio(self.customer, "xml")

    def test_empty_portfolio(self):
        """Test a customer without accounts renders just the header"""
        assert format_portfolio(Customer("09", "Nobody")) == "Customer Nobody (ID: 09)\n"
