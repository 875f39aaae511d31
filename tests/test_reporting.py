"""
Test suite for reporting module

Tests the read-only ledger snapshot, the text report and the JSON export.
"""

import json

import pytest
from decimal import Decimal

from bank_ledger.accounts import CheckingAccount, PremiumAccount, SavingsAccount
from bank_ledger.ledger import Ledger
from bank_ledger.reporting import (
    AccountSummary, LedgerReport, build_report, export_json, render_report,
    REPORT_HEADER, REPORT_FOOTER
)


@pytest.fixture
def ledger():
    ledger = Ledger()
    ledger.add_account(SavingsAccount("SAV001", "Sujan", 1500))
    ledger.add_account(CheckingAccount("CHK001", "Bishal", -135))
    ledger.add_account(PremiumAccount("PRM001", "Gm", Decimal('20183.75')))
    return ledger


class TestBuildReport:
    """Test report snapshots"""

    def test_snapshot_fields(self, ledger):
        """Test one summary per account in ledger order"""
        report = build_report(ledger)

        assert [s.account_number for s in report.accounts] == ["SAV001", "CHK001", "PRM001"]
        assert report.accounts[0] == AccountSummary(
            account_number="SAV001",
            holder_name="Sujan",
            product_type="savings",
            balance=Decimal('1500')
        )
        assert report.account_count == 3
        assert report.total_balance == Decimal('21548.75')

    def test_snapshot_is_detached(self, ledger):
        """Test later activity does not change an existing report"""
        report = build_report(ledger)
        ledger.find_account("SAV001").deposit(100)

        assert report.accounts[0].balance == Decimal('1500')

    def test_reporting_does_not_mutate(self, ledger):
        """Test building and rendering are pure reads"""
        before = [(acc.account_number, acc.balance) for acc in ledger]

        render_report(build_report(ledger))

        assert [(acc.account_number, acc.balance) for acc in ledger] == before
        assert ledger.find_account("SAV001").withdrawals == 0

    def test_empty_report(self):
        report = build_report(Ledger())

        assert report.accounts == []
        assert report.total_balance == Decimal('0')


class TestRenderReport:
    """Test the plain-text bank report"""

    def test_render(self, ledger):
        text = render_report(build_report(ledger))

        assert text.split("\n") == [
            "",
            " Bank Report:",
            "Sujan (SAV001): $1500.00",
            "Bishal (CHK001): $-135.00",
            "Gm (PRM001): $20183.75",
            REPORT_FOOTER,
        ]

    def test_render_matches_display_info(self, ledger):
        """Test report lines use the same format as Account.display_info"""
        lines = render_report(build_report(ledger)).split("\n")[2:-1]
        assert lines == [acc.display_info() for acc in ledger]

    def test_display_all(self, ledger):
        """Test Ledger.display_all delegates to the reporting collaborator"""
        assert ledger.display_all() == render_report(build_report(ledger))
        assert ledger.display_all(symbol="£").startswith(REPORT_HEADER + "\nSujan (SAV001): £1500.00")

    def test_empty_ledger(self):
        assert render_report(LedgerReport()) == REPORT_HEADER + "\n" + REPORT_FOOTER


class TestExportJson:
    """Test JSON export"""

    def test_export(self, ledger):
        data = json.loads(export_json(build_report(ledger)))

        assert data["account_count"] == 3
        assert Decimal(data["total_balance"]) == Decimal('21548.75')
        assert data["accounts"][1]["account_number"] == "CHK001"
        assert Decimal(data["accounts"][1]["balance"]) == Decimal('-135')
        assert "generated_at" in data
