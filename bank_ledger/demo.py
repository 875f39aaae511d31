"""
Demo scenario

Opens one account of each product, runs a withdrawal on each side of the
overdraft rule, a transfer and a month of interest, then prints the report.
"""

from .accounts import CheckingAccount, PremiumAccount, SavingsAccount, StudentAccount
from .config import get_config
from .ledger import Ledger
from .logging_config import setup_logging_from_config


def build_demo_ledger() -> Ledger:
    """Ledger holding the four demo accounts, before any activity"""
    ledger = Ledger()
    ledger.add_account(SavingsAccount("SAV001", "Sujan", 1500))
    ledger.add_account(CheckingAccount("CHK001", "bishal", 500))
    ledger.add_account(PremiumAccount("PRM001", "gm", 20000))
    ledger.add_account(StudentAccount("STD001", "susan", 1000))
    return ledger


def run_demo(ledger: Ledger) -> Ledger:
    ledger.find_account("SAV001").withdraw(200)     # 1500 -> 1300
    ledger.find_account("CHK001").withdraw(600)     # 500 -> -100, fee -> -135
    ledger.transfer("SAV001", "PRM001", 100)        # 1300 -> 1200, 20000 -> 20100
    ledger.apply_monthly_interest()                 # +2, +83.75
    return ledger


def main() -> int:
    settings = get_config()
    setup_logging_from_config(settings)

    ledger = run_demo(build_demo_ledger())
    print(ledger.display_all(symbol=settings.currency_symbol, precision=settings.display_precision))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
