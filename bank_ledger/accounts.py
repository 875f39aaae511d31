"""
Account Management Module

Account policy hierarchy: an abstract Account holding identity and balance,
an orthogonal InterestBearing capability, and the concrete Savings, Checking,
Premium and Student products with their withdrawal/deposit rules.

Policy rejections (soft failures) are returned as OperationResult values and
never raise. Invalid arguments (hard failures) raise InvalidArgument.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
import logging

from .errors import InvalidArgument
from .money import AmountLike, ZERO, format_amount, to_amount, to_positive_amount


logger = logging.getLogger("bank_ledger.accounts")


class ProductType(Enum):
    """Banking product types"""
    SAVINGS = "savings"
    CHECKING = "checking"
    PREMIUM = "premium"
    STUDENT = "student"


class OperationOutcome(Enum):
    """Outcome of a deposit or withdrawal"""
    APPLIED = "applied"
    REJECTED_LIMIT = "rejected_limit"                                  # Withdrawal count exhausted
    REJECTED_MIN_BALANCE = "rejected_min_balance"                      # Would breach minimum balance
    REJECTED_INSUFFICIENT_FUNDS = "rejected_insufficient_funds"        # Would go negative
    REJECTED_CAP_EXCEEDED = "rejected_cap_exceeded"                    # Would exceed maximum balance

    @property
    def is_applied(self) -> bool:
        return self is OperationOutcome.APPLIED


REJECTION_MESSAGES = {
    OperationOutcome.REJECTED_LIMIT: "Withdrawal limit reached",
    OperationOutcome.REJECTED_MIN_BALANCE: "Cannot go below minimum balance",
    OperationOutcome.REJECTED_INSUFFICIENT_FUNDS: "Insufficient funds",
    OperationOutcome.REJECTED_CAP_EXCEEDED: "Cannot exceed maximum balance",
}


@dataclass(frozen=True)
class OperationResult:
    """Result of a deposit or withdrawal on a single account"""
    outcome: OperationOutcome
    amount: Decimal
    balance: Decimal              # Balance after the operation
    fee: Decimal = ZERO           # Fees charged on top of the amount
    message: str = ""

    @property
    def applied(self) -> bool:
        """Check if the operation changed the balance"""
        return self.outcome.is_applied


class Account(ABC):
    """
    Abstract bank account

    Holds the account number, holder name and balance. The balance only
    changes through credit() and debit(); variants layer their policies
    on top through withdraw(), deposit() and the check_* methods.
    """

    product_type: ProductType

    def __init__(self, account_number: str, holder_name: str, balance: AmountLike):
        if not isinstance(account_number, str) or not account_number.strip():
            raise InvalidArgument("Account number cannot be empty")
        if not isinstance(holder_name, str) or not holder_name.strip():
            raise InvalidArgument("Account holder name cannot be empty")

        self._account_number = account_number
        self._holder_name = holder_name.strip()
        self._balance = to_amount(balance, "opening balance")

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def holder_name(self) -> str:
        return self._holder_name

    @holder_name.setter
    def holder_name(self, name: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgument("Name cannot be empty")
        self._holder_name = name.strip()

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def supports_interest(self) -> bool:
        """Check if this account earns interest"""
        return False

    # Balance primitives

    def credit(self, amount: AmountLike) -> None:
        """Add funds to the balance"""
        self._balance += to_positive_amount(amount, "Deposit amount must be > 0")

    def debit(self, amount: AmountLike) -> None:
        """Remove funds from the balance. No floor check is applied here."""
        self._balance -= to_positive_amount(amount, "Withdrawal amount must be > 0")

    # Policy checks (never mutate)

    def check_deposit(self, amount: AmountLike) -> OperationOutcome:
        """Evaluate the deposit policy for an amount without applying it"""
        to_positive_amount(amount, "Deposit amount must be > 0")
        return OperationOutcome.APPLIED

    @abstractmethod
    def check_withdraw(self, amount: AmountLike) -> OperationOutcome:
        """Evaluate the withdrawal policy for an amount without applying it"""

    # Policy operations

    def deposit(self, amount: AmountLike) -> OperationResult:
        """Deposit funds subject to the account's deposit policy"""
        value = to_positive_amount(amount, "Deposit amount must be > 0")
        outcome = self.check_deposit(value)
        if not outcome.is_applied:
            return self._reject(outcome, value, "deposit")

        self.credit(value)
        return OperationResult(OperationOutcome.APPLIED, value, self._balance)

    def withdraw(self, amount: AmountLike) -> OperationResult:
        """Withdraw funds subject to the account's withdrawal policy"""
        value = to_positive_amount(amount, "Withdrawal amount must be > 0")
        outcome = self.check_withdraw(value)
        if not outcome.is_applied:
            return self._reject(outcome, value, "withdraw")

        self.debit(value)
        return OperationResult(OperationOutcome.APPLIED, value, self._balance)

    def monthly_interest(self) -> Optional[Decimal]:
        """
        Interest capability probe

        Returns the interest owed for one month, or None when the account
        does not earn interest.
        """
        return None

    def display_info(self, symbol: str = "$", precision: int = 2) -> str:
        """One-line human readable summary"""
        return f"{self._holder_name} ({self._account_number}): {format_amount(self._balance, symbol, precision)}"

    def _reject(self, outcome: OperationOutcome, amount: Decimal, operation: str) -> OperationResult:
        message = REJECTION_MESSAGES[outcome]
        logger.warning(
            "%s rejected on %s: %s (amount=%s, balance=%s)",
            operation.capitalize(), self._account_number, message, amount, self._balance
        )
        return OperationResult(outcome, amount, self._balance, message=message)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(account_number={self._account_number!r}, "
                f"holder_name={self._holder_name!r}, balance={self._balance!r})")


class InterestBearing(ABC):
    """Capability mixin for accounts that accrue monthly interest"""

    INTEREST_RATE: Decimal  # Annual rate, e.g. 0.02 for 2%

    @property
    def annual_rate(self) -> Decimal:
        return self.INTEREST_RATE

    @property
    def supports_interest(self) -> bool:
        return True

    @abstractmethod
    def calculate_interest(self) -> Decimal:
        """Interest for one month. Reads the balance; never mutates it."""

    def monthly_interest(self) -> Optional[Decimal]:
        return self.calculate_interest()


class SavingsAccount(InterestBearing, Account):
    """
    Savings account

    Requires a 500 minimum balance, allows 3 withdrawals over the account's
    lifetime (the counter never resets) and earns 2% annual interest.
    """

    product_type = ProductType.SAVINGS
    MIN_BALANCE = Decimal('500')
    INTEREST_RATE = Decimal('0.02')
    WITHDRAWAL_LIMIT = 3

    def __init__(self, account_number: str, holder_name: str, balance: AmountLike):
        super().__init__(account_number, holder_name, balance)
        if self._balance < self.MIN_BALANCE:
            raise InvalidArgument(
                f"Savings requires opening balance >= {format_amount(self.MIN_BALANCE)}"
            )
        self.withdrawals = 0

    def check_withdraw(self, amount: AmountLike) -> OperationOutcome:
        value = to_positive_amount(amount, "Withdrawal amount must be > 0")
        if self.withdrawals >= self.WITHDRAWAL_LIMIT:
            return OperationOutcome.REJECTED_LIMIT
        if self._balance - value < self.MIN_BALANCE:
            return OperationOutcome.REJECTED_MIN_BALANCE
        return OperationOutcome.APPLIED

    def withdraw(self, amount: AmountLike) -> OperationResult:
        result = super().withdraw(amount)
        if result.applied:
            self.withdrawals += 1
        return result

    def calculate_interest(self) -> Decimal:
        return self._balance * self.INTEREST_RATE / 12


class CheckingAccount(Account):
    """
    Checking account

    Withdrawals always go through. When a withdrawal leaves the balance
    negative a single overdraft fee is charged; the fee itself is not
    re-checked for a second overdraft.
    """

    product_type = ProductType.CHECKING
    OVERDRAFT_FEE = Decimal('35')

    def check_withdraw(self, amount: AmountLike) -> OperationOutcome:
        to_positive_amount(amount, "Withdrawal amount must be > 0")
        return OperationOutcome.APPLIED

    def withdraw(self, amount: AmountLike) -> OperationResult:
        value = to_positive_amount(amount, "Withdrawal amount must be > 0")
        self.debit(value)

        fee = ZERO
        if self._balance < ZERO:
            logger.warning(
                "Overdraft on %s: fee %s applied (balance=%s)",
                self._account_number, self.OVERDRAFT_FEE, self._balance
            )
            self.debit(self.OVERDRAFT_FEE)
            fee = self.OVERDRAFT_FEE

        return OperationResult(
            OperationOutcome.APPLIED, value, self._balance, fee=fee,
            message="Overdraft fee applied" if fee else ""
        )


class PremiumAccount(InterestBearing, Account):
    """Premium account: 10000 opening minimum, no overdraft, 5% annual interest"""

    product_type = ProductType.PREMIUM
    MIN_BALANCE = Decimal('10000')
    INTEREST_RATE = Decimal('0.05')

    def __init__(self, account_number: str, holder_name: str, balance: AmountLike):
        super().__init__(account_number, holder_name, balance)
        if self._balance < self.MIN_BALANCE:
            raise InvalidArgument(
                f"Premium requires opening balance >= {format_amount(self.MIN_BALANCE)}"
            )

    def check_withdraw(self, amount: AmountLike) -> OperationOutcome:
        value = to_positive_amount(amount, "Withdrawal amount must be > 0")
        if self._balance - value < ZERO:
            return OperationOutcome.REJECTED_INSUFFICIENT_FUNDS
        return OperationOutcome.APPLIED

    def calculate_interest(self) -> Decimal:
        return self._balance * self.INTEREST_RATE / 12


class StudentAccount(Account):
    """
    Student account

    Balance is capped at 5000. The cap applies to every inbound deposit,
    including being the receiving side of a transfer. No interest.
    """

    product_type = ProductType.STUDENT
    MAX_BALANCE = Decimal('5000')

    def __init__(self, account_number: str, holder_name: str, balance: AmountLike):
        super().__init__(account_number, holder_name, balance)
        if self._balance > self.MAX_BALANCE:
            raise InvalidArgument(
                f"StudentAccount opening balance cannot exceed {format_amount(self.MAX_BALANCE)}"
            )

    def check_withdraw(self, amount: AmountLike) -> OperationOutcome:
        value = to_positive_amount(amount, "Withdrawal amount must be > 0")
        if self._balance - value < ZERO:
            return OperationOutcome.REJECTED_INSUFFICIENT_FUNDS
        return OperationOutcome.APPLIED

    def check_deposit(self, amount: AmountLike) -> OperationOutcome:
        value = to_positive_amount(amount, "Deposit amount must be > 0")
        if self._balance + value > self.MAX_BALANCE:
            return OperationOutcome.REJECTED_CAP_EXCEEDED
        return OperationOutcome.APPLIED


ACCOUNT_CLASSES = {
    ProductType.SAVINGS: SavingsAccount,
    ProductType.CHECKING: CheckingAccount,
    ProductType.PREMIUM: PremiumAccount,
    ProductType.STUDENT: StudentAccount,
}


def open_account(
    product_type: Union[ProductType, str],
    account_number: str,
    holder_name: str,
    opening_balance: AmountLike
) -> Account:
    """
    Open an account of the given product type

    Args:
        product_type: ProductType or its string value ("savings", "checking", ...)
        account_number: Unique account identifier
        holder_name: Name of the account holder
        opening_balance: Initial balance

    Returns:
        The concrete Account variant

    Raises:
        InvalidArgument: If the product type is unknown or any argument is invalid
    """
    if not isinstance(product_type, ProductType):
        try:
            product_type = ProductType(str(product_type).lower())
        except ValueError:
            raise InvalidArgument(f"Unknown product type: {product_type!r}") from None

    account_class = ACCOUNT_CLASSES[product_type]
    return account_class(account_number, holder_name, opening_balance)
