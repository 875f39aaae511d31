"""
Ledger Module

Owns the account collection and coordinates every cross-account operation:
lookup, transfers and monthly interest. Accounts never reference the ledger
or each other.

Transfers are two-phase: both legs' policies are checked before either
balance is touched, so a rejected withdrawal can never credit the receiver.
If the apply phase still fails (a rejected deposit or an exception from an
overridden deposit/withdraw), the sender is re-credited back to its
pre-transfer balance.
"""

from dataclasses import dataclass
from decimal import Decimal
from threading import RLock
from typing import Iterator, List, Optional, Tuple
import logging

from .accounts import Account, OperationOutcome, REJECTION_MESSAGES
from .errors import AccountNotFound, DuplicateAccount, InvalidArgument
from .logging_config import log_action
from .money import AmountLike, ZERO, to_positive_amount
from .reporting import build_report, render_report


logger = logging.getLogger("bank_ledger.ledger")


@dataclass(frozen=True)
class TransferResult:
    """Outcome of a transfer between two accounts"""
    from_account: str
    to_account: str
    amount: Decimal
    outcome: OperationOutcome
    rejected_by: Optional[str] = None   # "sender" or "receiver" when rejected
    fee: Decimal = ZERO                 # Fees charged to the sender (overdraft)

    @property
    def applied(self) -> bool:
        """Check if funds moved"""
        return self.outcome.is_applied


@dataclass(frozen=True)
class InterestPosting:
    """Interest deposited (or refused) for one account"""
    account_number: str
    amount: Decimal
    outcome: OperationOutcome


class Ledger:
    """
    Coordinator for a collection of accounts

    Accounts are kept in insertion order, which is also the iteration and
    display order. A single re-entrant lock serializes all mutating ledger
    operations.
    """

    def __init__(self):
        self._accounts: List[Account] = []
        self._lock = RLock()

    @property
    def accounts(self) -> Tuple[Account, ...]:
        """Snapshot of the accounts in insertion order"""
        return tuple(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self.accounts)

    def __contains__(self, account_number: object) -> bool:
        return any(acc.account_number == account_number for acc in self._accounts)

    def add_account(self, account: Account) -> Account:
        """
        Register an account

        Raises:
            InvalidArgument: If the object is not an Account
            DuplicateAccount: If the account number is already registered
        """
        if not isinstance(account, Account):
            raise InvalidArgument(f"Expected an Account, got {type(account).__name__}")

        with self._lock:
            if account.account_number in self:
                raise DuplicateAccount(account.account_number)
            self._accounts.append(account)

        log_action(
            logger, "info", f"Account {account.account_number} added",
            action="account_added", resource=account.account_number,
            extra={"product_type": account.product_type.value}
        )
        return account

    def find_account(self, account_number: str) -> Account:
        """
        Find an account by number

        Raises:
            AccountNotFound: If no account has this number
        """
        with self._lock:
            for acc in self._accounts:
                if acc.account_number == account_number:
                    return acc
        raise AccountNotFound(account_number)

    def remove_account(self, account_number: str) -> Account:
        """Remove an account from the ledger and return it"""
        with self._lock:
            account = self.find_account(account_number)
            self._accounts.remove(account)

        log_action(
            logger, "info", f"Account {account_number} removed",
            action="account_removed", resource=account_number
        )
        return account

    def total_balance(self) -> Decimal:
        """Sum of all account balances"""
        return sum((acc.balance for acc in self._accounts), ZERO)

    def transfer(self, from_number: str, to_number: str, amount: AmountLike) -> TransferResult:
        """
        Move funds between two accounts

        Args:
            from_number: Sending account number
            to_number: Receiving account number
            amount: Amount to move (must be > 0)

        Returns:
            TransferResult; a rejected result means neither balance changed

        Raises:
            InvalidArgument: Same account on both sides, or invalid amount
            AccountNotFound: Either account number is unknown
            Exception: Anything raised by the accounts while applying, after
                the sender has been re-credited
        """
        if from_number == to_number:
            raise InvalidArgument("Cannot transfer to the same account")

        with self._lock:
            sender = self.find_account(from_number)
            receiver = self.find_account(to_number)

            value = to_positive_amount(amount, "Transfer amount must be > 0")

            # Phase 1: check both legs before mutating either side
            withdraw_outcome = sender.check_withdraw(value)
            if not withdraw_outcome.is_applied:
                return self._rejected_transfer(sender, receiver, value, withdraw_outcome, "sender")

            deposit_outcome = receiver.check_deposit(value)
            if not deposit_outcome.is_applied:
                return self._rejected_transfer(sender, receiver, value, deposit_outcome, "receiver")

            # Phase 2: apply, re-crediting the sender if either leg fails
            sender_start = sender.balance
            try:
                withdrawal = sender.withdraw(value)
                deposit = receiver.deposit(value) if withdrawal.applied else None
            except Exception:
                self._restore_sender(sender, sender_start)
                raise

            if deposit is None:
                self._restore_sender(sender, sender_start)
                return self._rejected_transfer(sender, receiver, value, withdrawal.outcome, "sender")

            if not deposit.applied:
                self._restore_sender(sender, sender_start)
                return self._rejected_transfer(sender, receiver, value, deposit.outcome, "receiver")

        log_action(
            logger, "info", f"Transferred {value} from {from_number} to {to_number}",
            action="transfer", resource=from_number,
            extra={
                "to_account": to_number,
                "amount": str(value),
                "fee": str(withdrawal.fee),
                "sender_balance": str(sender.balance),
                "receiver_balance": str(receiver.balance)
            }
        )

        return TransferResult(
            from_account=from_number,
            to_account=to_number,
            amount=value,
            outcome=OperationOutcome.APPLIED,
            fee=withdrawal.fee
        )

    def apply_monthly_interest(self) -> List[InterestPosting]:
        """
        Deposit one month of interest into every interest-bearing account

        Accounts are visited in insertion order. Interest goes through the
        account's own deposit policy.

        Returns:
            One InterestPosting per account that was owed positive interest
        """
        postings: List[InterestPosting] = []

        with self._lock:
            for acc in self._accounts:
                interest = acc.monthly_interest()
                if interest is None or interest <= ZERO:
                    continue

                result = acc.deposit(interest)
                postings.append(InterestPosting(acc.account_number, interest, result.outcome))

                log_action(
                    logger, "debug", f"Interest {interest} posted to {acc.account_number}",
                    action="interest_posted", resource=acc.account_number,
                    extra={"amount": str(interest), "outcome": result.outcome.value}
                )

        log_action(
            logger, "info", f"Monthly interest applied to {len(postings)} accounts",
            action="monthly_interest",
            extra={"accounts": len(postings)}
        )
        return postings

    def display_all(self, symbol: str = "$", precision: int = 2) -> str:
        """Text report of every account, see reporting.render_report"""
        return render_report(build_report(self), symbol=symbol, precision=precision)

    def _restore_sender(self, sender: Account, sender_start: Decimal) -> None:
        drift = sender_start - sender.balance
        if drift > ZERO:
            sender.credit(drift)
            log_action(
                logger, "warning", f"Transfer rolled back: re-credited {drift} to {sender.account_number}",
                action="transfer_rollback", resource=sender.account_number,
                extra={"amount": str(drift), "balance": str(sender.balance)}
            )

    def _rejected_transfer(
        self,
        sender: Account,
        receiver: Account,
        amount: Decimal,
        outcome: OperationOutcome,
        rejected_by: str
    ) -> TransferResult:
        rejected_account = sender if rejected_by == "sender" else receiver
        log_action(
            logger, "warning",
            f"Transfer {sender.account_number} -> {receiver.account_number} rejected: "
            f"{REJECTION_MESSAGES[outcome]}",
            action="transfer_rejected", resource=rejected_account.account_number,
            extra={
                "amount": str(amount),
                "outcome": outcome.value,
                "rejected_by": rejected_by
            }
        )
        return TransferResult(
            from_account=sender.account_number,
            to_account=receiver.account_number,
            amount=amount,
            outcome=outcome,
            rejected_by=rejected_by
        )
