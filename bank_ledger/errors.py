"""
Ledger Exceptions

Hard failures that abort the current operation. Policy rejections
(withdrawal limits, minimum balances, deposit caps) are NOT exceptions;
they are reported through OperationResult / TransferResult values.
"""


class LedgerError(Exception):
    """Base class for all ledger errors"""


class InvalidArgument(LedgerError, ValueError):
    """Raised for invalid constructor arguments, amounts or transfer requests"""


class AccountNotFound(LedgerError, LookupError):
    """Raised when an account number does not resolve to an account"""
    
    def __init__(self, account_number: str):
        self.account_number = account_number
        super().__init__(f"Account not found: {account_number}")


class DuplicateAccount(LedgerError, ValueError):
    """Raised when an account number is already registered in the ledger"""
    
    def __init__(self, account_number: str):
        self.account_number = account_number
        super().__init__(f"Account already exists: {account_number}")
