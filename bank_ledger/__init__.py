"""
Bank Ledger

An in-memory bank ledger with typed account policies, two-phase transfers
and monthly interest accrual. All monetary values use Decimal precision.
"""

__version__ = "1.0.0"
