"""Domain models - pure Python dataclasses and enums for loans and credit lines"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Tuple


class PaymentTiming(str, Enum):
    """When a period's payment falls relative to that period's interest"""

    DUE_AT_START = "start"
    DUE_AT_END = "end"


class PaymentFrequency(IntEnum):
    """Payments per year"""

    WEEKLY = 52
    MONTHLY = 12
    QUARTERLY = 4
    SEMI_ANNUALLY = 2
    ANNUALLY = 1


class Direction(str, Enum):
    """Ledger movement: credit pays debt down, debit draws it up"""

    CREDIT = "credit"
    DEBIT = "debit"


@dataclass(frozen=True)
class AmortizationInputs:
    """Parameters of a level-payment loan or annuity"""

    rate: Decimal  # Per period, as a fraction
    num_periods: int
    present_value: Decimal
    future_value: Decimal = Decimal("0")
    timing: PaymentTiming = PaymentTiming.DUE_AT_END


@dataclass
class ScheduleRow:
    """Single period of an amortization table"""

    period: int
    payment: Decimal
    interest: Decimal
    principal: Decimal
    capital: Decimal  # Outstanding after this period


@dataclass(frozen=True)
class Transaction:
    """Dated draw or payment on a revolving credit line"""

    day: int
    amount: Decimal
    direction: Direction


@dataclass
class LedgerDay:
    """End-of-day view of a credit line"""

    day: int
    balance: Decimal
    daily_interest: Decimal
    accrued_interest: Decimal
    transactions: Tuple[Transaction, ...] = field(default_factory=tuple)
