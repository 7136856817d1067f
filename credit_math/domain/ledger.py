"""Revolving credit line - dated draws and payments with simple daily interest"""

import logging
import threading
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterator, List, Tuple

from credit_math.domain.exceptions import InvalidCreditLimitError, InvalidTransactionDataError
from credit_math.domain.models import Direction, LedgerDay, Transaction
from credit_math.infrastructure.observability.logging import log_transaction
from credit_math.infrastructure.observability.metrics import record_transaction
from credit_math.utils.money import ZERO, Number, round_bank, to_decimal

# Actual/365 day count
DAYS_IN_YEAR = 365


def _apply(balance: Decimal, transaction: Transaction) -> Decimal:
    """Move a balance by one transaction: debits add debt, credits remove it"""
    if transaction.direction == Direction.DEBIT:
        return balance + abs(transaction.amount)
    return balance - abs(transaction.amount)


class LoanAccount:
    """
    Credit line with an append-only transaction log.

    Every query replays the log, so results always reflect the full history.
    The credit limit is informational: draws beyond it are recorded as-is and
    the balance may exceed the limit.
    """

    def __init__(self, credit_limit: Number, annual_rate: Number):
        credit_limit = to_decimal(credit_limit)
        if credit_limit <= ZERO:
            raise InvalidCreditLimitError(f"credit_limit must be positive, got {credit_limit}")

        self._credit_limit = credit_limit
        self._annual_rate = to_decimal(annual_rate)
        self._transactions: List[Transaction] = []
        self._lock = threading.RLock()

    @property
    def credit_limit(self) -> Decimal:
        return self._credit_limit

    @property
    def annual_rate(self) -> Decimal:
        return self._annual_rate

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        """Recorded transactions in recording order"""
        with self._lock:
            return tuple(self._transactions)

    def draw(self, amount: Number, day: int) -> Transaction:
        """Record a draw (debit) on `day`"""
        return self._record(amount, day, Direction.DEBIT)

    def pay(self, amount: Number, day: int) -> Transaction:
        """Record a payment (credit) on `day`"""
        return self._record(amount, day, Direction.CREDIT)

    def _record(self, amount: Number, day: int, direction: Direction) -> Transaction:
        if isinstance(day, bool) or not isinstance(day, int) or day < 0:
            raise InvalidTransactionDataError(f"day must be a non-negative integer, got {day!r}")
        amount = to_decimal(amount)
        if amount <= ZERO:
            raise InvalidTransactionDataError(f"amount must be positive, got {amount}")

        transaction = Transaction(day=day, amount=amount, direction=direction)
        with self._lock:
            self._transactions.append(transaction)
            balance = self.balance_as_of(day)

        record_transaction(direction)
        log_transaction(transaction, balance)
        if balance > self._credit_limit:
            logging.warning(
                f"Balance {balance} exceeds credit limit {self._credit_limit} on day {day}"
            )
        return transaction

    def transactions_on(self, day: int) -> List[Transaction]:
        """Transactions recorded for exactly `day`, in recording order"""
        with self._lock:
            return [t for t in self._transactions if t.day == day]

    def balance_as_of(self, day: int) -> Decimal:
        """
        Outstanding debt at the end of `day`.

        Negative when cumulative payments exceed cumulative draws.
        """
        with self._lock:
            balance = ZERO
            for transaction in self._transactions:
                if transaction.day <= day:
                    balance = _apply(balance, transaction)
            return balance

    def available_credit_as_of(self, day: int) -> Decimal:
        """Credit limit minus outstanding balance (negative when over-drawn)"""
        return self._credit_limit - self.balance_as_of(day)

    def limit_and_balance_as_of(self, day: int) -> Tuple[Decimal, Decimal]:
        """Returns: (available_credit, balance) for `day`"""
        with self._lock:
            balance = self.balance_as_of(day)
            return self._credit_limit - balance, balance

    def _replay(self, day: int) -> Iterator[Tuple[int, List[Transaction], Decimal, Decimal]]:
        """
        Walk the log day by day from day 0 through `day` inclusive.

        Yields (day, day's transactions, end-of-day balance, interest accrued
        that day). Interest is simple: accruals never feed back into balance.
        Days with a zero or negative balance accrue nothing.
        """
        by_day: Dict[int, List[Transaction]] = defaultdict(list)
        for transaction in self._transactions:
            by_day[transaction.day].append(transaction)

        daily_rate = self._annual_rate / DAYS_IN_YEAR
        balance = ZERO
        for i in range(day + 1):
            todays = by_day.get(i, [])
            for transaction in todays:
                balance = _apply(balance, transaction)

            accrual = balance * daily_rate if balance > ZERO else ZERO
            yield i, todays, balance, accrual

    def interest_owed_as_of(self, day: int) -> Decimal:
        """
        Simple interest accrued from day 0 through `day` inclusive.

        Each day is charged on the balance held after that day's transactions,
        so the total tracks how long each balance was actually outstanding.
        Rounded once, at the end.
        """
        with self._lock:
            accrued = ZERO
            for _, _, _, accrual in self._replay(day):
                accrued += accrual
            return round_bank(accrued)

    def payoff_amount_as_of(self, day: int) -> Decimal:
        """Balance plus accrued interest: the amount that settles the line on `day`"""
        with self._lock:
            return self.balance_as_of(day) + self.interest_owed_as_of(day)

    def statement(self, day: int) -> List[LedgerDay]:
        """Day-by-day statement from day 0 through `day`"""
        rows: List[LedgerDay] = []
        with self._lock:
            accrued = ZERO
            for i, todays, balance, accrual in self._replay(day):
                accrued += accrual
                rows.append(
                    LedgerDay(
                        day=i,
                        balance=balance,
                        daily_interest=round_bank(accrual),
                        accrued_interest=round_bank(accrued),
                        transactions=tuple(todays),
                    )
                )
        return rows
