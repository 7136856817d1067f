"""Level-payment amortization - payment amount, interest/principal split and schedules"""

from decimal import Decimal
from typing import Iterator, List, Tuple

from credit_math.domain.exceptions import InvalidPeriodCountError, InvalidPeriodError
from credit_math.domain.models import (
    AmortizationInputs,
    PaymentFrequency,
    PaymentTiming,
    ScheduleRow,
)
from credit_math.infrastructure.observability.metrics import record_calculation
from credit_math.utils.money import ONE, ZERO, Number, round_bank, to_decimal

# A loan received is a negative cash flow for the payer
_PAYER_SIGN = Decimal("-1")


def _check_num_periods(num_periods: int) -> None:
    if isinstance(num_periods, bool) or not isinstance(num_periods, int) or num_periods < 1:
        raise InvalidPeriodCountError(f"num_periods must be a positive integer, got {num_periods!r}")


def _level_payment(
    rate: Decimal,
    num_periods: int,
    present_value: Decimal,
    future_value: Decimal,
    timing: PaymentTiming,
) -> Decimal:
    """Unrounded level payment, payer-signed"""
    _check_num_periods(num_periods)

    pv = _PAYER_SIGN * present_value
    delta = pv - future_value

    growth = ONE if rate == ZERO else (ONE + rate) ** num_periods
    if growth == ONE:
        # Zero rate, or a rate too small to register at working precision
        payment = delta / num_periods
    else:
        payment = delta * rate * growth / (growth - ONE)
        payment += future_value * rate

    # One less period of rate accrues when the payment leads the period
    if timing == PaymentTiming.DUE_AT_START:
        payment = payment / (ONE + rate)

    return payment


def compute_payment(
    rate: Number,
    num_periods: int,
    present_value: Number,
    future_value: Number = ZERO,
    timing: PaymentTiming = PaymentTiming.DUE_AT_END,
) -> Decimal:
    """
    Level payment per period for a loan or annuity (spreadsheet PMT).

    Sign follows the spreadsheet convention: borrowing a positive present value
    yields a negative payment.

    Args:
        rate: Interest rate per period as a fraction (0.07 for 7%)
        num_periods: Number of payments, at least 1
        present_value: Amount borrowed
        future_value: Balance left after the last payment
        timing: Whether payments fall at the start or end of each period

    Returns:
        Payment rounded half to even at money precision

    Example:
        compute_payment(0.07, 5, 100000) -> Decimal("-24389.07")
    """
    payment = _level_payment(
        to_decimal(rate),
        num_periods,
        to_decimal(present_value),
        to_decimal(future_value),
        timing,
    )
    record_calculation("payment")
    return round_bank(payment)


def compute_payment_no_future_value(
    rate: Number,
    num_periods: int,
    present_value: Number,
    timing: PaymentTiming = PaymentTiming.DUE_AT_END,
) -> Decimal:
    """Level payment for a loan paid down to zero"""
    return compute_payment(rate, num_periods, present_value, ZERO, timing)


def compute_total_payable(
    rate: Number,
    num_periods: int,
    present_value: Number,
    timing: PaymentTiming = PaymentTiming.DUE_AT_END,
) -> Decimal:
    """Total cash paid over the life of the loan, as a positive amount"""
    payment = compute_payment_no_future_value(rate, num_periods, present_value, timing)
    return abs(payment * num_periods)


def _iterate_periods(
    rate: Decimal,
    num_periods: int,
    present_value: Decimal,
    future_value: Decimal,
    timing: PaymentTiming,
) -> Iterator[Tuple[int, Decimal, Decimal, Decimal, Decimal]]:
    """
    Walk the amortization recurrence one period at a time.

    Yields (period, payment, interest, principal, capital) with full precision.
    Interest is charged on the capital outstanding at the start of the period;
    the remainder of the payment goes to principal and reduces capital.
    """
    payment = _level_payment(rate, num_periods, present_value, future_value, timing)
    capital = present_value

    for period in range(1, num_periods + 1):
        # No interest without a rate, nor before the first payment when payments lead
        if rate == ZERO or (timing == PaymentTiming.DUE_AT_START and period == 1):
            interest = ZERO
        else:
            interest = _PAYER_SIGN * capital * rate
        principal = payment - interest
        capital = capital + principal
        yield period, payment, interest, principal, capital


def compute_interest_and_principal(
    rate: Number,
    period: int,
    num_periods: int,
    present_value: Number,
    future_value: Number = ZERO,
    timing: PaymentTiming = PaymentTiming.DUE_AT_END,
) -> Tuple[Decimal, Decimal]:
    """
    Split the level payment of one period into interest and principal.

    Replays the declining balance from period 1 so the split follows the exact
    path of the amortization table. Both parts carry the payment's sign.

    Raises:
        InvalidPeriodCountError: num_periods < 1
        InvalidPeriodError: period outside 1..num_periods

    Returns:
        (interest, principal), each rounded half to even at money precision
    """
    _check_num_periods(num_periods)
    if isinstance(period, bool) or not isinstance(period, int) or not 1 <= period <= num_periods:
        raise InvalidPeriodError(f"period must be within 1..{num_periods}, got {period!r}")

    interest = principal = ZERO
    for i, _, interest, principal, _ in _iterate_periods(
        to_decimal(rate),
        num_periods,
        to_decimal(present_value),
        to_decimal(future_value),
        timing,
    ):
        if i == period:
            break

    record_calculation("interest_principal")
    return round_bank(interest), round_bank(principal)


def compute_interest_payment(
    rate: Number,
    period: int,
    num_periods: int,
    present_value: Number,
    future_value: Number = ZERO,
    timing: PaymentTiming = PaymentTiming.DUE_AT_END,
) -> Decimal:
    """Interest portion of a period's payment (spreadsheet IPMT)"""
    interest, _ = compute_interest_and_principal(
        rate, period, num_periods, present_value, future_value, timing
    )
    return interest


def compute_principal_payment(
    rate: Number,
    period: int,
    num_periods: int,
    present_value: Number,
    future_value: Number = ZERO,
    timing: PaymentTiming = PaymentTiming.DUE_AT_END,
) -> Decimal:
    """Principal portion of a period's payment (spreadsheet PPMT)"""
    _, principal = compute_interest_and_principal(
        rate, period, num_periods, present_value, future_value, timing
    )
    return principal


def build_schedule(inputs: AmortizationInputs) -> List[ScheduleRow]:
    """
    Generate the full amortization table.

    Row p matches compute_interest_and_principal(period=p) for the same inputs.
    Rounding is applied per row for display only; the recurrence itself runs
    at full precision.
    """
    rows = [
        ScheduleRow(
            period=period,
            payment=round_bank(payment),
            interest=round_bank(interest),
            principal=round_bank(principal),
            capital=round_bank(capital),
        )
        for period, payment, interest, principal, capital in _iterate_periods(
            to_decimal(inputs.rate),
            inputs.num_periods,
            to_decimal(inputs.present_value),
            to_decimal(inputs.future_value),
            inputs.timing,
        )
    ]
    record_calculation("schedule")
    return rows


def simple_interest(principal: Number, rate: Number, periods: Number) -> Decimal:
    """Non-compounding interest: principal x rate x periods (unrounded)"""
    return to_decimal(principal) * to_decimal(rate) * to_decimal(periods)


def periodic_rate(annual_rate: Number, frequency: PaymentFrequency) -> Decimal:
    """Convert an annual rate to a per-period rate, e.g. 0.07 monthly -> 0.07/12"""
    return to_decimal(annual_rate) / int(frequency)


def total_periods(years: int, frequency: PaymentFrequency) -> int:
    """Number of payments over a term of whole years"""
    return years * int(frequency)
