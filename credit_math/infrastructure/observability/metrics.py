"""Prometheus metrics for ledger activity and amortization calculations"""

from prometheus_client import Counter

from credit_math.domain.models import Direction

# Ledger metrics
transaction_counter = Counter(
    "credit_ledger_transactions_total",
    "Transactions recorded on credit lines",
    ["direction"],  # credit | debit
)

# Amortization metrics
calculation_counter = Counter(
    "amortization_calculations_total",
    "Amortization calculations performed",
    ["operation"],  # payment | interest_principal | schedule
)


def record_transaction(direction: Direction) -> None:
    """Count a recorded draw or payment"""
    transaction_counter.labels(direction=direction.value).inc()


def record_calculation(operation: str) -> None:
    """Count an amortization calculation by operation"""
    calculation_counter.labels(operation=operation).inc()
