"""Pytest fixtures for testing"""

import logging
import pytest
from decimal import Decimal
from typing import Generator
from credit_math.domain.ledger import LoanAccount
from credit_math.domain.models import AmortizationInputs, PaymentTiming
from credit_math.infrastructure.observability.logging import CustomJsonFormatter


@pytest.fixture
def account() -> LoanAccount:
    """Fresh $1000 credit line at 35% APR"""
    return LoanAccount(credit_limit=Decimal("1000"), annual_rate=Decimal("0.35"))


@pytest.fixture
def active_account(account: LoanAccount) -> LoanAccount:
    """Credit line with a draw, a partial payment and a second draw"""
    account.draw(Decimal("500"), day=1)
    account.pay(Decimal("200"), day=15)
    account.draw(Decimal("100"), day=25)
    return account


@pytest.fixture
def five_year_loan() -> AmortizationInputs:
    """$100,000 over 5 annual payments at 7%"""
    return AmortizationInputs(
        rate=Decimal("0.07"),
        num_periods=5,
        present_value=Decimal("100000"),
        timing=PaymentTiming.DUE_AT_END,
    )


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Drop handlers installed by setup_logging and restore the root level after the test"""
    root = logging.getLogger()
    level = root.level
    try:
        yield root
    finally:
        for handler in list(root.handlers):
            if isinstance(handler.formatter, CustomJsonFormatter):
                root.removeHandler(handler)
        root.setLevel(level)
