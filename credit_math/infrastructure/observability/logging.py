"""Structured JSON logging for ledger and amortization events"""

import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List
from pythonjsonlogger.json import JsonFormatter

from credit_math.config import settings
from credit_math.domain.models import LedgerDay, Transaction


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str | None = None) -> None:
    """Configure structured JSON logging (default level: settings.log_level)"""
    logger = logging.getLogger()
    logger.setLevel(level or settings.log_level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_transaction(transaction: Transaction, balance: Decimal) -> None:
    """Log a recorded draw or payment with the balance it leaves"""
    logging.info(
        "Transaction recorded",
        extra={
            "step": "transaction_recorded",
            "day": transaction.day,
            "direction": transaction.direction.value,
            "amount": str(transaction.amount),
            "balance": str(balance),
        },
    )


def log_statement(rows: List[LedgerDay]) -> None:
    """Log a daily statement, one record per day"""
    for row in rows:
        logging.info(
            "Statement day",
            extra={
                "step": "statement_day",
                "day": row.day,
                "transactions": [
                    {"direction": t.direction.value, "amount": str(t.amount)}
                    for t in row.transactions
                ],
                "balance": str(row.balance),
                "daily_interest": str(row.daily_interest),
                "accrued_interest": str(row.accrued_interest),
            },
        )
