"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding timestamp, level and service name"""

    def __init__(self, *args: Any, service_name: str = "credit-gateway", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "credit-gateway") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_loan_created(
    request_id: str,
    loan_id: int,
    customer_id: int,
    loan_amount: Decimal,
    number_of_installment: int,
    duration_ms: float,
) -> None:
    """Log structured loan origination outcome"""
    logging.info(
        "Loan created",
        extra={
            "request_id": request_id,
            "loan_id": loan_id,
            "customer_id": customer_id,
            "step": "loan_created",
            "loan_amount": str(loan_amount),
            "number_of_installment": number_of_installment,
            "duration_ms": duration_ms,
        },
    )


def log_payment(
    request_id: str,
    loan_id: int,
    paid_installment_count: int,
    total_amount_spent: Decimal,
    loan_paid_completely: bool,
    duration_ms: float,
) -> None:
    """Log structured payment settlement outcome"""
    logging.info(
        "Loan payment settled",
        extra={
            "request_id": request_id,
            "loan_id": loan_id,
            "step": "payment_settled",
            "paid_installment_count": paid_installment_count,
            "total_amount_spent": str(total_amount_spent),
            "loan_paid_completely": loan_paid_completely,
            "duration_ms": duration_ms,
        },
    )
