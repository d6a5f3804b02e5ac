"""Prometheus metrics for loan origination, payments and HTTP latency"""

from decimal import Decimal
from prometheus_client import Counter, Histogram

# Origination metrics
loans_created_counter = Counter(
    "credit_loans_created_total",
    "Loans opened",
    ["installments"],  # 6 | 9 | 12 | 24
)

# Payment metrics
payment_counter = Counter(
    "credit_payment_total",
    "Payment requests by outcome",
    ["outcome"],  # settled | not_found | invalid_argument | business_rule
)

installments_settled_counter = Counter(
    "credit_installments_settled_total",
    "Installments marked paid",
)

amount_settled_counter = Counter(
    "credit_amount_settled_total",
    "Money settled against installments",
)

loans_paid_off_counter = Counter(
    "credit_loans_paid_off_total",
    "Loans whose last installment was settled",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_loan_created(number_of_installment: int) -> None:
    loans_created_counter.labels(installments=str(number_of_installment)).inc()


def record_payment(paid_installment_count: int, total_amount_spent: Decimal, loan_paid_completely: bool) -> None:
    """Record a successful settlement"""
    payment_counter.labels(outcome="settled").inc()
    installments_settled_counter.inc(paid_installment_count)
    amount_settled_counter.inc(float(total_amount_spent))
    if loan_paid_completely:
        loans_paid_off_counter.inc()


def record_payment_failure(kind: str) -> None:
    payment_counter.labels(outcome=kind).inc()
