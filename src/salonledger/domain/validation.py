"""Invariant checks applied at the boundary of the settlement engine."""

from decimal import Decimal
from typing import Iterable, Optional

from salonledger.domain.entities import (
    RateConfig,
    RecipientRole,
    TransactionRecord,
    ZERO,
)
from salonledger.domain.errors import (
    InvalidRateConfigError,
    InvalidTransactionError,
    ValidationError,
)
from salonledger.domain.overlap import time_to_minutes

HUNDRED = Decimal("100")


def _is_percentage(value: Optional[Decimal]) -> bool:
    return value is not None and ZERO <= value <= HUNDRED


def validate_rate_config(config: RateConfig) -> None:
    """Reject a rate configuration with a percentage outside [0, 100].

    Raises:
        InvalidRateConfigError: If any rate is missing or out of range
    """
    for name in ("rate_general", "rate_cash", "rate_card"):
        value = getattr(config, name)
        if not _is_percentage(value):
            raise InvalidRateConfigError(
                f"{name} must be between 0 and 100, got {value}"
            )


def validate_transaction(txn: TransactionRecord) -> None:
    """Reject a record that violates a data-model invariant.

    Raises:
        InvalidTransactionError: Naming the first violated invariant
    """
    if txn.price is None or txn.price < ZERO:
        raise InvalidTransactionError("price must be non-negative", txn.id)
    if txn.tips is None or txn.tips < ZERO:
        raise InvalidTransactionError("tips must be non-negative", txn.id)

    if txn.is_service:
        if txn.payment_method is None:
            raise InvalidTransactionError(
                "service entry requires a payment method", txn.id
            )
        if txn.tips > ZERO and txn.tips_payment_method is None:
            raise InvalidTransactionError(
                "tips require a tips payment method", txn.id
            )

    if txn.recipient_role == RecipientRole.MASTER and not (
        txn.recipient_name and txn.recipient_name.strip()
    ):
        raise InvalidTransactionError(
            "recipient name is required when another master took the payment",
            txn.id,
        )

    if txn.start_time and txn.end_time:
        try:
            start = time_to_minutes(txn.start_time)
            end = time_to_minutes(txn.end_time)
        except ValidationError as exc:
            raise InvalidTransactionError(str(exc), txn.id) from exc
        if start >= end:
            raise InvalidTransactionError(
                f"start time {txn.start_time} must be before end time {txn.end_time}",
                txn.id,
            )

    if txn.master_revenue_share is not None and not _is_percentage(
        txn.master_revenue_share
    ):
        raise InvalidTransactionError(
            f"master revenue share must be between 0 and 100, got {txn.master_revenue_share}",
            txn.id,
        )


def validate_transactions(transactions: Iterable[TransactionRecord]) -> None:
    """Validate every record of a snapshot, failing on the first bad one."""
    for txn in transactions:
        validate_transaction(txn)
