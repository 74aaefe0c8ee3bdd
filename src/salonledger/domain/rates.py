"""Commission rate resolution."""

from decimal import Decimal
from typing import Optional

from salonledger.domain.entities import (
    DEFAULT_RATE,
    RateConfig,
    ResolvedRates,
    TransactionRecord,
)
from salonledger.domain.validation import validate_rate_config


def resolve_rates(config: Optional[RateConfig]) -> ResolvedRates:
    """Resolve the cash and card percentages of a master.

    Args:
        config: Master's rate configuration, or None when the master has none

    Returns:
        ResolvedRates; both rates fall back to 40% without a configuration

    Raises:
        InvalidRateConfigError: If a configured rate is outside [0, 100]
    """
    if config is None:
        return ResolvedRates(cash_rate=DEFAULT_RATE, card_rate=DEFAULT_RATE)

    validate_rate_config(config)
    if config.use_different_rates:
        return ResolvedRates(cash_rate=config.rate_cash, card_rate=config.rate_card)
    return ResolvedRates(cash_rate=config.rate_general, card_rate=config.rate_general)


def effective_rate(
    txn: TransactionRecord, rates: ResolvedRates, acts_like_card: bool
) -> Decimal:
    """Rate applied to the service portion of a single entry.

    A per-transaction ``master_revenue_share`` replaces the resolved rate
    regardless of payment method.
    """
    if txn.master_revenue_share is not None:
        return txn.master_revenue_share
    return rates.card_rate if acts_like_card else rates.cash_rate
