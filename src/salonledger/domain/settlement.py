"""Settlement calculation engine.

Folds a snapshot of transaction records into the signed balance between a
master and the salon. Every entry contributes independently; the aggregate is
the plain sum of the contributions, so the result does not depend on the
order of the records and the per-entry balances always add up to the
aggregate balance.

Balances are computed from the master's side (positive: the salon owes the
master). The admin view is that same number negated once, after the fold.
"""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Union

from salonledger import log
from salonledger.domain.entities import (
    PaymentMethod,
    Perspective,
    RateConfig,
    RecipientRole,
    ResolvedRates,
    SettlementResult,
    TransactionRecord,
    TransactionType,
    ZERO,
)
from salonledger.domain.rates import effective_rate, resolve_rates
from salonledger.domain.validation import validate_transaction

HUNDRED = Decimal("100")

Rates = Union[RateConfig, ResolvedRates, None]


@dataclass(frozen=True)
class Contribution:
    """What a single entry adds to each settlement aggregate."""

    balance: Decimal = ZERO
    income: Decimal = ZERO
    tips_income: Decimal = ZERO
    salon_income: Decimal = ZERO
    card_tips: Decimal = ZERO
    recipient: Optional[str] = None
    recipient_amount: Decimal = ZERO


def _resolved(rates: Rates) -> ResolvedRates:
    if isinstance(rates, ResolvedRates):
        return rates
    return resolve_rates(rates)


def _sign(perspective: Union[Perspective, str]) -> int:
    return -1 if Perspective(perspective) == Perspective.ADMIN else 1


def acts_like_card(txn: TransactionRecord) -> bool:
    """Whether the service money already sits with the salon.

    Card payments do, and so does cash taken by an admin.
    """
    return (
        txn.payment_method != PaymentMethod.CASH
        or txn.recipient_role == RecipientRole.ADMIN
    )


def _service_contribution(txn: TransactionRecord, rates: ResolvedRates) -> Contribution:
    like_card = acts_like_card(txn)
    rate = effective_rate(txn, rates, like_card) / HUNDRED

    service_income = txn.price * rate
    salon_share = txn.price * (1 - rate)
    service_balance = service_income if like_card else -salon_share

    tips_balance = ZERO
    tips_income = ZERO
    card_tips = ZERO
    if txn.tips > ZERO:
        tips_method = txn.tips_payment_method or PaymentMethod.CASH
        if tips_method == PaymentMethod.CASH:
            tips_income = txn.tips
        else:
            tips_balance = txn.tips * (rates.card_rate / HUNDRED)
            tips_income = tips_balance
            card_tips = txn.tips

    recipient = None
    recipient_amount = ZERO
    if (
        txn.recipient_role == RecipientRole.MASTER
        and txn.payment_method == PaymentMethod.CASH
    ):
        recipient = txn.recipient_name
        recipient_amount = txn.price

    return Contribution(
        balance=service_balance + tips_balance,
        income=service_income + tips_income,
        tips_income=tips_income,
        salon_income=salon_share,
        card_tips=card_tips,
        recipient=recipient,
        recipient_amount=recipient_amount,
    )


def entry_contribution(txn: TransactionRecord, rates: Rates) -> Contribution:
    """Compute the master-side contribution of one validated entry.

    Raises:
        InvalidTransactionError: If the record breaks a data-model invariant
        InvalidRateConfigError: If the rate configuration is out of range
    """
    validate_transaction(txn)
    resolved = _resolved(rates)

    if txn.transaction_type == TransactionType.DEBT_SALON_TO_MASTER:
        return Contribution(balance=txn.price, income=txn.price)
    if txn.transaction_type == TransactionType.DEBT_MASTER_TO_SALON:
        return Contribution(balance=-txn.price, salon_income=txn.price)
    return _service_contribution(txn, resolved)


def compute_entry_balance(
    txn: TransactionRecord,
    rates: Rates,
    perspective: Union[Perspective, str] = Perspective.MASTER,
) -> Decimal:
    """Balance shown for a single entry, from the given perspective."""
    return entry_contribution(txn, rates).balance * _sign(perspective)


def compute_settlement(
    transactions: Iterable[TransactionRecord],
    rates: Rates,
    perspective: Union[Perspective, str] = Perspective.MASTER,
) -> SettlementResult:
    """Fold transactions into a SettlementResult.

    Args:
        transactions: Snapshot of one master's entries
        rates: Master's RateConfig (None uses the default rate) or ResolvedRates
        perspective: ``master`` or ``admin``; only the sign of the balance differs

    Returns:
        SettlementResult

    Raises:
        InvalidTransactionError: If any record breaks a data-model invariant
        InvalidRateConfigError: If the rate configuration is out of range
    """
    resolved = _resolved(rates)
    perspective = Perspective(perspective)

    balance = income = tips_total = salon_income = card_tips = ZERO
    recipients: dict[str, Decimal] = defaultdict(lambda: ZERO)
    count = 0

    for txn in transactions:
        part = entry_contribution(txn, resolved)
        balance += part.balance
        income += part.income
        tips_total += part.tips_income
        salon_income += part.salon_income
        card_tips += part.card_tips
        if part.recipient is not None:
            recipients[part.recipient] += part.recipient_amount
        count += 1

    balance *= _sign(perspective)
    log.debug(
        "Settled %d entries from %s perspective: balance %s",
        count,
        perspective.value,
        balance,
    )

    return SettlementResult(
        balance=balance,
        income=income,
        tips_total=tips_total,
        salon_income=salon_income,
        card_tips=card_tips,
        recipients=dict(recipients),
        perspective=perspective,
    )
