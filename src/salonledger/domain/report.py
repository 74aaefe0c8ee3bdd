"""Presentation adapter: turns settlements into display-ready reports."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Sequence, Union

from salonledger.database.base import Database
from salonledger.domain.catalog import CatalogService
from salonledger.domain.entities import (
    PaymentMethod,
    Perspective,
    RecipientRole,
    ReportRow,
    SettlementReport,
    TransactionRecord,
    TransactionType,
    ZERO,
)
from salonledger.domain.settlement import Rates, compute_entry_balance, compute_settlement

SERVICE_LABELS = {
    "manicure": "Manicure",
    "pedicure": "Pedicure",
    "other": "Other",
}

METHOD_LABELS = {
    PaymentMethod.CASH: "Cash",
    PaymentMethod.CARD: "Card",
}

DEBT_LABELS = {
    TransactionType.DEBT_SALON_TO_MASTER: "Salon → master",
    TransactionType.DEBT_MASTER_TO_SALON: "Master → salon",
}

SALON_OWES_MASTER = "Salon owes master"
MASTER_OWES_SALON = "Master owes salon"


def format_money(value: Decimal, signed: bool = False) -> str:
    """Format an amount as euros with two decimals.

    Examples:
        format_money(Decimal("12.5")) -> "€12.50"
        format_money(Decimal("-3"), signed=True) -> "-€3.00"
    """
    amount = f"€{abs(value):,.2f}"
    if value < 0:
        return f"-{amount}"
    if signed:
        return f"+{amount}"
    return amount


def format_rate(value: Decimal) -> str:
    """Format a percentage without trailing zeros ("40", "37.5")."""
    return f"{value.normalize():f}"


def format_day(day: date) -> str:
    return f"{day.day} {day:%B %Y}"


def service_label(service: str, labels: Optional[Mapping[str, str]] = None) -> str:
    """Map comma-joined service codes to display labels.

    ``labels`` adds workspace catalog names on top of the built-in codes.
    A code is looked up as written, then in lower case; unknown codes are
    shown unchanged.
    """
    known = {**SERVICE_LABELS, **(labels or {})}
    names = [part.strip() for part in (service or "").split(",") if part.strip()]
    return ", ".join(known.get(name, known.get(name.lower(), name)) for name in names)


def method_label(txn: TransactionRecord) -> str:
    if txn.transaction_type in DEBT_LABELS:
        return DEBT_LABELS[txn.transaction_type]
    return METHOD_LABELS.get(txn.payment_method, "")


def recipient_label(txn: TransactionRecord) -> str:
    if txn.recipient_role == RecipientRole.ADMIN:
        return "Admin"
    if txn.recipient_role == RecipientRole.MASTER:
        return txn.recipient_name or "Master"
    return "Me"


def card_tips(txn: TransactionRecord) -> Decimal:
    if txn.tips > ZERO and txn.tips_payment_method == PaymentMethod.CARD:
        return txn.tips
    return ZERO


def signed_price(txn: TransactionRecord) -> Decimal:
    if txn.transaction_type == TransactionType.DEBT_MASTER_TO_SALON:
        return -txn.price
    return txn.price


def balance_caption(balance: Decimal, perspective: Union[Perspective, str]) -> str:
    """Describe who owes whom for a balance read from ``perspective``."""
    master_side = balance if Perspective(perspective) == Perspective.MASTER else -balance
    return SALON_OWES_MASTER if master_side >= 0 else MASTER_OWES_SALON


def period_label(start_date: Optional[date], end_date: Optional[date]) -> str:
    if start_date is None and end_date is None:
        return "All dates"
    if start_date is None or end_date is None or start_date == end_date:
        return format_day(start_date or end_date)
    return f"{format_day(start_date)} – {format_day(end_date)}"


def build_report(
    transactions: Sequence[TransactionRecord],
    rates: Rates,
    perspective: Union[Perspective, str] = Perspective.MASTER,
    master_name: str = "Master",
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    service_labels: Optional[Mapping[str, str]] = None,
) -> SettlementReport:
    """Build a settlement report for one master.

    Rows are grouped by date (ascending) and numbered across the whole
    report. Each row carries the entry balance from ``perspective``; the
    rows' balances add up to the settlement balance.
    """
    perspective = Perspective(perspective)
    settlement = compute_settlement(transactions, rates, perspective)

    grouped: dict[date, list[TransactionRecord]] = defaultdict(list)
    for txn in transactions:
        grouped[txn.date].append(txn)

    rows_by_date: dict[date, tuple[ReportRow, ...]] = {}
    index = 0
    for day in sorted(grouped):
        rows = []
        for txn in grouped[day]:
            index += 1
            rows.append(
                ReportRow(
                    index=index,
                    transaction_id=txn.id,
                    date=day,
                    client=txn.client_name or "No name",
                    service=service_label(txn.service, service_labels),
                    method=method_label(txn),
                    price=signed_price(txn),
                    card_tips=card_tips(txn),
                    recipient=recipient_label(txn),
                    balance=compute_entry_balance(txn, rates, perspective),
                )
            )
        rows_by_date[day] = tuple(rows)

    total = sum((signed_price(txn) + card_tips(txn) for txn in transactions), ZERO)

    return SettlementReport(
        master_name=master_name,
        perspective=perspective,
        start_date=start_date,
        end_date=end_date,
        period_label=period_label(start_date, end_date),
        rows_by_date=rows_by_date,
        total=total,
        settlement=settlement,
        balance_caption=balance_caption(settlement.balance, perspective),
    )


class ReportService:
    """Builds settlement reports from the record store."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_master_report(
        self,
        workspace_id: int,
        master_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        perspective: Perspective = Perspective.MASTER,
    ) -> SettlementReport:
        """Fetch a master's entries and settings and build the report."""
        master = self.db.get_member(master_id)
        transactions = self.db.list_transactions(
            workspace_id=workspace_id,
            master_id=master_id,
            start_date=start_date,
            end_date=end_date,
        )
        rates = self.db.get_rate_config(workspace_id, master_id)
        return build_report(
            transactions,
            rates,
            perspective=perspective,
            master_name=master.name if master else "Master",
            start_date=start_date,
            end_date=end_date,
            service_labels=CatalogService(self.db).service_labels(workspace_id),
        )
