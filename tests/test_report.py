"""Tests for settlement reports."""

from datetime import date
from decimal import Decimal

import pytest

from salonledger.domain.entities import (
    PaymentMethod,
    Perspective,
    RateConfig,
    RecipientRole,
    TransactionType,
)
from salonledger.domain.report import (
    MASTER_OWES_SALON,
    SALON_OWES_MASTER,
    ReportService,
    balance_caption,
    build_report,
    format_money,
    format_rate,
    period_label,
    service_label,
)
from salonledger.domain.settlement import compute_settlement


@pytest.fixture
def entries(make_txn):
    return [
        make_txn(id=1, date=date(2024, 3, 16), price=Decimal("100"), service="manicure"),
        make_txn(
            id=2,
            date=date(2024, 3, 15),
            price=Decimal("80"),
            payment_method=PaymentMethod.CARD,
            tips=Decimal("10"),
            tips_payment_method=PaymentMethod.CARD,
            recipient_role=RecipientRole.ADMIN,
            service="manicure,pedicure",
            client_name="Maria",
        ),
        make_txn(
            id=3,
            date=date(2024, 3, 15),
            transaction_type=TransactionType.DEBT_MASTER_TO_SALON,
            price=Decimal("15"),
            start_time=None,
            end_time=None,
            service="Supplies",
        ),
    ]


def test_format_money():
    assert format_money(Decimal("12.5")) == "€12.50"
    assert format_money(Decimal("1234")) == "€1,234.00"
    assert format_money(Decimal("-3"), signed=True) == "-€3.00"
    assert format_money(Decimal("3"), signed=True) == "+€3.00"
    assert format_money(Decimal("0"), signed=True) == "+€0.00"


def test_format_rate():
    assert format_rate(Decimal("40.00")) == "40"
    assert format_rate(Decimal("37.50")) == "37.5"
    assert format_rate(Decimal("100.00")) == "100"


def test_service_label():
    assert service_label("manicure, pedicure") == "Manicure, Pedicure"
    assert service_label("gel polish") == "gel polish"
    assert service_label("") == ""


def test_service_label_uses_catalog_names():
    labels = {"7": "Gel polish", "gel polish": "Gel polish"}

    assert service_label("7, pedicure", labels) == "Gel polish, Pedicure"
    assert service_label("GEL POLISH", labels) == "Gel polish"
    assert service_label("8", labels) == "8"


def test_balance_caption_follows_perspective():
    assert balance_caption(Decimal("10"), Perspective.MASTER) == SALON_OWES_MASTER
    assert balance_caption(Decimal("-10"), Perspective.MASTER) == MASTER_OWES_SALON
    assert balance_caption(Decimal("-10"), Perspective.ADMIN) == SALON_OWES_MASTER
    assert balance_caption(Decimal("10"), "admin") == MASTER_OWES_SALON


def test_period_label():
    assert period_label(None, None) == "All dates"
    assert period_label(date(2024, 3, 5), date(2024, 3, 5)) == "5 March 2024"
    assert period_label(date(2024, 3, 1), date(2024, 3, 31)) == "1 March 2024 – 31 March 2024"


def test_rows_grouped_and_numbered(entries):
    report = build_report(entries, RateConfig(), master_name="Anna")

    assert list(report.rows_by_date) == [date(2024, 3, 15), date(2024, 3, 16)]
    first_day = report.rows_by_date[date(2024, 3, 15)]
    assert [row.index for row in first_day] == [1, 2]
    assert [row.transaction_id for row in first_day] == [2, 3]
    assert report.rows_by_date[date(2024, 3, 16)][0].index == 3


def test_row_labels(entries):
    report = build_report(entries, RateConfig())
    card_row, debt_row = report.rows_by_date[date(2024, 3, 15)]
    cash_row = report.rows_by_date[date(2024, 3, 16)][0]

    assert card_row.client == "Maria"
    assert card_row.service == "Manicure, Pedicure"
    assert card_row.method == "Card"
    assert card_row.recipient == "Admin"
    assert card_row.card_tips == Decimal("10")
    assert debt_row.method == "Master → salon"
    assert debt_row.price == Decimal("-15")
    assert cash_row.client == "No name"
    assert cash_row.recipient == "Me"


@pytest.mark.parametrize("perspective", [Perspective.MASTER, Perspective.ADMIN])
def test_row_balances_add_up(entries, perspective):
    report = build_report(entries, RateConfig(), perspective=perspective)
    rows = [row for day in report.rows_by_date.values() for row in day]

    assert sum(row.balance for row in rows) == report.settlement.balance
    assert report.settlement == compute_settlement(entries, RateConfig(), perspective)


def test_total_and_caption(entries):
    report = build_report(entries, RateConfig())
    # 100 + (80 + 10) - 15
    assert report.total == Decimal("175")
    # -60 + (32 + 4) - 15
    assert report.settlement.balance == Decimal("-39")
    assert report.balance_caption == MASTER_OWES_SALON

    admin = build_report(entries, RateConfig(), perspective=Perspective.ADMIN)
    assert admin.settlement.balance == Decimal("39")
    assert admin.balance_caption == MASTER_OWES_SALON


def test_report_service(temp_db, transaction_service, sample_workspace, sample_master):
    transaction_service.create_transaction(
        workspace_id=sample_workspace.id,
        master_id=sample_master.id,
        date=date(2024, 3, 15),
        price=Decimal("100"),
        payment_method=PaymentMethod.CARD,
        start_time="10:00",
        end_time="11:00",
    )
    report = ReportService(temp_db).build_master_report(
        sample_workspace.id,
        sample_master.id,
        start_date=date(2024, 3, 15),
        end_date=date(2024, 3, 15),
    )

    assert report.master_name == "Anna"
    assert report.period_label == "15 March 2024"
    assert report.settlement.balance == Decimal("40")
    assert report.balance_caption == SALON_OWES_MASTER


def test_report_service_labels_catalog_services(
    temp_db, transaction_service, catalog_service, sample_workspace, sample_master
):
    gel = catalog_service.add_service(sample_workspace.id, "Gel polish", Decimal("35"))
    transaction_service.create_transaction(
        workspace_id=sample_workspace.id,
        master_id=sample_master.id,
        date=date(2024, 3, 15),
        price=Decimal("35"),
        payment_method=PaymentMethod.CARD,
        start_time="10:00",
        end_time="11:00",
        service=f"{gel},manicure",
    )

    report = ReportService(temp_db).build_master_report(sample_workspace.id, sample_master.id)

    (row,) = report.rows_by_date[date(2024, 3, 15)]
    assert row.service == "Gel polish, Manicure"
