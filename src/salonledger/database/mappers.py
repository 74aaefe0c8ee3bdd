"""Mapper functions to convert between domain models and SQLAlchemy models.

Enumerations are stored as their string values; this layer turns them back
into domain enums so the engine never sees raw column strings.
"""

from decimal import Decimal
from typing import Optional

from salonledger.domain import entities as domain
from salonledger.database.models import (
    Workspace as ORMWorkspace,
    Member as ORMMember,
    RateSettings as ORMRateSettings,
    Client as ORMClient,
    ServiceCategory as ORMServiceCategory,
    ServiceItem as ORMServiceItem,
    Profession as ORMProfession,
    Transaction as ORMTransaction,
)


def _decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


def workspace_to_domain(orm_workspace: ORMWorkspace) -> domain.Workspace:
    """Convert SQLAlchemy Workspace model to domain Workspace entity."""
    return domain.Workspace(
        id=orm_workspace.id,
        name=orm_workspace.name,
        owner_name=orm_workspace.owner_name,
        created_at=orm_workspace.created_at,
    )


def member_to_domain(orm_member: ORMMember) -> domain.Member:
    """Convert SQLAlchemy Member model to domain Member entity."""
    return domain.Member(
        id=orm_member.id,
        workspace_id=orm_member.workspace_id,
        name=orm_member.name,
        role=domain.MemberRole(orm_member.role),
        profession=orm_member.profession,
        manage_clients=bool(orm_member.manage_clients),
        created_at=orm_member.created_at,
    )


def rate_settings_to_domain(orm_settings: ORMRateSettings) -> domain.RateConfig:
    """Convert SQLAlchemy RateSettings model to domain RateConfig."""
    return domain.RateConfig(
        use_different_rates=bool(orm_settings.use_different_rates),
        rate_general=_decimal(orm_settings.rate_general),
        rate_cash=_decimal(orm_settings.rate_cash),
        rate_card=_decimal(orm_settings.rate_card),
        workspace_id=orm_settings.workspace_id,
        master_id=orm_settings.member_id,
    )


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        workspace_id=orm_client.workspace_id,
        name=orm_client.name,
        phone=orm_client.phone,
        description=orm_client.description,
        created_at=orm_client.created_at,
    )


def service_category_to_domain(orm_category: ORMServiceCategory) -> domain.ServiceCategory:
    """Convert SQLAlchemy ServiceCategory model to domain ServiceCategory entity."""
    return domain.ServiceCategory(
        id=orm_category.id,
        workspace_id=orm_category.workspace_id,
        name=orm_category.name,
        created_at=orm_category.created_at,
    )


def service_item_to_domain(orm_service: ORMServiceItem) -> domain.ServiceItem:
    """Convert SQLAlchemy ServiceItem model to domain ServiceItem entity.

    The category name is read through the relationship so listings need no
    second lookup.
    """
    category = orm_service.category
    return domain.ServiceItem(
        id=orm_service.id,
        workspace_id=orm_service.workspace_id,
        name=orm_service.name,
        price=_decimal(orm_service.price),
        duration=orm_service.duration,
        category_id=orm_service.category_id,
        category_name=category.name if category is not None else None,
        created_at=orm_service.created_at,
    )


def profession_to_domain(orm_profession: ORMProfession) -> domain.Profession:
    """Convert SQLAlchemy Profession model to domain Profession entity."""
    return domain.Profession(
        id=orm_profession.id,
        name=orm_profession.name,
        created_at=orm_profession.created_at,
    )

def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.TransactionRecord:
    """Convert SQLAlchemy Transaction model to domain TransactionRecord."""
    payment_method = orm_transaction.payment_method
    tips_payment_method = orm_transaction.tips_payment_method
    return domain.TransactionRecord(
        id=orm_transaction.id,
        workspace_id=orm_transaction.workspace_id,
        master_id=orm_transaction.master_id,
        date=orm_transaction.date,
        transaction_type=domain.TransactionType(orm_transaction.transaction_type),
        price=_decimal(orm_transaction.price),
        tips=_decimal(orm_transaction.tips) or domain.ZERO,
        payment_method=domain.PaymentMethod(payment_method) if payment_method else None,
        tips_payment_method=(
            domain.PaymentMethod(tips_payment_method) if tips_payment_method else None
        ),
        recipient_role=domain.RecipientRole(orm_transaction.recipient_role or "me"),
        recipient_name=orm_transaction.recipient_name,
        start_time=orm_transaction.start_time,
        end_time=orm_transaction.end_time,
        client_name=orm_transaction.client_name,
        client_id=orm_transaction.client_id,
        master_revenue_share=_decimal(orm_transaction.master_revenue_share),
        service=orm_transaction.service or "",
        created_at=orm_transaction.created_at,
    )


def transaction_to_columns(record: domain.TransactionRecord) -> dict:
    """Flatten a domain TransactionRecord into mutable column values."""
    return {
        "workspace_id": record.workspace_id,
        "master_id": record.master_id,
        "date": record.date,
        "start_time": record.start_time,
        "end_time": record.end_time,
        "transaction_type": record.transaction_type.value,
        "price": record.price,
        "tips": record.tips,
        "payment_method": record.payment_method.value if record.payment_method else None,
        "tips_payment_method": (
            record.tips_payment_method.value if record.tips_payment_method else None
        ),
        "recipient_role": record.recipient_role.value,
        "recipient_name": record.recipient_name,
        "client_name": record.client_name,
        "client_id": record.client_id,
        "master_revenue_share": record.master_revenue_share,
        "service": record.service,
    }
