"""Domain model entities for salonledger.

These are pure data classes representing business concepts, independent of
database schema. The settlement engine only ever sees these types, so it can
run on any snapshot handed to it by a record store.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

DEFAULT_RATE = Decimal("40")
ZERO = Decimal("0")


class TransactionType(str, Enum):
    """Kinds of ledger entry."""

    SERVICE = "service"
    DEBT_SALON_TO_MASTER = "debt_salon_to_master"
    DEBT_MASTER_TO_SALON = "debt_master_to_salon"


class PaymentMethod(str, Enum):
    """How the client paid."""

    CASH = "cash"
    CARD = "card"


class RecipientRole(str, Enum):
    """Who physically took custody of the payment."""

    ME = "me"
    MASTER = "master"
    ADMIN = "admin"


class Perspective(str, Enum):
    """Side from which a settlement balance is read."""

    MASTER = "master"
    ADMIN = "admin"


class MemberRole(str, Enum):
    """Role of a member inside a workspace."""

    ADMIN = "admin"
    MASTER = "master"


# Payment method recorded for debt entries; display only, never used for rates.
DEBT_PAYMENT_METHODS = {
    TransactionType.DEBT_SALON_TO_MASTER: PaymentMethod.CARD,
    TransactionType.DEBT_MASTER_TO_SALON: PaymentMethod.CASH,
}


@dataclass(frozen=True)
class Workspace:
    """Salon workspace (tenant)."""

    id: int
    name: str
    owner_name: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Member:
    """Workspace member: an admin or a master."""

    id: int
    workspace_id: int
    name: str
    role: MemberRole
    profession: Optional[str]
    manage_clients: bool
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN

    @property
    def can_manage_clients(self) -> bool:
        return self.is_admin or self.manage_clients


@dataclass(frozen=True)
class RateConfig:
    """Commission configuration of a master.

    All percentages are the master's share of the service price.
    """

    use_different_rates: bool = False
    rate_general: Decimal = DEFAULT_RATE
    rate_cash: Decimal = DEFAULT_RATE
    rate_card: Decimal = DEFAULT_RATE
    workspace_id: Optional[int] = None
    master_id: Optional[int] = None


@dataclass(frozen=True)
class ResolvedRates:
    """Effective cash and card percentages for one master."""

    cash_rate: Decimal
    card_rate: Decimal


@dataclass(frozen=True)
class TransactionRecord:
    """One financial fact recorded by (or for) a master."""

    workspace_id: int
    master_id: int
    date: date
    transaction_type: TransactionType
    price: Decimal
    id: Optional[int] = None
    tips: Decimal = ZERO
    payment_method: Optional[PaymentMethod] = None
    tips_payment_method: Optional[PaymentMethod] = None
    recipient_role: RecipientRole = RecipientRole.ME
    recipient_name: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    client_name: Optional[str] = None
    client_id: Optional[int] = None
    master_revenue_share: Optional[Decimal] = None
    service: str = ""
    created_at: Optional[datetime] = None

    @property
    def is_service(self) -> bool:
        return self.transaction_type == TransactionType.SERVICE


@dataclass(frozen=True)
class SettlementResult:
    """Outcome of folding a set of transactions into one balance."""

    balance: Decimal = ZERO
    income: Decimal = ZERO
    tips_total: Decimal = ZERO
    salon_income: Decimal = ZERO
    card_tips: Decimal = ZERO
    recipients: dict[str, Decimal] = field(default_factory=dict)
    perspective: Perspective = Perspective.MASTER


@dataclass(frozen=True)
class Client:
    """Client of a workspace."""

    id: int
    workspace_id: int
    name: str
    phone: Optional[str]
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class ClientStats:
    """Visit statistics derived from a client's service entries."""

    client_id: int
    visit_count: int
    total_spent: Decimal
    last_visit: Optional[date]


@dataclass(frozen=True)
class ReportRow:
    """One display row of a settlement report."""

    index: int
    transaction_id: Optional[int]
    date: date
    client: str
    service: str
    method: str
    price: Decimal
    card_tips: Decimal
    recipient: str
    balance: Decimal


@dataclass(frozen=True)
class SettlementReport:
    """Display-ready settlement of one master over a period."""

    master_name: str
    perspective: Perspective
    start_date: Optional[date]
    end_date: Optional[date]
    period_label: str
    rows_by_date: dict[date, tuple[ReportRow, ...]]
    total: Decimal
    settlement: SettlementResult
    balance_caption: str


UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class ServiceCategory:
    """Group of catalog services in a workspace."""

    id: int
    workspace_id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class ServiceItem:
    """Priced service offered by a workspace."""

    id: int
    workspace_id: int
    name: str
    price: Decimal
    duration: Optional[int]
    category_id: Optional[int]
    category_name: Optional[str]
    created_at: datetime

    @property
    def category_label(self) -> str:
        return self.category_name or UNCATEGORIZED


@dataclass(frozen=True)
class Profession:
    """Profession a master can be registered with."""

    id: int
    name: str
    created_at: datetime
