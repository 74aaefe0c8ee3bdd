"""SQLAlchemy models for the salonledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Workspace(Base):
    """Salon workspace model."""

    __tablename__ = "workspaces"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    owner_name = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    members = relationship("Member", back_populates="workspace", cascade="all, delete-orphan")
    clients = relationship("Client", back_populates="workspace", cascade="all, delete-orphan")
    service_categories = relationship(
        "ServiceCategory", back_populates="workspace", cascade="all, delete-orphan"
    )
    services = relationship("ServiceItem", back_populates="workspace", cascade="all, delete-orphan")


class Member(Base):
    """Workspace membership model (admin or master)."""

    __tablename__ = "members"

    id = Column(Integer, primary_key=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default="master")
    profession = Column(String, nullable=True)
    manage_clients = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("workspace_id", "name", name="uq_workspace_member_name"),)

    # Relationships
    workspace = relationship("Workspace", back_populates="members")
    settings = relationship(
        "RateSettings", back_populates="member", uselist=False, cascade="all, delete-orphan"
    )
    transactions = relationship("Transaction", back_populates="master", cascade="all, delete-orphan")


class RateSettings(Base):
    """Per-master commission settings."""

    __tablename__ = "rate_settings"

    id = Column(Integer, primary_key=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, unique=True)
    use_different_rates = Column(Boolean, default=False, nullable=False)
    rate_general = Column(Numeric(5, 2), nullable=False)
    rate_cash = Column(Numeric(5, 2), nullable=False)
    rate_card = Column(Numeric(5, 2), nullable=False)

    # Relationships
    member = relationship("Member", back_populates="settings")


class Client(Base):
    """Client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    workspace = relationship("Workspace", back_populates="clients")
    transactions = relationship("Transaction", back_populates="client")


class ServiceCategory(Base):
    """Service category model."""

    __tablename__ = "service_categories"

    id = Column(Integer, primary_key=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("workspace_id", "name", name="uq_workspace_category_name"),)

    # Relationships
    workspace = relationship("Workspace", back_populates="service_categories")
    services = relationship("ServiceItem", back_populates="category")


class ServiceItem(Base):
    """Catalog service model."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("service_categories.id"), nullable=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    duration = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("workspace_id", "name", name="uq_workspace_service_name"),)

    # Relationships
    workspace = relationship("Workspace", back_populates="services")
    category = relationship("ServiceCategory", back_populates="services")


class Profession(Base):
    """Profession model, shared by all workspaces."""

    __tablename__ = "professions"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

class Transaction(Base):
    """Ledger entry model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    workspace_id = Column(Integer, ForeignKey("workspaces.id"), nullable=False)
    master_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(String(8), nullable=True)
    end_time = Column(String(8), nullable=True)
    transaction_type = Column(String, nullable=False, default="service")
    price = Column(Numeric(10, 2), nullable=False)
    tips = Column(Numeric(10, 2), nullable=False, default=0)
    payment_method = Column(String, nullable=True)
    tips_payment_method = Column(String, nullable=True)
    recipient_role = Column(String, nullable=False, default="me")
    recipient_name = Column(String, nullable=True)
    client_name = Column(String, nullable=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    master_revenue_share = Column(Numeric(5, 2), nullable=True)
    service = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    master = relationship("Member", back_populates="transactions")
    client = relationship("Client", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
