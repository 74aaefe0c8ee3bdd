"""Transaction domain service.

Wraps the record store around the pure settlement core: every mutation is
validated before it is stored, and settlements are always recomputed from a
fresh fetch rather than patched locally.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from salonledger import log
from salonledger.database.base import Database
from salonledger.domain.entities import (
    DEBT_PAYMENT_METHODS,
    PaymentMethod,
    Perspective,
    RecipientRole,
    SettlementResult,
    TransactionRecord,
    TransactionType,
    ZERO,
)
from salonledger.domain.errors import (
    ConflictError,
    InvalidTransactionError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    client_not_found,
    member_not_found,
    transaction_not_found,
    transaction_overlaps,
    workspace_not_found,
)
from salonledger.domain.overlap import has_overlap
from salonledger.domain.settlement import compute_settlement
from salonledger.domain.validation import validate_transaction


class TransactionService:
    """Service for managing ledger entries."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        workspace_id: int,
        master_id: int,
        date: date,
        price: Decimal,
        transaction_type: TransactionType = TransactionType.SERVICE,
        tips: Decimal = ZERO,
        payment_method: Optional[PaymentMethod] = None,
        tips_payment_method: Optional[PaymentMethod] = None,
        recipient_role: RecipientRole = RecipientRole.ME,
        recipient_name: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        client_name: Optional[str] = None,
        client_id: Optional[int] = None,
        master_revenue_share: Optional[Decimal] = None,
        service: str = "",
        acting_member_id: Optional[int] = None,
        reject_overlap: bool = False,
    ) -> int:
        """Create a ledger entry.

        Args:
            workspace_id: Owning workspace
            master_id: Master the entry belongs to
            date: Entry date
            price: Principal amount
            transaction_type: Service or one of the debt variants
            tips: Tips amount (service entries only)
            payment_method: Cash or card (required for service entries)
            tips_payment_method: Cash or card (required when tips > 0)
            recipient_role: Who took the payment
            recipient_name: Name of the other master holding the payment
            start_time: Start time HH:MM (required for service entries)
            end_time: End time HH:MM (required for service entries)
            client_name: Optional client display name
            client_id: Optional client link
            master_revenue_share: Optional per-entry rate override (admin only)
            service: Service names or debt description
            acting_member_id: Member performing the operation; defaults to the master
            reject_overlap: If True, refuse service entries overlapping another one

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If workspace, master or client doesn't exist
            PermissionDeniedError: If an admin-only field is set by a non-admin
            InvalidTransactionError: If the entry breaks a data-model invariant
            ConflictError: If reject_overlap is set and the time slot is taken
        """
        record = TransactionRecord(
            workspace_id=workspace_id,
            master_id=master_id,
            date=date,
            transaction_type=TransactionType(transaction_type),
            price=price,
            tips=tips if tips is not None else ZERO,
            payment_method=PaymentMethod(payment_method) if payment_method else None,
            tips_payment_method=(
                PaymentMethod(tips_payment_method) if tips_payment_method else None
            ),
            recipient_role=RecipientRole(recipient_role),
            recipient_name=recipient_name,
            start_time=start_time,
            end_time=end_time,
            client_name=client_name,
            client_id=client_id,
            master_revenue_share=master_revenue_share,
            service=service or "",
        )
        record = self._prepare(
            record,
            acting_member_id,
            reject_overlap,
            share_changed=record.master_revenue_share is not None,
        )

        transaction_id = self.db.create_transaction(record)
        log.info(
            "Created %s transaction %s for master %s on %s",
            record.transaction_type.value,
            transaction_id,
            master_id,
            record.date,
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionRecord]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            TransactionRecord or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionRecord:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        acting_member_id: Optional[int] = None,
        reject_overlap: bool = False,
        **changes,
    ) -> TransactionRecord:
        """Update a ledger entry.

        The changed fields are merged onto the stored entry and the result
        replaces every mutable field of the stored row.

        Args:
            transaction_id: Transaction ID to update
            acting_member_id: Member performing the operation
            reject_overlap: If True, refuse a time slot taken by another entry
            **changes: TransactionRecord fields to change

        Returns:
            The stored TransactionRecord

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If an unknown or immutable field is passed
            InvalidTransactionError: If the result breaks an invariant
        """
        existing = self.require_transaction(transaction_id)
        immutable = {"id", "workspace_id", "created_at"} & changes.keys()
        if immutable:
            raise ValidationError(f"Cannot change {', '.join(sorted(immutable))}")
        try:
            updated = replace(existing, **changes)
        except TypeError as exc:
            raise ValidationError(str(exc)) from exc

        updated = self._prepare(
            updated,
            acting_member_id,
            reject_overlap,
            share_changed=updated.master_revenue_share != existing.master_revenue_share,
        )
        self.db.update_transaction(transaction_id, updated)
        log.info("Updated transaction %s", transaction_id)
        return self.require_transaction(transaction_id)

    def delete_transaction(
        self, transaction_id: int, acting_member_id: Optional[int] = None
    ) -> None:
        """Delete a ledger entry.

        Raises:
            NotFoundError: If the transaction doesn't exist
            PermissionDeniedError: If the acting member is neither its master nor an admin
        """
        txn = self.require_transaction(transaction_id)
        self._check_actor(txn, acting_member_id)
        self.db.delete_transaction(transaction_id)
        log.info("Deleted transaction %s", transaction_id)

    def list_transactions(
        self,
        workspace_id: int,
        master_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionRecord]:
        """List entries of a workspace with optional master and date filters."""
        return self.db.list_transactions(
            workspace_id=workspace_id,
            master_id=master_id,
            start_date=start_date,
            end_date=end_date,
        )

    def check_overlap(
        self,
        workspace_id: int,
        master_id: int,
        date: date,
        start_time: Optional[str],
        end_time: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> bool:
        """Check a candidate time slot against the master's entries of that day."""
        day_entries = self.db.list_transactions(
            workspace_id=workspace_id, master_id=master_id, start_date=date, end_date=date
        )
        return has_overlap(date, start_time, end_time, day_entries, exclude_id=exclude_id)

    def settle(
        self,
        workspace_id: int,
        master_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        perspective: Perspective = Perspective.MASTER,
    ) -> SettlementResult:
        """Fetch a master's entries and compute their settlement.

        Args:
            workspace_id: Workspace ID
            master_id: Master ID
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            perspective: Master or admin view of the balance

        Returns:
            SettlementResult
        """
        transactions = self.list_transactions(
            workspace_id, master_id=master_id, start_date=start_date, end_date=end_date
        )
        rates = self.db.get_rate_config(workspace_id, master_id)
        return compute_settlement(transactions, rates, perspective)

    def _check_actor(self, txn: TransactionRecord, acting_member_id: Optional[int]) -> None:
        if acting_member_id is None or acting_member_id == txn.master_id:
            return
        actor = self.db.get_member(acting_member_id)
        if actor is None or actor.workspace_id != txn.workspace_id:
            raise NotFoundError(member_not_found(acting_member_id))
        if not actor.is_admin:
            raise PermissionDeniedError(
                f"Member {acting_member_id} cannot manage entries of member {txn.master_id}"
            )

    def _prepare(
        self,
        record: TransactionRecord,
        acting_member_id: Optional[int],
        reject_overlap: bool,
        share_changed: bool = False,
    ) -> TransactionRecord:
        """Check references, permissions and invariants; return the record to store.

        Setting, changing or clearing ``master_revenue_share`` needs an admin
        actor; when the actor is omitted it is the entry's own master.
        """
        if self.db.get_workspace(record.workspace_id) is None:
            raise NotFoundError(workspace_not_found(record.workspace_id))
        master = self.db.get_member(record.master_id)
        if master is None or master.workspace_id != record.workspace_id:
            raise NotFoundError(member_not_found(record.master_id))

        self._check_actor(record, acting_member_id)
        if share_changed:
            actor = (
                self.db.get_member(acting_member_id)
                if acting_member_id is not None
                else master
            )
            if actor is None or not actor.is_admin:
                raise PermissionDeniedError("Only an admin can change a master revenue share")

        record = self._normalize(record)

        try:
            validate_transaction(record)
            if record.is_service and not (record.start_time and record.end_time):
                raise InvalidTransactionError(
                    "service entry requires start and end time", record.id
                )
        except InvalidTransactionError as exc:
            log.warning("Rejected transaction: %s", exc)
            raise

        if reject_overlap and record.is_service and self.check_overlap(
            record.workspace_id,
            record.master_id,
            record.date,
            record.start_time,
            record.end_time,
            exclude_id=record.id,
        ):
            raise ConflictError(transaction_overlaps(record.start_time, record.end_time))

        return record

    def _normalize(self, record: TransactionRecord) -> TransactionRecord:
        """Apply storage conventions: debt payment methods, recipient and client names."""
        record = replace(
            record,
            transaction_type=TransactionType(record.transaction_type),
            recipient_role=RecipientRole(record.recipient_role or RecipientRole.ME),
            payment_method=PaymentMethod(record.payment_method) if record.payment_method else None,
            tips_payment_method=(
                PaymentMethod(record.tips_payment_method) if record.tips_payment_method else None
            ),
            tips=record.tips if record.tips is not None else ZERO,
        )

        changes = {}
        if not record.is_service:
            changes.update(
                payment_method=DEBT_PAYMENT_METHODS[record.transaction_type],
                tips=ZERO,
                tips_payment_method=None,
            )
        elif record.tips == ZERO:
            changes["tips_payment_method"] = None

        if record.recipient_role != RecipientRole.MASTER:
            changes["recipient_name"] = None

        if record.client_id is not None:
            client = self.db.get_client(record.client_id)
            if client is None or client.workspace_id != record.workspace_id:
                raise NotFoundError(client_not_found(record.client_id))
            if not record.client_name:
                changes["client_name"] = client.name

        return replace(record, **changes) if changes else record
