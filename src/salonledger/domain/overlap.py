"""Scheduling guard for service entries."""

from datetime import date
from typing import Iterable, Optional

from salonledger.domain.entities import TransactionRecord, TransactionType
from salonledger.domain.errors import ValidationError


def time_to_minutes(value: str) -> int:
    """Convert a wall-clock ``HH:MM`` string to minutes since midnight.

    A trailing seconds component (``HH:MM:SS``) is accepted and ignored.

    Raises:
        ValidationError: If the string is not a valid time of day
    """
    parts = value.strip().split(":") if value else []
    if len(parts) not in (2, 3):
        raise ValidationError(f"Invalid time '{value}': expected HH:MM")
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValidationError(f"Invalid time '{value}': expected HH:MM")
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValidationError(f"Invalid time '{value}': out of range")
    return hours * 60 + minutes


def has_overlap(
    date: date,
    start_time: Optional[str],
    end_time: Optional[str],
    transactions: Iterable[TransactionRecord],
    exclude_id: Optional[int] = None,
) -> bool:
    """Check whether ``[start_time, end_time)`` collides with a service entry.

    Only service entries on the same date with both times set are considered;
    the entry identified by ``exclude_id`` (the one being edited) is skipped.
    Touching endpoints do not overlap.

    Args:
        date: Day of the candidate entry
        start_time: Candidate start (``HH:MM``)
        end_time: Candidate end (``HH:MM``)
        transactions: Existing entries to check against
        exclude_id: Optional ID to ignore

    Returns:
        True on the first conflicting entry, False otherwise
    """
    if not start_time or not end_time:
        return False

    new_start = time_to_minutes(start_time)
    new_end = time_to_minutes(end_time)

    for txn in transactions:
        if exclude_id is not None and txn.id == exclude_id:
            continue
        if txn.transaction_type != TransactionType.SERVICE:
            continue
        if txn.date != date:
            continue
        if not txn.start_time or not txn.end_time:
            continue

        existing_start = time_to_minutes(txn.start_time)
        existing_end = time_to_minutes(txn.end_time)
        if new_start < existing_end and existing_start < new_end:
            return True

    return False
