"""Tests for the service entry overlap check."""

from datetime import date

import pytest

from salonledger.domain import has_overlap
from salonledger.domain.entities import TransactionType
from salonledger.domain.errors import ValidationError
from salonledger.domain.overlap import time_to_minutes

DAY = date(2024, 3, 15)


@pytest.fixture
def booked(make_txn):
    return [make_txn(id=1, date=DAY, start_time="10:00", end_time="11:00")]


def test_time_to_minutes():
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("10:30") == 630
    assert time_to_minutes("23:59:00") == 1439


@pytest.mark.parametrize("value", ["", "10", "24:00", "10:60", "ab:cd", "1:2:3:4"])
def test_time_to_minutes_rejects_garbage(value):
    with pytest.raises(ValidationError):
        time_to_minutes(value)


def test_partial_overlap(booked):
    assert has_overlap(DAY, "10:30", "11:30", booked)


def test_touching_end_is_free(booked):
    assert not has_overlap(DAY, "11:00", "12:00", booked)
    assert not has_overlap(DAY, "09:00", "10:00", booked)


def test_containment_overlaps(booked):
    assert has_overlap(DAY, "10:15", "10:45", booked)
    assert has_overlap(DAY, "09:00", "12:00", booked)


def test_missing_times_never_overlap(booked):
    assert not has_overlap(DAY, None, "10:30", booked)
    assert not has_overlap(DAY, "10:00", None, booked)


def test_other_day_ignored(booked):
    assert not has_overlap(date(2024, 3, 16), "10:00", "11:00", booked)


def test_excluded_entry_ignored(booked):
    assert not has_overlap(DAY, "10:00", "11:00", booked, exclude_id=1)


def test_debts_never_occupy_time(make_txn):
    debt = make_txn(id=2, date=DAY, transaction_type=TransactionType.DEBT_MASTER_TO_SALON)
    assert not has_overlap(DAY, "10:00", "11:00", [debt])


def test_entries_without_times_ignored(make_txn):
    untimed = make_txn(id=3, date=DAY, start_time=None, end_time=None)
    assert not has_overlap(DAY, "10:00", "11:00", [untimed])
