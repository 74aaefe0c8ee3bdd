"""Domain layer for salonledger.

The settlement core (rates, settlement, overlap) is pure; services wrap it
around the record store.
"""

from salonledger.domain.overlap import has_overlap
from salonledger.domain.rates import resolve_rates
from salonledger.domain.settlement import compute_entry_balance, compute_settlement

__all__ = [
    "compute_settlement",
    "compute_entry_balance",
    "has_overlap",
    "resolve_rates",
]
