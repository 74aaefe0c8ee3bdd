"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or overlapping entries."""


class PermissionDeniedError(DomainError):
    """Acting member lacks the role required for the operation."""


class InvalidTransactionError(ValidationError):
    """A transaction record violates a data-model invariant."""

    def __init__(self, message: str, transaction_id: Optional[int] = None):
        self.transaction_id = transaction_id
        if transaction_id is not None:
            message = f"Transaction {transaction_id}: {message}"
        super().__init__(message)


class InvalidRateConfigError(ValidationError):
    """A commission rate lies outside [0, 100]."""


def workspace_not_found(workspace: int | str) -> str:
    """Return message for missing workspace."""
    if isinstance(workspace, int):
        return f"Workspace {workspace} not found"
    return f"Workspace '{workspace}' not found"


def member_not_found(member: int | str) -> str:
    """Return message for missing member."""
    if isinstance(member, int):
        return f"Member {member} not found"
    return f"Member '{member}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def transaction_overlaps(start_time: str, end_time: str) -> str:
    """Return message when a service entry collides with another one."""
    return f"Time {start_time}-{end_time} overlaps an existing service entry"


def service_not_found(service_id: int) -> str:
    """Return message for missing catalog service."""
    return f"Service {service_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing service category."""
    return f"Category {category_id} not found"


def profession_not_found(profession_id: int) -> str:
    """Return message for missing profession."""
    return f"Profession {profession_id} not found"
