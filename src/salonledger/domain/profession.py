"""Profession list shared by all workspaces."""

from typing import Optional

from salonledger import log
from salonledger.database.base import Database
from salonledger.domain.entities import Profession
from salonledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    profession_not_found,
)


class ProfessionService:
    """Service for managing professions."""

    def __init__(self, db: Database):
        self.db = db

    def add_profession(self, name: str) -> int:
        """Add a profession.

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a profession with this name exists
        """
        if not name or not name.strip():
            raise ValidationError("Profession name cannot be empty")
        name = name.strip()
        if self.find_profession(name) is not None:
            raise ConflictError(f"Profession '{name}' already exists")

        profession_id = self.db.create_profession(name)
        log.info("Added profession %s (%s)", profession_id, name)
        return profession_id

    def find_profession(self, name: str) -> Optional[Profession]:
        """Find a profession by name, ignoring case."""
        wanted = name.strip().lower()
        for profession in self.db.list_professions():
            if profession.name.lower() == wanted:
                return profession
        return None

    def list_professions(self) -> list[Profession]:
        return self.db.list_professions()

    def delete_profession(self, profession_id: int) -> None:
        """Delete a profession; members keep the text they were created with."""
        if self.db.get_profession(profession_id) is None:
            raise NotFoundError(profession_not_found(profession_id))
        self.db.delete_profession(profession_id)
        log.info("Deleted profession %s", profession_id)
