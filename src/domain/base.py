import uuid
from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel
from src.domain.exceptions import ConcurrencyConflict


def generate_uuid() -> str:
    return str(uuid.uuid4())


class BaseModel(SQLModel):
    """Base for all persisted entities"""

    pass


class VersionedMixin:
    """Optimistic concurrency helpers for entities carrying a ``version`` column"""

    __entity_name__ = "entity"

    def check_version(self, expected_version: Optional[int]) -> None:
        """Raise ConcurrencyConflict if the caller read a stale version"""
        if expected_version is not None and expected_version != self.version:
            raise ConcurrencyConflict(
                self.__entity_name__, self.id, expected_version, self.version
            )

    def bump_version(self) -> None:
        self.version = (self.version or 0) + 1
        self.updated_at = datetime.utcnow()
