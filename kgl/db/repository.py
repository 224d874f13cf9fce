"""
Persistence gateway shared by every entity.

One ``Repository`` wraps a request-scoped ``Session`` and a mapped model.
Lookups go through the integer primary key only; anything that is not a
positive integer is rejected before the database is touched.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Type

from sqlalchemy.orm import Session

from kgl.core.errors import EntityValidationError, InvalidIdentifier, RecordNotFound
from kgl.db.session import Base

logger = logging.getLogger("kgl.db")

# SQLite and most SQL backends store keys as signed 64-bit integers
_MAX_ID = 2**63 - 1


def parse_record_id(record_id: Any) -> int:
    if isinstance(record_id, bool):
        raise InvalidIdentifier(details=f"{record_id!r} is not a valid record id")
    if isinstance(record_id, int):
        value = record_id
    else:
        text = str(record_id).strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidIdentifier(details=f"{record_id!r} is not a valid record id")
        value = int(text)
    if value < 1 or value > _MAX_ID:
        raise InvalidIdentifier(details=f"{record_id!r} is not a valid record id")
    return value


class Repository:
    def __init__(self, db: Session, model: Type[Base], label: str):
        self.db = db
        self.model = model
        self.label = label

    def create(self, fields: Dict[str, Any]):
        record = self.model(**fields)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info("Created %s %s", self.label, record.id)
        return record

    def list_all(self) -> List:
        records = self.db.query(self.model).order_by(self.model.id).all()
        # An empty collection is reported as an absence, not an empty success
        if not records:
            raise RecordNotFound(f"No {self.label} record found", f"The {self.label} collection is empty")
        return records

    def get(self, record_id: Any):
        key = parse_record_id(record_id)
        record = self.db.get(self.model, key)
        if record is None:
            raise RecordNotFound(
                f"{self.label.capitalize()} record with id {key} not found",
                f"No {self.label} has id {key}",
            )
        return record

    def update(self, record_id: Any, changes: Dict[str, Any], check: Optional[Callable] = None):
        record = self.get(record_id)
        if not changes:
            return record

        for field, value in changes.items():
            setattr(record, field, value)

        if check is not None:
            try:
                check(record)
            except ValueError as exc:
                self.db.rollback()
                raise EntityValidationError(details=str(exc)) from exc

        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info("Updated %s %s (%s)", self.label, record.id, ", ".join(sorted(changes)))
        return record

    def delete(self, record_id: Any):
        record = self.get(record_id)
        self.db.delete(record)
        self.db.commit()
        logger.info("Deleted %s %s", self.label, record.id)
        return record
