from typing import Any, ClassVar, Dict, List, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from database.models.base import utcnow

# Fields the store owns; callers can never write them.
IMMUTABLE_FIELDS = frozenset({'id', 'created_at', 'updated_at'})
LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """Lower-cased ``%text%`` pattern with LIKE wildcards escaped; use with ``escape=LIKE_ESCAPE``."""
    escaped = (
        text.strip().lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db


class RecordRepository(BaseRepository):
    """
    Generic keyed-record store over one ORM model.

    Criteria are SQLAlchemy where-clauses, e.g.
    ``repo.find_all(Student.status == 'PENDING')``.
    """
    model: ClassVar[Type[Any]]

    def _columns(self) -> set:
        return {c.key for c in self.model.__table__.columns}

    def _writable(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        columns = self._columns()
        return {k: v for k, v in fields.items() if k in columns and k not in IMMUTABLE_FIELDS}

    def find_all(self, *criteria, order_by=None) -> List[Any]:
        stmt = select(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        if isinstance(order_by, (list, tuple)):
            stmt = stmt.order_by(*order_by)
        elif order_by is not None:
            stmt = stmt.order_by(order_by)
        return list(self.db.execute(stmt).scalars().all())

    def find_by_id(self, record_id: Any) -> Optional[Any]:
        if record_id is None:
            return None
        return self.db.get(self.model, record_id)

    def find_one(self, *criteria) -> Optional[Any]:
        stmt = select(self.model).where(*criteria).limit(1)
        return self.db.execute(stmt).scalars().first()

    def count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        return self.db.execute(stmt).scalar_one()

    def create(self, **fields) -> Any:
        now = utcnow()
        record = self.model(**self._writable(fields))
        record.created_at = now
        record.updated_at = now
        self.db.add(record)
        self.db.flush()
        return record

    def update(self, record_id: Any, fields: Dict[str, Any]) -> Optional[Any]:
        record = self.find_by_id(record_id)
        if record is None:
            return None
        for key, value in self._writable(fields).items():
            setattr(record, key, value)
        record.updated_at = utcnow()
        self.db.flush()
        return record

    def delete(self, record_id: Any) -> bool:
        record = self.find_by_id(record_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True
