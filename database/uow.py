import contextlib
import logging
from typing import Iterator, Optional

from sqlalchemy.orm import Session, sessionmaker

from database.database import SessionLocal
from database.repositories import (
    DocumentRepository,
    StudentRepository,
    SupervisorRepository,
    ThesisRecordRepository,
    WorkflowStageRepository,
)

logger = logging.getLogger(__name__)


class Store:
    """All repositories bound to one session."""

    def __init__(self, session: Session):
        self.session = session
        self.students = StudentRepository(session)
        self.supervisors = SupervisorRepository(session)
        self.stages = WorkflowStageRepository(session)
        self.documents = DocumentRepository(session)
        self.theses = ThesisRecordRepository(session)


@contextlib.contextmanager
def store_uow(session_factory: Optional[sessionmaker] = None) -> Iterator[Store]:
    """Per-unit-of-work transaction scope.

    Yields a Store bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with store_uow() as store:
            student = store.students.find_by_id(student_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = (session_factory or SessionLocal)()
    try:
        yield Store(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
