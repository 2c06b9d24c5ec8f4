import logging
from typing import Dict, List, Optional

from sqlalchemy import func, or_, select

from database.models import Student
from database.repositories.base import LIKE_ESCAPE, RecordRepository, contains_pattern

logger = logging.getLogger(__name__)


class StudentRepository(RecordRepository):
    model = Student

    def find_by_email(self, email: str) -> Optional[Student]:
        return self.find_one(Student.email == email.strip().lower())

    def find_by_supervisor(self, supervisor_id: str) -> List[Student]:
        return self.find_all(Student.supervisor_id == supervisor_id, order_by=Student.last_name)

    def count_by_supervisor(self) -> Dict[str, int]:
        """Number of students referencing each supervisor id."""
        stmt = (
            select(Student.supervisor_id, func.count(Student.id))
            .where(Student.supervisor_id.is_not(None))
            .group_by(Student.supervisor_id)
        )
        return {supervisor_id: count for supervisor_id, count in self.db.execute(stmt).all()}

    def search(
        self,
        stage: Optional[str] = None,
        status: Optional[str] = None,
        supervisor_id: Optional[str] = None,
        text: Optional[str] = None
    ) -> List[Student]:
        criteria = []
        if stage:
            criteria.append(Student.current_stage == stage)
        if status:
            criteria.append(Student.status == status)
        if supervisor_id:
            criteria.append(Student.supervisor_id == supervisor_id)
        if text:
            pattern = contains_pattern(text)
            criteria.append(or_(
                func.lower(Student.last_name).like(pattern, escape=LIKE_ESCAPE),
                func.lower(Student.first_name).like(pattern, escape=LIKE_ESCAPE),
                func.lower(func.coalesce(Student.thesis_title, '')).like(pattern, escape=LIKE_ESCAPE),
            ))
        return self.find_all(*criteria, order_by=Student.last_name)
