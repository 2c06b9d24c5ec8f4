import enum

from sqlalchemy import Column, Text, Integer, TIMESTAMP, ForeignKey, Index

from .base import Base, new_id, utcnow
from .types import DomainTagList

DEFAULT_PROGRAMME = 'Master en communication'
INITIAL_STAGE = 'DEPOT_SUJET'


class StudentStatus(str, enum.Enum):
    PENDING = 'PENDING'
    IN_PROGRESS = 'IN_PROGRESS'
    VALIDATED = 'VALIDATED'
    REJECTED = 'REJECTED'

    @classmethod
    def values(cls):
        return [s.value for s in cls]


class Student(Base):
    """
    A student and their thesis project.

    supervisor_id is only written by the assignment coordinator.
    """
    __tablename__ = 'students'

    id = Column(Text, primary_key=True, default=new_id)
    last_name = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    programme = Column(Text, nullable=False, default=DEFAULT_PROGRAMME)
    year = Column(Integer, nullable=False)

    # Project description, editable by the student
    thesis_title = Column(Text)
    project_summary = Column(Text)
    research_question = Column(Text)
    immersion_place = Column(Text)
    remarks = Column(Text)
    domains = Column(DomainTagList, nullable=False, default=list)

    supervisor_id = Column(Text, ForeignKey('supervisors.id'), nullable=True)
    current_stage = Column(Text, nullable=False, default=INITIAL_STAGE)
    status = Column(Text, nullable=False, default=StudentStatus.PENDING.value)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_students_supervisor', 'supervisor_id'),
        Index('idx_students_stage', 'current_stage'),
        Index('idx_students_status', 'status'),
    )
