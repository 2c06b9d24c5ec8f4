from sqlalchemy import Column, Text, Boolean, Integer, TIMESTAMP, CheckConstraint, Index

from .base import Base, new_id, utcnow
from .types import DomainTagList


class Supervisor(Base):
    """
    Thesis supervisor ("promoteur").

    current_load is owned by the assignment coordinator and must equal the
    number of students whose supervisor_id points here.
    """
    __tablename__ = 'supervisors'

    id = Column(Text, primary_key=True, default=new_id)
    last_name = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    biography = Column(Text)

    domains = Column(DomainTagList, nullable=False, default=list)

    max_quota = Column(Integer, nullable=False, default=10)
    current_load = Column(Integer, nullable=False, default=0)
    available = Column(Boolean, nullable=False, default=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint('current_load >= 0', name='ck_supervisors_load_nonneg'),
        Index('idx_supervisors_available', 'available'),
    )

    @property
    def remaining_capacity(self) -> int:
        return (self.max_quota or 0) - (self.current_load or 0)

    @property
    def fill_rate(self) -> int:
        """Load as a whole percentage of quota (0 when quota is not positive)."""
        if not self.max_quota or self.max_quota <= 0:
            return 0
        return int((self.current_load or 0) * 100 / self.max_quota + 0.5)
