from sqlalchemy import Column, Text, Integer, Float, TIMESTAMP, Index

from .base import Base, new_id, utcnow
from .types import DomainTagList


class ThesisRecord(Base):
    """
    A thesis defended in a previous year.

    Archive entries are free-standing: the supervisor is kept by name and
    never counts towards a current supervisor's load.
    """
    __tablename__ = 'theses'

    id = Column(Text, primary_key=True, default=new_id)
    title = Column(Text, nullable=False)
    summary = Column(Text)
    author = Column(Text, nullable=False)
    year = Column(Integer, nullable=False)
    supervisor_name = Column(Text, nullable=False)
    domains = Column(DomainTagList, nullable=False, default=list)
    grade = Column(Float)
    distinction = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_theses_year', 'year'),
    )
