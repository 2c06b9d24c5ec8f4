from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Index

from .base import Base, new_id, utcnow


class Document(Base):
    """
    Metadata of a document submitted by a student.

    Storage of the file itself is handled outside this service.
    """
    __tablename__ = 'documents'

    id = Column(Text, primary_key=True, default=new_id)
    student_id = Column(Text, ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    file_name = Column(Text, nullable=False)
    doc_type = Column(Text, nullable=False, default='AUTRE')
    stage = Column(Text)
    comment = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index('idx_documents_student', 'student_id'),
    )
