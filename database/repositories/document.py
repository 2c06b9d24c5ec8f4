import logging
from typing import List, Optional

from database.models import Document
from database.repositories.base import RecordRepository

logger = logging.getLogger(__name__)


class DocumentRepository(RecordRepository):
    model = Document

    def find_by_student(self, student_id: str, stage: Optional[str] = None) -> List[Document]:
        criteria = [Document.student_id == student_id]
        if stage:
            criteria.append(Document.stage == stage)
        return self.find_all(*criteria, order_by=Document.created_at)

    def delete_for_student(self, student_id: str) -> int:
        documents = self.find_by_student(student_id)
        for doc in documents:
            self.db.delete(doc)
        if documents:
            self.db.flush()
            logger.info(f"Deleted {len(documents)} documents of student {student_id}")
        return len(documents)
