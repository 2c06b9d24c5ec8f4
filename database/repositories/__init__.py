from database.repositories.base import BaseRepository, RecordRepository
from database.repositories.student import StudentRepository
from database.repositories.supervisor import SupervisorRepository
from database.repositories.workflow import WorkflowStageRepository
from database.repositories.document import DocumentRepository
from database.repositories.thesis import ThesisRecordRepository

__all__ = [
    'BaseRepository',
    'RecordRepository',
    'StudentRepository',
    'SupervisorRepository',
    'WorkflowStageRepository',
    'DocumentRepository',
    'ThesisRecordRepository',
]
