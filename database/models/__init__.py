from .base import Base
from .types import DomainTagList
from .supervisor import Supervisor
from .student import Student, StudentStatus, DEFAULT_PROGRAMME, INITIAL_STAGE
from .workflow import WorkflowStage, DEFAULT_STAGES
from .document import Document
from .thesis import ThesisRecord

__all__ = [
    'Base',
    'DomainTagList',
    'Supervisor',
    'Student',
    'StudentStatus',
    'DEFAULT_PROGRAMME',
    'INITIAL_STAGE',
    'WorkflowStage',
    'DEFAULT_STAGES',
    'Document',
    'ThesisRecord',
]
