"""Business logic services."""

from .matching_service import MatchingService
from .student_service import StudentService
from .supervisor_service import SupervisorService
from .workflow_service import WorkflowService
from .stats_service import StatsService
from .thesis_service import ThesisService
