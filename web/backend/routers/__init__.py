"""API route handlers."""

from .matching import router as matching_router
from .students import router as students_router
from .supervisors import router as supervisors_router
from .workflow import router as workflow_router
from .stats import router as stats_router
from .theses import router as theses_router
from .documents import router as documents_router
