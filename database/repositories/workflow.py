from typing import List, Optional

from database.models import WorkflowStage
from database.repositories.base import RecordRepository


class WorkflowStageRepository(RecordRepository):
    model = WorkflowStage

    def find_by_code(self, code: str) -> Optional[WorkflowStage]:
        return self.find_one(WorkflowStage.code == code)

    def list_ordered(self, active_only: bool = False) -> List[WorkflowStage]:
        criteria = [WorkflowStage.active.is_(True)] if active_only else []
        return self.find_all(*criteria, order_by=WorkflowStage.position)
