import logging
from typing import List, Optional

from database.models import Supervisor
from database.repositories.base import RecordRepository

logger = logging.getLogger(__name__)


class SupervisorRepository(RecordRepository):
    model = Supervisor

    def find_by_email(self, email: str) -> Optional[Supervisor]:
        return self.find_one(Supervisor.email == email.strip().lower())

    def list_ordered(self) -> List[Supervisor]:
        return self.find_all(order_by=Supervisor.last_name)

    def search(
        self,
        available: Optional[bool] = None,
        domain: Optional[str] = None
    ) -> List[Supervisor]:
        criteria = []
        if available is not None:
            criteria.append(Supervisor.available.is_(available))
        supervisors = self.find_all(*criteria, order_by=Supervisor.last_name)

        # Tags are an encoded column, so substring search happens in Python.
        if domain:
            needle = domain.strip().lower()
            supervisors = [
                s for s in supervisors
                if any(needle in d.lower() for d in s.domains)
            ]
        return supervisors
