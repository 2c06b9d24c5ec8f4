import logging
from typing import List, Optional

from sqlalchemy import func, or_

from database.models import ThesisRecord
from database.repositories.base import LIKE_ESCAPE, RecordRepository, contains_pattern

logger = logging.getLogger(__name__)


class ThesisRecordRepository(RecordRepository):
    model = ThesisRecord

    def search(
        self,
        year: Optional[int] = None,
        supervisor: Optional[str] = None,
        domain: Optional[str] = None,
        text: Optional[str] = None
    ) -> List[ThesisRecord]:
        """
        Archive entries, newest year first.

        ``supervisor`` and ``text`` are case-insensitive substrings; ``text``
        looks at title, summary and author.
        """
        criteria = []
        if year is not None:
            criteria.append(ThesisRecord.year == year)
        if supervisor:
            criteria.append(
                func.lower(ThesisRecord.supervisor_name).like(contains_pattern(supervisor), escape=LIKE_ESCAPE)
            )
        if text:
            pattern = contains_pattern(text)
            criteria.append(or_(
                func.lower(ThesisRecord.title).like(pattern, escape=LIKE_ESCAPE),
                func.lower(func.coalesce(ThesisRecord.summary, '')).like(pattern, escape=LIKE_ESCAPE),
                func.lower(ThesisRecord.author).like(pattern, escape=LIKE_ESCAPE),
            ))
        theses = self.find_all(*criteria, order_by=(ThesisRecord.year.desc(), ThesisRecord.title))

        # Same as supervisors: tags are encoded, so match them in Python.
        if domain:
            needle = domain.strip().lower()
            theses = [t for t in theses if any(needle in d.lower() for d in t.domains)]
        return theses
