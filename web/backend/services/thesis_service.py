#!/usr/bin/env python3
"""
Thesis archive service - consultation and upkeep of past theses.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from core.errors import NotFoundError
from core.matching import normalize_tags
from database.models import ThesisRecord
from database.repositories import ThesisRecordRepository
from ..models.requests import ThesisCreate, ThesisUpdate
from ..models.responses import ImportRowError, ThesisOut
from ..utils import safe_datetime_iso

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

NULLABLE_FIELDS = {'summary', 'grade', 'distinction'}


def to_thesis_out(thesis: ThesisRecord) -> ThesisOut:
    return ThesisOut(
        id=thesis.id,
        title=thesis.title,
        summary=thesis.summary,
        author=thesis.author,
        year=thesis.year,
        supervisor_name=thesis.supervisor_name,
        domains=list(thesis.domains or []),
        grade=thesis.grade,
        distinction=thesis.distinction,
        created_at=safe_datetime_iso(thesis.created_at),
        updated_at=safe_datetime_iso(thesis.updated_at),
    )


def describe_validation_error(exc: PydanticValidationError) -> str:
    """First error of a pydantic ValidationError as ``field: message``."""
    errors = exc.errors()
    if not errors:
        return "Invalid row"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


class ThesisService:
    """Service for the archive of past theses."""

    def __init__(self, db: Session):
        self.db = db
        self.theses = ThesisRecordRepository(db)

    def list_theses(
        self,
        year: Optional[int] = None,
        supervisor: Optional[str] = None,
        domain: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[ThesisOut], int, int]:
        """
        Get one page of archive entries.

        Args:
            year: Exact defence year.
            supervisor: Substring of the supervisor's name.
            domain: Substring of one of the domain tags.
            search: Substring of title, summary or author.
            page: 1-based page number.
            limit: Page size, capped at 100.

        Returns:
            (page of theses, total matching, total pages)
        """
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        page = max(1, page)

        theses = self.theses.search(year=year, supervisor=supervisor, domain=domain, text=search)
        total = len(theses)
        offset = (page - 1) * limit

        return (
            [to_thesis_out(t) for t in theses[offset:offset + limit]],
            total,
            math.ceil(total / limit),
        )

    def get_thesis(self, thesis_id: str) -> ThesisOut:
        return to_thesis_out(self._get(thesis_id))

    def create_thesis(self, payload: ThesisCreate) -> ThesisOut:
        thesis = self._create(payload)
        self.db.commit()

        logger.info(f"Archived thesis {thesis.id} ({thesis.year}, {thesis.author})")
        return to_thesis_out(thesis)

    def update_thesis(self, thesis_id: str, payload: ThesisUpdate) -> ThesisOut:
        self._get(thesis_id)
        updates = payload.model_dump(exclude_unset=True)
        if 'domains' in updates:
            updates['domains'] = normalize_tags(updates['domains'])
        updates = {k: v for k, v in updates.items() if v is not None or k in NULLABLE_FIELDS}

        thesis = self.theses.update(thesis_id, updates)
        self.db.commit()
        return to_thesis_out(thesis)

    def delete_thesis(self, thesis_id: str) -> None:
        self._get(thesis_id)
        self.theses.delete(thesis_id)
        self.db.commit()
        logger.info(f"Deleted archived thesis {thesis_id}")

    def import_theses(self, rows: List[Dict[str, Any]]) -> Tuple[int, List[ImportRowError]]:
        """
        Create archive entries in bulk.

        Every valid row is created in a single commit; invalid rows are
        skipped and reported with their index.

        Returns:
            (number created, rejected rows)
        """
        errors = []
        created = 0
        for index, row in enumerate(rows):
            try:
                payload = ThesisCreate.model_validate(row)
            except PydanticValidationError as e:
                errors.append(ImportRowError(index=index, reason=describe_validation_error(e)))
                continue
            self._create(payload)
            created += 1

        self.db.commit()
        logger.info(f"Thesis import: {created} created, {len(errors)} rejected")
        return created, errors

    # Private helper methods

    def _get(self, thesis_id: str) -> ThesisRecord:
        thesis = self.theses.find_by_id(thesis_id)
        if not thesis:
            raise NotFoundError(f"Thesis {thesis_id} not found")
        return thesis

    def _create(self, payload: ThesisCreate) -> ThesisRecord:
        return self.theses.create(
            title=payload.title,
            summary=payload.summary,
            author=payload.author,
            year=payload.year,
            supervisor_name=payload.supervisor_name,
            domains=normalize_tags(payload.domains),
            grade=payload.grade,
            distinction=payload.distinction,
        )
