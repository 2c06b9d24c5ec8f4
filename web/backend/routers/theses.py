#!/usr/bin/env python3
"""
Thesis archive endpoints - past theses and bulk import.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..services.thesis_service import ThesisService
from ..models.requests import ThesisCreate, ThesisImportRequest, ThesisUpdate
from ..models.responses import (
    DeleteResponse,
    ThesesResponse,
    ThesisImportResponse,
    ThesisResponse,
)

router = APIRouter(prefix="/api/theses", tags=["theses"])


@router.get("", response_model=ThesesResponse)
def list_theses(
    year: Optional[int] = Query(default=None, description="Defence year"),
    supervisor: Optional[str] = Query(default=None, description="Supervisor name"),
    domain: Optional[str] = Query(default=None, description="Domain tag"),
    q: Optional[str] = Query(default=None, description="Title, summary or author"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """
    Browse the archive, newest year first.

    Text filters are case-insensitive substring matches.
    """
    service = ThesisService(db)
    theses, total, total_pages = service.list_theses(
        year=year, supervisor=supervisor, domain=domain, search=q, page=page, limit=limit
    )
    return ThesesResponse(success=True, total=total, page=page, total_pages=total_pages, theses=theses)


@router.post("/import", response_model=ThesisImportResponse, status_code=201)
def import_theses(payload: ThesisImportRequest, db: Session = Depends(get_db)):
    """Import archive rows in bulk; invalid rows are reported, not fatal."""
    created, errors = ThesisService(db).import_theses(payload.theses)
    return ThesisImportResponse(
        success=True,
        message=f"Import finished: {created} created, {len(errors)} rejected",
        created=created,
        errors=errors,
    )


@router.get("/{thesis_id}", response_model=ThesisResponse)
def get_thesis(thesis_id: str, db: Session = Depends(get_db)):
    return ThesisResponse(success=True, thesis=ThesisService(db).get_thesis(thesis_id))


@router.post("", response_model=ThesisResponse, status_code=201)
def create_thesis(payload: ThesisCreate, db: Session = Depends(get_db)):
    thesis = ThesisService(db).create_thesis(payload)
    return ThesisResponse(success=True, message="Thesis archived", thesis=thesis)


@router.put("/{thesis_id}", response_model=ThesisResponse)
def update_thesis(thesis_id: str, payload: ThesisUpdate, db: Session = Depends(get_db)):
    thesis = ThesisService(db).update_thesis(thesis_id, payload)
    return ThesisResponse(success=True, message="Thesis updated", thesis=thesis)


@router.delete("/{thesis_id}", response_model=DeleteResponse)
def delete_thesis(thesis_id: str, db: Session = Depends(get_db)):
    ThesisService(db).delete_thesis(thesis_id)
    return DeleteResponse(success=True, message="Thesis deleted")
