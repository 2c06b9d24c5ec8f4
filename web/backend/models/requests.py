#!/usr/bin/env python3
"""
Request models for API endpoints.

Update models deliberately omit supervisor_id and current_load: those two
fields are only written by the assignment coordinator.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional

from core.matching import is_utf8_text


class RequestModel(BaseModel):
    """Base for request bodies: every text value must be storable as UTF-8."""

    @field_validator("*")
    @classmethod
    def reject_unencodable_text(cls, v):
        values = v if isinstance(v, list) else [v]
        if any(isinstance(item, str) and not is_utf8_text(item) for item in values):
            raise ValueError("text must be valid UTF-8")
        return v


class StudentCreate(RequestModel):
    """Request to register a student."""
    last_name: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    year: int = Field(..., ge=1900, le=2100, description="Academic year")
    programme: Optional[str] = None
    thesis_title: Optional[str] = None
    project_summary: Optional[str] = None
    research_question: Optional[str] = None
    immersion_place: Optional[str] = None
    remarks: Optional[str] = None
    domains: List[str] = Field(default_factory=list, description="Research domain tags")


class StudentUpdate(RequestModel):
    """Partial update of a student. Unset fields are left untouched."""
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    email: Optional[str] = None
    year: Optional[int] = Field(None, ge=1900, le=2100)
    programme: Optional[str] = None
    thesis_title: Optional[str] = None
    project_summary: Optional[str] = None
    research_question: Optional[str] = None
    immersion_place: Optional[str] = None
    remarks: Optional[str] = None
    domains: Optional[List[str]] = None


class SupervisorCreate(RequestModel):
    """Request to register a supervisor."""
    last_name: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    domains: List[str] = Field(default_factory=list)
    max_quota: int = Field(default=10, ge=1, description="Maximum concurrent students")
    available: bool = True
    biography: Optional[str] = None


class SupervisorUpdate(RequestModel):
    """Partial update of a supervisor."""
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    email: Optional[str] = None
    domains: Optional[List[str]] = None
    max_quota: Optional[int] = Field(None, ge=1)
    available: Optional[bool] = None
    biography: Optional[str] = None


class AssignRequest(RequestModel):
    """Assign a supervisor to a student. Missing ids are reported as 400."""
    student_id: Optional[str] = None
    supervisor_id: Optional[str] = None


class StageCreate(RequestModel):
    code: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    description: Optional[str] = None
    position: int
    active: bool = True


class StageUpdate(RequestModel):
    label: Optional[str] = None
    description: Optional[str] = None
    position: Optional[int] = None
    active: Optional[bool] = None


class StageAdvanceRequest(RequestModel):
    """Move a student to a workflow stage, optionally changing status."""
    stage: Optional[str] = None
    status: Optional[str] = None


class DocumentCreate(RequestModel):
    file_name: str = Field(..., min_length=1)
    doc_type: str = "AUTRE"
    stage: Optional[str] = Field(None, description="Workflow stage code the document belongs to")
    comment: Optional[str] = None


class ThesisCreate(RequestModel):
    """A past thesis added to the archive."""
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    year: int = Field(..., ge=1900, le=2100)
    supervisor_name: str = Field(..., min_length=1)
    summary: Optional[str] = None
    domains: List[str] = Field(default_factory=list)
    grade: Optional[float] = Field(None, ge=0)
    distinction: Optional[str] = None


class ThesisUpdate(RequestModel):
    title: Optional[str] = None
    author: Optional[str] = None
    year: Optional[int] = Field(None, ge=1900, le=2100)
    supervisor_name: Optional[str] = None
    summary: Optional[str] = None
    domains: Optional[List[str]] = None
    grade: Optional[float] = Field(None, ge=0)
    distinction: Optional[str] = None


class ThesisImportRequest(RequestModel):
    """
    Bulk import of archive rows.

    Rows are validated one by one; invalid rows are reported, not fatal.
    """
    theses: List[Dict[str, Any]] = Field(..., min_length=1)
