#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class SupervisorRef(BaseModel):
    """Short supervisor reference embedded in other payloads."""
    id: str
    last_name: str
    first_name: str
    email: str


class StudentRef(BaseModel):
    id: str
    last_name: str
    first_name: str
    thesis_title: Optional[str] = None
    current_stage: Optional[str] = None
    status: Optional[str] = None


class SupervisorOut(BaseModel):
    """Supervisor with its quota figures."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "last_name": "Dupont",
                "first_name": "Claire",
                "email": "claire.dupont@uclouvain.be",
                "domains": ["Médias", "Journalisme"],
                "max_quota": 8,
                "current_load": 3,
                "remaining_capacity": 5,
                "fill_rate": 38,
                "available": True,
                "biography": None
            }
        }
    )

    id: str
    last_name: str
    first_name: str
    email: str
    domains: List[str]
    max_quota: int
    current_load: int = Field(ge=0)
    remaining_capacity: int
    fill_rate: int = Field(ge=0, description="current_load / max_quota in percent")
    available: bool
    biography: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class DocumentOut(BaseModel):
    id: str
    student_id: str
    file_name: str
    doc_type: str
    stage: Optional[str] = None
    comment: Optional[str] = None
    created_at: Optional[str] = None


class StudentOut(BaseModel):
    id: str
    last_name: str
    first_name: str
    email: str
    programme: str
    year: int
    thesis_title: Optional[str] = None
    project_summary: Optional[str] = None
    research_question: Optional[str] = None
    immersion_place: Optional[str] = None
    remarks: Optional[str] = None
    domains: List[str]
    supervisor_id: Optional[str] = None
    supervisor: Optional[SupervisorRef] = None
    current_stage: str
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class StudentDetail(StudentOut):
    documents: List[DocumentOut] = Field(default_factory=list)


class SupervisorDetail(SupervisorOut):
    students: List[StudentRef] = Field(default_factory=list)


class StudentResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    student: StudentOut


class StudentDetailResponse(BaseModel):
    success: bool
    student: StudentDetail


class StudentsResponse(BaseModel):
    success: bool
    count: int
    students: List[StudentOut]


class SupervisorResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    supervisor: SupervisorOut


class SupervisorDetailResponse(BaseModel):
    success: bool
    supervisor: SupervisorDetail


class SupervisorsResponse(BaseModel):
    success: bool
    count: int
    supervisors: List[SupervisorOut]


class DocumentResponse(BaseModel):
    success: bool
    document: DocumentOut


class DocumentsResponse(BaseModel):
    success: bool
    count: int
    documents: List[DocumentOut]


class DeleteResponse(BaseModel):
    success: bool
    message: str


class Suggestion(BaseModel):
    """One ranked supervisor suggestion."""
    supervisor: SupervisorOut
    score: float = Field(ge=0, le=1)
    topical_score: float = Field(ge=0, le=1)
    capacity_score: float = Field(ge=0, le=1)
    common_domains: List[str]
    remaining_capacity: int


class MatchingStudent(BaseModel):
    id: str
    last_name: str
    first_name: str
    thesis_title: Optional[str] = None
    domains: List[str]


class SuggestionsResponse(BaseModel):
    """Ranked suggestions for a student, best first."""
    success: bool
    student: MatchingStudent
    count: int
    suggestions: List[Suggestion]


class AssignedStudent(BaseModel):
    id: str
    last_name: str
    first_name: str
    supervisor_id: Optional[str] = None
    status: str


class AssignedSupervisor(BaseModel):
    id: str
    last_name: str
    first_name: str
    current_load: int
    max_quota: int


class Assignment(BaseModel):
    student: AssignedStudent
    supervisor: Optional[AssignedSupervisor] = None


class AssignmentResponse(BaseModel):
    success: bool
    message: str
    assignment: Assignment


class LoadDriftOut(BaseModel):
    supervisor_id: str
    stored_load: int
    actual_load: int


class ReconcileResponse(BaseModel):
    success: bool
    applied: bool
    count: int
    drifts: List[LoadDriftOut]


class StageOut(BaseModel):
    id: str
    code: str
    label: str
    description: Optional[str] = None
    position: int
    active: bool


class StageResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    stage: StageOut


class StagesResponse(BaseModel):
    success: bool
    count: int
    stages: List[StageOut]


class StudentStageResponse(BaseModel):
    success: bool
    message: str
    student_id: str
    current_stage: str
    status: str


class StatsResponse(BaseModel):
    """Response containing overall statistics."""
    success: bool
    stats: Dict[str, Any]


class SupervisorStats(BaseModel):
    id: str
    last_name: str
    first_name: str
    email: str
    domains: List[str]
    max_quota: int
    current_load: int
    remaining_capacity: int
    fill_rate: int
    available: bool
    student_count: int
    students_by_status: Dict[str, int]


class SupervisorStatsResponse(BaseModel):
    success: bool
    count: int
    supervisors: List[SupervisorStats]


class DomainCount(BaseModel):
    domain: str
    count: int


class DomainStatsResponse(BaseModel):
    """How often each domain tag is declared, most frequent first."""
    success: bool
    students: List[DomainCount]
    supervisors: List[DomainCount]


class ThesisOut(BaseModel):
    id: str
    title: str
    summary: Optional[str] = None
    author: str
    year: int
    supervisor_name: str
    domains: List[str]
    grade: Optional[float] = None
    distinction: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ThesisResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    thesis: ThesisOut


class ThesesResponse(BaseModel):
    """One page of archive entries."""
    success: bool
    total: int
    page: int
    total_pages: int
    theses: List[ThesisOut]


class ImportRowError(BaseModel):
    """A rejected import row, by its position in the request."""
    index: int
    reason: str


class ThesisImportResponse(BaseModel):
    success: bool
    message: str
    created: int
    errors: List[ImportRowError]
