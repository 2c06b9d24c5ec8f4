#!/usr/bin/env python3
"""
Stats endpoints - assignment and capacity statistics.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..services.stats_service import StatsService
from ..models.responses import DomainStatsResponse, StatsResponse, SupervisorStatsResponse

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    """
    Get overall statistics.

    Returns student counts by status and stage, and the global supervisor
    capacity and fill rate.
    """
    return StatsResponse(success=True, stats=StatsService(db).get_overview())


@router.get("/supervisors", response_model=SupervisorStatsResponse)
def get_supervisor_stats(db: Session = Depends(get_db)):
    """Per-supervisor load and student breakdown."""
    stats = StatsService(db).get_supervisor_stats()
    return SupervisorStatsResponse(success=True, count=len(stats), supervisors=stats)


@router.get("/domains", response_model=DomainStatsResponse)
def get_domain_stats(db: Session = Depends(get_db)):
    """Domain tag frequencies among students and supervisors, most frequent first."""
    stats = StatsService(db).get_domain_stats()
    return DomainStatsResponse(success=True, **stats)
