#!/usr/bin/env python3
"""
Stats service - aggregate figures for the administration dashboard.
"""

from collections import Counter
from typing import Any, Dict, List
from sqlalchemy.orm import Session

from core.matching import is_eligible
from database.repositories import StudentRepository, SupervisorRepository, WorkflowStageRepository
from ..models.responses import DomainCount, SupervisorStats
from ..utils import percent


class StatsService:
    """Service computing assignment and capacity statistics."""

    def __init__(self, db: Session):
        self.db = db
        self.students = StudentRepository(db)
        self.supervisors = SupervisorRepository(db)
        self.stages = WorkflowStageRepository(db)

    def get_overview(self) -> Dict[str, Any]:
        students = self.students.find_all()
        supervisors = self.supervisors.find_all()

        assigned = sum(1 for s in students if s.supervisor_id)
        open_supervisors = sum(1 for p in supervisors if is_eligible(p))
        total_capacity = sum(p.max_quota for p in supervisors)
        total_load = sum(p.current_load for p in supervisors)

        return {
            'students': {
                'total': len(students),
                'assigned': assigned,
                'unassigned': len(students) - assigned,
                'assignment_rate': percent(assigned, len(students)),
                'by_status': dict(Counter(s.status for s in students)),
                'by_stage': dict(Counter(s.current_stage for s in students)),
            },
            'supervisors': {
                'total': len(supervisors),
                'open': open_supervisors,
                'closed': len(supervisors) - open_supervisors,
                'total_capacity': total_capacity,
                'total_load': total_load,
                'fill_rate': percent(total_load, total_capacity),
            },
            'workflow': {
                'active_stages': len(self.stages.list_ordered(active_only=True)),
            },
        }

    def get_supervisor_stats(self) -> List[SupervisorStats]:
        by_supervisor: Dict[str, List] = {}
        for student in self.students.find_all():
            if student.supervisor_id:
                by_supervisor.setdefault(student.supervisor_id, []).append(student)

        stats = []
        for p in self.supervisors.list_ordered():
            mine = by_supervisor.get(p.id, [])
            stats.append(SupervisorStats(
                id=p.id,
                last_name=p.last_name,
                first_name=p.first_name,
                email=p.email,
                domains=list(p.domains or []),
                max_quota=p.max_quota,
                current_load=p.current_load,
                remaining_capacity=p.remaining_capacity,
                fill_rate=p.fill_rate,
                available=bool(p.available),
                student_count=len(mine),
                students_by_status=dict(Counter(s.status for s in mine)),
            ))
        return stats

    def get_domain_stats(self) -> Dict[str, List[DomainCount]]:
        """
        Declared domain tags, counted per student and per supervisor.

        Tags are counted with their stored spelling. Equal counts keep the
        order in which the tag was first seen.
        """
        return {
            'students': _count_domains(s.domains for s in self.students.find_all()),
            'supervisors': _count_domains(p.domains for p in self.supervisors.list_ordered()),
        }


def _count_domains(tag_lists) -> List[DomainCount]:
    counts = Counter()
    for tags in tag_lists:
        counts.update(tags or [])
    return [DomainCount(domain=domain, count=count) for domain, count in counts.most_common()]
