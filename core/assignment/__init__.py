#!/usr/bin/env python3
"""
Assignment Module - supervisor assignment and quota accounting.

Public API:
- AssignmentCoordinator: assign / unassign / delete with load invariant
- AssignmentResult, StudentDTO, SupervisorDTO: detached results
- KeyedLockStrategy, NullLockStrategy, build_lock_strategy: locking
- reconcile_loads, LoadDrift: recompute loads from student references
"""

from core.assignment.coordinator import AssignmentCoordinator
from core.assignment.dto import AssignmentResult, StudentDTO, SupervisorDTO
from core.assignment.locking import KeyedLockStrategy, NullLockStrategy, build_lock_strategy
from core.assignment.reconcile import LoadDrift, reconcile_loads

__all__ = [
    'AssignmentCoordinator',
    'AssignmentResult',
    'StudentDTO',
    'SupervisorDTO',
    'KeyedLockStrategy',
    'NullLockStrategy',
    'build_lock_strategy',
    'LoadDrift',
    'reconcile_loads',
]
