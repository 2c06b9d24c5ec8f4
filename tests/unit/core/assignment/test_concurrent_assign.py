"""
Concurrent assignment against a supervisor with a single free slot.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from core.assignment import AssignmentCoordinator, KeyedLockStrategy
from core.errors import ConflictError
from database.uow import store_uow
from tests import add_student, add_supervisor, load_supervisor

WORKERS = 8


@pytest.mark.db
def test_last_slot_goes_to_exactly_one_student(file_db):
    supervisor_id = add_supervisor(file_db, max_quota=1, current_load=0)
    student_ids = [add_student(file_db) for _ in range(WORKERS)]
    coordinator = AssignmentCoordinator(session_factory=file_db, locks=KeyedLockStrategy())

    def attempt(student_id):
        try:
            coordinator.assign(student_id, supervisor_id)
            return "assigned"
        except ConflictError:
            return "refused"

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        outcomes = list(pool.map(attempt, student_ids))

    assert outcomes.count("assigned") == 1
    assert outcomes.count("refused") == WORKERS - 1
    assert load_supervisor(file_db, supervisor_id).current_load == 1


@pytest.mark.db
def test_reassignments_keep_loads_consistent(file_db):
    supervisors = [add_supervisor(file_db, max_quota=50) for _ in range(3)]
    student_ids = [add_student(file_db) for _ in range(6)]
    coordinator = AssignmentCoordinator(session_factory=file_db)

    def shuffle(index):
        student_id = student_ids[index % len(student_ids)]
        for step in range(4):
            coordinator.assign(student_id, supervisors[(index + step) % len(supervisors)])

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(shuffle, range(12)))

    with store_uow(file_db) as store:
        counts = store.students.count_by_supervisor()
        loads = {s.id: s.current_load for s in store.supervisors.find_all()}

    assert loads == {s: counts.get(s, 0) for s in supervisors}
    assert sum(loads.values()) == len(student_ids)
