#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Skip tests that open a database
    python -m pytest tests/ -v -m "not db"

    # Using unittest
    python -m unittest discover tests -v

Database tests run against SQLite: an in-memory database with a single
shared connection by default, or a file under a temporary directory when a
test needs several threads with their own connections.
"""

from typing import Any, Optional, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from database.database import build_engine, build_session_factory
from database.models import Base, StudentStatus, INITIAL_STAGE
from database.uow import store_uow

MEMORY_URL = "sqlite://"


def make_test_database(url: str = MEMORY_URL) -> Tuple[Engine, sessionmaker]:
    """Create a fresh schema and return its engine and session factory."""
    engine = build_engine(url)
    Base.metadata.create_all(engine)
    return engine, build_session_factory(engine)


def add_supervisor(session_factory: sessionmaker, **overrides: Any) -> str:
    """Insert a supervisor and return its id."""
    n = overrides.pop('n', None) or _next_number()
    fields = {
        'last_name': f'Supervisor{n}',
        'first_name': 'Test',
        'email': f'supervisor{n}@example.org',
        'domains': ['Médias'],
        'max_quota': 10,
        'current_load': 0,
        'available': True,
    }
    fields.update(overrides)
    with store_uow(session_factory) as store:
        return store.supervisors.create(**fields).id


def add_student(
    session_factory: sessionmaker,
    supervisor_id: Optional[str] = None,
    **overrides: Any
) -> str:
    """
    Insert a student and return its id.

    ``supervisor_id`` is written as-is; callers keep the supervisor's load
    in step themselves when they need a consistent fixture.
    """
    n = overrides.pop('n', None) or _next_number()
    fields = {
        'last_name': f'Student{n}',
        'first_name': 'Test',
        'email': f'student{n}@example.org',
        'year': 2025,
        'domains': ['Communication'],
        'supervisor_id': supervisor_id,
        'current_stage': INITIAL_STAGE,
        'status': StudentStatus.IN_PROGRESS.value if supervisor_id else StudentStatus.PENDING.value,
    }
    fields.update(overrides)
    with store_uow(session_factory) as store:
        return store.students.create(**fields).id


def load_supervisor(session_factory: sessionmaker, supervisor_id: str):
    with store_uow(session_factory) as store:
        supervisor = store.supervisors.find_by_id(supervisor_id)
        if supervisor is not None:
            store.session.expunge(supervisor)
        return supervisor


def load_student(session_factory: sessionmaker, student_id: str):
    with store_uow(session_factory) as store:
        student = store.students.find_by_id(student_id)
        if student is not None:
            store.session.expunge(student)
        return student


_counter = [0]


def _next_number() -> int:
    _counter[0] += 1
    return _counter[0]
