#!/usr/bin/env python3
"""
Load reconciliation.

``current_load`` is a cached count. This recomputes it from the student
references, reports every supervisor whose stored value drifted, and
optionally writes the derived value back.
"""

import logging
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)


@dataclass
class LoadDrift:
    supervisor_id: str
    stored_load: int
    actual_load: int


def reconcile_loads(store, apply: bool = False) -> List[LoadDrift]:
    """
    Compare stored loads with actual assignment counts.

    Args:
        store: database.uow.Store bound to an open unit of work.
        apply: Write the actual counts back when True.

    Returns:
        One LoadDrift per supervisor whose stored load is wrong.
    """
    counts = store.students.count_by_supervisor()
    known_ids = set()
    drifts = []

    for supervisor in store.supervisors.find_all():
        known_ids.add(supervisor.id)
        actual = counts.get(supervisor.id, 0)
        if supervisor.current_load == actual:
            continue

        drifts.append(LoadDrift(
            supervisor_id=supervisor.id,
            stored_load=supervisor.current_load,
            actual_load=actual,
        ))
        if apply:
            store.supervisors.update(supervisor.id, {'current_load': actual})

    for orphan_id in set(counts) - known_ids:
        logger.warning(f"{counts[orphan_id]} student(s) reference missing supervisor {orphan_id}")

    if drifts:
        action = "Corrected" if apply else "Found"
        logger.info(f"{action} load drift on {len(drifts)} supervisor(s)")
    return drifts
