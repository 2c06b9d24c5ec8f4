import logging
import argparse

from core.assignment import AssignmentCoordinator, build_lock_strategy
from core.config_loader import load_config
from database.database import build_engine, build_session_factory
from database.init_db import init_db

logger = logging.getLogger(__name__)


def run_reconcile(config, apply: bool) -> int:
    """Report (and optionally fix) supervisors whose stored load has drifted."""
    engine = build_engine(config.database.url, echo=config.database.echo)
    coordinator = AssignmentCoordinator(
        session_factory=build_session_factory(engine),
        locks=build_lock_strategy(config.assignment.lock_strategy),
    )

    drifts = coordinator.reconcile(apply=apply)
    if not drifts:
        logger.info("All supervisor loads are consistent")
        return 0

    for drift in drifts:
        logger.warning(
            f"Supervisor {drift.supervisor_id}: stored load {drift.stored_load}, "
            f"actual {drift.actual_load}"
        )
    if apply:
        logger.info(f"Fixed {len(drifts)} supervisor loads")
        return 0
    logger.info("Dry run; re-run with --apply to write the corrected loads")
    return 1


def main():
    parser = argparse.ArgumentParser(description="ThesisMatch")
    parser.add_argument('--mode', type=str, choices=['serve', 'init-db', 'reconcile'], default='serve',
                        help='serve (default): run the web API, init-db: create tables and seed stages, '
                             'reconcile: check supervisor loads against assignments')
    parser.add_argument('--apply', action='store_true',
                        help='With --mode reconcile, write the corrected loads')
    args = parser.parse_args()

    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format
    )

    mode = args.mode
    logger.info(f"ThesisMatch starting in {mode.upper()} mode...")

    if mode == 'serve':
        from web.backend.app import main as serve
        serve()
    elif mode == 'init-db':
        init_db(build_engine(config.database.url, echo=config.database.echo))
    elif mode == 'reconcile':
        raise SystemExit(run_reconcile(config, apply=args.apply))


if __name__ == "__main__":
    main()
