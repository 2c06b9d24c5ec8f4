import logging
from typing import Optional

from sqlalchemy.engine import Engine
from tenacity import retry, stop_after_attempt, wait_fixed

from database.database import build_session_factory, engine as default_engine
from database.models import Base, DEFAULT_STAGES
from database.uow import store_uow

logger = logging.getLogger(__name__)


def seed_workflow_stages(session_factory) -> int:
    """Insert the default workflow stages when the catalog is empty."""
    with store_uow(session_factory) as store:
        if store.stages.count() > 0:
            return 0
        for stage in DEFAULT_STAGES:
            store.stages.create(active=True, **stage)
        logger.info(f"Seeded {len(DEFAULT_STAGES)} workflow stages")
        return len(DEFAULT_STAGES)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2), reraise=True)
def init_db(engine: Optional[Engine] = None):
    engine = engine or default_engine
    logger.info("Initializing database...")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tables created or verified.")
        seed_workflow_stages(build_session_factory(engine))
    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
