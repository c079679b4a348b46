# farm/infrastructure/db/init_db.py
"""
Create the farm tables. Run from project root:
    python -m farm.infrastructure.db.init_db [--reset]

--reset drops every barn and animal first.
"""
import logging
import sys

from farm.infrastructure import models
from farm.infrastructure.db.session import Base, engine

logger = logging.getLogger(__name__)


def init_db(bind=None, reset: bool = False):
    bind = bind or engine
    if reset:
        Base.metadata.drop_all(bind=bind)
        logger.warning("Dropped tables %s", sorted(Base.metadata.tables))
    Base.metadata.create_all(bind=bind)
    logger.info("Tables ready: %s, %s", models.Barn.__tablename__, models.Animal.__tablename__)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db(reset="--reset" in sys.argv[1:])
