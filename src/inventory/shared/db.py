from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine

from inventory.models.schema import *  # noqa: F403 # SQLModel subclasses need to be in memory
from inventory.shared.logger import Logger

logger = Logger(__name__).get_logger()


def create_db_engine(url: str) -> Engine:
    # TestClient and uvicorn may hand the connection to another thread
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}

    engine: Engine = create_engine(url, connect_args=connect_args)
    SQLModel.metadata.create_all(engine)

    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
    return engine
