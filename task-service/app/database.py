import logging

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, Text, create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from app.config import DBSettings

logger = logging.getLogger(__name__)

metadata = MetaData()

tasks = Table(
    "tasks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("status", String(50), nullable=False),
    Column("due_date", DateTime(timezone=True), nullable=False),
)


class StorageError(Exception):
    pass


def build_url(db: DBSettings) -> URL:
    return URL.create(
        "postgresql+psycopg2",
        username=db.user,
        password=db.password,
        host=db.host,
        port=db.port,
        database=db.name,
    )


def init_db(db: DBSettings) -> Engine:
    """Create the pooled engine and make sure the database answers."""
    engine = create_engine(
        build_url(db),
        pool_pre_ping=True,
        connect_args={"sslmode": "disable", "options": "-c timezone=utc"},
    )
    try:
        ping(engine)
    except StorageError:
        engine.dispose()
        raise
    logger.info("connected to database %s at %s:%s", db.name, db.host, db.port)
    return engine


def ping(engine: Engine) -> None:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise StorageError("error pinging the database") from e


def create_schema(engine: Engine) -> None:
    metadata.create_all(engine)
