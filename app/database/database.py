from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Handle de conexión a la base de datos.

    Se construye una vez por proceso (en create_app o en el worker de Celery)
    y se pasa explícitamente a quien lo necesite.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        if url.startswith("sqlite"):
            # In-memory SQLite must share a single connection between threads
            self.engine = create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        else:
            self.engine = create_engine(
                url,
                pool_pre_ping=True,
                pool_size=10,
                max_overflow=20,
                echo=echo,
            )
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        # Model modules register their tables on Base.metadata when imported
        import app.modules.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self):
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database ping failed: {e}")
            return False

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Genera una sesión de base de datos a partir del handle de la aplicación."""
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
