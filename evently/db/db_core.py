"""Core database functionality and configuration.

This module provides the database manager used by the API: configuration,
connection pooling, and session handling. A ``Database`` is constructed
explicitly by whoever owns its lifecycle (the FastAPI lifespan, a script,
or a test) and handed to the code that needs it.
"""

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os

from sqlalchemy import create_engine, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models import Base
from ..config.environment import IS_PRODUCTION_ENVIRONMENT

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 10

class DatabaseConfig:
    """Database configuration settings."""

    def __init__(
        self,
        url: Optional[str] = None,
        sqlite_path: Optional[Path] = None,
        echo: bool = False,
        pool_size: Optional[int] = None,
        max_overflow: int = 0,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True
    ):
        """
        Initialize database configuration.

        In production environment, DATABASE_URL must be set in environment variables
        or provided explicitly via the url parameter.

        Args:
            url: Full SQLAlchemy connection URL. Takes precedence over everything else.
                 If not provided, DATABASE_URL is used, and in development a SQLite
                 file is used as the last resort.
            sqlite_path: Path to SQLite database file (development fallback)
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool. Defaults to DB_POOL_SIZE or 10.
            max_overflow: Extra connections allowed beyond pool_size. Zero keeps the
                        pool at a fixed size; further requests wait for a free connection.
            pool_recycle: Seconds before connections are recycled (prevent stale)
            pool_pre_ping: Whether to ping connections before using them

        Raises:
            ValueError: If in production environment and no database URL is provided
                      either via the url parameter or DATABASE_URL env variable
        """
        self.url = url or os.environ.get('DATABASE_URL')
        if not self.url:
            if IS_PRODUCTION_ENVIRONMENT:
                raise ValueError(
                    "Database URL must be provided either via url parameter "
                    "or DATABASE_URL environment variable when in production environment"
                )
            self.sqlite_path = sqlite_path or Path(__file__).parent.parent.parent / 'data' / 'evently.db'
            self.url = f"sqlite:///{self.sqlite_path}"
        else:
            self.sqlite_path = None

        self.echo = echo
        self.pool_size = pool_size or int(os.environ.get('DB_POOL_SIZE', DEFAULT_POOL_SIZE))
        self.max_overflow = max_overflow
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    @property
    def connection_url(self) -> str:
        """Get the database connection URL."""
        return self.url

    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration."""
        args = {"echo": self.echo}

        # SQLite-specific configuration
        if self.is_sqlite:
            args["connect_args"] = {"check_same_thread": False}
            args["poolclass"] = StaticPool

        # Server database configuration
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })

        return args

class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass

class ConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""
    pass

class SessionError(DatabaseError):
    """Raised when there are issues with database sessions."""
    pass

class Database:
    """Owns the engine (and with it the connection pool) and hands out sessions.

    Lifecycle: construct at process start, call ``init_db()`` to make sure the
    schema exists, and ``dispose()`` at shutdown to drain the pool.
    """

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self.engine: Optional[Engine] = None
        self._session_factory = sessionmaker(expire_on_commit=False)
        self._setup_engine()

    def _setup_engine(self) -> None:
        """Set up the SQLAlchemy engine."""
        try:
            if self.config.sqlite_path:
                self.config.sqlite_path.parent.mkdir(parents=True, exist_ok=True)
            self.engine = create_engine(
                self.config.connection_url,
                **self.config.get_engine_args()
            )
            self._session_factory.configure(bind=self.engine)
        except Exception as e:
            raise ConnectionError(f"Failed to create database engine: {e}") from e

    def init_db(self) -> None:
        """Create any missing tables."""
        if not self.engine:
            raise ConnectionError("Database engine not initialized")

        try:
            Base.metadata.create_all(self.engine)
            logger.info("Database schema initialized successfully")
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to initialize database schema: {e}") from e

    def dispose(self) -> None:
        """Close every pooled connection. The instance is unusable afterwards."""
        if self.engine:
            self.engine.dispose()
            self.engine = None
            logger.info("Database connection pool disposed")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.

        The session commits when the block exits normally and rolls back
        otherwise. Its connection goes back to the pool either way.

        Example:
            with database.session() as session:
                user = session.query(User).first()
                user.bio = "New bio"
                # No need to call commit - it's handled automatically

        Raises:
            SessionError: If the database reports an error. Any other exception
                          raised inside the block propagates unchanged.
        """
        if not self.engine:
            raise ConnectionError("Database engine not initialized")

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
