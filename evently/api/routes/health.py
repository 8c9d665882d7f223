"""Liveness and database health check."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ...config.environment import ENVIRONMENT
from ...db import Database, DatabaseError
from ... import __version__
from ..dependencies import get_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

@router.get("/")
def health_check(database: Database = Depends(get_database)):
    """Report the running version and whether the database answers."""
    try:
        with database.session() as session:
            session.execute(text("SELECT 1"))
        database_status = "ok"
    except (DatabaseError, SQLAlchemyError) as e:
        logger.error(f"Health check could not reach the database: {e}")
        database_status = "unavailable"

    return {
        "status": "healthy" if database_status == "ok" else "degraded",
        "database": database_status,
        "environment": ENVIRONMENT,
        "version": __version__,
    }
