from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from creator_leads import __version__
from creator_leads.models.db import get_db
from creator_leads.utils.log import get_logger

router = APIRouter(prefix="/health", tags=["health"])
logger = get_logger(__name__)

@router.get("")
def health_root(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.warning("Health check could not reach the database: %s", e)
        database = "unavailable"
    return {
        "status": "ok" if database == "ok" else "degraded",
        "database": database,
        "version": __version__,
        "ts": datetime.now(timezone.utc).isoformat(),
    }
