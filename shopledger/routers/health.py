import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shopledger.db.database import Database, get_db
from shopledger.exceptions import AppException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/test")
async def check_connection(database: Database = Depends(get_db)):
    """Database connectivity check."""
    try:
        now = await database.now()
    except AppException as e:
        logger.error(f"Database check failed: {e.message}")
        return JSONResponse(status_code=500, content={"success": False, "error": e.message})
    return {"success": True, "time": now.isoformat() if now else None}
