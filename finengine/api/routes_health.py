from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from finengine.db.session import get_db

router = APIRouter(tags=["health"])


def _check_db(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:  # noqa: BLE001
        return False


@router.get("/healthz")
def healthz(db: Annotated[Session, Depends(get_db)]):
    db_ok = _check_db(db)
    return {"status": "ok" if db_ok else "degraded", "database": db_ok}
