from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .database import get_db
from .services.store import ConstraintStore


def get_current_user_id(x_user_id: int = Header(default=1)) -> int:
    """Caller identity from the X-User-Id header; authentication is handled upstream."""
    return x_user_id


def get_store(db: Session = Depends(get_db)) -> ConstraintStore:
    return ConstraintStore(db)
