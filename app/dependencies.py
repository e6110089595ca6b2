"""
dependencies.py — Shared FastAPI Dependencies

Builds request-scoped collaborators so routers never construct them
themselves.

Called by: routers/users.py
Depends on: database, services.user_service
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_db
from .services.user_service import UserService


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency: a UserService bound to this request's session."""
    return UserService(db)
