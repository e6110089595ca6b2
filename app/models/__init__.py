"""Database models.

Import from here:  from app.models import Base, User
"""

from .base import Base  # noqa: F401
from .user import User  # noqa: F401
