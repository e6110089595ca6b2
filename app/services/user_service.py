"""User service — the store behind the users router.

Wraps one SQLAlchemy session. Built per request by
dependencies.get_user_service and passed to the router handlers.
"""

import logging

from sqlalchemy.orm import Session

from ..models import User
from ..schemas.users import UserForm

log = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_all_users(self) -> list[User]:
        """Return every user, oldest first."""
        return self.db.query(User).order_by(User.id).all()

    def get_user_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def save_user(self, form: UserForm) -> User:
        """Insert a new user. The database assigns the id."""
        user = User(name=form.name, email=form.email)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        log.info(f"Created user {user.id} ({user.name})")
        return user

    def update_user(self, user_id: int, form: UserForm) -> User | None:
        """Overwrite a user's fields in place. Returns None if user_id doesn't exist."""
        target = self.db.get(User, user_id)
        if not target:
            log.warning(f"Update skipped, user {user_id} not found")
            return None
        target.name = form.name
        target.email = form.email
        self.db.commit()
        self.db.refresh(target)
        log.info(f"Updated user {user_id}")
        return target

    def delete_user(self, user_id: int) -> bool:
        """Delete a user by id. Returns False when there was nothing to delete."""
        target = self.db.get(User, user_id)
        if not target:
            log.info(f"Delete skipped, user {user_id} not found")
            return False
        self.db.delete(target)
        self.db.commit()
        log.info(f"Deleted user {user_id}")
        return True
