"""
schemas/users.py — User form input and list page view-model

UserForm is parsed from the urlencoded body of the create/update forms.
UserListView is what the users router hands to index.html.

Called by: routers/users.py, services/user_service.py
Depends on: pydantic, models.User
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import User


class UserForm(BaseModel):
    """Fields a user can submit. There is no id: the store assigns it and
    update takes it from the path, so a body id is dropped as an extra field."""

    name: str = Field("", max_length=255)
    email: str | None = Field(None, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("email")
    @classmethod
    def blank_email_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class UserListView(BaseModel):
    """Per-request view-model for the list page: all users plus the form's user."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    users: list[User]
    user: User

    def context(self) -> dict:
        return {"users": self.users, "user": self.user}
