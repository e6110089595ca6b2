"""
routers/users.py — User list, create, edit, update and delete pages

Server-rendered CRUD over the users table. Every write answers with a
303 redirect back to the list (Post/Redirect/Get).

Business Rules:
- The list page always carries all users plus one user for the form
  (a blank one when creating, the selected one when editing)
- Editing an unknown id silently redirects to the list, no 404
- Update takes its id from the path; an id in the form body is never read
- Deleting an unknown id is not an error
- Delete is POST only; browsers and prefetchers must not trigger it

Called by: main.py (router mount)
Depends on: dependencies, services.user_service, schemas.users, rate_limit
"""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..config import settings
from ..dependencies import get_user_service
from ..models import User
from ..rate_limit import limiter
from ..schemas.users import UserForm, UserListView
from ..services.user_service import UserService

log = logging.getLogger(__name__)

COLLECTION_ROOT = "/users"

router = APIRouter(prefix=COLLECTION_ROOT, tags=["users"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def _render_list(request: Request, view: UserListView) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", view.context())


def _back_to_list() -> RedirectResponse:
    return RedirectResponse(COLLECTION_ROOT, status_code=303)


@router.get("", response_class=HTMLResponse, name="list_users")
@limiter.limit(settings.rate_limit_default)
def list_users(request: Request, svc: UserService = Depends(get_user_service)):
    view = UserListView(users=svc.get_all_users(), user=User())
    return _render_list(request, view)


@router.post("", name="create_user")
@limiter.limit(settings.rate_limit_writes)
def create_user(
    request: Request,
    form: Annotated[UserForm, Form()],
    svc: UserService = Depends(get_user_service),
):
    svc.save_user(form)
    return _back_to_list()


@router.get("/{user_id}/edit", response_class=HTMLResponse, name="edit_user")
@limiter.limit(settings.rate_limit_default)
def edit_user(request: Request, user_id: int, svc: UserService = Depends(get_user_service)):
    user = svc.get_user_by_id(user_id)
    if not user:
        log.info(f"Edit requested for missing user {user_id}, redirecting to list")
        return _back_to_list()
    view = UserListView(users=svc.get_all_users(), user=user)
    return _render_list(request, view)


@router.post("/{user_id}", name="update_user")
@limiter.limit(settings.rate_limit_writes)
def update_user(
    request: Request,
    user_id: int,
    form: Annotated[UserForm, Form()],
    svc: UserService = Depends(get_user_service),
):
    svc.update_user(user_id, form)
    return _back_to_list()


@router.post("/{user_id}/delete", name="delete_user")
@limiter.limit(settings.rate_limit_writes)
def delete_user(request: Request, user_id: int, svc: UserService = Depends(get_user_service)):
    svc.delete_user(user_id)
    return _back_to_list()
