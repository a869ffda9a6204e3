"""
Routes for the server‑rendered web UI.

The browser session carries the same bearer token the JSON API issues,
stored in the ``access_token`` cookie by the login page.
"""

from typing import Dict, Optional

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from eventures.app.core.security import create_access_token, resolve_principal
from eventures.app.schemas.user import Principal
from eventures.app.services.user_service import UserService

from .controller import ALL_EVENTS_URL, ActionResult, BadRequest, EventsController, Redirect
from .pages import render, render_login

COOKIE_NAME = "access_token"
LOGIN_URL = "/users/login"

router = APIRouter(include_in_schema=False)
controller = EventsController()


async def read_form(request: Request) -> Dict[str, str]:
    """Text fields of a submitted form; file parts are ignored."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def web_principal(request: Request) -> Optional[Principal]:
    return resolve_principal(request.cookies.get(COOKIE_NAME))


def to_response(result: ActionResult):
    if isinstance(result, BadRequest):
        return HTMLResponse("Bad Request", status_code=status.HTTP_400_BAD_REQUEST)
    if isinstance(result, Redirect):
        return RedirectResponse(result.location, status_code=status.HTTP_303_SEE_OTHER)
    return HTMLResponse(render(result))


def login_required() -> RedirectResponse:
    return RedirectResponse(LOGIN_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/events/all", response_class=HTMLResponse)
async def all_events():
    return to_response(await controller.all())


@router.get("/events/create", response_class=HTMLResponse)
async def create_page():
    return to_response(await controller.create())


@router.post("/events/create", response_class=HTMLResponse)
async def create_event(request: Request):
    principal = web_principal(request)
    if principal is None:
        return login_required()
    return to_response(await controller.create_post(principal, await read_form(request)))


@router.get("/events/edit/{event_id}", response_class=HTMLResponse)
async def edit_page(event_id: int):
    return to_response(await controller.edit(event_id))


@router.post("/events/edit/{event_id}", response_class=HTMLResponse)
async def edit_event(event_id: int, request: Request):
    principal = web_principal(request)
    if principal is None:
        return login_required()
    return to_response(await controller.edit_post(event_id, principal, await read_form(request)))


@router.get("/events/delete/{event_id}", response_class=HTMLResponse)
async def delete_page(event_id: int):
    return to_response(await controller.delete(event_id))


@router.post("/events/delete/{event_id}", response_class=HTMLResponse)
async def delete_event(event_id: int, request: Request):
    principal = web_principal(request)
    if principal is None:
        return login_required()
    return to_response(await controller.delete_post(event_id, principal))


@router.get("/users/login", response_class=HTMLResponse)
async def login_page():
    return HTMLResponse(render_login())


@router.post("/users/login", response_class=HTMLResponse)
async def login(username: Optional[str] = Form(None), password: Optional[str] = Form(None)):
    principal = await UserService.authenticate(username, password)
    if principal is None:
        return HTMLResponse(
            render_login("Invalid username or password!"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    token, expiration = create_access_token({"sub": principal.username})
    response = RedirectResponse(ALL_EVENTS_URL, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(COOKIE_NAME, token, expires=expiration, httponly=True, samesite="lax")
    return response


@router.post("/users/logout")
async def logout():
    response = RedirectResponse(ALL_EVENTS_URL, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(COOKIE_NAME)
    return response
