"""
User endpoints for API v1.

Registration and login.  Login returns a bearer token that clients
send in the ``Authorization`` header of every event request.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from eventures.app.core.security import create_access_token
from eventures.app.schemas.common import ResponseMsg, ValidationMsg
from eventures.app.schemas.user import LoginModel, RegisterUserModel, TokenRead, UserRead
from eventures.app.services.results import Success
from eventures.app.services.user_service import UserService

router = APIRouter()

INVALID_CREDENTIALS = "Invalid username or password!"


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ValidationMsg}},
)
async def register_user(user: RegisterUserModel):
    """Register a new user.

    Every missing field is reported in one combined message.
    """
    result = await UserService.register_user(user)
    if not isinstance(result, Success):
        body = ValidationMsg(message=result.message, errors=list(result.messages))
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=result.payload.model_dump(mode="json", by_alias=True),
    )


@router.post(
    "/login",
    response_model=TokenRead,
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ResponseMsg}},
)
async def login_user(credentials: LoginModel):
    """Authenticate a user and return a token with its expiration time."""
    principal = await UserService.authenticate(credentials.username, credentials.password)
    if principal is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=ResponseMsg(message=INVALID_CREDENTIALS).model_dump(),
        )
    token, expiration = create_access_token({"sub": principal.username})
    return TokenRead(token=token, expiration=expiration)
