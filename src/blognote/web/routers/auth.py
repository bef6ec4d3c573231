from fastapi import APIRouter
from pydantic import BaseModel, Field

from blognote.core.modules.session.models import LoginResult
from blognote.web.deps import AppDep
from blognote.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., description="Email the account was registered with")
    password: str = Field(..., description="Password for authentication")


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with email and password to receive a bearer token valid for one hour.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep) -> LoginResult:
    return await app.login(login_data.email, login_data.password)
