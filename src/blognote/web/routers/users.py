from fastapi import APIRouter
from pydantic import BaseModel, Field

from blognote.core.modules.user.models import UserView
from blognote.web.deps import AppDep
from blognote.web.openapi import ErrorResponse

router = APIRouter(tags=["users"])


class CreateUserRequest(BaseModel):
    """Request to register a new user.

    Fields are checked by the application so that every problem is reported at once.
    """

    email: str = Field(..., description="Email address, must be unique")
    name: str = Field(..., description="Display name")
    password: str = Field(..., description="Password for the new user")


@router.post(
    "/users",
    summary="Register user",
    description="Create a new user account. Open to everyone.",
    operation_id="createUser",
    responses={
        201: {"description": "User created successfully"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        422: {"model": ErrorResponse, "description": "Invalid email or password"},
    },
    status_code=201,
)
async def create_user(create_data: CreateUserRequest, app: AppDep) -> UserView:
    return await app.create_user(create_data.email, create_data.name, create_data.password)
