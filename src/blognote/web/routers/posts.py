from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from blognote.core.modules.post.models import PostInput, PostsPage, PostView
from blognote.web.deps import AppDep, AuthenticatedDep
from blognote.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["posts"])


@router.get(
    "/posts",
    summary="List posts",
    description="Get one page of posts, newest first. Pages past the end are empty.",
    operation_id="getPosts",
    responses={
        200: {"description": "Page of posts with the total count"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        422: {"model": ErrorResponse, "description": "Invalid page number"},
    },
)
async def get_posts(
    app: AppDep,
    auth: AuthenticatedDep,
    page: Annotated[int | None, Query(description="1-based page number")] = None,
) -> PostsPage:
    return await app.get_posts(auth, page)


@router.get(
    "/posts/{post_id}",
    summary="Get post",
    operation_id="getPost",
    responses={
        200: {"description": "Post details"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
async def get_post(post_id: UUID, app: AppDep, auth: AuthenticatedDep) -> PostView:
    return await app.get_post(auth, post_id)


@router.post(
    "/posts",
    summary="Create post",
    description="Create a post owned by the authenticated user.",
    operation_id="createPost",
    status_code=201,
    responses={
        201: {"description": "Post created successfully"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        422: {"model": ErrorResponse, "description": "Invalid title"},
    },
)
async def create_post(post_data: PostInput, app: AppDep, auth: AuthenticatedDep) -> PostView:
    return await app.create_post(auth, post_data)


@router.patch(
    "/posts/{post_id}",
    summary="Edit post",
    description=(
        "Replace title and content of a post. `imageUrl` is replaced only when present in the body; "
        "send `null` to remove the image. Only the creator may edit a post."
    ),
    operation_id="editPost",
    responses={
        200: {"description": "Post updated successfully"},
        401: {"model": ErrorResponse, "description": "Not authenticated or not the creator"},
        404: {"model": ErrorResponse, "description": "Post not found"},
        422: {"model": ErrorResponse, "description": "Invalid title"},
    },
)
async def edit_post(post_id: UUID, post_data: PostInput, app: AppDep, auth: AuthenticatedDep) -> PostView:
    return await app.edit_post(auth, post_id, post_data)
