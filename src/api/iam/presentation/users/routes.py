"""HTTP routes for user management.

Every route sits behind the access gate. Users are addressed by
username, except restore and permanent deletion which take the ID
because soft-deleted users have no live username.
"""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.services import UserService
from iam.dependencies.authentication import ActiveUser
from iam.dependencies.user import get_user_service
from iam.ports.exceptions import NotDeletedError, UserNotFoundError
from iam.presentation.pagination import PaginationMeta
from iam.presentation.users.models import (
    CreateUserRequest,
    UpdateUserRequest,
    UserListResponse,
    UserResponse,
    UserStatisticsResponse,
)

router = APIRouter(prefix="/users", tags=["users"])

UserSortField = Literal["name", "email", "username", "created_at"]


def _not_found(e: UserNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/statistics", response_model=UserStatisticsResponse)
async def user_statistics(
    _: ActiveUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserStatisticsResponse:
    """Count users by state and registration period."""
    return UserStatisticsResponse(**await service.get_statistics())


@router.post("/{user_id}/restore", response_model=UserResponse)
async def restore_user(
    user_id: str,
    principal: ActiveUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Restore a soft-deleted user.

    Args:
        user_id: User ID (ULID format)
        principal: Authenticated and verified user
        service: User service for orchestration

    Returns:
        The restored user

    Raises:
        HTTPException: 404 if the user does not exist
        HTTPException: 409 if the user is not soft deleted
    """
    try:
        user = await service.restore(user_id, actor=principal)
    except UserNotFoundError as e:
        raise _not_found(e) from e
    except NotDeletedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e

    return UserResponse.from_domain(user)


@router.delete("/{user_id}/force", status_code=status.HTTP_204_NO_CONTENT)
async def force_delete_user(
    user_id: str,
    principal: ActiveUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> None:
    """Permanently delete a user, live or soft deleted.

    Raises:
        HTTPException: 404 if the user does not exist
    """
    try:
        await service.force_delete(user_id, actor=principal)
    except UserNotFoundError as e:
        raise _not_found(e) from e


@router.get("", response_model=UserListResponse)
async def list_users(
    _: ActiveUser,
    service: Annotated[UserService, Depends(get_user_service)],
    search: str | None = None,
    sort_by: UserSortField = "created_at",
    sort_direction: Literal["asc", "desc"] = "asc",
    per_page: Annotated[int, Query(ge=1, le=100)] = 15,
    page: Annotated[int, Query(ge=1)] = 1,
) -> UserListResponse:
    """List live users, with search, sorting and pagination.

    Args:
        search: Substring matched against name, email and username
        sort_by: Sort column
        sort_direction: asc or desc
        per_page: Page size (1-100)
        page: One-based page number

    Returns:
        One page of users with pagination metadata
    """
    try:
        result = await service.list_users(
            search=search,
            sort_by=sort_by,
            sort_direction=sort_direction,
            per_page=per_page,
            page=page,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e

    return UserListResponse(
        data=[UserResponse.from_domain(u) for u in result.items],
        meta=PaginationMeta.from_page(result),
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_user(
    request: CreateUserRequest,
    _: ActiveUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create a user. Users created here start with a verified email.

    Raises:
        DuplicateEmailError: Rendered as 422 if the email is taken
    """
    user = await service.create(
        name=request.name,
        email=request.email,
        password=request.password,
        email_verified=True,
    )
    return UserResponse.from_domain(user)


@router.get("/{username}", response_model=UserResponse)
async def get_user(
    username: str,
    _: ActiveUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get a live user by username.

    Raises:
        HTTPException: 404 if no live user has this username
    """
    try:
        user = await service.get_by_username(username)
    except UserNotFoundError as e:
        raise _not_found(e) from e

    return UserResponse.from_domain(user)


@router.api_route("/{username}", methods=["PUT", "PATCH"], response_model=UserResponse)
async def update_user(
    username: str,
    request: UpdateUserRequest,
    principal: ActiveUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Update a user. Only the user themselves may do this.

    Raises:
        HTTPException: 404 if no live user has this username
        UnauthorizedError: Rendered as 403 for any other actor
    """
    try:
        user = await service.update(username, request.changes(), actor=principal)
    except UserNotFoundError as e:
        raise _not_found(e) from e

    return UserResponse.from_domain(user)


@router.delete("/{username}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    username: str,
    principal: ActiveUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> None:
    """Soft delete a user and revoke their tokens.

    Raises:
        HTTPException: 404 if no live user has this username
        UnauthorizedError: Rendered as 403 when deleting yourself
    """
    try:
        await service.delete(username, actor=principal)
    except UserNotFoundError as e:
        raise _not_found(e) from e
