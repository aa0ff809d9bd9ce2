"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import BaseModel, Field

from inkwell.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentCountsRequest,
    GetCommentCountsResponse,
    GetCommentCountsUseCase,
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
    ReactToCommentRequest,
    ReactToCommentResponse,
    ReactToCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from inkwell.config import PaginationSettings
from inkwell.domain.model import Principal
from inkwell.domain.value import CommentStatus, Reaction
from inkwell.interface.api.auth import get_principal, require_admin, require_principal

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    ``name``/``email``/``website`` are only read for anonymous requests.
    """

    post_id: UUID
    content: str = Field(min_length=1, max_length=5000)
    parent_id: UUID | None = None
    name: str | None = None
    email: str | None = None
    website: str = ""


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str = Field(min_length=1, max_length=5000)


class CommentCountsAPIRequest(BaseModel):
    """API request for batch comment counts."""

    post_ids: list[UUID] = Field(max_length=100)


class ModerateCommentAPIRequest(BaseModel):
    """API request for setting a comment's moderation status."""

    status: CommentStatus
    notes: str | None = Field(default=None, max_length=1000)


@router.get("/post/{post_id}", response_model=GetCommentTreeResponse)
async def get_comment_tree(
    post_id: UUID,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
) -> GetCommentTreeResponse:
    """Get approved comments of a post as a threaded tree."""
    return await get_comment_tree_use_case.execute(
        GetCommentTreeRequest(post_id=str(post_id))
    )


@router.post("/counts", response_model=GetCommentCountsResponse)
async def get_comment_counts(
    request: CommentCountsAPIRequest,
    get_comment_counts_use_case: FromDishka[GetCommentCountsUseCase],
) -> GetCommentCountsResponse:
    """Count approved comments for up to 100 posts at once."""
    return await get_comment_counts_use_case.execute(
        GetCommentCountsRequest(post_ids=[str(p) for p in request.post_ids])
    )


@router.get("", response_model=ListCommentsResponse)
async def list_comments(
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    pagination: FromDishka[PaginationSettings],
    status_filter: CommentStatus | None = Query(default=None, alias="status"),
    post_id: UUID | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    admin: Principal = Depends(require_admin),
) -> ListCommentsResponse:
    """Moderation queue, newest first. Admin only."""
    return await list_comments_use_case.execute(
        ListCommentsRequest(
            status=status_filter,
            post_id=str(post_id) if post_id else None,
            page=page,
            limit=min(limit or pagination.default_limit, pagination.max_limit),
        )
    )


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    http_request: Request,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    principal: Principal | None = Depends(get_principal),
) -> CreateCommentResponse:
    """Comment on a post or reply to a comment.

    Authenticated callers comment under their account; anonymous callers
    must give a name and email. The client address and user agent are
    recorded with the comment.
    """
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            post_id=str(request.post_id),
            content=request.content,
            parent_id=str(request.parent_id) if request.parent_id else None,
            principal=principal,
            name=request.name,
            email=request.email,
            website=request.website,
            ip_address=http_request.client.host if http_request.client else "",
            user_agent=http_request.headers.get("user-agent", ""),
        )
    )


@router.put("/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: UUID,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    principal: Principal = Depends(require_principal),
) -> UpdateCommentResponse:
    """Edit a comment. Only its author may edit."""
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=str(comment_id),
            content=request.content,
            requester=principal,
        )
    )


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    principal: Principal = Depends(require_principal),
) -> Response:
    """Delete a comment as its author or an admin."""
    await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=str(comment_id), requester=principal)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{comment_id}/like", response_model=ReactToCommentResponse)
async def like_comment(
    comment_id: UUID,
    react_to_comment_use_case: FromDishka[ReactToCommentUseCase],
    principal: Principal = Depends(require_principal),
) -> ReactToCommentResponse:
    """Toggle a like; clears the caller's dislike if present."""
    return await react_to_comment_use_case.execute(
        ReactToCommentRequest(
            comment_id=str(comment_id),
            user_id=str(principal.id),
            reaction=Reaction.LIKE,
        )
    )


@router.put("/{comment_id}/dislike", response_model=ReactToCommentResponse)
async def dislike_comment(
    comment_id: UUID,
    react_to_comment_use_case: FromDishka[ReactToCommentUseCase],
    principal: Principal = Depends(require_principal),
) -> ReactToCommentResponse:
    """Toggle a dislike; clears the caller's like if present."""
    return await react_to_comment_use_case.execute(
        ReactToCommentRequest(
            comment_id=str(comment_id),
            user_id=str(principal.id),
            reaction=Reaction.DISLIKE,
        )
    )


@router.put("/{comment_id}/approve", response_model=ModerateCommentResponse)
async def approve_comment(
    comment_id: UUID,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    admin: Principal = Depends(require_admin),
) -> ModerateCommentResponse:
    """Approve a comment. Admin only."""
    return await moderate_comment_use_case.execute(
        ModerateCommentRequest(
            comment_id=str(comment_id), status=CommentStatus.APPROVED
        )
    )


@router.put("/{comment_id}/spam", response_model=ModerateCommentResponse)
async def mark_comment_spam(
    comment_id: UUID,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    admin: Principal = Depends(require_admin),
) -> ModerateCommentResponse:
    """Mark a comment as spam. Admin only."""
    return await moderate_comment_use_case.execute(
        ModerateCommentRequest(comment_id=str(comment_id), status=CommentStatus.SPAM)
    )


@router.put("/{comment_id}/status", response_model=ModerateCommentResponse)
async def set_comment_status(
    comment_id: UUID,
    request: ModerateCommentAPIRequest,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    admin: Principal = Depends(require_admin),
) -> ModerateCommentResponse:
    """Force any moderation status, optionally with notes. Admin only."""
    return await moderate_comment_use_case.execute(
        ModerateCommentRequest(
            comment_id=str(comment_id), status=request.status, notes=request.notes
        )
    )
