"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import DeleteCommentRequest, DeleteCommentUseCase
from .get_comment_counts import (
    GetCommentCountsRequest,
    GetCommentCountsResponse,
    GetCommentCountsUseCase,
)
from .get_comment_tree import (
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
)
from .list_comments import ListCommentsRequest, ListCommentsResponse, ListCommentsUseCase
from .moderate_comment import (
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)
from .react_to_comment import (
    ReactToCommentRequest,
    ReactToCommentResponse,
    ReactToCommentUseCase,
)
from .update_comment import (
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)

__all__ = [
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentUseCase",
    "GetCommentCountsRequest",
    "GetCommentCountsResponse",
    "GetCommentCountsUseCase",
    "GetCommentTreeRequest",
    "GetCommentTreeResponse",
    "GetCommentTreeUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "ModerateCommentRequest",
    "ModerateCommentResponse",
    "ModerateCommentUseCase",
    "ReactToCommentRequest",
    "ReactToCommentResponse",
    "ReactToCommentUseCase",
    "UpdateCommentRequest",
    "UpdateCommentResponse",
    "UpdateCommentUseCase",
]
