"""Strongly typed identifiers for Inkwell domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CategoryId = NewType("CategoryId", UUID)
CommentId = NewType("CommentId", UUID)
