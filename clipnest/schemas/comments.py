from datetime import datetime
from typing import List, Optional

from beanie import PydanticObjectId
from pydantic import BaseModel, Field

from clipnest.models.documents import CommentDocument
from clipnest.schemas.users import OwnerSummary


class CommentPayload(BaseModel):
    content: str = Field(..., min_length=1)


class CommentResponse(BaseModel):
    id: PydanticObjectId
    video: PydanticObjectId
    content: str
    created_at: datetime
    updated_at: datetime
    owner: Optional[OwnerSummary] = None
    owner_id: PydanticObjectId

    @classmethod
    def from_document(cls, comment: CommentDocument, owner: Optional[OwnerSummary] = None) -> "CommentResponse":
        return cls(
            id=comment.id,
            video=comment.video,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            owner=owner,
            owner_id=comment.owner,
        )


class CommentsPage(BaseModel):
    comments: List[CommentResponse]
    total_count: int
    page: int
    limit: int
    total_pages: int
