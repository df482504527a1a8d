from fastapi import APIRouter, Depends, status

from clipnest.api.dependencies import get_services, parse_object_id, require_user
from clipnest.models.documents import UserDocument
from clipnest.schemas.comments import CommentPayload, CommentResponse
from clipnest.schemas.users import OwnerSummary
from clipnest.services.container import ServiceContainer

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    payload: CommentPayload,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> CommentResponse:
    comment = await services.comments.update(parse_object_id(comment_id, "comment id"), user, payload.content)
    return CommentResponse.from_document(comment, OwnerSummary.from_document(user))


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> None:
    await services.comments.delete(parse_object_id(comment_id, "comment id"), user)
