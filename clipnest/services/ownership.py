from typing import Any, Optional

from clipnest.core.exceptions import AuthorizationError
from clipnest.models.documents import UserDocument, VideoDocument


def ensure_owner(aggregate: Any, actor: UserDocument) -> None:
    """Raise AuthorizationError unless ``actor`` owns ``aggregate``.

    Ids are compared as ObjectIds, never by their string form.
    """
    if aggregate.owner != actor.id:
        raise AuthorizationError()


def can_view(video: VideoDocument, viewer: Optional[UserDocument]) -> bool:
    """Unpublished videos are visible only to their owner."""
    return video.is_published or (viewer is not None and video.owner == viewer.id)
