from enum import Enum


class LikeKind(str, Enum):
    """Kind of entity a like edge points at."""

    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"
