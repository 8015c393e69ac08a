"""Domain entities and enumerations for the notification ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Closed set of events that can produce a notification."""

    POST_VIEWED = "POST_VIEWED"
    COMMENT_REPLY = "COMMENT_REPLY"
    REACTION = "REACTION"
    POST_REVIEW_REQUEST = "POST_REVIEW_REQUEST"
    POST_REVIEWED = "POST_REVIEWED"
    POST_DELETED = "POST_DELETED"
    POST_UPDATED = "POST_UPDATED"
    POST_SUBSCRIBED = "POST_SUBSCRIBED"
    POST_UNSUBSCRIBED = "POST_UNSUBSCRIBED"
    FOLLOWED_POST = "FOLLOWED_POST"
    USER_FOLLOWED = "USER_FOLLOWED"
    USER_UNFOLLOWED = "USER_UNFOLLOWED"
    USER_ACTIVITY = "USER_ACTIVITY"
    REGISTER_REQUEST = "REGISTER_REQUEST"
    ACTIVITY_REDEEM = "ACTIVITY_REDEEM"
    POINT_REDEEM = "POINT_REDEEM"
    LOTTERY_WIN = "LOTTERY_WIN"
    LOTTERY_DRAW = "LOTTERY_DRAW"
    POLL_VOTE = "POLL_VOTE"
    POLL_RESULT_OWNER = "POLL_RESULT_OWNER"
    POLL_RESULT_PARTICIPANT = "POLL_RESULT_PARTICIPANT"
    POST_FEATURED = "POST_FEATURED"
    MENTION = "MENTION"

    @property
    def is_toggleable(self) -> bool:
        """``True`` when a repeated trigger retracts instead of duplicating."""

        return self in TOGGLEABLE_NOTIFICATION_TYPES

    @property
    def requires_reaction(self) -> bool:
        return self in REACTION_NOTIFICATION_TYPES

    @property
    def accepts_approval(self) -> bool:
        return self in MODERATION_NOTIFICATION_TYPES


class ReactionType(str, Enum):
    """Closed set of reactions users can leave on posts and comments."""

    LIKE = "LIKE"
    DISLIKE = "DISLIKE"
    SMILE = "SMILE"
    RECOMMEND = "RECOMMEND"
    CONGRATULATIONS = "CONGRATULATIONS"
    ANGRY = "ANGRY"
    FLUSHED = "FLUSHED"
    STAR_STRUCK = "STAR_STRUCK"
    ROFL = "ROFL"
    HOLDING_BACK_TEARS = "HOLDING_BACK_TEARS"
    MIND_BLOWN = "MIND_BLOWN"
    POOP = "POOP"
    CLOWN = "CLOWN"
    SKULL = "SKULL"
    FIRE = "FIRE"
    EYES = "EYES"
    FROWN = "FROWN"
    HOT = "HOT"
    EAGLE = "EAGLE"
    SPIDER = "SPIDER"
    BAT = "BAT"
    CHINA = "CHINA"
    USA = "USA"
    JAPAN = "JAPAN"
    KOREA = "KOREA"


class NotificationChannel(str, Enum):
    """Delivery channels whose suppression is configured independently."""

    IN_APP = "IN_APP"
    EMAIL = "EMAIL"


TOGGLEABLE_NOTIFICATION_TYPES: frozenset[NotificationType] = frozenset(
    {
        NotificationType.REACTION,
        NotificationType.POST_SUBSCRIBED,
        NotificationType.USER_FOLLOWED,
    }
)

REACTION_NOTIFICATION_TYPES: frozenset[NotificationType] = frozenset(
    {NotificationType.REACTION}
)

MODERATION_NOTIFICATION_TYPES: frozenset[NotificationType] = frozenset(
    {
        NotificationType.POST_REVIEW_REQUEST,
        NotificationType.POST_REVIEWED,
        NotificationType.REGISTER_REQUEST,
    }
)


def build_dedup_key(
    kind: NotificationType,
    *,
    recipient_id: int,
    actor_id: int | None,
    post_id: int | None = None,
    comment_id: int | None = None,
    reaction_type: ReactionType | None = None,
) -> str | None:
    """Return the dedup key for toggleable kinds and ``None`` otherwise.

    The recipient is part of the key so that kinds without a post or comment
    subject (following a user) stay distinct per target.
    """

    if not kind.is_toggleable:
        return None
    parts = (
        kind.value,
        recipient_id,
        actor_id,
        post_id,
        comment_id,
        reaction_type.value if reaction_type is not None else None,
    )
    return ":".join("-" if part is None else str(part) for part in parts)


@dataclass
class Notification:
    """Alert delivered to ``user_id`` about something ``from_user_id`` did."""

    id: int | None
    type: NotificationType
    user_id: int
    from_user_id: int | None = None
    post_id: int | None = None
    comment_id: int | None = None
    reaction_type: ReactionType | None = None
    content: str | None = None
    approved: bool | None = None
    read: bool = False
    created_at: datetime | None = None


class ToggleOutcome(str, Enum):
    """Result of a create-or-toggle call."""

    CREATED = "created"
    RETRACTED = "retracted"
    SUPPRESSED = "suppressed"


@dataclass(frozen=True)
class ToggleResult:
    outcome: ToggleOutcome
    notification: Notification | None = None

    @property
    def created(self) -> bool:
        return self.outcome is ToggleOutcome.CREATED

    @property
    def retracted(self) -> bool:
        return self.outcome is ToggleOutcome.RETRACTED


__all__ = [
    "MODERATION_NOTIFICATION_TYPES",
    "Notification",
    "NotificationChannel",
    "NotificationType",
    "REACTION_NOTIFICATION_TYPES",
    "ReactionType",
    "TOGGLEABLE_NOTIFICATION_TYPES",
    "ToggleOutcome",
    "ToggleResult",
    "build_dedup_key",
]
