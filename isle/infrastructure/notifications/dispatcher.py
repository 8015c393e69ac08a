"""Fire-and-forget delivery of committed notifications to external channels."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Final

from sqlalchemy.orm import Session

from isle.domain.entities import Notification, NotificationChannel, NotificationType
from isle.infrastructure.database import SessionLocal
from isle.infrastructure.email import render_notification_email, send_email
from isle.infrastructure.preferences import UserPreferenceStore, is_suppressed
from isle.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, str], bool]

NOTIFICATION_TITLES: Final[dict[NotificationType, str]] = {
    NotificationType.POST_VIEWED: "Someone viewed your post",
    NotificationType.COMMENT_REPLY: "New reply",
    NotificationType.REACTION: "New reaction",
    NotificationType.POST_REVIEW_REQUEST: "A post is waiting for review",
    NotificationType.POST_REVIEWED: "Your post was reviewed",
    NotificationType.POST_DELETED: "Your post was removed",
    NotificationType.POST_UPDATED: "A post you follow was updated",
    NotificationType.POST_SUBSCRIBED: "New subscriber to your post",
    NotificationType.POST_UNSUBSCRIBED: "Someone unsubscribed from your post",
    NotificationType.FOLLOWED_POST: "Someone you follow published a post",
    NotificationType.USER_FOLLOWED: "You have a new follower",
    NotificationType.USER_UNFOLLOWED: "Someone stopped following you",
    NotificationType.USER_ACTIVITY: "Activity from someone you follow",
    NotificationType.REGISTER_REQUEST: "New registration request",
    NotificationType.ACTIVITY_REDEEM: "Activity reward redeemed",
    NotificationType.POINT_REDEEM: "Points redeemed",
    NotificationType.LOTTERY_WIN: "You won a lottery",
    NotificationType.LOTTERY_DRAW: "Your lottery was drawn",
    NotificationType.POLL_VOTE: "New vote on your poll",
    NotificationType.POLL_RESULT_OWNER: "Your poll has closed",
    NotificationType.POLL_RESULT_PARTICIPANT: "A poll you voted in has closed",
    NotificationType.POST_FEATURED: "Your post was featured",
    NotificationType.MENTION: "You were mentioned",
}


def notification_title(kind: NotificationType) -> str:
    return NOTIFICATION_TITLES[kind]


class NotificationDispatcher:
    """Deliver notifications by email unless the recipient muted the kind.

    :meth:`dispatch` only schedules the work. Delivery runs on a worker thread
    with its own database session once the ledger write has been committed,
    so a slow or failing channel never holds up the caller. :meth:`deliver`
    never raises.
    """

    def __init__(
        self,
        email_sender: EmailSender | None = None,
        session_factory: Callable[[], Session] | None = None,
        max_workers: int = 4,
    ) -> None:
        self._email_sender = email_sender
        self._session_factory = session_factory or SessionLocal
        self._max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its user."""

        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="notification-delivery",
                )
            self._executor.submit(self._deliver_in_background, notification)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker pool; with ``wait`` pending deliveries finish first."""

        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)

    def _deliver_in_background(self, notification: Notification) -> None:
        session = self._session_factory()
        try:
            self.deliver(session, notification)
        finally:
            session.close()

    def deliver(self, session: Session, notification: Notification) -> bool:
        """Send ``notification``; return ``True`` when a channel accepted it."""

        try:
            return self._deliver_email(session, notification)
        except Exception:
            logger.exception(
                "Delivery of notification %s to user %s failed",
                notification.id,
                notification.user_id,
            )
            return False

    def _deliver_email(self, session: Session, notification: Notification) -> bool:
        if is_suppressed(
            UserPreferenceStore(session),
            notification.user_id,
            notification.type,
            NotificationChannel.EMAIL,
        ):
            logger.info(
                "Email for %s suppressed by user %s preferences",
                notification.type.value,
                notification.user_id,
            )
            return False

        users = UserRepository(session)
        recipient = users.get(notification.user_id)
        if recipient is None or not recipient.email:
            logger.warning("Notification %s has no email recipient", notification.id)
            return False

        lines: list[str] = []
        if notification.from_user_id is not None:
            actor = users.get(notification.from_user_id)
            if actor is not None:
                lines.append(f"From: {actor.username}")
        if notification.reaction_type is not None:
            lines.append(f"Reaction: {notification.reaction_type.value}")
        if notification.content:
            lines.append(notification.content)

        subject, html_content = render_notification_email(
            notification_title(notification.type), lines
        )
        sender = self._email_sender or send_email
        return sender(subject, html_content, recipient.email)


notification_dispatcher = NotificationDispatcher()


def dispatch_notification(notification: Notification) -> None:
    """Public helper that delegates to the shared dispatcher instance."""

    notification_dispatcher.dispatch(notification)


__all__ = [
    "NOTIFICATION_TITLES",
    "NotificationDispatcher",
    "dispatch_notification",
    "notification_dispatcher",
    "notification_title",
]
