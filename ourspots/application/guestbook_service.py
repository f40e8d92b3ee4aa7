"""Guestbook use cases: list, write (rate limited), delete."""
import logging
from typing import List

from ourspots.domain.errors import InvalidRequestError, NotFoundError, UnauthorizedError
from ourspots.domain.guestbook import GuestbookMessage

logger = logging.getLogger("ourspots.guestbook")

MAX_DISPLAY = 20


class GuestbookService:
    def __init__(self, repo, throttle, quota, clock):
        self._repo = repo
        self._throttle = throttle
        self._quota = quota
        self._clock = clock

    def get_messages(self, client_ip: str, authenticated: bool) -> List[dict]:
        """Latest messages, oldest first. Authors and admins may delete."""
        recent = self._repo.find_recent(MAX_DISPLAY)
        return [
            m.to_public_dict(deletable=authenticated or m.is_owned_by(client_ip))
            for m in reversed(recent)
        ]

    def create_message(self, content: str, nickname: str | None, client_ip: str) -> dict:
        """Persist a message after the cooldown and daily caps allow it.

        Raises InvalidRequestError for blank or over-long input,
        TooManyAttemptsError (cooldown / per_key / global) or InternalError
        when the daily counts cannot be read.
        """
        try:
            message = GuestbookMessage(
                content=content,
                nickname=nickname,
                ip_address=client_ip,
                created_at=self._clock.now(),
            )
        except ValueError as e:
            raise InvalidRequestError(str(e)) from e
        with self._throttle.check_and_record_submission(client_ip):
            self._quota.check_daily_limits(client_ip)
            saved = self._repo.save(message)

        logger.info("Guestbook message %s written from %s", saved.id, client_ip)
        return saved.to_public_dict(deletable=True)

    def delete_message(self, message_id: int, client_ip: str, authenticated: bool) -> None:
        message = self._repo.find_by_id(message_id)
        if message is None:
            raise NotFoundError("Message not found.")
        if not authenticated and not message.is_owned_by(client_ip):
            raise UnauthorizedError("You are not allowed to delete this message.")
        if not self._repo.soft_delete(message_id, deleted_at=self._clock.now()):
            raise NotFoundError("Message not found.")
        logger.info("Guestbook message %s deleted by %s", message_id, client_ip)
