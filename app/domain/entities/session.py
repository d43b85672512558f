"""Session domain entity: the signed-in identity of one browser."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.exceptions import ValidationException


@dataclass(frozen=True)
class Session:
    """Signed-in identity (email + provider subject id) and its expiry.

    Created on successful login/registration; destroyed on logout or when
    expires_at has passed.
    """

    uid: str
    email: str
    expires_at: datetime

    def __post_init__(self) -> None:
        if not self.uid:
            raise ValidationException("Session subject id is required", field="uid")
        if self.expires_at.tzinfo is None:
            raise ValidationException(
                "Session expiry must carry a timezone", field="expires_at"
            )

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
