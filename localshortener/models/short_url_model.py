from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ClickModel:
    """Represent a single visit of a shortened URL.

    Attributes:
        id (str):
            Opaque unique identifier of the click.
        timestamp (datetime):
            Moment the click was recorded (timezone-aware, UTC).
        source (str):
            Free-text origin of the click, e.g. the HTTP referrer or 'direct'.
        user_location (str):
            Coarse '<language>/<timezone>' string, e.g. 'en-US/Europe/Sofia'.
    """

    id: str
    timestamp: datetime
    source: str
    user_location: str


@dataclass
class ShortURLModel:
    """Represent a shortened URL mapping and its click history.

    Everything except `clicks` and `is_expired` is fixed at creation.
    `is_expired` is a cache of `now > expiry_date` refreshed by the registry
    on every read; `expiry_date` is the only source of truth.

    Attributes:
        id (str):
            Opaque unique identifier of the record.
        original_url (str):
            The absolute HTTP(S) URL the shortcode redirects to.
        shortcode (str):
            The unique alphanumeric identifier of the shortened URL.
        created_at (datetime):
            Creation moment (timezone-aware, UTC).
        expiry_date (datetime):
            `created_at` plus the validity period.
        clicks (list[ClickModel]):
            Recorded clicks, oldest first.
        is_expired (bool):
            Derived flag, see above.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime.now(UTC)
        >>> url = ShortURLModel(
        ...     id='5f0c...',
        ...     original_url='https://example.com/article/123',
        ...     shortcode='abc123',
        ...     created_at=now,
        ...     expiry_date=now + timedelta(minutes=30),
        ... )
        >>> url.expired_at(now + timedelta(minutes=31))
        True
    """

    id: str
    original_url: str
    shortcode: str
    created_at: datetime
    expiry_date: datetime
    clicks: list[ClickModel] = field(default_factory=list)
    is_expired: bool = False

    def expired_at(self, moment: datetime) -> bool:
        return moment > self.expiry_date

    def refresh_expiry(self, moment: datetime) -> bool:
        """Recompute `is_expired` against `moment` and report whether it changed."""
        was_expired = self.is_expired
        self.is_expired = self.expired_at(moment)
        return was_expired != self.is_expired
