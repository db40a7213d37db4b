"""URL registry: the single source of truth for shortened URLs

The registry keeps every record in memory, keyed by shortcode, and writes the
complete record set to its store after every mutation. The store is read once,
when the registry is constructed.

Responsibilities:
    - Validate user input (URL, preferred shortcode, validity period);
    - Generate collision-free shortcodes;
    - Hide expired records from resolution while keeping them for statistics;
    - Record clicks;
    - Absorb store failures (logged, never raised).

Classes:
    URLRegistry:
        The registry itself.
    LinkStatus:
        Outcome of looking up a shortcode (active, expired, not found).
    RegistryStats:
        Aggregate figures shown by the statistics view.
    ShortenRequest / ShortenResult:
        One row of a batch shorten request and its outcome.

Example:
    >>> from localshortener.dao import ShortURLMemoryDAO
    >>> registry = URLRegistry(ShortURLMemoryDAO())
    >>> short_url = registry.create('https://example.com/article/123', validity_minutes=30, preferred_shortcode='abc123')
    >>> registry.resolve('abc123').original_url
    'https://example.com/article/123'
    >>> registry.record_click('abc123', source='https://news.example.org')
    True
    >>> len(registry.resolve('abc123').clicks)
    1
"""

import uuid
import logging
import threading
from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum
from random import Random
from collections.abc import Iterable

from localshortener.constants import Defaults, Limits
from localshortener.dao.base import ShortURLBaseDAO
from localshortener.dao.exceptions import DataStoreError
from localshortener.exceptions import ValidationError, ShortcodeConflictError, BatchTooLargeError
from localshortener.models import ShortURLModel, ClickModel
from localshortener.registry.validation import (
    VALID,
    SHORTCODE_TAKEN_MESSAGE,
    ValidationResult,
    validate_url,
    validate_shortcode_format,
    validate_validity,
)
from localshortener.types import Clock, LocationProvider
from localshortener.utils.helpers import utc_now, coarse_location
from localshortener.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class LinkStatus(StrEnum):
    ACTIVE = 'active'
    EXPIRED = 'expired'
    NOT_FOUND = 'not_found'


@dataclass(frozen=True)
class RegistryStats:
    total_urls: int
    active_urls: int
    expired_urls: int
    total_clicks: int


@dataclass(frozen=True)
class ShortenRequest:
    original_url: str
    validity_minutes: int = Defaults.VALIDITY_MINUTES
    preferred_shortcode: str | None = None


@dataclass(frozen=True)
class ShortenResult:
    request: ShortenRequest
    short_url: ShortURLModel | None = None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class URLRegistry:
    """In-memory registry of shortened URLs persisted through a DAO

    Every public operation runs under a re-entrant lock, so the
    load-mutate-persist sequence of one caller never interleaves with another
    thread's.

    Attributes:
        dao (ShortURLBaseDAO):
            Store receiving the full record set after every mutation.
        clock (Clock):
            Returns the current aware UTC datetime.
        location_provider (LocationProvider):
            Returns the coarse location attached to recorded clicks.

    Methods:
        validate_url(candidate) -> ValidationResult
        validate_shortcode(candidate) -> ValidationResult
        validate_validity(minutes) -> ValidationResult
        generate_shortcode() -> str
        create(original_url, validity_minutes, preferred_shortcode) -> ShortURLModel
        create_many(requests) -> list[ShortenResult]
        resolve(shortcode) -> ShortURLModel | None
        get(shortcode) -> ShortURLModel | None
        status(shortcode) -> LinkStatus
        record_click(shortcode, source, user_location) -> bool
        list_urls() -> list[ShortURLModel]
        stats() -> RegistryStats
        delete(shortcode) -> bool
        clear() -> None
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        clock: Clock = utc_now,
        location_provider: LocationProvider = coarse_location,
        rng: Random | None = None,
    ):
        self.dao = dao
        self.clock = clock
        self.location_provider = location_provider
        self._rng = rng
        self._urls: dict[str, ShortURLModel] = {}
        self._lock = threading.RLock()
        self._load()

    def __len__(self) -> int:
        return len(self._urls)

    def __contains__(self, shortcode: object) -> bool:
        return shortcode in self._urls

    # -------------------------------
    # Validation
    # -------------------------------

    @staticmethod
    def validate_url(candidate: str) -> ValidationResult:
        return validate_url(candidate)

    def validate_shortcode(self, candidate: str | None) -> ValidationResult:
        """Check a preferred shortcode's format and availability

        Expired records keep their shortcode reserved until they are deleted.
        """
        result = validate_shortcode_format(candidate)
        if not result.is_valid or not candidate:
            return result
        with self._lock:
            if candidate in self._urls:
                return ValidationResult(ShortcodeConflictError(SHORTCODE_TAKEN_MESSAGE))
        return VALID

    @staticmethod
    def validate_validity(minutes: int) -> ValidationResult:
        return validate_validity(minutes)

    def generate_shortcode(self) -> str:
        with self._lock:
            return generate_shortcode(self._urls, rng=self._rng)

    # -------------------------------
    # Creation
    # -------------------------------

    def create(
        self,
        original_url: str,
        validity_minutes: int = Defaults.VALIDITY_MINUTES,
        preferred_shortcode: str | None = None,
    ) -> ShortURLModel:
        """Validate input, then store a new shortened URL

        Validations run in order URL, shortcode, validity; the first failure
        is raised and nothing is stored.

        Args:
            original_url (str):
                Absolute HTTP(S) URL to shorten.
            validity_minutes (int):
                Minutes until the link expires, 1 to 525600. Defaults to 30.
            preferred_shortcode (str | None):
                Custom shortcode. None or '' generates one.

        Returns:
            ShortURLModel: The stored record.

        Raises:
            InvalidURLError, InvalidShortcodeError, ShortcodeConflictError, InvalidValidityError:
                On the first failed validation.
            ShortcodeGenerationError:
                If no free shortcode could be generated.
        """
        with self._lock:
            self.validate_url(original_url).raise_for_error()
            self.validate_shortcode(preferred_shortcode).raise_for_error()
            self.validate_validity(validity_minutes).raise_for_error()

            shortcode = preferred_shortcode or self.generate_shortcode()
            now = self.clock()
            short_url = ShortURLModel(
                id=str(uuid.uuid4()),
                original_url=original_url.strip(),
                shortcode=shortcode,
                created_at=now,
                expiry_date=now + timedelta(minutes=validity_minutes),
            )

            self._urls[shortcode] = short_url
            self._persist()

        logger.info(
            'URL shortened successfully.',
            extra={'shortCode': shortcode, 'originalUrl': original_url, 'expiryDate': short_url.expiry_date.isoformat()},
        )
        return short_url

    def create_many(self, requests: Iterable[ShortenRequest]) -> list[ShortenResult]:
        """Create up to `Limits.MAX_BATCH_SIZE` shortened URLs, row by row

        Rows are independent: a failed row doesn't prevent later rows, and a
        later row asking for the shortcode of an earlier row gets a conflict.

        Raises:
            BatchTooLargeError: If more rows are submitted than allowed. Nothing is stored.
        """
        requests = list(requests)
        if len(requests) > Limits.MAX_BATCH_SIZE:
            raise BatchTooLargeError(f'You can shorten up to {Limits.MAX_BATCH_SIZE} URLs at once')

        results = []
        with self._lock:
            for request in requests:
                try:
                    short_url = self.create(request.original_url, request.validity_minutes, request.preferred_shortcode)
                except ValidationError as e:
                    results.append(ShortenResult(request=request, error=e))
                else:
                    results.append(ShortenResult(request=request, short_url=short_url))
        return results

    # -------------------------------
    # Lookup
    # -------------------------------

    def get(self, shortcode: str) -> ShortURLModel | None:
        """Return the record for `shortcode` whether expired or not, flag refreshed"""
        with self._lock:
            short_url = self._urls.get(shortcode)
            if short_url is None:
                return None
            if short_url.refresh_expiry(self.clock()):
                self._persist()
            return short_url

    def resolve(self, shortcode: str) -> ShortURLModel | None:
        """Return the live record for `shortcode`, None if absent or expired

        Expired records stay stored (for statistics) but are never resolved.
        """
        with self._lock:
            short_url = self.get(shortcode)
            if short_url is None:
                return None
            if short_url.is_expired:
                logger.warning('Attempted to access expired URL.', extra={'shortCode': shortcode})
                return None
            return short_url

    def status(self, shortcode: str) -> LinkStatus:
        short_url = self.get(shortcode)
        if short_url is None:
            return LinkStatus.NOT_FOUND
        return LinkStatus.EXPIRED if short_url.is_expired else LinkStatus.ACTIVE

    def record_click(self, shortcode: str, source: str = 'direct', user_location: str | None = None) -> bool:
        """Append a click to a live record

        Args:
            shortcode (str):
                Shortcode that was visited.
            source (str):
                Origin of the click, e.g. the referrer. Defaults to 'direct'.
            user_location (str | None):
                Coarse location. Defaults to the registry's location provider.

        Returns:
            bool: False (and nothing recorded) if the shortcode is absent or expired.
        """
        with self._lock:
            short_url = self.resolve(shortcode)
            if short_url is None:
                return False

            click = ClickModel(
                id=str(uuid.uuid4()),
                timestamp=self.clock(),
                source=source or 'direct',
                user_location=user_location or self.location_provider(),
            )
            short_url.clicks.append(click)
            self._persist()

        logger.info(
            'Click recorded.',
            extra={'shortCode': shortcode, 'source': click.source, 'userLocation': click.user_location},
        )
        return True

    def list_urls(self) -> list[ShortURLModel]:
        """Return every record, newest first, with expiry flags refreshed"""
        with self._lock:
            now = self.clock()
            changed = False
            for short_url in self._urls.values():
                if short_url.refresh_expiry(now):
                    changed = True
                    if short_url.is_expired:
                        logger.info('URL expired.', extra={'shortCode': short_url.shortcode})
            if changed:
                self._persist()
            return sorted(self._urls.values(), key=lambda short_url: short_url.created_at, reverse=True)

    def stats(self) -> RegistryStats:
        short_urls = self.list_urls()
        expired = sum(1 for short_url in short_urls if short_url.is_expired)
        return RegistryStats(
            total_urls=len(short_urls),
            active_urls=len(short_urls) - expired,
            expired_urls=expired,
            total_clicks=sum(len(short_url.clicks) for short_url in short_urls),
        )

    # -------------------------------
    # Removal
    # -------------------------------

    def delete(self, shortcode: str) -> bool:
        """Remove a record and free its shortcode. Returns whether anything was removed."""
        with self._lock:
            if self._urls.pop(shortcode, None) is None:
                return False
            self._persist()

        logger.info('URL deleted.', extra={'shortCode': shortcode})
        return True

    def clear(self) -> None:
        with self._lock:
            self._urls.clear()
            self._persist()

        logger.info('All URLs cleared.')

    # -------------------------------
    # Persistence
    # -------------------------------

    def _load(self) -> None:
        try:
            short_urls = self.dao.load()
        except DataStoreError:
            logger.critical('Failed to load URLs from storage. Starting with an empty registry.', exc_info=True, extra={'operation': 'load'})
            return

        if short_urls is None:
            return

        now = self.clock()
        for short_url in short_urls:
            short_url.refresh_expiry(now)
            self._urls[short_url.shortcode] = short_url
        logger.info('Loaded %s URLs from storage.', len(short_urls), extra={'count': len(short_urls)})

    def _persist(self) -> None:
        # NOTE: a failed save leaves the in-memory state ahead of the store;
        #       there is no transaction to roll back.
        try:
            self.dao.save(list(self._urls.values()))
        except DataStoreError:
            logger.critical('Failed to save URLs to storage.', exc_info=True, extra={'operation': 'save', 'count': len(self._urls)})
        else:
            logger.debug('Saved %s URLs to storage.', len(self._urls), extra={'count': len(self._urls)})
