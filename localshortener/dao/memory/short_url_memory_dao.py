"""In-memory implementation of ShortURLBaseDAO

Records are kept serialized in a plain mapping slot, the same way a browser
app keeps them in local storage. Serializing on every save keeps the
in-memory store honest: whatever the registry gets back from `load()` has
gone through the same JSON round trip as the file and Redis backends.

Example:
    >>> slots = {}
    >>> dao = ShortURLMemoryDAO(storage=slots)
    >>> dao.load() is None
    True
    >>> dao.save([short_url])
    <ShortURLMemoryDAO>
    >>> 'shortened-urls' in slots
    True
"""

from collections.abc import MutableMapping, Sequence

from beartype import beartype

from localshortener.constants import REGISTRY_SLOT
from localshortener.dao.base import ShortURLBaseDAO
from localshortener.dao.serializers import dumps_short_urls, loads_short_urls
from localshortener.models import ShortURLModel


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """Mapping-backed registry store

    Attributes:
        storage (MutableMapping[str, str]):
            Key-value slots holding serialized documents. Shared mappings let
            several DAOs (or a test) observe the same slots.
        key (str):
            Slot name of the registry document.
    """

    def __init__(self, storage: MutableMapping[str, str] | None = None, key: str = REGISTRY_SLOT):
        self.storage = storage if storage is not None else {}
        self.key = key

    def load(self, **kwargs) -> list[ShortURLModel] | None:
        raw = self.storage.get(self.key)
        if raw is None:
            return None
        return loads_short_urls(raw)

    @beartype
    def save(self, short_urls: Sequence[ShortURLModel], **kwargs) -> 'ShortURLMemoryDAO':
        self.storage[self.key] = dumps_short_urls(short_urls)
        return self
