"""Abstract base class for log mirror data access objects (DAOs).

The log buffer keeps a second, smaller copy of its entries in a separate slot
for out-of-band debugging. Nothing in the application reads it back except the
log buffer itself, when it is constructed.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from localshortener.models import LogEntry


class LogMirrorBaseDAO(ABC):
    """Interface for log mirror data access objects (DAOs).

    Methods:
        load(**kwargs) -> list[LogEntry] | None:
            Load the mirrored entries, None if the slot is empty.
            Raises DataStoreError on read failure or malformed content.

        save(entries: Sequence[LogEntry], **kwargs) -> LogMirrorBaseDAO:
            Replace the mirrored entries.
            Raises DataStoreError on write failure.

        clear(**kwargs) -> LogMirrorBaseDAO:
            Remove the mirror slot.
            Raises DataStoreError on write failure.
    """

    @abstractmethod
    def load(self, **kwargs) -> list[LogEntry] | None:
        pass

    @abstractmethod
    def save(self, entries: Sequence[LogEntry], **kwargs) -> 'LogMirrorBaseDAO':
        pass

    @abstractmethod
    def clear(self, **kwargs) -> 'LogMirrorBaseDAO':
        pass
