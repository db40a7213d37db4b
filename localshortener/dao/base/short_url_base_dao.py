"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all registry stores,
regardless of the underlying storage mechanism (e.g., memory, JSON file, Redis).

The registry keeps its records in memory and hands the *whole* record set to
the store after every mutation, the way a browser app writes one local-storage
slot. A store therefore only needs to load and save a complete snapshot.

Responsibilities:
    - Load the persisted record set once, at registry construction.
    - Save the full current record set after every mutation.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from localshortener.dao import ShortURLFileDAO

        >>> dao = ShortURLFileDAO(path='data/shortened-urls.json')
        >>> dao.load()
        None
        >>> dao.save([short_url])
        <ShortURLFileDAO>
        >>> [url.shortcode for url in dao.load()]
        ['abc123']
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from localshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        load(**kwargs) -> list[ShortURLModel] | None:
            Load the persisted record set.
            Returns None if nothing was ever saved (first run).
            Raises DataStoreError on read failure or malformed content.

        save(short_urls: Sequence[ShortURLModel], **kwargs) -> ShortURLBaseDAO:
            Replace the persisted record set.
            Raises DataStoreError on write failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLRedisDAO or
        ShortURLFileDAO) must extend this class and implement all
        abstract methods.
    """

    @abstractmethod
    def load(self, **kwargs) -> list[ShortURLModel] | None:
        """Load the persisted record set.

        Returns:
            list[ShortURLModel] | None: The stored records, or None when the store is empty.

        Raises:
            DataStoreError:
                If the data store cannot be read or holds malformed content.
        """
        pass

    @abstractmethod
    def save(self, short_urls: Sequence[ShortURLModel], **kwargs) -> 'ShortURLBaseDAO':
        """Replace the persisted record set.

        Args:
            short_urls (Sequence[ShortURLModel]):
                The complete current record set.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
