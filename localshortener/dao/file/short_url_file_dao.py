"""JSON file implementation of ShortURLBaseDAO

The non-browser counterpart of the local-storage slot: the whole registry is
one JSON document on disk, replaced atomically on every save.

Example:
    >>> dao = ShortURLFileDAO(path='data/shortened-urls.json')
    >>> dao.load() is None   # first run
    True
    >>> dao.save([short_url])
    <ShortURLFileDAO>
"""

from collections.abc import Sequence
from os import PathLike
from pathlib import Path

from beartype import beartype

from localshortener.dao.base import ShortURLBaseDAO
from localshortener.dao.file.helpers import handle_file_error, read_text_or_none, atomic_write_text
from localshortener.dao.serializers import dumps_short_urls, loads_short_urls
from localshortener.models import ShortURLModel


class ShortURLFileDAO(ShortURLBaseDAO):
    """File-backed registry store

    Attributes:
        path (Path):
            Location of the JSON document. Parent directories are created on
            first save.

    Methods:
        load(**kwargs) -> list[ShortURLModel] | None:
            Returns None if the file doesn't exist.
            Raises DataStoreError on I/O errors or malformed JSON.

        save(short_urls: Sequence[ShortURLModel], **kwargs) -> ShortURLFileDAO:
            Raises DataStoreError on I/O errors.
    """

    def __init__(self, path: str | PathLike):
        self.path = Path(path)

    @handle_file_error
    def load(self, **kwargs) -> list[ShortURLModel] | None:
        raw = read_text_or_none(self.path)
        if raw is None:
            return None
        return loads_short_urls(raw)

    @handle_file_error
    @beartype
    def save(self, short_urls: Sequence[ShortURLModel], **kwargs) -> 'ShortURLFileDAO':
        atomic_write_text(self.path, dumps_short_urls(short_urls))
        return self
