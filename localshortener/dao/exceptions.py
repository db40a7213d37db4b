"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when the data store cannot be read or written, or holds content
        that cannot be deserialized (e.g. connection issues, I/O errors,
        malformed JSON).

Example:
    >>> from localshortener.dao.exceptions import DataStoreError
    >>> raise DataStoreError("Stored registry is not a JSON array.")
    Traceback (most recent call last):
        ...
    localshortener.dao.exceptions.DataStoreError: Stored registry is not a JSON array.
"""

from localshortener.exceptions import LocalShortenerError


class DAOError(LocalShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, I/O errors, malformed content, etc.
    """

    error_code = 'dao:data_store_error'
