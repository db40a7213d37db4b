import os
import functools
import tempfile
from pathlib import Path

from localshortener.dao.exceptions import DataStoreError


__all__ = []


def handle_file_error[F](method: F) -> F:
    """Wrap file-interacting DAO methods to handle I/O errors

    Args:
        method (Callable[..., Any]):
            DAO method performing file operations which may raise OSError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on I/O failures.

    Example:
        >>> @handle_file_error
        ... def load(self):
        ...     return self.path.read_text()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OSError as e:
            raise DataStoreError(f"Can't access data file at {self.path}.") from e

    return wrapper


def read_text_or_none(path: Path) -> str | None:
    try:
        return path.read_text(encoding='utf-8')
    except FileNotFoundError:
        return None


def atomic_write_text(path: Path, content: str) -> None:
    """Write `content` to `path` so readers never observe a half-written file"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f'.{path.name}.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
