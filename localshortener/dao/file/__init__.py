from localshortener.dao.file.short_url_file_dao import ShortURLFileDAO
from localshortener.dao.file.log_mirror_file_dao import LogMirrorFileDAO


__all__ = [
    'ShortURLFileDAO',
    'LogMirrorFileDAO',
]
