from localshortener.dao.base.short_url_base_dao import ShortURLBaseDAO
from localshortener.dao.base.log_mirror_base_dao import LogMirrorBaseDAO


__all__ = [
    'ShortURLBaseDAO',
    'LogMirrorBaseDAO',
]
