from localshortener.registry import URLRegistry, LinkStatus
from localshortener.logbuffer import LogBuffer
from localshortener.app import Application


__all__ = [
    'URLRegistry',
    'LinkStatus',
    'LogBuffer',
    'Application',
]
