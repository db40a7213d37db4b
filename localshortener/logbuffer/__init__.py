from localshortener.logbuffer.transport import LogTransport, HTTPLogTransport
from localshortener.logbuffer.log_buffer import LogBuffer, LOGBUFFER_PACKAGE
from localshortener.logbuffer.handler import LogBufferHandler


__all__ = [
    'LogTransport',
    'HTTPLogTransport',
    'LogBuffer',
    'LOGBUFFER_PACKAGE',
    'LogBufferHandler',
]
