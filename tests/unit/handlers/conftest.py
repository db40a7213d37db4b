import json

import pytest

from localshortener.app import Application
from localshortener.logbuffer import LogBuffer


@pytest.fixture
def log_buffer(transport, executor, log_mirror_dao, clock):
    return LogBuffer(endpoint=None, transport=transport, mirror_dao=log_mirror_dao, executor=executor, clock=clock)


@pytest.fixture
def app(registry, log_buffer):
    return Application(registry=registry, log_buffer=log_buffer, base_url='http://localhost:3000')


@pytest.fixture
def body():
    """Decode a handler response's JSON body"""

    def _body(response):
        return json.loads(response['body'])

    return _body
