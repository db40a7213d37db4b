"""Unit tests for the RedisKeySchema class in redis_key_schema.py.

Test coverage includes:

1. Default prefix behavior
   - Confirms keys are the plain slot names when no prefix is provided.

2. Custom prefix behavior
   - Confirms keys are correctly prefixed when a valid prefix is provided.

3. Invalid prefix types
   - Ensures improper prefix types raise TypeError.
"""

import pytest

from localshortener.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Default prefix behavior
# -------------------------------


def test_keys_without_prefix():
    """Ensure keys are the slot names when no prefix is set."""
    keys = RedisKeySchema()
    assert keys.registry_key() == 'shortened-urls'
    assert keys.log_mirror_key() == 'logging-middleware-logs'


# -------------------------------
# 2. Custom prefix behavior
# -------------------------------


@pytest.mark.parametrize('prefix', ['localshortener:dev', 'localshortener:prod', 'x'])
def test_keys_with_prefix(prefix):
    """Ensure keys are namespaced with the given prefix."""
    keys = RedisKeySchema(prefix=prefix)
    assert keys.registry_key() == f'{prefix}:shortened-urls'
    assert keys.log_mirror_key() == f'{prefix}:logging-middleware-logs'


# -------------------------------
# 3. Invalid prefix types
# -------------------------------


@pytest.mark.parametrize('prefix', [123, 4.5, ['a'], {'a': 1}])
def test_invalid_prefix_type(prefix):
    """Ensure non-string prefixes raise TypeError."""
    with pytest.raises(TypeError, match='Prefix must be of type string'):
        RedisKeySchema(prefix=prefix)
