import uuid

import pytest

from crud_lib.crud import keys


def test_storage_key_format():
    assert keys.storage_key('test', 'abc') == 'test::abc'
    assert keys.namespace_prefix('test') == 'test::'


def test_strip_prefix_returns_bare_id():
    assert keys.strip_prefix('test', 'test::abc') == 'abc'
    # ids may themselves contain the separator
    assert keys.strip_prefix('test', 'test::a::b') == 'a::b'


def test_strip_prefix_rejects_foreign_keys():
    with pytest.raises(ValueError):
        keys.strip_prefix('test', 'test2::abc')


def test_new_object_id_is_unique_uuid():
    a = keys.new_object_id()
    b = keys.new_object_id()
    assert a != b
    assert str(uuid.UUID(a)) == a
