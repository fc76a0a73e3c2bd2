from __future__ import annotations

import pytest

from incidentstore.db.errors import unknown_db_error
from incidentstore.utils.result import Result, fail, ok, res


def test_success_carries_value_and_no_error():
    r = res({'id': 1})
    assert r.data == {'id': 1}
    assert r.err is None
    assert r.is_ok


def test_success_may_carry_none():
    r = res(None)
    assert r.data is None
    assert r.is_ok


def test_failure_carries_error_and_no_value():
    e = unknown_db_error('boom')
    r = fail(e)
    assert r.data is None
    assert r.err is e
    assert not r.is_ok


def test_both_populated_is_rejected():
    with pytest.raises(ValueError):
        Result(data=1, err=unknown_db_error('boom'))


def test_fail_requires_an_error():
    with pytest.raises(ValueError):
        fail(None)


def test_ok_query_is_none():
    assert ok() is None
