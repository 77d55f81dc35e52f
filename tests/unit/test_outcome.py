#!/usr/bin/env python3
"""
Tests for the Outcome result type.
"""

import pytest

from py2ts.shared.errors import UnsupportedConstruct
from py2ts.utils.base import Outcome, OutcomeTag


class TestOutcome:
    """Ok(value) | Err(error)"""

    def test_ok(self):
        outcome = Outcome.ok(3)
        assert outcome.tag is OutcomeTag.OK
        assert outcome.success and outcome.is_ok() and not outcome.is_err()
        assert outcome.unwrap() == 3
        assert str(outcome) == "Ok(3)"

    def test_err_unwrap_raises_stored_error(self):
        error = UnsupportedConstruct("set", "module")
        outcome = Outcome.err(error)
        assert not outcome.success
        with pytest.raises(UnsupportedConstruct) as exc:
            outcome.unwrap()
        assert exc.value is error
        assert outcome.unwrap_or("fallback") == "fallback"

    def test_map_and_then(self):
        assert Outcome.ok(2).map(lambda v: v * 5).unwrap() == 10
        assert Outcome.ok(2).and_then(lambda v: Outcome.ok(v + 1)).unwrap() == 3
        error = UnsupportedConstruct("set", "module")
        assert Outcome.err(error).map(lambda v: v * 5).error is error
        assert Outcome.err(error).and_then(lambda v: Outcome.ok(v)).is_err()
