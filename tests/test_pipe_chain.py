"""Tests for transformer chain editing: push, unshift, pop, shift, remove."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from conduit import PipeIndexError, TransformerError, create_pipe


def _received(p, *args):
    consumer = MagicMock()
    sub = p.connect(consumer)
    p.send(*args)
    sub()
    assert consumer.call_count == 1
    return consumer.call_args.args


class TestPush:
    def test_push_appends(self, add1, double, to_str):
        p = create_pipe(add1, double)
        p.push(to_str)
        assert p.transformers == (add1, double, to_str)
        assert _received(p, 1) == ("number = 4",)

    def test_push_many_preserves_order(self, add1, double):
        p = create_pipe()
        p.push(add1, double)
        assert _received(p, 1) == (4,)

    def test_push_nothing_keeps_chain(self, add1):
        p = create_pipe(add1)
        p.push()
        assert _received(p, 1) == (2,)

    def test_push_non_callable_leaves_chain_untouched(self, add1):
        p = create_pipe(add1)
        with pytest.raises(TransformerError):
            p.push("nope")
        assert p.transformers == (add1,)
        assert _received(p, 1) == (2,)


class TestUnshift:
    def test_unshift_prepends(self, add1, double):
        p = create_pipe(add1)
        p.unshift(double)
        assert p.transformers == (double, add1)
        assert _received(p, 1) == (3,)

    def test_unshift_many_keeps_relative_order(self, add1, double, to_str):
        p = create_pipe(to_str)
        p.unshift(add1, double)
        assert p.transformers == (add1, double, to_str)
        assert _received(p, 1) == ("number = 4",)


class TestPop:
    def test_pop_removes_last(self, add1, double, to_str):
        p = create_pipe(add1, double, to_str)
        assert p.pop() is to_str
        assert _received(p, 1) == (4,)

    def test_pop_index(self, add1, double):
        p = create_pipe(add1, double)
        assert p.pop(0) is add1
        assert p.transformers == (double,)
        assert _received(p, 1) == (2,)

    def test_pop_negative_index(self, add1, double):
        p = create_pipe(add1, double)
        assert p.pop(-2) is add1
        assert p.transformers == (double,)

    def test_pop_empty_returns_none(self):
        p = create_pipe()
        assert p.pop() is None
        assert _received(p, 1) == (1,)

    def test_pop_out_of_range_raises(self, add1):
        p = create_pipe(add1)
        with pytest.raises(PipeIndexError) as excinfo:
            p.pop(3)
        assert excinfo.value.index == 3
        assert excinfo.value.size == 1
        assert p.transformers == (add1,)
        assert _received(p, 1) == (2,)

    def test_pop_out_of_range_is_index_error(self):
        p = create_pipe()
        with pytest.raises(IndexError):
            p.pop(0)


class TestShift:
    def test_shift_removes_first(self, add1, double):
        p = create_pipe(add1, double)
        assert p.shift() is add1
        assert _received(p, 1) == (2,)

    def test_shift_empty_returns_none(self):
        p = create_pipe()
        assert p.shift() is None


class TestRemove:
    def test_remove_all_occurrences(self, add1, double, to_str):
        p = create_pipe(add1, add1, double, to_str)
        assert p.remove(add1) == 2
        assert p.transformers == (double, to_str)
        assert _received(p, 1) == ("number = 2",)

    def test_remove_keeps_order_of_rest(self, add1, double, to_str):
        p = create_pipe(double, add1, to_str, add1)
        p.remove(add1)
        assert p.transformers == (double, to_str)

    def test_remove_missing_is_noop(self, add1, double):
        p = create_pipe(add1)
        assert p.remove(double) == 0
        assert _received(p, 1) == (2,)

    def test_remove_matches_identity_not_equality(self):
        def make_inc():
            def inc(next):
                return lambda x: next(x + 1)

            return inc

        first, second = make_inc(), make_inc()
        p = create_pipe(first, second)
        p.remove(first)
        assert p.transformers == (second,)


class TestRebuild:
    def test_factories_rerun_on_rebuild(self, add1):
        calls = []

        def counting(next):
            calls.append(next)
            return next

        p = create_pipe(counting)
        p.push(add1)
        assert len(calls) == 2

    def test_mutation_from_subscriber_applies_to_next_send(self, double):
        seen = []
        p = create_pipe()

        def sink(value):
            seen.append(value)
            if not p.transformers:
                p.push(double)

        p.connect(sink)
        p.send(1)
        p.send(1)
        assert seen == [1, 2]

    def test_factory_exception_propagates_and_keeps_chain(self, add1):
        def refusing(next):
            raise RuntimeError("no chain for you")

        p = create_pipe(add1)
        with pytest.raises(RuntimeError, match="no chain"):
            p.push(refusing)
        assert p.transformers == (add1,)
        assert _received(p, 1) == (2,)
