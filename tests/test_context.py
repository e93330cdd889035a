"""Tests for cancellation contexts."""

import time

from bento import Cancelled, Context, DeadlineExceeded


class TestContext:
    def test_background_never_fires(self):
        ctx = Context.background()

        assert ctx.err() is None
        assert ctx.deadline is None
        assert ctx.remaining() is None
        assert not ctx.done()

    def test_cancel_returns_same_error(self):
        ctx = Context.background().with_cancel()
        ctx.cancel()

        error = ctx.err()
        assert isinstance(error, Cancelled)
        assert ctx.err() is error

    def test_cancel_twice_keeps_first_error(self):
        ctx = Context.background().with_cancel()
        ctx.cancel()
        first = ctx.err()
        ctx.cancel()

        assert ctx.err() is first

    def test_immediate_timeout(self):
        ctx = Context.background().with_timeout(0)

        error = ctx.err()
        assert isinstance(error, DeadlineExceeded)
        assert ctx.err() is error
        assert ctx.remaining() == 0.0

    def test_parent_cancellation_reaches_child(self):
        parent = Context.background().with_cancel()
        child = parent.with_timeout(1)
        parent.cancel()

        assert child.err() is parent.err()
        assert isinstance(child.err(), Cancelled)

    def test_child_cancel_does_not_reach_parent(self):
        parent = Context.background().with_cancel()
        child = parent.with_cancel()
        child.cancel()

        assert parent.err() is None
        assert isinstance(child.err(), Cancelled)

    def test_earliest_deadline_wins(self):
        parent = Context.background().with_timeout(0.5)
        child = parent.with_timeout(60)

        assert child.deadline == parent.deadline
        assert child.remaining() <= 0.5

    def test_child_deadline_tighter_than_parent(self):
        parent = Context.background().with_timeout(60)
        child = parent.with_deadline(time.monotonic() - 1)

        assert isinstance(child.err(), DeadlineExceeded)
        assert parent.err() is None

    def test_live_timeout(self):
        ctx = Context.background().with_timeout(60)

        assert ctx.err() is None
        assert 0 < ctx.remaining() <= 60
