"""Tests for debounced calls, driven by a manual timer."""

import pytest
from debounce import Debouncer, create_debounced_search
from models import Law


class FakeTimer:
    """Timer that only fires when the test says so."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        # threading.Timer may still run a callback that raced with cancel()
        self.callback()


class TimerFactory:

    def __init__(self):
        self.timers = []

    def __call__(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer


@pytest.fixture
def timers():
    return TimerFactory()


# ─── Debouncer Tests ─────────────────────────────────────────────────────────

class TestDebouncer:

    def test_runs_after_delay(self, timers):
        calls = []
        debounced = Debouncer(calls.append, delay=0.5, timer_factory=timers)
        debounced("a")
        assert calls == []
        assert debounced.pending
        assert timers.timers[0].delay == 0.5
        assert timers.timers[0].started

        timers.timers[0].fire()
        assert calls == ["a"]
        assert not debounced.pending

    def test_new_call_cancels_previous(self, timers):
        calls = []
        debounced = Debouncer(calls.append, timer_factory=timers)
        debounced("a")
        debounced("ab")
        assert timers.timers[0].cancelled

        timers.timers[1].fire()
        assert calls == ["ab"]

    def test_stale_timer_does_not_fire(self, timers):
        calls = []
        debounced = Debouncer(calls.append, timer_factory=timers)
        debounced("a")
        debounced("ab")
        timers.timers[0].fire()
        assert calls == []
        assert debounced.pending

    def test_cancel(self, timers):
        calls = []
        debounced = Debouncer(calls.append, timer_factory=timers)
        debounced("a")
        debounced.cancel()
        timers.timers[0].fire()
        assert calls == []
        assert not debounced.pending

    def test_flush(self, timers):
        calls = []
        debounced = Debouncer(calls.append, timer_factory=timers)
        debounced("a")
        debounced.flush()
        assert calls == ["a"]
        timers.timers[0].fire()
        assert calls == ["a"]

    def test_flush_without_pending(self, timers):
        calls = []
        Debouncer(calls.append, timer_factory=timers).flush()
        assert calls == []

    def test_passes_keyword_arguments(self, timers):
        calls = []
        debounced = Debouncer(lambda **kw: calls.append(kw), timer_factory=timers)
        debounced(query="x")
        timers.timers[0].fire()
        assert calls == [{"query": "x"}]

    def test_rejects_negative_delay(self):
        with pytest.raises(ValueError):
            Debouncer(print, delay=-1)


class TestDebouncedSearch:

    def test_callback_receives_latest_results(self, timers):
        laws = [
            Law(id="1", act="Penal Code", section="Section 1", theory=""),
            Law(id="2", act="IT Act", section="Section 2", theory=""),
        ]
        received = []
        search = create_debounced_search(
            lambda results, query: received.append((query, [l.id for l in results])),
            timer_factory=timers,
        )
        search("pen", laws)
        search("it act", laws)
        timers.timers[-1].fire()
        assert received == [("it act", ["2"])]
