"""
Тесты планировщика таймеров.
"""
import pytest

from timers import Scheduler


class TestScheduler:
    def test_call_later_fires_once(self, scheduler):
        calls = []
        scheduler.call_later(100, lambda: calls.append(scheduler.now))
        assert scheduler.advance(99) == 0
        assert scheduler.advance(100) == 1
        assert scheduler.advance(1000) == 0
        assert calls == [100]
        assert scheduler.pending == 0

    def test_call_every_fires_each_interval(self, scheduler):
        calls = []
        scheduler.call_every(100, lambda: calls.append(scheduler.now))
        scheduler.advance(350)
        assert calls == [100, 200, 300]
        scheduler.advance(400)
        assert calls == [100, 200, 300, 400]
        assert scheduler.pending == 1

    def test_rejects_non_positive_interval(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.call_every(0, lambda: None)

    def test_cancel_is_idempotent(self, scheduler):
        calls = []
        timer = scheduler.call_every(100, lambda: calls.append(1))
        timer.cancel()
        timer.cancel()
        scheduler.advance(1000)
        assert calls == []
        assert scheduler.pending == 0
        assert not timer.active

    def test_cancel_from_callback_stops_due_timer(self, scheduler):
        calls = []
        second = scheduler.call_later(100, lambda: calls.append('second'))

        def first():
            calls.append('first')
            second.cancel()

        # Создан позже, но срабатывает раньше
        scheduler.call_later(50, first)
        scheduler.advance(200)
        assert calls == ['first']

    def test_same_due_time_fires_in_creation_order(self, scheduler):
        calls = []
        scheduler.call_later(100, lambda: calls.append('a'))
        scheduler.call_later(100, lambda: calls.append('b'))
        scheduler.advance(100)
        assert calls == ['a', 'b']

    def test_timer_created_in_callback_counts_from_its_due_time(self, scheduler):
        calls = []
        scheduler.call_later(100, lambda: scheduler.call_later(50, lambda: calls.append(scheduler.now)))
        scheduler.advance(1000)
        assert calls == [150]
        assert scheduler.now == 1000

    def test_cancel_all(self, scheduler):
        calls = []
        scheduler.call_later(10, lambda: calls.append(1))
        timer = scheduler.call_every(10, lambda: calls.append(2))
        scheduler.cancel_all()
        scheduler.advance(100)
        assert calls == []
        assert scheduler.pending == 0
        timer.cancel()
        assert scheduler.pending == 0

    def test_starts_from_given_clock(self):
        scheduler = Scheduler(now=5000)
        calls = []
        scheduler.call_later(100, lambda: calls.append(scheduler.now))
        scheduler.advance(5099)
        assert calls == []
        scheduler.advance(5100)
        assert calls == [5100]
