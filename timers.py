"""
Кооперативный планировщик таймеров.

Время приходит снаружи (pygame.time.get_ticks() в play.py, вручную в тестах),
внутри нет потоков: advance(now) вызывает все созревшие таймеры по порядку.
"""
import heapq
import itertools


class Timer:
    """Ручка таймера. cancel() синхронный и повторный вызов ничего не делает"""

    def __init__(self, scheduler, due, callback, interval=None):
        self._scheduler = scheduler
        self.due = due
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    @property
    def active(self):
        return not self.cancelled

    def cancel(self):
        if not self.cancelled:
            self.cancelled = True
            self._scheduler._discard(self)

    def __repr__(self):
        kind = f"every {self.interval}ms" if self.interval else "once"
        state = "cancelled" if self.cancelled else f"due={self.due}"
        return f"<Timer {kind} {state}>"


class Scheduler:
    def __init__(self, now=0):
        self.now = now
        self._queue = []
        self._seq = itertools.count()
        self._live = 0

    @property
    def pending(self):
        """Сколько таймеров ещё не отменено"""
        return self._live

    def call_later(self, delay, callback):
        """Один вызов через delay мс"""
        return self._push(Timer(self, self.now + max(0, delay), callback))

    def call_every(self, interval, callback):
        """Вызов каждые interval мс, первый - через interval"""
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        return self._push(Timer(self, self.now + interval, callback, interval))

    def advance(self, now):
        """Сдвинуть часы и вызвать всё, что созрело к моменту now"""
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue

            # Часы совпадают со временем таймера, чтобы новые таймеры
            # из callback отсчитывались от него
            self.now = max(self.now, due)

            if timer.interval:
                timer.due = due + timer.interval
                heapq.heappush(self._queue, (timer.due, next(self._seq), timer))
            else:
                timer.cancelled = True
                self._live -= 1

            timer.callback()
            fired += 1

        self.now = max(self.now, now)
        return fired

    def cancel_all(self):
        for _, _, timer in self._queue:
            timer.cancelled = True
        self._queue = []
        self._live = 0

    def _push(self, timer):
        heapq.heappush(self._queue, (timer.due, next(self._seq), timer))
        self._live += 1
        return timer

    def _discard(self, timer):
        # Из кучи не удаляем - отменённый таймер пропускается в advance
        self._live -= 1
