"""
Игровая сессия: конечный автомат Idle -> Running -> Paused -> GameOver.

Сессия владеет состоянием партии (змейка, еда, очки), таймерами тика и
бонусной еды, а также держит рекорд и настройки, которые живут дольше
одной партии. Слой отрисовки только подписывается на снимки состояния
и посылает команды (start, pause, resume, turn, resize).
"""
import numpy as np

from config import (
    GRID_WIDTH, GRID_HEIGHT, BONUS_FOOD_LIFETIME_MS,
    MIN_TICK_INTERVAL_MS, MAX_TICK_INTERVAL_MS,
)
from controller import DirectionController
from database import default_high_score, default_preferences
from env import Grid, GameState, BONUS_EAT, step
from timers import Scheduler

# Состояния сессии
IDLE = "idle"
RUNNING = "running"
PAUSED = "paused"
GAME_OVER = "game_over"


class GameSession:
    def __init__(self, width=None, height=None, db=None, scheduler=None, rng=None):
        """
        width, height: размер поля в клетках
        db: SnakeDatabase или None (тогда ничего не сохраняется)
        scheduler: общий планировщик таймеров
        rng: генератор случайных чисел (для тестов - с фиксированным seed)
        """
        self.grid = Grid(width or GRID_WIDTH, height or GRID_HEIGHT)
        self.db = db
        self.scheduler = scheduler or Scheduler()
        self.rng = rng if rng is not None else np.random.RandomState()

        self.status = IDLE
        self.state = None
        self.controller = DirectionController()
        self.last_collision = None

        self._tick_timer = None
        self._bonus_timer = None
        self._listeners = []

        if db is not None:
            self.high_score = db.get_high_score()
            prefs = db.get_preferences()
        else:
            self.high_score = default_high_score()
            prefs = default_preferences()

        self.tick_interval_ms = _clamp_interval(prefs['tick_interval_ms'])
        self.player_name = prefs['player_name']

    @property
    def running(self):
        return self.status == RUNNING

    # --- Команды ---

    def start(self, name=None):
        """Новая партия (из Idle или после GameOver)"""
        if self.status not in (IDLE, GAME_OVER):
            return False

        if name:
            self.player_name = name
        if self.db is not None:
            self.db.save_player_name(self.player_name)

        self._cancel_timers()
        self.state = GameState.new(self.grid, self.rng)
        self.controller.reset(self.state.direction)
        self.last_collision = None

        self.status = RUNNING
        self._start_tick_timer()
        self._emit()
        return True

    def pause(self):
        if self.status != RUNNING:
            return False
        self._cancel_timers()
        self.status = PAUSED
        self._emit()
        return True

    def resume(self):
        if self.status != PAUSED:
            return False
        self.status = RUNNING
        self._start_tick_timer()
        # Оставшееся время бонуса не запоминаем - таймер заново на полный срок
        if self.state.bonus_active:
            self._start_bonus_timer()
        self._emit()
        return True

    def toggle_pause(self):
        if self.status == RUNNING:
            return self.pause()
        return self.resume()

    def stop(self):
        """Прервать партию и вернуться в Idle"""
        if self.status not in (RUNNING, PAUSED):
            return False
        self._cancel_timers()
        self.status = IDLE
        self._emit()
        return True

    def turn(self, direction):
        return self.controller.request_turn(direction, running=self.running)

    def resize(self, width, height):
        """Новый размер поля, только когда партия не идёт"""
        if self.status not in (IDLE, GAME_OVER):
            return False
        if width < 1 or height < 1:
            return False
        self._cancel_timers()
        self.grid = Grid(width, height)
        self.state = None
        self.last_collision = None
        self.status = IDLE
        self._emit()
        return True

    # --- Настройки ---

    def set_tick_interval(self, interval_ms):
        if self.running:
            return False
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms <= 0:
            return False
        self.tick_interval_ms = _clamp_interval(interval_ms)
        if self.db is not None:
            self.db.save_tick_interval(self.tick_interval_ms)
        self._emit()
        return True

    def set_player_name(self, name):
        if self.running or not name:
            return False
        self.player_name = name
        if self.db is not None:
            self.db.save_player_name(name)
        self._emit()
        return True

    # --- События от таймеров ---

    def tick(self):
        """Один шаг симуляции"""
        if self.status != RUNNING:
            return None

        result = step(self.state, self.controller.direction, self.rng)
        self.controller.end_tick()
        self.state = result.state

        if result.bonus_activated:
            self._start_bonus_timer()
        elif result.eaten == BONUS_EAT:
            self._cancel_bonus_timer()

        self._update_high_score()

        if result.collision:
            self.last_collision = result.collision
            self._cancel_timers()
            self.status = GAME_OVER

        self._emit()
        return result

    def expire_bonus(self):
        """Бонусная еда пропадает, если её не съели вовремя"""
        self._cancel_bonus_timer()
        if self.state is None or not self.state.bonus_active:
            return False
        self.state.bonus_food = None
        self._emit()
        return True

    # --- Подписка на изменения ---

    def subscribe(self, callback):
        """callback(snapshot) после каждого тика и смены состояния"""
        self._listeners.append(callback)
        return callback

    def unsubscribe(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def snapshot(self):
        """Всё, что нужно для отрисовки"""
        snap = {
            'status': self.status,
            'width': self.grid.width,
            'height': self.grid.height,
            'snake': [],
            'direction': self.controller.direction,
            'food': None,
            'bonus_food': None,
            'score': 0,
            'high_score': dict(self.high_score),
            'player_name': self.player_name,
            'tick_interval_ms': self.tick_interval_ms,
            'collision': self.last_collision,
        }
        if self.state is not None:
            snap.update(self.state.to_dict())
            # Направление для следующего тика, а не последнего
            snap['direction'] = self.controller.direction
        return snap

    # --- Внутреннее ---

    def _update_high_score(self):
        score = self.state.score
        if score <= self.high_score['score']:
            return
        self.high_score = {'name': self.player_name, 'score': score}
        if self.db is not None:
            self.db.save_high_score(self.player_name, score)

    def _start_tick_timer(self):
        if self._tick_timer is not None:
            self._tick_timer.cancel()
        self._tick_timer = self.scheduler.call_every(self.tick_interval_ms, self.tick)

    def _start_bonus_timer(self):
        self._cancel_bonus_timer()
        self._bonus_timer = self.scheduler.call_later(BONUS_FOOD_LIFETIME_MS, self.expire_bonus)

    def _cancel_bonus_timer(self):
        if self._bonus_timer is not None:
            self._bonus_timer.cancel()
            self._bonus_timer = None

    def _cancel_timers(self):
        if self._tick_timer is not None:
            self._tick_timer.cancel()
            self._tick_timer = None
        self._cancel_bonus_timer()

    def _emit(self):
        snap = self.snapshot()
        for callback in list(self._listeners):
            callback(snap)


def _clamp_interval(interval_ms):
    return max(MIN_TICK_INTERVAL_MS, min(MAX_TICK_INTERVAL_MS, int(interval_ms)))
