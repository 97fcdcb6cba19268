"""
Ядро змейки: поле, состояние игры и шаг симуляции.

Матрица занятости (для поиска свободных клеток на почти полном поле):
  0 = пусто
  1 = занято (змейка или другая еда)
"""
import numpy as np
from config import (
    RIGHT, INITIAL_SNAKE_LENGTH, SCORE_FOR_FOOD, SCORE_FOR_BONUS,
    BONUS_EVERY, SELF_COLLISION_FROM, FOOD_MAX_ATTEMPTS,
)

# Исходы поедания
REGULAR_EAT = "regular"
BONUS_EAT = "bonus"

# Причины столкновения
WALL_COLLISION = "wall"
SELF_COLLISION = "self"


class Grid:
    """Прямоугольное поле width x height клеток"""

    def __init__(self, width, height):
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height

    def contains(self, cell):
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    @property
    def center(self):
        return self.width // 2, self.height // 2

    @property
    def cells(self):
        return self.width * self.height

    def __eq__(self, other):
        return (isinstance(other, Grid)
                and (self.width, self.height) == (other.width, other.height))

    def __repr__(self):
        return f"Grid({self.width}x{self.height})"


def place_food(grid, exclude, rng):
    """
    Случайная свободная клетка поля.

    Сначала rejection sampling по всему полю, если за FOOD_MAX_ATTEMPTS
    попыток ничего не нашли - перебираем свободные клетки через матрицу.
    None если поле заполнено целиком.
    """
    exclude = set(exclude)

    for _ in range(FOOD_MAX_ATTEMPTS):
        cell = (int(rng.randint(grid.width)), int(rng.randint(grid.height)))
        if cell not in exclude:
            return cell

    # Почти заполненное поле
    occupied = np.zeros((grid.height, grid.width), dtype=np.int8)
    for x, y in exclude:
        if grid.contains((x, y)):
            occupied[y, x] = 1
    empty = np.argwhere(occupied == 0)
    if len(empty) == 0:
        return None
    y, x = empty[rng.randint(len(empty))]
    return int(x), int(y)


class GameState:
    """
    Состояние одной партии.

    snake: список клеток (x, y), голова первая, хвост последний
    direction: направление, применённое на последнем шаге
    food: обычная еда (None только если на поле нет места)
    bonus_food: бонусная еда или None
    score: очки за партию
    food_eaten: сколько обычной еды съедено (каждая 5-я даёт бонус)
    """

    def __init__(self, grid, snake, direction=RIGHT, food=None,
                 bonus_food=None, score=0, food_eaten=0):
        self.grid = grid
        self.snake = list(snake)
        self.direction = direction
        self.food = food
        self.bonus_food = bonus_food
        self.score = score
        self.food_eaten = food_eaten

    @classmethod
    def new(cls, grid, rng):
        """Змейка длины 3 в центре, смотрит вправо"""
        cx, cy = grid.center
        snake = [(cx - i, cy) for i in range(INITIAL_SNAKE_LENGTH)]
        # На очень узком поле хвост может не поместиться
        snake = [cell for cell in snake if grid.contains(cell)]

        state = cls(grid, snake, RIGHT)
        state.food = place_food(grid, snake, rng)
        return state

    @property
    def head(self):
        return self.snake[0]

    @property
    def bonus_active(self):
        return self.bonus_food is not None

    def occupied(self):
        """Все клетки, занятые змейкой и едой"""
        cells = set(self.snake)
        if self.food is not None:
            cells.add(self.food)
        if self.bonus_food is not None:
            cells.add(self.bonus_food)
        return cells

    def copy(self):
        return GameState(self.grid, self.snake, self.direction, self.food,
                         self.bonus_food, self.score, self.food_eaten)

    def to_dict(self):
        return {
            'width': self.grid.width,
            'height': self.grid.height,
            'snake': list(self.snake),
            'direction': self.direction,
            'food': self.food,
            'bonus_food': self.bonus_food,
            'score': self.score,
            'food_eaten': self.food_eaten,
        }

    def __repr__(self):
        return (f"<GameState {self.grid!r} length={len(self.snake)} "
                f"food={self.food} bonus={self.bonus_food} score={self.score}>")


class StepResult:
    """Результат одного шага: новое состояние и что произошло"""

    def __init__(self, state, eaten=None, bonus_activated=False, collision=None):
        self.state = state
        self.eaten = eaten
        self.bonus_activated = bonus_activated
        self.collision = collision

    @property
    def done(self):
        return self.collision is not None

    def __repr__(self):
        return (f"<StepResult eaten={self.eaten} bonus_activated={self.bonus_activated} "
                f"collision={self.collision}>")


def step(state, direction, rng):
    """
    Один тик. Исходное состояние не изменяется.

    direction: зафиксированное направление (dx, dy)
    rng: генератор с методом randint (np.random.RandomState)
    """
    new = state.copy()
    new.direction = direction

    head_x, head_y = state.head
    dx, dy = direction
    new_head = (head_x + dx, head_y + dy)

    # Голова добавляется всегда, хвост убираем только если ничего не съели
    new.snake.insert(0, new_head)

    eaten = None
    bonus_activated = False

    if new_head == state.food:
        eaten = REGULAR_EAT
        new.score += SCORE_FOR_FOOD
        new.food_eaten += 1

        if new.food_eaten % BONUS_EVERY == 0:
            exclude = set(new.snake)
            exclude.add(state.food)
            new.bonus_food = place_food(new.grid, exclude, rng)
            bonus_activated = new.bonus_food is not None

        exclude = set(new.snake)
        if new.bonus_food is not None:
            exclude.add(new.bonus_food)
        new.food = place_food(new.grid, exclude, rng)

    elif state.bonus_food is not None and new_head == state.bonus_food:
        eaten = BONUS_EAT
        new.score += SCORE_FOR_BONUS
        new.bonus_food = None

    else:
        new.snake.pop()

    # Столкновения (позиция уже обновлена - рисуем голову в месте удара)
    collision = None
    if not new.grid.contains(new_head):
        collision = WALL_COLLISION
    elif new_head in new.snake[SELF_COLLISION_FROM:]:
        collision = SELF_COLLISION

    return StepResult(new, eaten, bonus_activated, collision)
