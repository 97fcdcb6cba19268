# Настройки игры
# Поле 20x20 клеток по 20 пикселей (как в браузерной версии)
CELL_SIZE = 20
WIDTH = 400   # 20 клеток * 20
HEIGHT = 400
PANEL_WIDTH = 200

# Сетка
GRID_WIDTH = WIDTH // CELL_SIZE    # 20 клеток
GRID_HEIGHT = HEIGHT // CELL_SIZE  # 20 клеток

# Цвета
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GRAY = (40, 40, 40)
HEAD = (72, 187, 120)
BODY = (56, 161, 105)
OUTLINE = (26, 32, 44)
RED = (229, 62, 62)
DARK_RED = (155, 44, 44)
GOLD = (236, 201, 75)

SNAKE = BODY
FOOD = RED
BONUS_FOOD = GOLD
BACKGROUND = BLACK
TEXT_COLOR = WHITE

# Направления
UP = (0, -1)
DOWN = (0, 1)
RIGHT = (1, 0)
LEFT = (-1, 0)

DIRECTIONS = {
    'up': UP,
    'down': DOWN,
    'left': LEFT,
    'right': RIGHT,
}

# Скорость (интервал тика в мс)
TICK_INTERVAL_MS = 100
MIN_TICK_INTERVAL_MS = 40
MAX_TICK_INTERVAL_MS = 1000
TICK_INTERVAL_STEP_MS = 20
FPS = 60  # Частота отрисовки, не влияет на скорость змейки

# Начальная длина змейки
INITIAL_SNAKE_LENGTH = 3

# Очки за еду
SCORE_FOR_FOOD = 10
SCORE_FOR_BONUS = 50

# Бонусная еда появляется после каждой 5-й обычной
BONUS_EVERY = 5
BONUS_FOOD_LIFETIME_MS = 5000

# Самостолкновение проверяется только с сегментами начиная с этого индекса
SELF_COLLISION_FROM = 4

# Попыток случайного выбора клетки для еды до полного перебора
FOOD_MAX_ATTEMPTS = 1000

# Хранилище рекорда и настроек
DB_PATH = "snake_arcade.db"
DEFAULT_PLAYER_NAME = "Player"
