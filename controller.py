"""
Управление направлением змейки.

Не больше одного поворота за тик и запрет разворота назад,
иначе два быстрых нажатия разворачивают змейку в собственную шею.
"""
from config import RIGHT, DIRECTIONS

VALID_DIRECTIONS = set(DIRECTIONS.values())


def to_direction(intent):
    """'up' / 'down' / 'left' / 'right' или вектор (dx, dy) -> вектор, иначе None"""
    if isinstance(intent, str):
        return DIRECTIONS.get(intent.lower())
    try:
        vector = tuple(intent)
    except TypeError:
        return None
    return vector if vector in VALID_DIRECTIONS else None


def is_reverse(a, b):
    return a[0] == -b[0] and a[1] == -b[1]


class DirectionController:
    def __init__(self, direction=RIGHT):
        self.direction = direction
        self.turn_consumed = False

    def reset(self, direction=RIGHT):
        self.direction = direction
        self.turn_consumed = False

    def request_turn(self, intent, running=True):
        """
        Попытка повернуть. Возвращает True если поворот принят.
        Неподходящий поворот молча игнорируется.
        """
        if not running or self.turn_consumed:
            return False

        direction = to_direction(intent)
        if direction is None or is_reverse(direction, self.direction):
            return False

        self.direction = direction
        self.turn_consumed = True
        return True

    def end_tick(self):
        """Граница тика - снова можно повернуть"""
        self.turn_consumed = False
