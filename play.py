"""
Игра в змейку (pygame).

Использование:
    python play.py                        # Поле 20x20, рекорд в snake_arcade.db
    python play.py --width 30 --height 20
    python play.py --db :memory:          # Без сохранения между запусками

Управление: стрелки / WASD, SPACE или ENTER - старт, P - пауза,
+/- скорость (не во время игры), ESC - выход.
"""
import argparse
import pygame

from config import (
    CELL_SIZE, WIDTH, HEIGHT, PANEL_WIDTH, FPS, DB_PATH,
    BACKGROUND, SNAKE, HEAD, OUTLINE, FOOD, DARK_RED, BONUS_FOOD,
    GRAY, WHITE, TICK_INTERVAL_STEP_MS,
)
from database import SnakeDatabase
from session import GameSession, IDLE, RUNNING, PAUSED, GAME_OVER
from timers import Scheduler

KEY_DIRECTIONS = {
    pygame.K_UP: 'up',
    pygame.K_DOWN: 'down',
    pygame.K_LEFT: 'left',
    pygame.K_RIGHT: 'right',
    pygame.K_w: 'up',
    pygame.K_s: 'down',
    pygame.K_a: 'left',
    pygame.K_d: 'right',
}


class SnakeApp:
    def __init__(self, width=WIDTH, height=HEIGHT, db_path=DB_PATH):
        pygame.init()

        self.screen = pygame.display.set_mode((width + PANEL_WIDTH, height), pygame.RESIZABLE)
        pygame.display.set_caption('Snake')
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('arial', 18)
        self.big_font = pygame.font.SysFont('arial', 28)

        self.db = SnakeDatabase(db_path)
        self.scheduler = Scheduler(pygame.time.get_ticks())
        self.session = GameSession(width // CELL_SIZE, height // CELL_SIZE,
                                   db=self.db, scheduler=self.scheduler)

        # Последний снимок от сессии - рисуем только его
        self.snapshot = self.session.snapshot()
        self.session.subscribe(self.on_state_changed)
        self.games = 0

    def on_state_changed(self, snapshot):
        if snapshot['status'] == GAME_OVER and self.snapshot['status'] != GAME_OVER:
            self.games += 1
            print(f"Game {self.games}: Score {snapshot['score']} "
                  f"({snapshot['collision']}) | Best: {snapshot['high_score']['score']}")
        self.snapshot = snapshot

    def cell_rect(self, x, y):
        return pygame.Rect(x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE, CELL_SIZE)

    def draw(self):
        snap = self.snapshot
        board_w = snap['width'] * CELL_SIZE
        board_h = snap['height'] * CELL_SIZE

        self.screen.fill(GRAY)
        pygame.draw.rect(self.screen, BACKGROUND, (0, 0, board_w, board_h))

        # Еда
        if snap['food'] is not None:
            rect = self.cell_rect(*snap['food'])
            pygame.draw.rect(self.screen, FOOD, rect)
            pygame.draw.rect(self.screen, DARK_RED, rect, 1)
        if snap['bonus_food'] is not None:
            pygame.draw.ellipse(self.screen, BONUS_FOOD, self.cell_rect(*snap['bonus_food']))

        # Змейка, голова светлее
        for i, (x, y) in enumerate(snap['snake']):
            # Голова после удара о стену уже за полем
            if not (0 <= x < snap['width'] and 0 <= y < snap['height']):
                continue
            rect = self.cell_rect(x, y)
            pygame.draw.rect(self.screen, HEAD if i == 0 else SNAKE, rect)
            pygame.draw.rect(self.screen, OUTLINE, rect, 1)

        self.draw_panel(board_w, board_h)
        self.draw_message(board_w, board_h)
        pygame.display.flip()

    def draw_panel(self, board_w, board_h):
        snap = self.snapshot
        high = snap['high_score']
        stats = [
            f"Player: {snap['player_name']}",
            f"Score: {snap['score']}",
            f"High: {high['score']} ({high['name']})",
            f"Length: {len(snap['snake'])}",
            f"Speed: {snap['tick_interval_ms']} ms",
            "",
            "Controls:",
            "Arrows/WASD Turn",
            "P Pause",
            "+/- Speed",
            "ESC Quit",
        ]
        for i, text in enumerate(stats):
            surf = self.font.render(text, True, WHITE)
            self.screen.blit(surf, (board_w + 10, 20 + i * 25))

    def draw_message(self, board_w, board_h):
        status = self.snapshot['status']
        if status == IDLE:
            lines = ["Welcome to Snake!", "Press ENTER to start"]
        elif status == GAME_OVER:
            lines = ["Game Over!", f"Your score: {self.snapshot['score']}", "ENTER to play again"]
        elif status == PAUSED:
            lines = ["Paused", "P to resume"]
        else:
            return

        y = board_h // 2 - len(lines) * 18
        for i, text in enumerate(lines):
            font = self.big_font if i == 0 else self.font
            surf = font.render(text, True, WHITE)
            self.screen.blit(surf, (board_w // 2 - surf.get_width() // 2, y))
            y += 36

    def handle_key(self, key):
        status = self.session.status
        if key in KEY_DIRECTIONS:
            self.session.turn(KEY_DIRECTIONS[key])
        elif key in (pygame.K_RETURN, pygame.K_SPACE):
            if status in (IDLE, GAME_OVER):
                self.session.start()
            else:
                self.session.toggle_pause()
        elif key == pygame.K_p:
            self.session.toggle_pause()
        elif key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
            # Быстрее = меньше интервал
            self.session.set_tick_interval(self.session.tick_interval_ms - TICK_INTERVAL_STEP_MS)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.session.set_tick_interval(self.session.tick_interval_ms + TICK_INTERVAL_STEP_MS)

    def run(self):
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        self.handle_key(event.key)
                elif event.type == pygame.VIDEORESIZE:
                    # Поле пересчитывается только между партиями
                    board_w = max(CELL_SIZE, event.w - PANEL_WIDTH)
                    self.session.resize(board_w // CELL_SIZE, max(CELL_SIZE, event.h) // CELL_SIZE)

            self.scheduler.advance(pygame.time.get_ticks())
            self.draw()
            self.clock.tick(FPS)

        self.session.stop()
        self.db.close()
        pygame.quit()

        high = self.session.high_score
        print(f"\nGames: {self.games}")
        print(f"High score: {high['score']} ({high['name']})")


def main():
    parser = argparse.ArgumentParser(description="Snake")
    parser.add_argument("--db", default=DB_PATH, help="SQLite file for high score and preferences")
    parser.add_argument("--width", type=int, default=WIDTH // CELL_SIZE, help="board width in cells")
    parser.add_argument("--height", type=int, default=HEIGHT // CELL_SIZE, help="board height in cells")
    parser.add_argument("--name", default=None, help="player name")
    args = parser.parse_args()

    app = SnakeApp(max(1, args.width) * CELL_SIZE, max(1, args.height) * CELL_SIZE, args.db)
    if args.name:
        app.session.set_player_name(args.name)
    app.run()


if __name__ == "__main__":
    main()
