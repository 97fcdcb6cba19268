"""
SQLite база данных для хранения рекорда и настроек игрока.

Хранилище необязательное: если база недоступна, игра работает
на значениях по умолчанию, а запись просто пропускается.
"""
import sqlite3
from datetime import datetime

from config import DB_PATH, DEFAULT_PLAYER_NAME, TICK_INTERVAL_MS


def default_high_score():
    return {'name': DEFAULT_PLAYER_NAME, 'score': 0}


def default_preferences():
    return {'tick_interval_ms': TICK_INTERVAL_MS, 'player_name': DEFAULT_PLAYER_NAME}


class SnakeDatabase:
    def __init__(self, db_path=DB_PATH):
        self.db_path = db_path
        self.conn = None
        self._init_db()

    @property
    def available(self):
        return self.conn is not None

    def _init_db(self):
        """Инициализация базы данных"""
        try:
            self.conn = sqlite3.connect(self.db_path)
            cursor = self.conn.cursor()

            # Рекорд (всегда одна строка)
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS high_score (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    player_name TEXT NOT NULL,
                    score INTEGER NOT NULL,
                    updated_at TIMESTAMP
                )
            ''')

            # Настройки ключ-значение
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            ''')

            self.conn.commit()
        except sqlite3.Error as e:
            print(f"Warning: storage unavailable ({self.db_path}): {e}")
            if self.conn is not None:
                self.conn.close()
            self.conn = None

    def get_high_score(self):
        """Рекорд {'name', 'score'}, по умолчанию {'Player', 0}"""
        if not self.available:
            return default_high_score()
        try:
            cursor = self.conn.cursor()
            cursor.execute('SELECT player_name, score FROM high_score WHERE id = 1')
            row = cursor.fetchone()
        except sqlite3.Error as e:
            print(f"Warning: could not read high score: {e}")
            return default_high_score()

        if row:
            return {'name': row[0], 'score': int(row[1])}
        return default_high_score()

    def save_high_score(self, name, score):
        """Перезаписать рекорд"""
        return self._write('''
            INSERT INTO high_score (id, player_name, score, updated_at)
            VALUES (1, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                player_name = excluded.player_name,
                score = excluded.score,
                updated_at = excluded.updated_at
        ''', (name, int(score), datetime.now().isoformat()), 'high score')

    def get_preferences(self):
        """Настройки {'tick_interval_ms', 'player_name'}"""
        prefs = default_preferences()
        if not self.available:
            return prefs
        try:
            cursor = self.conn.cursor()
            cursor.execute('SELECT key, value FROM preferences')
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            print(f"Warning: could not read preferences: {e}")
            return prefs

        stored = dict(rows)
        if 'tick_interval_ms' in stored:
            try:
                prefs['tick_interval_ms'] = int(stored['tick_interval_ms'])
            except ValueError:
                pass  # битое значение - остаётся по умолчанию
        if stored.get('player_name'):
            prefs['player_name'] = stored['player_name']
        return prefs

    def save_tick_interval(self, interval_ms):
        return self._save_preference('tick_interval_ms', str(int(interval_ms)))

    def save_player_name(self, name):
        return self._save_preference('player_name', name)

    def _save_preference(self, key, value):
        return self._write('''
            INSERT INTO preferences (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
        ''', (key, value), key)

    def _write(self, sql, params, what):
        """Запись по возможности: ошибка не роняет игру"""
        if not self.available:
            return False
        try:
            cursor = self.conn.cursor()
            cursor.execute(sql, params)
            self.conn.commit()
        except sqlite3.Error as e:
            print(f"Warning: could not save {what}: {e}")
            return False
        return True

    def close(self):
        """Закрыть соединение"""
        if self.conn:
            self.conn.close()
            self.conn = None
