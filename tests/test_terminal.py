import curses

from falling_block_rl.game import Action, FallingBlockGame, GameConfig, Piece, TetrominoType
from falling_block_rl.game.loop import VirtualClock, last_valid_key
from falling_block_rl.visualization.terminal import (
    BLOCK,
    EMPTY,
    TerminalKeySource,
    TerminalSink,
    format_frame,
    key_to_action,
    play,
)


class FakeScreen:
    """Stands in for a curses window: records draws, replays key codes."""

    def __init__(self, keys=(), rows=100):
        self.keys = list(keys)
        self.rows = rows
        self.lines = {}
        self.refreshes = 0
        self.delay = None

    def nodelay(self, flag):
        self.delay = not flag

    def timeout(self, ms):
        pass

    def getch(self):
        return self.keys.pop(0) if self.keys else -1

    def erase(self):
        self.lines = {}

    def addstr(self, y, x, s, attr=0):
        if y >= self.rows:
            raise curses.error("addwstr() returned ERR")
        self.lines[y] = s

    def refresh(self):
        self.refreshes += 1


def _frame():
    game = FallingBlockGame(GameConfig(random_seed=0))
    game.current_piece = Piece.spawn(TetrominoType.O, 4, 19)
    game.grid.set_occupied(0, 0)
    return game.snapshot()


def test_format_frame_layout():
    lines = format_frame(_frame()).split("\n")
    assert lines[1] == "TETRIS"
    assert lines[3] == "_" + "__" * 10 + "_"
    assert lines[4] == "|" + EMPTY * 4 + BLOCK * 2 + EMPTY * 4 + "|"
    assert lines[4 + 19] == "|" + BLOCK + EMPTY * 9 + "|"
    assert lines[24] == "||" * 11
    assert "Score: 0" in lines


def test_format_frame_is_idempotent():
    frame = _frame()
    assert format_frame(frame) == format_frame(frame)


def test_key_to_action():
    assert key_to_action(ord("a")) == Action.LEFT
    assert key_to_action(curses.KEY_RIGHT) == Action.RIGHT
    assert key_to_action(ord("s")) == Action.SOFT_DROP
    assert key_to_action(curses.KEY_DOWN) == Action.SOFT_DROP
    assert key_to_action(ord("p")) == Action.ROTATE_CW
    assert key_to_action(ord("o")) == Action.ROTATE_CCW
    assert key_to_action(ord("x")) is None


def test_key_source_is_non_blocking():
    screen = FakeScreen()
    keys = TerminalKeySource(screen)
    assert screen.delay is False
    assert keys.poll_key() is None


def test_key_source_drains_burst():
    screen = FakeScreen([ord("a"), curses.KEY_RIGHT, ord("x")])
    keys = TerminalKeySource(screen)
    assert keys.poll_key() == Action.RIGHT
    assert screen.keys == []
    assert keys.poll_key() is None


def test_last_valid_key_in_burst():
    assert last_valid_key([key_to_action(c) for c in b"adq"]) == Action.RIGHT
    assert last_valid_key([key_to_action(ord("q"))]) is None


def test_quit_key():
    keys = TerminalKeySource(FakeScreen([ord("s"), ord("q")]))
    assert keys.poll_key() == Action.SOFT_DROP
    assert keys.quit_requested


def test_sink_draws_frame_lines():
    screen = FakeScreen()
    frame = _frame()
    TerminalSink(screen).render(frame)
    expected = format_frame(frame).split("\n")
    assert [screen.lines[i] for i in range(len(expected))] == expected
    assert screen.refreshes == 1


def test_sink_clips_small_window():
    screen = FakeScreen(rows=10)
    TerminalSink(screen).render(_frame())
    assert sorted(screen.lines) == list(range(10))
    assert screen.refreshes == 1


def test_play_stops_on_quit(monkeypatch):
    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
    game = FallingBlockGame(GameConfig(random_seed=0))
    screen = FakeScreen([ord("q")])
    clock = VirtualClock()
    assert play(screen, game, clock) == 0
    assert clock.elapsed_ms == 500
    assert game.playing
    assert screen.refreshes >= 2
