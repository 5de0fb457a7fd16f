from __future__ import annotations

import curses
import logging
import sys
from typing import Dict, Optional

from falling_block_rl.game import Action, FallingBlockGame, Frame, GameLoop
from falling_block_rl.game.loop import Clock, last_valid_key

logger = logging.getLogger(__name__)

BLOCK = "██"
EMPTY = "  "

KEY_TO_ACTION: Dict[int, Action] = {
    ord("a"): Action.LEFT,
    ord("d"): Action.RIGHT,
    ord("s"): Action.SOFT_DROP,
    ord("p"): Action.ROTATE_CW,
    ord("o"): Action.ROTATE_CCW,
    curses.KEY_LEFT: Action.LEFT,
    curses.KEY_RIGHT: Action.RIGHT,
    curses.KEY_DOWN: Action.SOFT_DROP,
    curses.KEY_UP: Action.ROTATE_CW,
}
QUIT_KEYS = (ord("q"), ord("Q"))


def format_frame(frame: Frame) -> str:
    """Text board, top row first, framed by `|` walls."""
    lines = ["", "TETRIS", "", "_" + "__" * frame.width + "_"]
    for y in range(frame.height - 1, -1, -1):
        cells = "".join(BLOCK if frame.is_filled(x, y) else EMPTY for x in range(frame.width))
        lines.append("|" + cells + "|")
    lines.append("||" * (frame.width + 1))
    lines.append("")
    lines.append(f"Score: {frame.score}")
    if frame.game_over:
        lines.append("Game over...")
    return "\n".join(lines) + "\n"


def safe_addstr(stdscr, y: int, x: int, s: str, attr: int = 0) -> None:
    # Lines past the window edge are clipped on small terminals
    try:
        stdscr.addstr(y, x, s, attr)
    except curses.error:
        pass


def key_to_action(ch: int) -> Optional[Action]:
    """Map a curses key code to an action; unknown keys map to None."""
    return KEY_TO_ACTION.get(ch)


class TerminalSink:
    def __init__(self, stdscr) -> None:
        self.stdscr = stdscr

    def render(self, frame: Frame) -> None:
        self.stdscr.erase()
        for row, line in enumerate(format_frame(frame).split("\n")):
            safe_addstr(self.stdscr, row, 0, line)
        self.stdscr.refresh()


class TerminalKeySource:
    """Non-blocking curses reader. Drains every pending key on each poll."""

    def __init__(self, stdscr) -> None:
        self.stdscr = stdscr
        self.quit_requested = False
        stdscr.nodelay(True)
        stdscr.timeout(0)

    def poll_key(self) -> Optional[Action]:
        keys = []
        ch = self.stdscr.getch()
        while ch != -1:
            if ch in QUIT_KEYS:
                self.quit_requested = True
            keys.append(key_to_action(ch))
            ch = self.stdscr.getch()
        return last_valid_key(keys)


def play(stdscr, game: FallingBlockGame, clock: Optional[Clock] = None) -> int:
    try:
        curses.curs_set(0)
    except curses.error:
        logger.debug("terminal cannot hide the cursor")
    keys = TerminalKeySource(stdscr)
    loop = GameLoop(game, keys, TerminalSink(stdscr), clock)
    loop.render()
    while game.playing and not keys.quit_requested:
        loop.run_cycle()
    logger.info("terminal session ended after %d cycles, score %d", loop.cycles, game.score)
    return game.score


def run() -> None:
    # Logs go to stderr at WARNING so they do not tear the curses screen
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    game = FallingBlockGame()
    try:
        curses.wrapper(play, game)
    except KeyboardInterrupt:
        logger.warning("interrupted with score %d", game.score)
    finally:
        print("\nTETRIS\n")
        print("Game over...\n")
        print(f"{game.score} points, {game.rows_cleared_total} deleted rows!\n")


if __name__ == "__main__":  # pragma: no cover
    run()
