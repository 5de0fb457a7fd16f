from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence, Union

from .core import Action, FallingBlockGame, Frame

logger = logging.getLogger(__name__)


class KeySource(Protocol):
    def poll_key(self) -> Optional[Action]:
        """Most recent key since the last poll, or None. Never blocks."""
        ...


class FrameSink(Protocol):
    def render(self, frame: Frame) -> None:
        ...


class Clock(Protocol):
    def sleep_ms(self, ms: int) -> None:
        ...


class SystemClock:
    def sleep_ms(self, ms: int) -> None:
        time.sleep(ms / 1000.0)


class VirtualClock:
    """Clock that only counts. Lets tests replay exact timing."""

    def __init__(self) -> None:
        self.elapsed_ms = 0

    def sleep_ms(self, ms: int) -> None:
        self.elapsed_ms += ms


Burst = Union[None, Action, Sequence[Optional[Action]]]


class ScriptedKeySource:
    """Replays one entry per poll.

    An entry is None (no key), an Action, or a sequence of actions pressed
    within the same poll interval, of which only the last valid one counts.
    Once the script runs out every poll returns None.
    """

    def __init__(self, script: Iterable[Burst]) -> None:
        self._script = deque(script)
        self.polls = 0

    def poll_key(self) -> Optional[Action]:
        self.polls += 1
        if not self._script:
            return None
        entry = self._script.popleft()
        if entry is None or isinstance(entry, Action):
            return entry
        return last_valid_key(entry)


class RecordingSink:
    def __init__(self) -> None:
        self.frames: list[Frame] = []

    def render(self, frame: Frame) -> None:
        self.frames.append(frame)


def last_valid_key(keys: Iterable[Optional[Action]]) -> Optional[Action]:
    last: Optional[Action] = None
    for key in keys:
        if key is not None and key != Action.NONE:
            last = key
    return last


@dataclass
class LoopConfig:
    tick_ms: int = 10
    cycle_ms: int = 500

    def __post_init__(self) -> None:
        if self.tick_ms <= 0 or self.cycle_ms <= 0:
            raise ValueError("tick_ms and cycle_ms must be positive")


class GameLoop:
    """Fixed-interval poll loop driving a game session.

    A cycle is one gravity step followed by a polling window of ``cycle_ms``,
    sampled every ``tick_ms``.
    """

    def __init__(self, game: FallingBlockGame, keys: KeySource, sink: FrameSink,
                 clock: Optional[Clock] = None, config: Optional[LoopConfig] = None) -> None:
        self.game = game
        self.keys = keys
        self.sink = sink
        self.clock = clock or SystemClock()
        self.config = config or LoopConfig()
        self.cycles = 0

    def render(self) -> None:
        self.sink.render(self.game.snapshot())

    def run_cycle(self) -> bool:
        """Run one cycle. Returns True if the piece froze during it."""
        if self.game.game_over:
            return False
        self.cycles += 1
        game = self.game
        blocked = game.apply_gravity()
        froze = False
        elapsed = 0
        while elapsed < self.config.cycle_ms:
            self.clock.sleep_ms(self.config.tick_ms)
            elapsed += self.config.tick_ms
            key = self.keys.poll_key()
            changed = False
            if key is not None and key != Action.NONE:
                before = game.current_piece
                blocked = game.apply_action(key)
                changed = game.current_piece != before
            if blocked:
                game.lock_piece()
                froze = True
                self.render()
                break
            if changed:
                self.render()
        self.render()
        return froze

    def run(self, max_cycles: Optional[int] = None) -> int:
        """Play until game over (or ``max_cycles``). Returns the final score."""
        self.render()
        while self.game.playing:
            if max_cycles is not None and self.cycles >= max_cycles:
                break
            self.run_cycle()
        logger.info("loop finished after %d cycles, score %d", self.cycles, self.game.score)
        return self.game.score
