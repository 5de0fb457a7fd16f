from __future__ import annotations

from dataclasses import dataclass

from .grid import RowClearResult


@dataclass
class ScoringRules:
    """Height-weighted clear scoring.

    A clear is worth ``sum_of_heights * cleared_count``, multiplied by
    ``multi_clear_multiplier`` when exactly ``multi_clear_rows`` rows go at once.
    """

    multi_clear_rows: int = 4
    multi_clear_multiplier: int = 4

    def score_for_clear(self, cleared_count: int, sum_of_heights: int) -> int:
        if cleared_count <= 0:
            return 0
        multiplier = self.multi_clear_multiplier if cleared_count == self.multi_clear_rows else 1
        return sum_of_heights * cleared_count * multiplier

    def score_for_result(self, result: RowClearResult) -> int:
        return self.score_for_clear(result.cleared_count, result.sum_of_heights)
