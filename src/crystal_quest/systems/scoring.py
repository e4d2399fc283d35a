from __future__ import annotations

from typing import Iterable, Tuple

from crystal_quest.components.match import Match
from crystal_quest.components.rules import Rules


def score_cascade(matches: Iterable[Match], combo: int, rules: Rules) -> Tuple[int, int]:
    """Return (points, bonus) for one cascade iteration.

    points counts every match's full length, so a cell shared by a crossing row and
    column is paid twice. combo is the counter after this iteration's increment.
    """
    points = sum(match.length for match in matches) * rules.points_per_cell
    bonus = combo * rules.combo_bonus_per_level if combo > 1 else 0
    return points, bonus
