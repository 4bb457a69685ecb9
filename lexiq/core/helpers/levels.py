"""
XP to level conversion.

level = floor((1 + sqrt(1 + xp / 25)) / 2), so level n starts at
100 * n * (n - 1) XP: level 2 at 200, level 3 at 600, level 4 at 1200.
"""
import math


def calculate_level(total_xp: int) -> int:
    """Level for a total XP amount, never below level 1."""
    if total_xp <= 0:
        return 1
    return int(math.floor((1 + math.sqrt(1 + total_xp / 25)) / 2))
