from typing import Tuple

# Every 100 XP is a level
XP_PER_LEVEL = 100

# Completed focus sessions earn one XP per full minute focused
XP_PER_FOCUS_MINUTE = 1


def level_for_xp(total_xp: int) -> Tuple[int, int]:
    """Return (current_level, xp_to_next_level) for a running XP total."""
    if total_xp < 0:
        raise ValueError("total_xp cannot be negative")
    level = total_xp // XP_PER_LEVEL + 1
    return level, level * XP_PER_LEVEL - total_xp
