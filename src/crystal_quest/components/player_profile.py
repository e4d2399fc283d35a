from dataclasses import dataclass
from typing import Optional

@dataclass(slots=True)
class PlayerProfile:
    """Identifier used when a finished run is submitted to the leaderboard."""
    nickname: Optional[str] = None
