from urllib.parse import urlencode

from crystal_quest.constants import SHARE_COMPOSE_URL


def share_text(score: int) -> str:
    return f"I scored {score} points in Crystal Quest on Base! 💎🎮 Can you beat my score?"


def share_url(score: int) -> str:
    return f"{SHARE_COMPOSE_URL}?{urlencode({'text': share_text(score)})}"


def fallback_message(score: int) -> str:
    """Plain message shown when the compose link cannot be opened."""
    return f"Your score: {score} points! Share it with friends!"
