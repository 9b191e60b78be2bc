from __future__ import annotations

MOOD_COLORS: dict[str, str] = {
    "Joyful": "#fbbf24",
    "Happy": "#4ade80",
    "Neutral": "#94a3b8",
    "Sad": "#60a5fa",
    "Anxious": "#fb923c",
    "Angry": "#f87171",
    "Reflective": "#c084fc",
    "Tired": "#818cf8",
}
DEFAULT_MOOD_COLOR = "#94a3b8"
SENTINEL_COLOR = "#cbd5e1"
TAG_COLOR = "#94a3b8"
ENTITY_COLOR = "#c084fc"


def mood_color(mood: str | None) -> str:
    return MOOD_COLORS.get(mood or "", DEFAULT_MOOD_COLOR)


def category_color(value: str) -> str:
    """Stable hex color for an arbitrary label (32-bit djb-style string hash)."""
    acc = 0
    for ch in value:
        acc = (ord(ch) + (acc << 5) - acc) & 0xFFFFFFFF
    return f"#{acc & 0xFFFFFF:06X}"
