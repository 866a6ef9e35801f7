"""
Mood vocabulary and the deterministic mappings built on it.

Check-ins record one of ten fine-grained moods; the UI themes itself with one
of three coarse mood types (sad / mid / amazing), each of which the user can
recolor from a fixed palette. Focus progress grows a flower through six stages.
"""

from typing import Dict, List, Optional

SAD = "sad"
MID = "mid"
AMAZING = "amazing"

MOOD_TYPES: List[Dict[str, str]] = [
    {
        "key": SAD,
        "label": "When I'm Feeling Down",
        "description": "Choose colors that feel comforting and gentle",
        "emoji": "🌧️",
        "default_color": "#1e3a8a",
    },
    {
        "key": MID,
        "label": "When I'm Doing Okay",
        "description": "Pick colors that feel balanced and neutral",
        "emoji": "⛅",
        "default_color": "#f59e0b",
    },
    {
        "key": AMAZING,
        "label": "When I'm Feeling Great",
        "description": "Select colors that energize and inspire you",
        "emoji": "☀️",
        "default_color": "#10b981",
    },
]

MOOD_TYPE_KEYS = [m["key"] for m in MOOD_TYPES]
DEFAULT_MOOD_COLORS: Dict[str, str] = {m["key"]: m["default_color"] for m in MOOD_TYPES}

COLOR_PALETTE: List[Dict[str, str]] = [
    # Calm, muted colors for Sad
    {"color": "#1f2937", "name": "Dark Gray"},
    {"color": "#374151", "name": "Cool Gray"},
    {"color": "#4b5563", "name": "Medium Gray"},
    {"color": "#1e3a8a", "name": "Deep Blue"},
    {"color": "#1e40af", "name": "Royal Blue"},
    {"color": "#2563eb", "name": "Bright Blue"},
    {"color": "#3730a3", "name": "Indigo"},
    {"color": "#5b21b6", "name": "Purple"},
    # Warm colors for Mid
    {"color": "#f59e0b", "name": "Amber"},
    {"color": "#d97706", "name": "Orange"},
    {"color": "#ea580c", "name": "Deep Orange"},
    {"color": "#dc2626", "name": "Red"},
    {"color": "#be123c", "name": "Rose"},
    {"color": "#a21caf", "name": "Fuchsia"},
    {"color": "#7c2d12", "name": "Brown"},
    {"color": "#65a30d", "name": "Lime"},
    # Bright colors for Amazing
    {"color": "#10b981", "name": "Emerald"},
    {"color": "#059669", "name": "Forest Green"},
    {"color": "#0d9488", "name": "Teal"},
    {"color": "#0891b2", "name": "Cyan"},
    {"color": "#0284c7", "name": "Sky Blue"},
    {"color": "#7c3aed", "name": "Violet"},
    {"color": "#c026d3", "name": "Magenta"},
    {"color": "#e11d48", "name": "Pink"},
    {"color": "#f97316", "name": "Bright Orange"},
    {"color": "#eab308", "name": "Yellow"},
    {"color": "#84cc16", "name": "Lime Green"},
]

PALETTE_COLORS = {c["color"] for c in COLOR_PALETTE}

# Check-in mood -> (mood type, emoji)
CHECKIN_MOODS: Dict[str, tuple] = {
    "excited": (AMAZING, "🤩"),
    "happy": (AMAZING, "😊"),
    "calm": (MID, "😌"),
    "neutral": (MID, "😐"),
    "tired": (MID, "😴"),
    "stressed": (SAD, "😣"),
    "sad": (SAD, "😢"),
    "anxious": (SAD, "😰"),
    "frustrated": (SAD, "😤"),
    "overwhelmed": (SAD, "😵"),
}

POSITIVE_MOODS = {m for m, (t, _) in CHECKIN_MOODS.items() if t == AMAZING}
NEGATIVE_MOODS = {m for m, (t, _) in CHECKIN_MOODS.items() if t == SAD}

GROWTH_STAGES = ["seed", "sprout", "small-plant", "growing", "blooming", "full-bloom"]


def mood_type(mood: Optional[str]) -> str:
    """Collapse a check-in mood (or a mood type) to sad / mid / amazing."""
    if not mood:
        return MID
    key = mood.strip().lower()
    if key in MOOD_TYPE_KEYS:
        return key
    return CHECKIN_MOODS.get(key, (MID, ""))[0]


def mood_emoji(mood: Optional[str]) -> str:
    key = (mood or "").strip().lower()
    if key in CHECKIN_MOODS:
        return CHECKIN_MOODS[key][1]
    for m in MOOD_TYPES:
        if m["key"] == key:
            return m["emoji"]
    return "🙂"


def mood_color(mood: Optional[str], custom_colors: Optional[Dict[str, str]] = None) -> str:
    """Theme color for a mood, preferring the user's own pick for its mood type."""
    kind = mood_type(mood)
    if custom_colors and custom_colors.get(kind):
        return custom_colors[kind]
    return DEFAULT_MOOD_COLORS[kind]


def growth_stage(percentage: float) -> str:
    pct = max(0.0, min(100.0, float(percentage)))
    if pct == 0:
        return "seed"
    if pct <= 25:
        return "sprout"
    if pct <= 50:
        return "small-plant"
    if pct <= 75:
        return "growing"
    if pct < 100:
        return "blooming"
    return "full-bloom"
