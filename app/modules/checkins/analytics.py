"""
Wellness trend statistics over daily check-ins.

All functions are pure: they take rows as returned by Supabase (dicts with
snake_case columns, oldest first) and never touch the database.
"""

import math
from collections import Counter
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Sequence

DEFAULT_THRESHOLD = 0.1

PERIOD_DAYS = {
    "week": 7,
    "month": 30,
    "quarter": 90,
}


def to_date(value: Any) -> date:
    """Accept a date, a datetime or an ISO string ('2025-01-31' or full timestamp)."""
    if isinstance(value, date):
        return value if type(value) is date else value.date()
    return date.fromisoformat(str(value)[:10])


def local_date(value: Any, tz: tzinfo) -> date:
    """Calendar date of a timestamp in tz. Naive timestamps are UTC, plain dates pass through."""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return value
    else:
        text = str(value)
        if len(text) <= 10:
            return date.fromisoformat(text)
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz).date()


def linear_slope(values: Sequence[float]) -> float:
    """Least-squares slope of values against their index."""
    n = len(values)
    if n < 2:
        return 0.0
    mean_x = (n - 1) / 2
    mean_y = sum(values) / n
    num = sum((i - mean_x) * (y - mean_y) for i, y in enumerate(values))
    den = sum((i - mean_x) ** 2 for i in range(n))
    if den == 0:
        return 0.0
    return num / den


def trend_direction(slope: float, threshold: float = DEFAULT_THRESHOLD) -> str:
    if slope > threshold:
        return "improving"
    if slope < -threshold:
        return "declining"
    return "stable"


def stress_direction(slope: float, threshold: float = DEFAULT_THRESHOLD) -> str:
    # Rising stress is not an improvement, so it gets its own labels
    if slope > threshold:
        return "increasing"
    if slope < -threshold:
        return "decreasing"
    return "stable"


def metric_trend(values: Sequence[float], threshold: float = DEFAULT_THRESHOLD, stress: bool = False) -> Dict[str, Any]:
    slope = linear_slope(values)
    average = sum(values) / len(values) if values else 0.0
    direction = stress_direction(slope, threshold) if stress else trend_direction(slope, threshold)
    return {
        "direction": direction,
        "slope": round(slope, 2),
        "average": round(average, 2),
    }


def mood_distribution(checkins: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    counts = Counter(c["mood"] for c in checkins if c.get("mood"))
    if not counts:
        return {"dominant": "neutral", "distribution": {}, "variety": 0}
    # most_common keeps first-seen order among equal counts
    dominant = counts.most_common(1)[0][0]
    return {
        "dominant": dominant,
        "distribution": dict(counts),
        "variety": len(counts),
    }


def pearson(xs: Sequence[Optional[float]], ys: Sequence[Optional[float]]) -> float:
    """Pearson correlation over pairs where both sides are present."""
    pairs = [(x, y) for x, y in zip(xs, ys) if x is not None and y is not None]
    n = len(pairs)
    if n < 2:
        return 0.0
    mean_x = sum(p[0] for p in pairs) / n
    mean_y = sum(p[1] for p in pairs) / n
    cov = sum((x - mean_x) * (y - mean_y) for x, y in pairs)
    var_x = sum((x - mean_x) ** 2 for x, _ in pairs)
    var_y = sum((y - mean_y) ** 2 for _, y in pairs)
    if var_x == 0 or var_y == 0:
        return 0.0
    return cov / math.sqrt(var_x * var_y)


def correlation_strength_label(strength: float) -> str:
    if strength >= 0.7:
        return "strong"
    if strength >= 0.4:
        return "moderate"
    if strength >= 0.2:
        return "weak"
    return "none"


def describe_correlation(r: float, label_a: str, label_b: str) -> Dict[str, Any]:
    strength = round(abs(r), 2)
    direction = "positive" if r >= 0 else "negative"
    band = correlation_strength_label(strength)
    if band == "none":
        interpretation = f"No clear relationship between {label_a} and {label_b} yet"
    else:
        interpretation = f"{band.capitalize()} {direction} relationship between {label_a} and {label_b}"
    return {
        "strength": strength,
        "direction": direction,
        "interpretation": interpretation,
    }


def compute_streak(dates: Iterable[Any], today: date) -> int:
    """Consecutive check-in days ending today or yesterday. Dates after today are ignored."""
    unique = sorted({d for d in map(to_date, dates) if d <= today}, reverse=True)
    if not unique:
        return 0
    if unique[0] not in (today, today - timedelta(days=1)):
        return 0
    streak = 1
    for previous, current in zip(unique, unique[1:]):
        if previous - current == timedelta(days=1):
            streak += 1
        else:
            break
    return streak


def consistency_rate(count: int, days: int) -> int:
    if days <= 0:
        return 0
    return min(100, round(count / days * 100))


def _day_summary(checkin: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not checkin:
        return None
    return {
        "date": str(checkin.get("checkin_date")),
        "mood": checkin.get("mood"),
        "energy_level": checkin.get("energy_level"),
        "sleep_quality": checkin.get("sleep_quality"),
        "stress_level": checkin.get("stress_level"),
    }


def _series(checkins: Sequence[Dict[str, Any]], key: str) -> List[float]:
    return [c[key] for c in checkins if c.get(key) is not None]


def build_trends(checkins: Sequence[Dict[str, Any]], threshold: float = DEFAULT_THRESHOLD) -> Optional[Dict[str, Any]]:
    """Full trend document for the analytics dashboard, or None without data."""
    if not checkins:
        return None
    ordered = sorted(checkins, key=lambda c: to_date(c["checkin_date"]))

    energy = [c.get("energy_level") for c in ordered]
    sleep = [c.get("sleep_quality") for c in ordered]
    stress = [c.get("stress_level") for c in ordered]

    with_energy = [c for c in ordered if c.get("energy_level") is not None]
    with_stress = [c for c in ordered if c.get("stress_level") is not None]
    best_energy = max(with_energy, key=lambda c: c["energy_level"]) if with_energy else None
    lowest_stress = min(with_stress, key=lambda c: c["stress_level"]) if with_stress else None

    return {
        "energy_trend": metric_trend(_series(ordered, "energy_level"), threshold),
        "sleep_trend": metric_trend(_series(ordered, "sleep_quality"), threshold),
        "stress_trend": metric_trend(_series(ordered, "stress_level"), threshold, stress=True),
        "mood_pattern": mood_distribution(ordered),
        "correlations": {
            "sleep_energy": describe_correlation(pearson(sleep, energy), "sleep quality", "energy"),
            "stress_energy": describe_correlation(pearson(stress, energy), "stress", "energy"),
        },
        "summary": {
            "total_days": len({to_date(c["checkin_date"]) for c in ordered}),
            "best_energy_day": _day_summary(best_energy),
            "lowest_stress_day": _day_summary(lowest_stress),
        },
    }
