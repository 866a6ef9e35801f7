"""
Platform-wide aggregations for the admin dashboard.

Weekly charts cover the last 12 weeks. Week i starts at midnight UTC,
i * 7 days before today, and is 7 days long; the newest week starts today.
"""

from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

WEEKS = 12
TOP_USERS = 10


def parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def week_windows(now: datetime, weeks: int = WEEKS) -> List[Tuple[str, datetime, datetime]]:
    """(label, start, end) oldest first; end is exclusive. Labels look like '9/16'."""
    midnight = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    windows = []
    for i in range(weeks - 1, -1, -1):
        start = midnight - timedelta(days=i * 7)
        windows.append((f"{start.month}/{start.day}", start, start + timedelta(days=7)))
    return windows


def _window_index(windows: List[Tuple[str, datetime, datetime]], moment: Optional[datetime]) -> Optional[int]:
    if moment is None:
        return None
    for i, (_, start, end) in enumerate(windows):
        if start <= moment < end:
            return i
    return None


def journal_weeks(rows: Iterable[Dict[str, Any]], now: datetime) -> List[Dict[str, Any]]:
    windows = week_windows(now)
    counts = [0] * len(windows)
    for row in rows:
        i = _window_index(windows, parse_timestamp(row.get("created_at")))
        if i is not None:
            counts[i] += 1
    return [{"week": label, "journals": counts[i]} for i, (label, _, _) in enumerate(windows)]


def meditation_weeks(rows: Iterable[Dict[str, Any]], now: datetime) -> List[Dict[str, Any]]:
    windows = week_windows(now)
    sessions = [0] * len(windows)
    minutes = [0] * len(windows)
    for row in rows:
        i = _window_index(windows, parse_timestamp(row.get("created_at")))
        if i is not None:
            sessions[i] += 1
            minutes[i] += round((row.get("duration") or 0) / 60)
    return [
        {"week": label, "sessions": sessions[i], "minutes": minutes[i]}
        for i, (label, _, _) in enumerate(windows)
    ]


def user_growth_weeks(rows: Iterable[Dict[str, Any]], now: datetime) -> List[Dict[str, Any]]:
    """New sign-ups per week with a running total over the charted weeks."""
    windows = week_windows(now)
    new_users = [0] * len(windows)
    for row in rows:
        i = _window_index(windows, parse_timestamp(row.get("created_at")))
        if i is not None:
            new_users[i] += 1
    result = []
    total = 0
    for i, (label, _, _) in enumerate(windows):
        total += new_users[i]
        result.append({"week": label, "new_users": new_users[i], "total_users": total})
    return result


def overview(
    profile_count: int,
    journal_count: int,
    meditation_count: int,
    journals: List[Dict[str, Any]],
    meditations: List[Dict[str, Any]],
    now: datetime,
) -> Dict[str, int]:
    week_ago = now - timedelta(days=7)
    active = set()
    for row in list(journals) + list(meditations):
        created = parse_timestamp(row.get("created_at"))
        if created is not None and created >= week_ago:
            active.add(row.get("user_id"))
    return {
        "total_users": profile_count,
        "total_journals": journal_count,
        "total_meditation_minutes": round(sum(m.get("duration") or 0 for m in meditations) / 60),
        "total_meditation_sessions": meditation_count,
        "active_users_last_7_days": len(active),
    }


def top_users(
    profiles: List[Dict[str, Any]],
    journals: List[Dict[str, Any]],
    meditations: List[Dict[str, Any]],
    limit: int = TOP_USERS,
) -> List[Dict[str, Any]]:
    """Most active users by journal entries plus meditation sessions."""
    journal_counts: Dict[str, int] = defaultdict(int)
    for j in journals:
        journal_counts[j.get("user_id")] += 1
    session_counts: Dict[str, int] = defaultdict(int)
    seconds: Dict[str, int] = defaultdict(int)
    for m in meditations:
        session_counts[m.get("user_id")] += 1
        seconds[m.get("user_id")] += m.get("duration") or 0

    ranked = []
    for p in profiles:
        uid = p["id"]
        ranked.append({
            "id": uid,
            "name": p.get("full_name") or p.get("email") or "Anonymous",
            "join_date": p.get("created_at"),
            "journal_entries": journal_counts[uid],
            "meditation_sessions": session_counts[uid],
            "meditation_minutes": round(seconds[uid] / 60),
            "total_activity": journal_counts[uid] + session_counts[uid],
        })
    ranked.sort(key=lambda u: u["total_activity"], reverse=True)
    return [u for u in ranked if u["total_activity"] > 0][:limit]
