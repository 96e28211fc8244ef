import csv
import json
from typing import Dict, Iterable, List, Optional

from .models import Parent, ResolvedDay, YearlyStats

CSV_FIELDS = ['date', 'owner', 'holiday', 'in_service', 'track_break']


def _parent_name(owner: Parent, names: Optional[Dict[str, str]]) -> str:
    if names and owner.value in names:
        return names[owner.value]
    return owner.label


def describe_day(day: ResolvedDay, names: Optional[Dict[str, str]] = None) -> str:
    """
    Kurzbeschreibung, warum ein Tag bei einem Elternteil liegt, z. B.
      "2025-07-04: Parent A (Independence Day)"
    `names` bildet Parent-IDs auf Anzeigenamen ab ({'parentA': 'Mom'}).
    """
    who = _parent_name(day.owner, names)
    if day.is_track_break_vacation_claimed:
        reason = f"{day.track_break_name} vacation"
    elif day.is_in_service_day:
        reason = 'in-service day, attached' if day.is_in_service_attached else 'in-service day'
    elif day.is_holiday_override:
        reason = day.holiday_name
    else:
        reason = None

    text = f"{day.date.isoformat()}: {who}"
    if reason:
        text += f" ({reason})"
    elif day.is_track_break:
        text += f" [{day.track_break_name}]"
    return text


def day_row(day: ResolvedDay) -> Dict[str, str]:
    return {
        'date': day.date.isoformat(),
        'owner': day.owner.value,
        'holiday': day.holiday_name if day.is_holiday_override else '',
        'in_service': 'attached' if day.is_in_service_attached else ('yes' if day.is_in_service_day else ''),
        'track_break': day.track_break_name or '',
    }


def export_days_csv(days: Iterable[ResolvedDay], filename: str) -> int:
    """Schreibt aufgelöste Tage als CSV; Rückgabe: Anzahl Zeilen."""
    count = 0
    with open(filename, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for day in days:
            writer.writerow(day_row(day))
            count += 1
    return count


def export_stats_json(stats: YearlyStats, filename: str):
    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(stats.as_dict(), f, ensure_ascii=False, indent=2)


def stats_lines(stats: YearlyStats, names: Optional[Dict[str, str]] = None) -> List[str]:
    lines = [f"Custody {stats.year} ({stats.total_days} days)"]
    for parent in Parent:
        s = stats.for_parent(parent)
        lines.append(f"  {_parent_name(parent, names)}: {s.days} days ({s.percentage:.2f}%)")
    for m in stats.monthly_breakdown:
        lines.append(f"  {m.month:<10} A={m.parent_a_days:>2}  B={m.parent_b_days:>2}")
    return lines
