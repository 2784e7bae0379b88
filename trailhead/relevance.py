"""Closure detection, alert ordering and date-window selection for park data."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional, Sequence

from trailhead.data_sources.records import Alert, Event, ForecastDay
from trailhead.domain import AlertSortKey, DateWindow

# The park overview looks two weeks ahead; the dedicated events lookup a month.
OVERVIEW_WINDOW_DAYS = 14
DEDICATED_SEARCH_WINDOW_DAYS = 30


def is_closure_relevant(alert: Alert) -> bool:
    """True when the alert title or category mentions a closure, or the title says closed."""
    title = (alert.title or "").lower()
    category = (alert.category or "").lower()
    return "closure" in title or "closure" in category or "closed" in title


def closure_alerts(alerts: Sequence[Alert]) -> List[Alert]:
    return [a for a in alerts if is_closure_relevant(a)]


def sort_alerts(alerts: Sequence[Alert], sort_by: AlertSortKey = AlertSortKey.DATE) -> List[Alert]:
    """Newest first for ``DATE`` (undated last); alphabetical for ``TITLE``/``CATEGORY``."""
    if sort_by == AlertSortKey.DATE:
        dated = [a for a in alerts if a.last_indexed_date]
        undated = [a for a in alerts if not a.last_indexed_date]
        # NPS timestamps are "YYYY-MM-DD HH:MM:SS.f", so string order is time order.
        return sorted(dated, key=lambda a: a.last_indexed_date, reverse=True) + undated
    if sort_by == AlertSortKey.TITLE:
        return sorted(alerts, key=lambda a: (a.title or "").lower())
    return sorted(alerts, key=lambda a: (a.category or "").lower())


def event_window(
    window_days: int,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> DateWindow:
    """Window ``[today, today+window_days]`` unless explicit bounds are supplied."""
    today = today or date.today()
    effective_start = start or today
    effective_end = end or (today + timedelta(days=window_days))
    return DateWindow(start_date=effective_start.isoformat(), end_date=effective_end.isoformat())


def _calendar_date(value: str) -> date:
    """First ten characters as ``YYYY-MM-DD``; providers append times sometimes."""
    return date.fromisoformat(value[:10])


def events_in_window(events: Sequence[Event], window: DateWindow) -> List[Event]:
    """Events whose run overlaps ``window``; undated events are kept.

    A recurring or multi-day event counts from ``date_start`` through
    ``date_end`` (or just its start day when it has no end).
    """
    start = _calendar_date(window.start_date)
    end = _calendar_date(window.end_date)
    kept: List[Event] = []
    for event in events:
        if not event.date_start:
            kept.append(event)
            continue
        event_start = _calendar_date(event.date_start)
        event_end = _calendar_date(event.date_end) if event.date_end else event_start
        if event_start <= end and event_end >= start:
            kept.append(event)
    return kept


def forecast_overlaps_trip(forecast: Sequence[ForecastDay], trip_start: date, trip_end: date) -> bool:
    """True when the trip shares at least one day with the forecast span."""
    if not forecast:
        return False
    first = _calendar_date(forecast[0].date)
    last = _calendar_date(forecast[-1].date)
    return trip_start <= last and trip_end >= first


def forecast_for_trip(forecast: Sequence[ForecastDay], trip_start: date, trip_end: date) -> List[ForecastDay]:
    """Forecast days falling within the trip, in forecast order."""
    return [day for day in forecast if trip_start <= _calendar_date(day.date) <= trip_end]
