from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Iterable, Union

from ..common.datetime_utils import TimezoneLike, local_date, parse_timestamp
from ..core.enums import DiagnosticCode, EventType
from .model import AttendanceEvent, Diagnostic

logger = logging.getLogger(__name__)

RawEvent = Union[AttendanceEvent, Mapping]


class InvalidEventField(ValueError):
    def __init__(self, code: DiagnosticCode, field_name: str, value):
        super().__init__(f"invalid {field_name} {value!r}")
        self.code = code
        self.field_name = field_name
        self.value = value


def _field(raw: RawEvent, *names: str):
    for name in names:
        if isinstance(raw, Mapping):
            if name in raw:
                return raw[name]
        elif hasattr(raw, name):
            return getattr(raw, name)
    return None


def to_event(raw: RawEvent) -> AttendanceEvent:
    """Build a validated event from a record or an existing event."""
    event_id = _field(raw, "id")
    raw_type = _field(raw, "event_type", "eventType")
    try:
        event_type = EventType(raw_type)
    except ValueError:
        raise InvalidEventField(DiagnosticCode.UNKNOWN_EVENT_TYPE, "event_type", raw_type)

    raw_timestamp = _field(raw, "timestamp")
    try:
        timestamp = parse_timestamp(raw_timestamp)
    except (TypeError, ValueError):
        raise InvalidEventField(DiagnosticCode.MALFORMED_TIMESTAMP, "timestamp", raw_timestamp)

    return AttendanceEvent(
        id=str(event_id) if event_id is not None else "",
        user_id=str(_field(raw, "user_id", "userId") or ""),
        event_type=event_type,
        timestamp=timestamp,
    )


def normalize_events(raw_events: Iterable[RawEvent]) -> tuple[list[AttendanceEvent], list[Diagnostic]]:
    """Validate and chronologically sort raw event records.

    Records with an unparseable/missing timestamp or an unknown event type are
    skipped and reported as diagnostics. The sort is stable, so events sharing
    a timestamp keep the order the event source gave them.
    """
    events: list[AttendanceEvent] = []
    diagnostics: list[Diagnostic] = []

    for raw in raw_events:
        try:
            events.append(to_event(raw))
        except InvalidEventField as e:
            event_id = _field(raw, "id")
            event_id = str(event_id) if event_id is not None else None
            message = f"Skipped event {event_id}: {e}"
            logger.warning(message)
            diagnostics.append(Diagnostic(code=e.code, message=message, event_id=event_id))

    events.sort(key=lambda e: e.timestamp)
    return events, diagnostics


def events_on_day(events: Iterable[AttendanceEvent], day: date, tz: TimezoneLike) -> list[AttendanceEvent]:
    """Events whose wall-clock date in ``tz`` is ``day``."""
    return [e for e in events if local_date(e.timestamp, tz) == day]
