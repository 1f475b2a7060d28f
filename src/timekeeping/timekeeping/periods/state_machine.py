"""Punch-event state machine.

``transition(state, event)`` is pure: it returns the next state together with
any interval the event closed. States are OFF, ACTIVE and ON_BREAK.

    OFF      + signin       -> ACTIVE    open active interval
    ACTIVE   + signout      -> OFF       close active interval
    ACTIVE   + break_start  -> ON_BREAK  close active, open break
    ON_BREAK + break_end    -> ACTIVE    close break, open active
    ON_BREAK + signout      -> OFF       close break
    ON_BREAK + signin       -> ACTIVE    close break, open active (anomaly)
    ACTIVE   + signin       -> ACTIVE    ignored (double sign-in)
    OFF      + signout      -> OFF       zero-length orphan entry
    everything else         -> unchanged, reported as an anomaly
"""

from __future__ import annotations

from typing import Callable, Optional

from ..core.enums import ActivityState, DiagnosticCode, EventType
from ..events.model import AttendanceEvent, Diagnostic
from .model import PeriodState, TimeInterval, Transition


def _anomaly(code: DiagnosticCode, event: AttendanceEvent, message: str) -> Diagnostic:
    return Diagnostic(code=code, message=f"{message} at {event.timestamp.isoformat()}", event_id=event.id or None)


def _closed(state: PeriodState, event: AttendanceEvent) -> TimeInterval:
    return TimeInterval(start=state.since, end=max(state.since, event.timestamp))


def _sign_in(state: PeriodState, event: AttendanceEvent) -> Transition:
    return Transition(state=PeriodState.active(event.timestamp))


def _double_sign_in(state: PeriodState, event: AttendanceEvent) -> Transition:
    return Transition(
        state=state,
        anomaly=_anomaly(DiagnosticCode.DOUBLE_SIGNIN, event, "Sign-in while already signed in"),
    )


def _sign_out_active(state: PeriodState, event: AttendanceEvent) -> Transition:
    return Transition(state=PeriodState.off(), active=_closed(state, event))


def _sign_out_break(state: PeriodState, event: AttendanceEvent) -> Transition:
    return Transition(state=PeriodState.off(), break_=_closed(state, event))


def _orphan_sign_out(state: PeriodState, event: AttendanceEvent) -> Transition:
    return Transition(
        state=state,
        orphan=TimeInterval(start=event.timestamp, end=event.timestamp),
        anomaly=_anomaly(DiagnosticCode.ORPHAN_SIGNOUT, event, "Sign-out without an open interval"),
    )


def _start_break(state: PeriodState, event: AttendanceEvent) -> Transition:
    return Transition(state=PeriodState.on_break(event.timestamp), active=_closed(state, event))


def _end_break(state: PeriodState, event: AttendanceEvent) -> Transition:
    return Transition(state=PeriodState.active(event.timestamp), break_=_closed(state, event))


def _sign_in_during_break(state: PeriodState, event: AttendanceEvent) -> Transition:
    return Transition(
        state=PeriodState.active(event.timestamp),
        break_=_closed(state, event),
        anomaly=_anomaly(DiagnosticCode.SIGNIN_DURING_BREAK, event, "Sign-in while on break; break closed"),
    )


def _ignored(code: DiagnosticCode, message: str) -> Callable[[PeriodState, AttendanceEvent], Transition]:
    def handler(state: PeriodState, event: AttendanceEvent) -> Transition:
        return Transition(state=state, anomaly=_anomaly(code, event, message))

    return handler


_TRANSITIONS: dict[tuple[ActivityState, EventType], Callable[[PeriodState, AttendanceEvent], Transition]] = {
    (ActivityState.OFF, EventType.SIGNIN): _sign_in,
    (ActivityState.OFF, EventType.SIGNOUT): _orphan_sign_out,
    (ActivityState.OFF, EventType.BREAK_START): _ignored(
        DiagnosticCode.ORPHAN_BREAK_START, "Break start while signed out"
    ),
    (ActivityState.OFF, EventType.BREAK_END): _ignored(
        DiagnosticCode.ORPHAN_BREAK_END, "Break end without an open break"
    ),
    (ActivityState.ACTIVE, EventType.SIGNIN): _double_sign_in,
    (ActivityState.ACTIVE, EventType.SIGNOUT): _sign_out_active,
    (ActivityState.ACTIVE, EventType.BREAK_START): _start_break,
    (ActivityState.ACTIVE, EventType.BREAK_END): _ignored(
        DiagnosticCode.ORPHAN_BREAK_END, "Break end without an open break"
    ),
    (ActivityState.ON_BREAK, EventType.SIGNIN): _sign_in_during_break,
    (ActivityState.ON_BREAK, EventType.SIGNOUT): _sign_out_break,
    (ActivityState.ON_BREAK, EventType.BREAK_START): _ignored(
        DiagnosticCode.DOUBLE_BREAK_START, "Break start while already on break"
    ),
    (ActivityState.ON_BREAK, EventType.BREAK_END): _end_break,
}


def transition(state: PeriodState, event: AttendanceEvent) -> Transition:
    return _TRANSITIONS[(state.activity, event.event_type)](state, event)


def close_open(state: PeriodState, now) -> tuple[Optional[TimeInterval], Optional[TimeInterval]]:
    """Close whatever is still open at ``now``; returns ``(active, break)``."""
    if state.since is None or state.activity == ActivityState.OFF:
        return None, None

    interval = TimeInterval(start=state.since, end=max(state.since, now))
    if state.activity == ActivityState.ACTIVE:
        return interval, None
    return None, interval
