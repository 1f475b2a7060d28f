from __future__ import annotations

from datetime import datetime

import pytest
import pytz


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2026, 2, 4, 10, 0, 0, tzinfo=pytz.UTC)


@pytest.fixture
def make_event():
    counter = {"n": 0}

    def _make(event_type: str, timestamp, user_id: str = "u1") -> dict:
        counter["n"] += 1
        return {
            "id": str(counter["n"]),
            "user_id": user_id,
            "event_type": event_type,
            "timestamp": timestamp,
        }

    return _make
