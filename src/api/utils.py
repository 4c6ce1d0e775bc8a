from __future__ import annotations

from datetime import date, datetime, timezone


# PUBLIC_INTERFACE
def get_today() -> date:
    """
    Return today's calendar date in UTC.

    Used as a FastAPI dependency so each request computes 'today' exactly once
    and tests can pin it through app.dependency_overrides.
    """
    return datetime.now(timezone.utc).date()
