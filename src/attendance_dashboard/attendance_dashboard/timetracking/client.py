"""Client for the external time-tracking service (Clockify-compatible REST API).

The service has no "entries across all users" query, so attendance for a day
is a fan-out: list the group's members, then ask for each member's entries.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, tzinfo
from typing import Any, Optional

import requests

from ..common.datetime_utils import day_window, to_utc_iso
from ..common.validators import normalize_email
from ..core.constants import (
    DEFAULT_FANOUT_MAX_WORKERS,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TIME_TRACKING_BASE_URL,
    DEFAULT_UPSTREAM_TIMEOUT,
)
from ..core.exceptions import ConfigurationError, UpstreamError
from .model import TimeEntry, TimeTrackingUser

logger = logging.getLogger(__name__)


class TimeTrackingClient:
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_TIME_TRACKING_BASE_URL,
        session: Optional[requests.Session] = None,
        max_workers: int = DEFAULT_FANOUT_MAX_WORKERS,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
        page_size: int = DEFAULT_PAGE_SIZE,
        tz: Optional[tzinfo] = None,
    ):
        if not api_key:
            raise ConfigurationError("Missing time-tracking API key in environment variables")
        if max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")

        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._headers = {"X-Api-Key": api_key, "Content-Type": "application/json"}
        self._max_workers = int(max_workers)
        self._timeout = timeout
        self._page_size = int(page_size)
        self._tz = tz

    def _get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        url = f"{self._base_url}{endpoint}"
        try:
            response = self._session.get(url, headers=self._headers, params=params, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"Time-tracking API unreachable: {e}") from e

        if not response.ok:
            raise UpstreamError(f"Time-tracking API error: {response.status_code} {response.reason}")

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Time-tracking API returned invalid JSON for {endpoint}") from e

    def _get_paged(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            batch = self._get(endpoint, {**(params or {}), "page": page, "page-size": self._page_size})
            if not isinstance(batch, list):
                raise UpstreamError(f"Time-tracking API returned unexpected payload for {endpoint}")
            items.extend(batch)
            if len(batch) < self._page_size:
                return items
            page += 1

    def list_group_members(self, group_id: str) -> list[TimeTrackingUser]:
        return [TimeTrackingUser.from_api(u) for u in self._get_paged(f"/workspaces/{group_id}/users")]

    def list_member_entries(self, group_id: str, user_id: str, start: datetime, end: datetime) -> list[TimeEntry]:
        params = {"start": to_utc_iso(start), "end": to_utc_iso(end)}
        raw = self._get_paged(f"/workspaces/{group_id}/user/{user_id}/time-entries", params)
        try:
            return [TimeEntry.from_api(e) for e in raw]
        except (AttributeError, TypeError, ValueError) as e:
            raise UpstreamError(f"Time-tracking API returned malformed entries for user {user_id}") from e

    def _member_logged_work(self, group_id: str, member: TimeTrackingUser, start: datetime, end: datetime) -> bool:
        try:
            entries = self.list_member_entries(group_id, member.id, start, end)
        except (UpstreamError, ValueError) as e:
            logger.warning("Error fetching entries for user %s, counting as absent: %s", member.email, e)
            return False

        return any(e.start is not None and start <= e.start < end for e in entries)

    def users_with_entries_on_date(self, group_id: str, day: date) -> set[str]:
        """Normalized emails of group members with an entry starting on ``day``.

        A failure listing the members is fatal. A failure for one member only
        marks that member absent.
        """
        start, end = day_window(day, self._tz)
        members = self.list_group_members(group_id)
        members = [m for m in members if m.id and m.email]

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            flags = list(pool.map(lambda m: self._member_logged_work(group_id, m, start, end), members))

        present = {normalize_email(m.email) for m, logged in zip(members, flags) if logged}
        logger.info(
            "Group %s on %s: %d/%d members logged entries", group_id, day.isoformat(), len(present), len(members)
        )
        return present


def build_time_tracking_client(settings: Any, *, session: Optional[requests.Session] = None) -> TimeTrackingClient:
    return TimeTrackingClient(
        getattr(settings, "TIME_TRACKING_API_KEY", ""),
        base_url=getattr(settings, "TIME_TRACKING_BASE_URL", DEFAULT_TIME_TRACKING_BASE_URL),
        session=session,
        max_workers=int(getattr(settings, "FANOUT_MAX_WORKERS", DEFAULT_FANOUT_MAX_WORKERS)),
        timeout=float(getattr(settings, "UPSTREAM_TIMEOUT", DEFAULT_UPSTREAM_TIMEOUT)),
    )
