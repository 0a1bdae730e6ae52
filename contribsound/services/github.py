# contribsound/services/github.py
from __future__ import annotations

import logging
import urllib.error
import urllib.request
from datetime import date, datetime, time, timezone
from typing import Any, List, Optional, Protocol

import orjson

from contribsound.core.config import Settings, settings as default_settings
from contribsound.core.errors import DataFetchError, UserNotFoundError
from contribsound.models.day import DayRecord
from contribsound.services.calendar import flatten_calendar

logger = logging.getLogger("contribsound.github")

CALENDAR_QUERY = """
query ($username: String!, $from: DateTime, $to: DateTime) {
  user(login: $username) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""

CREATED_AT_QUERY = """
query ($username: String!) {
  user(login: $username) {
    createdAt
  }
}
"""


class ContributionSource(Protocol):
    def fetch_days(
        self,
        username: str,
        since: Optional[date] = None,
        until: Optional[date] = None,
    ) -> List[DayRecord]: ...

    def created_at(self, username: str) -> datetime: ...


def _iso_start(d: Optional[date]) -> Optional[str]:
    if d is None:
        return None
    return datetime.combine(d, time.min, tzinfo=timezone.utc).isoformat()


def _iso_end(d: Optional[date]) -> Optional[str]:
    if d is None:
        return None
    return datetime.combine(d, time(23, 59, 59), tzinfo=timezone.utc).isoformat()


class GitHubContributionSource:
    """
    Thin GraphQL client for the contribution calendar.
    Every transport/decode problem surfaces as DataFetchError.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.settings = config or default_settings

    def fetch_days(
        self,
        username: str,
        since: Optional[date] = None,
        until: Optional[date] = None,
    ) -> List[DayRecord]:
        variables = {"username": username, "from": _iso_start(since), "to": _iso_end(until)}
        user = self._user(CALENDAR_QUERY, variables, username)
        try:
            weeks = user["contributionsCollection"]["contributionCalendar"]["weeks"]
        except (KeyError, TypeError) as e:
            raise DataFetchError(f"Unexpected contribution payload for '{username}'") from e

        days = flatten_calendar(weeks)
        logger.info(f"📥 GitHub calendar: user='{username}' days={len(days)}")
        return days

    def created_at(self, username: str) -> datetime:
        user = self._user(CREATED_AT_QUERY, {"username": username}, username)
        raw = user.get("createdAt")
        try:
            return datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
        except ValueError as e:
            raise DataFetchError(f"Unexpected createdAt for '{username}': {raw!r}") from e

    # -------------------------------------------------------------------------

    def _user(self, query: str, variables: dict, username: str) -> dict:
        data = self._post(query, variables)
        user = (data.get("data") or {}).get("user")
        if user is None:
            raise UserNotFoundError(f"GitHub user not found: {username}")
        return user

    def _post(self, query: str, variables: dict) -> dict:
        self.settings.validate_github_or_raise()

        req = urllib.request.Request(
            self.settings.github_graphql_url,
            data=orjson.dumps({"query": query, "variables": variables}),
            method="POST",
            headers={
                "Authorization": f"bearer {self.settings.github_token}",
                "Content-Type": "application/json",
                "User-Agent": self.settings.github_user_agent,
            },
        )

        try:
            with urllib.request.urlopen(req, timeout=self.settings.http_timeout_sec) as resp:
                body = resp.read()
        except urllib.error.HTTPError as e:
            raise DataFetchError(f"GitHub GraphQL returned HTTP {e.code}") from e
        except (urllib.error.URLError, TimeoutError) as e:
            raise DataFetchError(f"GitHub GraphQL unreachable: {e}") from e

        try:
            payload: Any = orjson.loads(body)
        except orjson.JSONDecodeError as e:
            raise DataFetchError("GitHub GraphQL returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise DataFetchError("GitHub GraphQL returned a non-object payload")

        errors = payload.get("errors")
        if errors:
            if any(err.get("type") == "NOT_FOUND" for err in errors if isinstance(err, dict)):
                raise UserNotFoundError(f"GitHub user not found: {variables.get('username')}")
            messages = "; ".join(str(err.get("message", err)) for err in errors if isinstance(err, dict))
            raise DataFetchError(f"GitHub GraphQL error: {messages or errors}")
        return payload
