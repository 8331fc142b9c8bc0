"""Google Calendar client for booking discussion meetings.

Credentials are a service-account key passed inline as JSON (the
``google-calendar-credentials`` input). The API service is built lazily on
the first insert, so malformed credentials surface as a CalendarError for
that concern rather than failing the whole run at startup.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from bikeshed_core.errors import CalendarError

logger = logging.getLogger(__name__)

CALENDAR_SCOPES = ["https://www.googleapis.com/auth/calendar"]


@dataclass(frozen=True)
class InsertedEvent:
    link: str | None
    confirmed_start: datetime | None


def _parse_start(event: dict) -> datetime | None:
    raw = (event.get("start") or {}).get("dateTime")
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable event start %r", raw)
        return None


class GoogleCalendarClient:
    def __init__(self, credentials_json: str, calendar_id: str, service: Any = None):
        self._credentials_json = credentials_json
        self.calendar_id = calendar_id
        self._service = service

    @property
    def service(self) -> Any:
        if self._service is None:
            try:
                info = json.loads(self._credentials_json)
            except (TypeError, json.JSONDecodeError) as e:
                raise CalendarError(f"google-calendar-credentials is not valid JSON: {e}") from e
            if not isinstance(info, dict):
                raise CalendarError(
                    f"google-calendar-credentials must be a JSON object, got {type(info).__name__}"
                )
            try:
                credentials = service_account.Credentials.from_service_account_info(info, scopes=CALENDAR_SCOPES)
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                raise CalendarError(f"Invalid service account credentials: {e}") from e
            self._service = build("calendar", "v3", credentials=credentials, cache_discovery=False)
        return self._service

    def insert_event(self, event: dict) -> InsertedEvent:
        """Insert ``event`` into the calendar and notify attendees.

        Every failure surfaces as a CalendarError, transport errors included.
        """
        try:
            created = (
                self.service.events()
                .insert(calendarId=self.calendar_id, body=event, sendUpdates="all")
                .execute()
            )
        except HttpError as e:
            raise CalendarError(f"Calendar API error {e.resp.status}: {e.reason}") from e
        except GoogleAuthError as e:
            raise CalendarError(f"Calendar authentication failed: {e}") from e
        except CalendarError:
            raise
        except Exception as e:
            logger.debug("Unexpected error inserting calendar event", exc_info=True)
            raise CalendarError(f"Calendar request failed: {e}") from e

        logger.debug("Created calendar event %s", created.get("id"))
        return InsertedEvent(link=created.get("htmlLink"), confirmed_start=_parse_start(created))
