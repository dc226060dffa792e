"""
Time entry sources for Employee Time Report.

PURPOSE: Narrow data-source capability that yields parsed time entries.
AI CONTEXT: The only place that touches the network or reads input files.

IMPLEMENTATIONS:
- HttpTimeEntrySource: GET the configured endpoint (requests)
- JsonFileTimeEntrySource: Read the same JSON array from a local file

ERROR MAPPING:
- Transport error, timeout, non-2xx status -> FetchError
- Missing/unreadable input file            -> FetchError
- Body is not JSON / not a list of entries -> DeserializationError

USAGE:
    source = HttpTimeEntrySource(Config.API_URL)
    entries = source.fetch_entries()
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Protocol

import requests

from .config import Config
from .errors import DeserializationError, FetchError
from .filesystem import RealFileSystem
from .models import TimeEntry, parse_time_entries

if TYPE_CHECKING:
    from .filesystem import FileSystem

__all__ = [
    "TimeEntrySource",
    "HttpTimeEntrySource",
    "JsonFileTimeEntrySource",
]

logger = logging.getLogger(__name__)


class TimeEntrySource(Protocol):
    """Protocol for anything that can supply the raw time entries of a run."""

    def fetch_entries(self) -> list[TimeEntry]:
        """
        Retrieve all time entries.

        Returns:
            List of TimeEntry in source order.

        Raises:
            FetchError: If the entries cannot be retrieved.
            DeserializationError: If the data has the wrong shape.
        """
        ...

    def describe(self) -> str:
        """Short human-readable name of the source for log messages."""
        ...


class HttpTimeEntrySource:
    """
    Time entries from the HTTP endpoint.

    Performs a single GET per fetch_entries() call. No retries: a failed
    request aborts the report run.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize the source with endpoint settings.

        Args:
            url: Endpoint returning a JSON array of time entries.
                Default: Config.API_URL.
            timeout: Request timeout in seconds.
                Default: Config.REQUEST_TIMEOUT_SECONDS.
            session: Optional requests.Session for connection reuse or
                testing. Default: module-level requests.get.

        Example:
            >>> source = HttpTimeEntrySource()
            >>> source.describe()
            'https://rc-vault-fap-live-1.azurewebsites.net/api/gettimeentries'
        """
        self.url = url or Config.API_URL
        self.timeout = timeout or Config.REQUEST_TIMEOUT_SECONDS
        self._session = session

    def describe(self) -> str:
        """Endpoint URL without its query string, so the access code is not logged."""
        return self.url.split("?", 1)[0]

    def _get(self) -> requests.Response:
        getter = self._session.get if self._session is not None else requests.get
        return getter(
            self.url,
            headers={
                "Accept": "application/json",
                "User-Agent": Config.USER_AGENT,
            },
            timeout=self.timeout,
        )

    def fetch_entries(self) -> list[TimeEntry]:
        """
        GET the endpoint and parse the JSON array.

        Business context: The endpoint is the system of record for
        employee time. Any failure here must stop the run before a
        partial or empty report overwrites the previous one.

        Returns:
            List of TimeEntry in response order.

        Raises:
            FetchError: On connection errors, timeouts or a non-2xx status.
            DeserializationError: If the body is not a JSON array of
                time entry objects.
        """
        try:
            response = self._get()
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Error fetching time entries from {self.describe()}: {e}")
            raise FetchError(f"GET {self.describe()}: {e}") from e

        try:
            payload: Any = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {self.describe()}: {e}")
            raise DeserializationError(f"Response is not valid JSON: {e}") from e

        entries = parse_time_entries(payload)
        logger.info(f"Fetched {len(entries)} time entries from {self.describe()}")
        return entries


class JsonFileTimeEntrySource:
    """
    Time entries from a local JSON file with the endpoint's shape.

    Business context: Lets a report be regenerated from a saved
    response, e.g. when the endpoint is unreachable or for audits.
    """

    def __init__(self, path: str, filesystem: FileSystem | None = None) -> None:
        """
        Initialize the source with a file path.

        Args:
            path: Path to a JSON file containing an array of time entries.
            filesystem: FileSystem implementation. Default: RealFileSystem
        """
        self.path = path
        self._fs: FileSystem = filesystem or RealFileSystem()

    def describe(self) -> str:
        return self.path

    def fetch_entries(self) -> list[TimeEntry]:
        """
        Read and parse the JSON file.

        Returns:
            List of TimeEntry in file order.

        Raises:
            FetchError: If the file cannot be read.
            DeserializationError: If the content is not a JSON array of
                time entry objects.
        """
        try:
            content = self._fs.read_text(self.path)
        except OSError as e:
            logger.error(f"Error reading {self.path}: {e}")
            raise FetchError(f"Cannot read {self.path}: {e}") from e

        try:
            payload = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {self.path}: {e}")
            raise DeserializationError(f"{self.path} is not valid JSON: {e}") from e

        entries = parse_time_entries(payload)
        logger.info(f"Loaded {len(entries)} time entries from {self.path}")
        return entries
