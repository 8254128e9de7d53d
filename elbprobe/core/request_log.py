# Request logging - builds one LogEntry per request and appends it to a daily JSON-lines file

import json
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Union
from urllib.parse import parse_qs

from starlette.requests import Request

from elbprobe.models.schemas import LogEntry
from elbprobe.services.system_service import isoformat_utc

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPES = ("application/json",)
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def reject_constant(name: str):
    """NaN and Infinity are not JSON; refuse them so log lines stay valid JSON"""
    raise ValueError(f"Invalid JSON constant: {name}")


class LogSink(ABC):
    """Destination for serialized request log entries"""

    @abstractmethod
    def write(self, entry: LogEntry) -> None:
        """Persist a single entry. May raise OSError."""


class FileLogSink(LogSink):
    """
    Append-only, date-partitioned JSON-lines files.

    Each entry goes to <log_dir>/<YYYY-MM-DD>.log, where the date is the UTC
    date of the entry's timestamp. Writes are serialized by a lock and each
    line is written with one call, so concurrent requests never interleave.
    """

    def __init__(self, log_dir: Union[str, Path]):
        self.log_dir = Path(log_dir)
        self._lock = threading.Lock()

    def path_for(self, entry: LogEntry) -> Path:
        # Timestamps are UTC ISO-8601, the first 10 chars are the calendar date
        return self.log_dir / f"{entry.timestamp[:10]}.log"

    def write(self, entry: LogEntry) -> None:
        line = json.dumps(entry.to_record(), ensure_ascii=False) + "\n"
        with self._lock:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with open(self.path_for(entry), "a", encoding="utf-8") as f:
                f.write(line)


class MemoryLogSink(LogSink):
    """Keeps entries in memory, for tests"""

    def __init__(self):
        self.entries: List[LogEntry] = []
        self._lock = threading.Lock()

    def write(self, entry: LogEntry) -> None:
        with self._lock:
            self.entries.append(entry)


def parse_body(raw: bytes, content_type: Optional[str]) -> Any:
    """
    Decode a request body for logging.

    JSON and URL-encoded form bodies are parsed. Anything else, an empty body
    or a body that fails to parse yields an empty dict.
    """
    if not raw:
        return {}

    media_type = (content_type or "").split(";")[0].strip().lower()

    if media_type in JSON_CONTENT_TYPES or media_type.endswith("+json"):
        try:
            return json.loads(raw, parse_constant=reject_constant)
        except (ValueError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring malformed JSON body: {e}")
            return {}

    if media_type == FORM_CONTENT_TYPE:
        fields = parse_qs(raw.decode("utf-8", errors="replace"), keep_blank_values=True)
        return {key: values[0] if len(values) == 1 else values for key, values in fields.items()}

    return {}


def request_url(request: Request) -> str:
    """Path plus query string, as the client sent it"""
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return url


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RequestLogger:
    """Turns requests into LogEntry records and hands them to a sink"""

    def __init__(self, sink: LogSink):
        self.sink = sink

    async def build_entry(self, request: Request, received_at: datetime) -> LogEntry:
        raw = await request.body()
        return LogEntry(
            timestamp=isoformat_utc(received_at),
            method=request.method,
            url=request_url(request),
            client_address=client_address(request),
            user_agent=request.headers.get("user-agent"),
            body=parse_body(raw, request.headers.get("content-type")),
        )

    def record(self, entry: LogEntry) -> None:
        """Echo the entry to the console and persist it. Sink failures are only warned about."""
        logger.info(f"[{entry.timestamp}] {entry.method} {entry.url} - IP: {entry.client_address}")

        try:
            self.sink.write(entry)
        except OSError as e:
            logger.warning(f"Could not persist request log entry: {e}")

    async def log_request(self, request: Request, received_at: datetime) -> LogEntry:
        entry = await self.build_entry(request, received_at)
        self.record(entry)
        return entry
