# Pydantic models - log entries and response payloads

from .schemas import (
    ErrorResponse,
    HealthStatus,
    InfoResponse,
    LogEntry,
    PingResponse,
)
