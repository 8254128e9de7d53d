# Pydantic models - request log entries and JSON response payloads

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LogEntry(CamelModel):
    """One inbound request, serialized as a single line of a daily log file"""

    timestamp: str
    method: str
    url: str
    client_address: str
    user_agent: Optional[str] = None
    body: Any = Field(default_factory=dict)

    def to_record(self) -> Dict[str, Any]:
        record = self.model_dump(by_alias=True)
        if record["userAgent"] is None:
            del record["userAgent"]
        return record


class HealthStatus(CamelModel):
    status: str = "healthy"
    timestamp: str
    uptime_seconds: float
    memory_stats: Dict[str, Any]
    environment: str


class PingResponse(CamelModel):
    message: str = "pong"
    timestamp: str
    server_address: str
    client_address: str
    user_agent: Optional[str] = None
    latency_ms: Optional[float] = None
    headers: Optional[Dict[str, str]] = None


class EndpointMap(CamelModel):
    health: str = "/health"
    ping: str = "/ping"
    detailed_ping: str = "/ping/detailed"


class ServerInfo(CamelModel):
    address: str
    port: int
    environment: str


class InfoResponse(CamelModel):
    message: str
    version: str
    endpoints: EndpointMap = Field(default_factory=EndpointMap)
    server_info: ServerInfo


class ErrorResponse(CamelModel):
    error: str
    message: str
    timestamp: str
