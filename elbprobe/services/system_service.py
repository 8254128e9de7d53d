# System information service - clock, process uptime, memory stats, server address

import socket
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import psutil

LOOPBACK_ADDRESS = "127.0.0.1"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_utc(moment: Optional[datetime] = None) -> str:
    """
    Format a timestamp as ISO-8601 UTC with millisecond precision.

    Example: 2026-10-19T08:15:30.123Z
    """
    moment = (moment or utc_now()).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def process_uptime() -> float:
    """Seconds since the current process was started."""
    started = psutil.Process().create_time()
    return max(0.0, time.time() - started)


def memory_stats() -> Dict[str, Any]:
    """Memory usage of this process plus totals for the host."""
    process = psutil.Process()
    memory = process.memory_info()
    system = psutil.virtual_memory()

    return {
        "rss": memory.rss,
        "vms": memory.vms,
        "percent": round(process.memory_percent(), 2),
        "systemTotal": system.total,
        "systemAvailable": system.available,
    }


def server_address() -> str:
    """
    First non-loopback IPv4 address of this host.

    Falls back to the loopback address when no external interface is up.
    """
    try:
        interfaces = psutil.net_if_addrs()
    except OSError:
        return LOOPBACK_ADDRESS

    for addresses in interfaces.values():
        for address in addresses:
            if address.family == socket.AF_INET and not address.address.startswith("127."):
                return address.address

    return LOOPBACK_ADDRESS
