"""
Server Configuration
====================
Settings for the task service. Defaults can be overridden from the
environment, and CLI flags override the environment.

    TASKLIST_ADDR       host:port to listen on   (default 127.0.0.1:8080)
    TASKLIST_WEB_DIR    static front-end dir      (default web)
    TASKLIST_CORS       "0" / "false" disables CORS headers
    TASKLIST_LOG_LEVEL  DEBUG, INFO, WARNING, ...  (default INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_ADDR = "127.0.0.1:8080"
DEFAULT_WEB_DIR = "web"

CORS_ALLOW_METHODS = ["POST", "GET", "OPTIONS", "PUT", "DELETE"]
CORS_ALLOW_HEADERS = [
    "Accept", "Content-Type", "Content-Length", "Accept-Encoding",
    "X-CSRF-Token", "Authorization",
]


def parse_addr(addr: str) -> tuple[str, int]:
    """Split "host:port" into its parts.

    An empty host (":8080") means all interfaces.

    Raises:
        ValueError: If the port is missing or not a number in range.
    """
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"address {addr!r} is missing a port")
    if not port.isdigit() or not 0 < int(port) < 65536:
        raise ValueError(f"address {addr!r} has an invalid port")
    return host or "0.0.0.0", int(port)


def _env_flag(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


@dataclass
class ServerConfig:
    """Runtime settings for ``tasklist serve``."""

    host: str = "127.0.0.1"
    port: int = 8080
    web_dir: str = DEFAULT_WEB_DIR   # Mounted at "/" only if it exists
    cors: bool = True
    log_level: str = "INFO"

    @property
    def addr(self) -> str:
        return f"{self.host}:{self.port}"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> ServerConfig:
        """Build a config from TASKLIST_* environment variables."""
        env = os.environ if environ is None else environ
        host, port = parse_addr(env.get("TASKLIST_ADDR") or DEFAULT_ADDR)
        return cls(
            host=host,
            port=port,
            web_dir=env.get("TASKLIST_WEB_DIR") or DEFAULT_WEB_DIR,
            cors=_env_flag(env.get("TASKLIST_CORS"), True),
            log_level=(env.get("TASKLIST_LOG_LEVEL") or "INFO").upper(),
        )
