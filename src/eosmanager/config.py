"""
Runtime configuration for eosmanager.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any

from rich.logging import RichHandler

SUPPORTED_PROTOCOLS = ("http", "https")


@dataclass
class ManagerConfig:
    """Configuration for switch sessions and the HTTP API."""

    # eAPI transport
    default_protocol: str = "http"
    api_path: str = "/command-api"
    request_timeout: float | None = None  # None keeps the aiohttp default
    verify_ssl: bool = False  # switches usually ship self-signed certificates

    # HTTP API server
    server_host: str = "127.0.0.1"
    server_port: int = 5000

    # Logging
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "ManagerConfig":
        """Load configuration from environment variables."""
        timeout_str = os.environ.get("EOSMANAGER_REQUEST_TIMEOUT")

        return cls(
            default_protocol=os.environ.get("EOSMANAGER_PROTOCOL", "http").lower(),
            api_path=os.environ.get("EOSMANAGER_API_PATH", "/command-api"),
            request_timeout=float(timeout_str) if timeout_str else None,
            verify_ssl=os.environ.get("EOSMANAGER_VERIFY_SSL", "").lower() in ("true", "yes", "1"),
            server_host=os.environ.get("EOSMANAGER_HOST", "127.0.0.1"),
            server_port=int(os.environ.get("EOSMANAGER_PORT", "5000")),
            log_level=os.environ.get("EOSMANAGER_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if self.default_protocol not in SUPPORTED_PROTOCOLS:
            errors.append(f"Unsupported protocol: {self.default_protocol}")
        if not self.api_path.startswith("/"):
            errors.append("API path must start with '/'")
        if self.request_timeout is not None and self.request_timeout <= 0:
            errors.append("Request timeout must be positive")
        if not 0 < self.server_port < 65536:
            errors.append(f"Invalid server port: {self.server_port}")
        if self.log_level not in logging.getLevelNamesMapping():
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "default_protocol": self.default_protocol,
            "api_path": self.api_path,
            "request_timeout": self.request_timeout,
            "verify_ssl": self.verify_ssl,
            "server_host": self.server_host,
            "server_port": self.server_port,
            "log_level": self.log_level,
        }


def setup_logging(level: str = "WARNING") -> None:
    """Route log records through rich for console output."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
