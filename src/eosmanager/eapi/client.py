"""
Arista eAPI client.

Runs ordered CLI command lists against a switch in a single JSON-RPC
request. Every request carries its own credentials; there is no login step
and no retry.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
from typing import Any

import aiohttp

from eosmanager.config import ManagerConfig, SUPPORTED_PROTOCOLS
from eosmanager.eapi.parsers import SWITCH_INFO_COMMANDS
from eosmanager.exceptions import (
    RemoteCommandError,
    SwitchConnectionError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# JSON-RPC request ids used by the dashboard
CONNECT_REQUEST_ID = "EOS-API-1"
COMMAND_REQUEST_ID = "EOS-API-CMD"
INFO_REQUEST_ID = "EOS-API-INFO"

OUTPUT_FORMATS = ("json", "text")


def check_commands(commands: Any) -> list[str]:
    """Return commands as a list, or raise if it is not a non-empty list of strings.

    A bare string is rejected rather than iterated into characters.
    """
    if not isinstance(commands, (list, tuple)) or not commands:
        raise ValidationError("Commands must be a non-empty list of strings")
    if not all(isinstance(c, str) and c.strip() for c in commands):
        raise ValidationError("Commands must be a non-empty list of strings")
    return list(commands)


class EapiClient:
    """Transport handle for one switch.

    Holds the endpoint URL and credentials. When no aiohttp session is
    injected, each call opens and closes its own session.
    """

    def __init__(
        self,
        ip_address: str,
        username: str,
        password: str,
        protocol: str = "http",
        config: ManagerConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        """Initialize the client.

        Args:
            ip_address: Switch management address
            username: eAPI username
            password: eAPI password
            protocol: 'http' or 'https'
            config: Transport settings (timeout, TLS verification, API path)
            session: Optional shared aiohttp session
        """
        if protocol not in SUPPORTED_PROTOCOLS:
            raise ValidationError(f"Unsupported protocol: {protocol}")

        self.config = config or ManagerConfig()
        self.ip_address = ip_address
        self.username = username
        self.password = password
        self.protocol = protocol
        self.base_url = f"{protocol}://{ip_address}{self.config.api_path}"
        self._session = session

    def __repr__(self) -> str:
        return f"EapiClient(base_url={self.base_url!r}, username={self.username!r})"

    @property
    def auth(self) -> dict[str, str]:
        return {"username": self.username, "password": self.password}

    def build_payload(
        self,
        commands: list[str],
        fmt: str = "json",
        request_id: str = COMMAND_REQUEST_ID,
    ) -> dict[str, Any]:
        """Build the runCmds JSON-RPC body."""
        return {
            "jsonrpc": "2.0",
            "method": "runCmds",
            "params": {
                "version": 1,
                "cmds": list(commands),
                "format": fmt,
            },
            "id": request_id,
            "auth": self.auth,
        }

    def _timeout(self) -> aiohttp.ClientTimeout | None:
        if self.config.request_timeout is None:
            return None
        return aiohttp.ClientTimeout(total=self.config.request_timeout)

    async def _post(self, session: aiohttp.ClientSession, payload: dict[str, Any]) -> Any:
        kwargs: dict[str, Any] = {"json": payload}
        timeout = self._timeout()
        if timeout is not None:
            kwargs["timeout"] = timeout
        if self.protocol == "https" and not self.config.verify_ssl:
            kwargs["ssl"] = False

        async with session.post(self.base_url, **kwargs) as response:
            if response.status < 200 or response.status >= 300:
                raise SwitchConnectionError(f"HTTP error! status: {response.status}")
            return await response.json(content_type=None)

    async def _request(self, payload: dict[str, Any]) -> list[dict[str, Any]]:
        try:
            if self._session is not None:
                data = await self._post(self._session, payload)
            else:
                async with aiohttp.ClientSession() as session:
                    data = await self._post(session, payload)
        except asyncio.TimeoutError as e:
            raise SwitchConnectionError(f"Request to {self.ip_address} timed out") from e
        except aiohttp.ClientError as e:
            raise SwitchConnectionError(f"Request to {self.ip_address} failed: {e}") from e
        except ValueError as e:
            raise SwitchConnectionError(f"Malformed response from {self.ip_address}: {e}") from e

        if not isinstance(data, dict):
            raise SwitchConnectionError(f"Malformed response from {self.ip_address}")

        error = data.get("error")
        if error:
            error = error if isinstance(error, dict) else {"message": str(error)}
            partial = error.get("data")
            raise RemoteCommandError(
                f"API Error: {error.get('message', 'unknown error')}",
                code=error.get("code"),
                results=partial if isinstance(partial, list) else [],
            )

        result = data.get("result")
        if not isinstance(result, list):
            raise SwitchConnectionError(f"Malformed response from {self.ip_address}: no result")

        return result

    async def run_commands(
        self,
        commands: list[str],
        fmt: str = "json",
        request_id: str = COMMAND_REQUEST_ID,
    ) -> list[dict[str, Any]]:
        """Execute commands in order in one request.

        Args:
            commands: Non-empty ordered list of CLI commands
            fmt: 'json' for structured results, 'text' for {'output': ...}

        Returns:
            One result per command

        Raises:
            ValidationError: commands not a non-empty list of strings, or unknown format
            SwitchConnectionError: network, HTTP or decoding failure
            RemoteCommandError: the device rejected a command
        """
        commands = check_commands(commands)
        if fmt not in OUTPUT_FORMATS:
            raise ValidationError(f"Unsupported output format: {fmt}")

        logger.debug(f"Running {len(commands)} command(s) on {self.ip_address}: {commands}")
        return await self._request(self.build_payload(commands, fmt, request_id))

    async def verify(self) -> dict[str, Any]:
        """Check the endpoint and credentials with 'show version'."""
        result = await self.run_commands(["show version"], request_id=CONNECT_REQUEST_ID)
        return result[0] if result else {}

    async def get_switch_info(self) -> list[dict[str, Any]]:
        """Fetch the fixed info command bundle."""
        return await self.run_commands(SWITCH_INFO_COMMANDS, request_id=INFO_REQUEST_ID)
