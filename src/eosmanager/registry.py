"""
In-memory registry of switch sessions.

The registry is the single owner of connection state for the life of the
process. Entries are replaced whole, never mutated field by field.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable

from eosmanager.config import ManagerConfig
from eosmanager.eapi.client import EapiClient, check_commands
from eosmanager.eapi.models import SwitchSummary
from eosmanager.eapi.parsers import parse_switch_info
from eosmanager.exceptions import (
    EosManagerError,
    NotFoundError,
    SwitchConnectionError,
    first_error,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., EapiClient]


@dataclass(frozen=True)
class SwitchCredentials:
    """Connection parameters a session was created with."""

    ip_address: str
    username: str
    password: str = field(repr=False)
    protocol: str = "http"


@dataclass(frozen=True)
class SwitchSession:
    """An authenticated switch and its last-known summary."""

    switch_id: str
    client: EapiClient
    switch_data: SwitchSummary
    credentials: SwitchCredentials
    created_at: datetime = field(default_factory=datetime.now)
    refreshed_at: datetime = field(default_factory=datetime.now)


class SessionRegistry:
    """Maps switch ids to sessions and runs commands through them.

    Construct one per application and pass it to whatever composes the
    domain services.
    """

    def __init__(
        self,
        config: ManagerConfig | None = None,
        client_factory: ClientFactory | None = None,
    ):
        """Initialize the registry.

        Args:
            config: Transport settings handed to every client
            client_factory: Callable building a transport from
                (ip_address, username, password, protocol, config=...)
        """
        self.config = config or ManagerConfig()
        self._client_factory = client_factory or EapiClient
        self._sessions: dict[str, SwitchSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, switch_id: object) -> bool:
        return switch_id in self._sessions

    def switch_ids(self) -> list[str]:
        """Ids of all stored sessions, in insertion order."""
        return list(self._sessions)

    async def _fetch_summary(self, client: EapiClient) -> SwitchSummary:
        raw = await client.get_switch_info()
        return parse_switch_info(raw)

    async def create_connection(
        self,
        ip_address: str,
        username: str,
        password: str,
        protocol: str | None = None,
    ) -> SwitchSummary:
        """Connect to a switch and store its session.

        Nothing is stored unless the info fetch and parse both succeed.

        Returns:
            The parsed SwitchSummary

        Raises:
            SwitchConnectionError: the switch could not be reached, rejected
                the request, or returned unusable data
            ValidationError: unsupported protocol
        """
        protocol = protocol or self.config.default_protocol
        client = self._client_factory(
            ip_address, username, password, protocol, config=self.config
        )

        try:
            await client.verify()
            summary = await self._fetch_summary(client)
        except SwitchConnectionError as e:
            logger.error(f"Failed to connect to {ip_address}: {e}")
            raise
        except EosManagerError as e:
            logger.error(f"Failed to connect to {ip_address}: {e}")
            raise SwitchConnectionError(str(e)) from e

        if summary.id in self._sessions:
            logger.info(f"Replacing existing session for switch {summary.id}")

        self._sessions[summary.id] = SwitchSession(
            switch_id=summary.id,
            client=client,
            switch_data=summary,
            credentials=SwitchCredentials(ip_address, username, password, protocol),
        )
        logger.info(f"Connected to {summary.hostname} ({ip_address}) as {summary.id}")
        return summary

    def get_connection(self, switch_id: str) -> SwitchSession | None:
        """Get a session by switch id."""
        return self._sessions.get(switch_id)

    def _require(self, switch_id: str) -> SwitchSession:
        session = self._sessions.get(switch_id)
        if session is None:
            raise NotFoundError(switch_id)
        return session

    def get_all_switch_data(self) -> list[SwitchSummary]:
        """Snapshot of every stored summary, in insertion order."""
        return [session.switch_data for session in self._sessions.values()]

    async def refresh_switch_data(self, switch_id: str) -> SwitchSummary:
        """Re-fetch and replace the stored summary for one switch.

        Raises:
            NotFoundError: no session for switch_id
            EosManagerError: the fetch failed; the stored session is unchanged
        """
        session = self._require(switch_id)

        try:
            summary = await self._fetch_summary(session.client)
        except EosManagerError as e:
            logger.error(f"Failed to refresh switch data for {switch_id}: {e}")
            raise

        self._commit(switch_id, summary)
        return self._sessions[switch_id].switch_data

    def _commit(self, switch_id: str, summary: SwitchSummary) -> None:
        session = self._sessions.get(switch_id)
        if session is None:
            # removed while the fetch was in flight
            return
        # the id is the registry key and never changes on refresh
        summary = replace(summary, id=switch_id)
        self._sessions[switch_id] = replace(
            session, switch_data=summary, refreshed_at=datetime.now()
        )

    async def refresh_all_connections(self) -> list[SwitchSummary]:
        """Refresh every session concurrently, all or nothing.

        If any fetch fails the error is raised and no stored summary is
        replaced.
        """
        switch_ids = self.switch_ids()
        sessions = [self._sessions[switch_id] for switch_id in switch_ids]

        # Every fetch settles before an error is raised
        summaries = await asyncio.gather(
            *(self._fetch_summary(session.client) for session in sessions),
            return_exceptions=True,
        )
        error = first_error(*summaries)
        if error is not None:
            logger.error(f"Failed to refresh all connections: {error}")
            raise error

        for switch_id, summary in zip(switch_ids, summaries):
            self._commit(switch_id, summary)

        return self.get_all_switch_data()

    def remove_connection(self, switch_id: str) -> bool:
        """Remove a session. Returns True if it existed."""
        removed = self._sessions.pop(switch_id, None) is not None
        if removed:
            logger.info(f"Removed session for switch {switch_id}")
        return removed

    async def execute_commands(
        self,
        switch_id: str,
        commands: list[str],
        fmt: str = "json",
    ) -> list[dict[str, Any]]:
        """Run commands on a stored switch.

        Raises:
            NotFoundError: no session for switch_id
            ValidationError: commands is not a non-empty list of strings
            SwitchConnectionError, RemoteCommandError: from the transport
        """
        session = self._require(switch_id)
        commands = check_commands(commands)

        try:
            return await session.client.run_commands(commands, fmt=fmt)
        except EosManagerError as e:
            logger.error(f"Failed to execute commands on {switch_id}: {e}")
            raise
