"""
Shared plumbing for the domain services.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from typing import Any

from eosmanager.registry import SessionRegistry

logger = logging.getLogger(__name__)


def bracket_config(commands: list[str]) -> list[str]:
    """Wrap configuration commands in 'configure' ... 'end'."""
    return ["configure", *commands, "end"]


class BaseService:
    """Base class for services that run commands through the registry."""

    def __init__(self, registry: SessionRegistry):
        self.registry = registry

    async def _show(self, switch_id: str, command: str, fmt: str = "json") -> dict[str, Any]:
        """Run one show command and return its result, {} if none came back."""
        results = await self.registry.execute_commands(switch_id, [command], fmt=fmt)
        return results[0] if results else {}

    async def _show_text(self, switch_id: str, command: str) -> str:
        """Run one show command in text format and return its output."""
        result = await self._show(switch_id, command, fmt="text")
        output = result.get("output") if isinstance(result, dict) else None
        return output if isinstance(output, str) else ""

    async def _configure(self, switch_id: str, commands: list[str]) -> list[dict[str, Any]]:
        """Apply configuration commands in one configure/end request."""
        sequence = bracket_config(commands)
        logger.info(f"Applying configuration on {switch_id}: {commands}")
        return await self.registry.execute_commands(switch_id, sequence)
