"""
Ad-hoc CLI command execution.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from typing import Any

from eosmanager.exceptions import ValidationError
from eosmanager.services.base import BaseService


class CommandService(BaseService):
    """Run raw commands typed by an operator."""

    async def execute_cli(
        self,
        switch_id: str,
        commands: str | list[str],
        fmt: str = "json",
    ) -> list[dict[str, Any]]:
        """Execute one command or a list of commands as given."""
        if not switch_id:
            raise ValidationError("No switch ID provided")
        command_list = [commands] if isinstance(commands, str) else list(commands or [])
        command_list = [c for c in command_list if c and c.strip()]
        if not command_list:
            raise ValidationError("No commands provided")

        return await self.registry.execute_commands(switch_id, command_list, fmt=fmt)

    async def execute_show_command(
        self, switch_id: str, command: str, fmt: str = "json"
    ) -> dict[str, Any]:
        """Execute a single show command and return its result."""
        if not command or not command.strip().lower().startswith("show"):
            raise ValidationError("Only show commands are allowed through this method.")

        return await self._show(switch_id, command.strip(), fmt=fmt)

    async def execute_config_commands(
        self, switch_id: str, config_commands: list[str]
    ) -> list[dict[str, Any]]:
        """Execute configuration commands inside configure/end."""
        if not isinstance(config_commands, list) or not config_commands:
            raise ValidationError(
                "Configuration commands must be provided as a non-empty array"
            )

        return await self._configure(switch_id, config_commands)
