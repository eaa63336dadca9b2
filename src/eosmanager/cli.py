"""
eosmanager CLI - Main entry point for the command-line interface.

Every command opens a fresh session against the switch given by --host,
runs, and exits. Use `eosmanager serve` for a long-lived registry.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import json
import sys
from typing import Any, Awaitable, Callable

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from eosmanager import __version__
from eosmanager.config import SUPPORTED_PROTOCOLS, ManagerConfig, setup_logging
from eosmanager.exceptions import EosManagerError, RemoteCommandError
from eosmanager.registry import SessionRegistry
from eosmanager.services import CommandService, InterfaceService, RoutingService, VlanService
from eosmanager.topology import TopologyBuilder

console = Console()

SessionAction = Callable[[SessionRegistry, str], Awaitable[Any]]


_CONNECTION_OPTIONS = [
    click.option("--host", "-H", required=True, help="Switch management IP address"),
    click.option("--username", "-u", envvar="EOSMANAGER_USERNAME", required=True,
                 help="eAPI username"),
    click.option("--password", "-p", envvar="EOSMANAGER_PASSWORD", default="",
                 help="eAPI password"),
    click.option("--protocol", type=click.Choice(SUPPORTED_PROTOCOLS), default=None,
                 help="eAPI protocol (default from EOSMANAGER_PROTOCOL)"),
]


def connection_options(f):
    """Options shared by every command that talks to one switch."""
    for option in reversed(_CONNECTION_OPTIONS):
        f = option(f)
    return f


def _fail(e: EosManagerError) -> None:
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    if isinstance(e, RemoteCommandError) and e.code is not None:
        console.print(f"[red]Error code: {e.code}[/red]")
    sys.exit(1)


def _registry(ctx: click.Context) -> SessionRegistry:
    factory = ctx.obj.get("registry_factory") or SessionRegistry
    return factory(ctx.obj["config"])


def run_on_switch(
    ctx: click.Context,
    host: str,
    username: str,
    password: str,
    protocol: str | None,
    action: SessionAction,
) -> Any:
    """Connect to a switch, run an action against it, report errors."""

    async def _run():
        registry = _registry(ctx)
        summary = await registry.create_connection(host, username, password, protocol)
        return await action(registry, summary.id)

    try:
        return asyncio.run(_run())
    except EosManagerError as e:
        _fail(e)


def _print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


def _print_results(results: list[dict[str, Any]], json_output: bool) -> None:
    if json_output:
        _print_json(results)
        return
    for index, result in enumerate(results):
        output = result.get("output") if isinstance(result, dict) else None
        if isinstance(output, str):
            if output.strip():
                console.print(output.rstrip(), markup=False, highlight=False)
            else:
                console.print(f"[dim]({index}) no output[/dim]")
        elif result:
            console.print_json(json.dumps(result, default=str))
    console.print("[green]Done[/green]")


@click.group()
@click.version_option(version=__version__, prog_name="eosmanager")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """eosmanager - Arista EOS switch management over eAPI

    Inspect and configure interfaces, VLANs, static routes and BGP, run
    ad-hoc commands, and map LLDP topology.
    """
    ctx.ensure_object(dict)
    config = ctx.obj.setdefault("config", ManagerConfig.from_env())
    setup_logging("DEBUG" if verbose else config.log_level)
    ctx.obj["console"] = console


# =============================================================================
# Switch info
# =============================================================================

@main.command("info")
@connection_options
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def info_cmd(ctx, host, username, password, protocol, json_output):
    """Show the switch summary.

    Examples:
        eosmanager info --host 10.0.0.1 -u admin -p admin
    """
    async def action(registry, switch_id):
        return registry.get_connection(switch_id).switch_data

    summary = run_on_switch(ctx, host, username, password, protocol, action)

    if json_output:
        _print_json(summary.to_dict())
        return

    lines = [
        f"[bold]Hostname:[/bold] {summary.hostname}",
        f"[bold]Model:[/bold] {summary.model}",
        f"[bold]Version:[/bold] {summary.version or '-'}",
        f"[bold]Serial:[/bold] {summary.serial_number or '-'}",
        f"[bold]System MAC:[/bold] {summary.system_mac_address or '-'}",
        f"[bold]Uptime:[/bold] {summary.uptime}",
        f"[bold]CPU:[/bold] {summary.cpu_usage}%",
        f"[bold]Memory:[/bold] {summary.memory_usage}%",
        f"[bold]Temperature:[/bold] {summary.temperature}°C",
        f"[bold]Interfaces:[/bold] {summary.active_interfaces}/{summary.total_interfaces} connected",
    ]
    console.print(Panel("\n".join(lines), title=f"{summary.hostname} ({summary.ip_address})"))


# =============================================================================
# Interfaces
# =============================================================================

@main.command("interfaces")
@connection_options
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def interfaces_cmd(ctx, host, username, password, protocol, json_output):
    """List interfaces with status, mode and addressing."""
    async def action(registry, switch_id):
        return await InterfaceService(registry).get_interface_details(switch_id)

    records = run_on_switch(ctx, host, username, password, protocol, action)

    if json_output:
        _print_json([r.to_dict() for r in records])
        return

    table = Table(title="Interfaces", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    table.add_column("Mode")
    table.add_column("VLAN")
    table.add_column("IP Address")
    table.add_column("Description")

    for record in records:
        status_style = "green" if record.status == "up" else "red"
        address = f"{record.ip_address}/{record.ip_prefix_length}" if record.ip_address else "-"
        table.add_row(
            record.name,
            f"[{status_style}]{record.status}[/{status_style}]",
            record.mode.value,
            str(record.vlan) if record.vlan else "-",
            address,
            record.description or "-",
        )

    console.print(table)


# =============================================================================
# VLANs
# =============================================================================

@main.group()
def vlans():
    """VLAN management."""
    pass


@vlans.command("list")
@connection_options
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def vlans_list(ctx, host, username, password, protocol, json_output):
    """List VLANs and their member interfaces."""
    async def action(registry, switch_id):
        return await VlanService(registry).get_vlans(switch_id)

    records = run_on_switch(ctx, host, username, password, protocol, action)

    if json_output:
        _print_json([v.to_dict() for v in records])
        return

    table = Table(title="VLANs", show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Interfaces")

    for vlan in records:
        table.add_row(str(vlan.id), vlan.name, vlan.status, ", ".join(vlan.interfaces) or "-")

    console.print(table)


@vlans.command("create")
@connection_options
@click.argument("vlan_id", type=int)
@click.option("--name", default="", help="VLAN name")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def vlans_create(ctx, host, username, password, protocol, vlan_id, name, json_output):
    """Create a VLAN.

    Examples:
        eosmanager vlans create 100 --name users --host 10.0.0.1 -u admin
    """
    async def action(registry, switch_id):
        return await VlanService(registry).create_vlan(switch_id, vlan_id, name)

    _print_results(run_on_switch(ctx, host, username, password, protocol, action), json_output)


@vlans.command("delete")
@connection_options
@click.argument("vlan_id", type=int)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def vlans_delete(ctx, host, username, password, protocol, vlan_id, json_output):
    """Delete a VLAN."""
    async def action(registry, switch_id):
        return await VlanService(registry).delete_vlan(switch_id, vlan_id)

    _print_results(run_on_switch(ctx, host, username, password, protocol, action), json_output)


@vlans.command("rename")
@connection_options
@click.argument("vlan_id", type=int)
@click.argument("name")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def vlans_rename(ctx, host, username, password, protocol, vlan_id, name, json_output):
    """Rename a VLAN. An empty NAME clears it."""
    async def action(registry, switch_id):
        return await VlanService(registry).rename_vlan(switch_id, vlan_id, name)

    _print_results(run_on_switch(ctx, host, username, password, protocol, action), json_output)


# =============================================================================
# Static routes
# =============================================================================

@main.group()
def routes():
    """Static route management."""
    pass


@routes.command("list")
@connection_options
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def routes_list(ctx, host, username, password, protocol, json_output):
    """List static routes."""
    async def action(registry, switch_id):
        return await RoutingService(registry).get_static_routes(switch_id)

    records = run_on_switch(ctx, host, username, password, protocol, action)

    if json_output:
        _print_json([r.to_dict() for r in records])
        return

    table = Table(title="Static Routes", show_header=True)
    table.add_column("Prefix", style="cyan")
    table.add_column("Next Hop")
    table.add_column("Distance", justify="right")
    table.add_column("Metric", justify="right")

    for route in records:
        table.add_row(route.prefix, route.next_hop, str(route.admin_distance), str(route.metric))

    console.print(table)


@routes.command("add")
@connection_options
@click.argument("prefix")
@click.argument("next_hop")
@click.option("--distance", "admin_distance", type=int, default=1, help="Administrative distance")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def routes_add(ctx, host, username, password, protocol, prefix, next_hop, admin_distance,
               json_output):
    """Add a static route.

    Examples:
        eosmanager routes add 10.1.0.0/24 192.168.1.1 --host 10.0.0.1 -u admin
    """
    async def action(registry, switch_id):
        return await RoutingService(registry).add_static_route(
            switch_id, prefix, next_hop, admin_distance
        )

    _print_results(run_on_switch(ctx, host, username, password, protocol, action), json_output)


@routes.command("delete")
@connection_options
@click.argument("prefix")
@click.argument("next_hop")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def routes_delete(ctx, host, username, password, protocol, prefix, next_hop, json_output):
    """Delete a static route."""
    async def action(registry, switch_id):
        return await RoutingService(registry).delete_static_route(switch_id, prefix, next_hop)

    _print_results(run_on_switch(ctx, host, username, password, protocol, action), json_output)


# =============================================================================
# BGP
# =============================================================================

@main.group()
def bgp():
    """BGP configuration."""
    pass


@bgp.command("show")
@connection_options
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def bgp_show(ctx, host, username, password, protocol, json_output):
    """Show the BGP process and its neighbors."""
    async def action(registry, switch_id):
        return await RoutingService(registry).get_bgp_config(switch_id)

    config = run_on_switch(ctx, host, username, password, protocol, action)

    if json_output:
        _print_json(config.to_dict())
        return

    if not config.enabled:
        console.print("[yellow]BGP is not enabled[/yellow]")
        return

    console.print(f"[bold]Local AS:[/bold] {config.asn}")
    console.print(f"[bold]Router ID:[/bold] {config.router_id or '-'}")

    if not config.neighbors:
        console.print("[dim]No neighbors configured[/dim]")
        return

    table = Table(title="BGP Neighbors", show_header=True)
    table.add_column("Neighbor", style="cyan")
    table.add_column("Remote AS", justify="right")
    table.add_column("State")
    table.add_column("Up/Down")
    table.add_column("Pfx Rcvd", justify="right")
    table.add_column("Pfx Sent", justify="right")

    for neighbor in config.neighbors:
        state_style = "green" if neighbor.state == "Established" else "yellow"
        table.add_row(
            neighbor.ip,
            str(neighbor.remote_asn) if neighbor.remote_asn is not None else "-",
            f"[{state_style}]{neighbor.state}[/{state_style}]",
            neighbor.uptime,
            str(neighbor.prefixes_received),
            str(neighbor.prefixes_sent),
        )

    console.print(table)


@bgp.command("configure")
@connection_options
@click.argument("asn", type=int)
@click.option("--router-id", default=None, help="BGP router ID")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def bgp_configure(ctx, host, username, password, protocol, asn, router_id, json_output):
    """Enable BGP with a local AS number."""
    async def action(registry, switch_id):
        return await RoutingService(registry).configure_bgp(switch_id, asn, router_id)

    _print_results(run_on_switch(ctx, host, username, password, protocol, action), json_output)


@bgp.command("add-neighbor")
@connection_options
@click.argument("asn", type=int)
@click.argument("neighbor_ip")
@click.argument("remote_asn", type=int)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def bgp_add_neighbor(ctx, host, username, password, protocol, asn, neighbor_ip, remote_asn,
                     json_output):
    """Add a BGP neighbor.

    Examples:
        eosmanager bgp add-neighbor 65001 192.168.1.2 65002 --host 10.0.0.1 -u admin
    """
    async def action(registry, switch_id):
        return await RoutingService(registry).add_bgp_neighbor(
            switch_id, asn, neighbor_ip, remote_asn
        )

    _print_results(run_on_switch(ctx, host, username, password, protocol, action), json_output)


@bgp.command("remove-neighbor")
@connection_options
@click.argument("asn", type=int)
@click.argument("neighbor_ip")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def bgp_remove_neighbor(ctx, host, username, password, protocol, asn, neighbor_ip, json_output):
    """Remove a BGP neighbor."""
    async def action(registry, switch_id):
        return await RoutingService(registry).remove_bgp_neighbor(switch_id, asn, neighbor_ip)

    _print_results(run_on_switch(ctx, host, username, password, protocol, action), json_output)


# =============================================================================
# Ad-hoc commands
# =============================================================================

@main.command("run")
@connection_options
@click.argument("commands", nargs=-1, required=True)
@click.option("--config", "config_mode", is_flag=True,
              help="Wrap the commands in configure/end")
@click.option("--text", "text_format", is_flag=True, help="Request text output")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def run_cmd(ctx, host, username, password, protocol, commands, config_mode, text_format,
            json_output):
    """Run one or more commands as given.

    Examples:
        eosmanager run "show version" --host 10.0.0.1 -u admin
        eosmanager run --text "show ip route" --host 10.0.0.1 -u admin
        eosmanager run --config "interface Ethernet1" "shutdown" --host 10.0.0.1 -u admin
    """
    async def action(registry, switch_id):
        service = CommandService(registry)
        if config_mode:
            return await service.execute_config_commands(switch_id, list(commands))
        return await service.execute_cli(
            switch_id, list(commands), fmt="text" if text_format else "json"
        )

    _print_results(run_on_switch(ctx, host, username, password, protocol, action), json_output)


# =============================================================================
# Topology
# =============================================================================

@main.command("topology")
@click.option("--host", "-H", "hosts", multiple=True, required=True,
              help="Switch management IP address (repeatable)")
@click.option("--username", "-u", envvar="EOSMANAGER_USERNAME", required=True,
              help="eAPI username")
@click.option("--password", "-p", envvar="EOSMANAGER_PASSWORD", default="",
              help="eAPI password")
@click.option("--protocol", type=click.Choice(SUPPORTED_PROTOCOLS), default=None,
              help="eAPI protocol (default from EOSMANAGER_PROTOCOL)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def topology_cmd(ctx, hosts, username, password, protocol, json_output):
    """Map LLDP neighbors across one or more switches.

    Examples:
        eosmanager topology -H 10.0.0.1 -H 10.0.0.2 -u admin
    """
    async def _run():
        registry = _registry(ctx)
        for host in hosts:
            await registry.create_connection(host, username, password, protocol)
        return await TopologyBuilder(registry).build_network_topology()

    try:
        graph = asyncio.run(_run())
    except EosManagerError as e:
        _fail(e)

    if json_output:
        _print_json(graph.to_dict())
        return

    nodes = Table(title="Nodes", show_header=True)
    nodes.add_column("ID", style="cyan")
    nodes.add_column("Name")
    nodes.add_column("Type")
    nodes.add_column("Status")

    for node in graph.nodes:
        nodes.add_row(node.id, node.name, node.type.value, node.status)

    links = Table(title="Links", show_header=True)
    links.add_column("Source", style="cyan")
    links.add_column("Port")
    links.add_column("Target", style="cyan")
    links.add_column("Port")
    links.add_column("Status")

    for link in graph.links:
        status_style = "green" if link.status == "up" else "red"
        links.add_row(
            link.source,
            link.source_port,
            link.target,
            link.target_port,
            f"[{status_style}]{link.status}[/{status_style}]",
        )

    console.print(nodes)
    console.print(links)


# =============================================================================
# HTTP API
# =============================================================================

@main.command("serve")
@click.option("--host", default=None, help="Host to bind to (default EOSMANAGER_HOST)")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on")
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def serve_cmd(ctx, host, port, debug):
    """Run the HTTP API server.

    Examples:
        eosmanager serve
        eosmanager serve --host 0.0.0.0 --port 8080
    """
    from eosmanager.server import DashboardServer

    config: ManagerConfig = ctx.obj["config"]
    errors = config.validate()
    if errors:
        for err in errors:
            console.print(f"[red]Config error: {err}[/red]")
        sys.exit(1)

    server = DashboardServer(registry=_registry(ctx), config=config)
    console.print(
        f"[green]Starting eosmanager API on "
        f"{host or config.server_host}:{port or config.server_port}[/green]"
    )
    server.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
