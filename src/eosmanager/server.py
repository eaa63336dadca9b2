"""
eosmanager HTTP API - JSON endpoints behind the browser dashboard.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from datetime import datetime
from typing import Any

from flask import Flask, jsonify, request

from eosmanager import __version__
from eosmanager.config import ManagerConfig
from eosmanager.exceptions import (
    EosManagerError,
    IncompleteDataError,
    NotFoundError,
    RemoteCommandError,
    SwitchConnectionError,
    ValidationError,
)
from eosmanager.registry import SessionRegistry
from eosmanager.services import CommandService, InterfaceService, RoutingService, VlanService
from eosmanager.topology import TopologyBuilder

logger = logging.getLogger(__name__)


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("A JSON object body is required")
    return data


def _require(data: dict[str, Any], *fields: str) -> None:
    missing = [name for name in fields if data.get(name) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


class DashboardServer:
    """REST API over a SessionRegistry.

    Provides endpoints for:
    - Switch sessions (/api/v1/switches)
    - Interfaces, VLANs, routes, BGP and raw CLI per switch
    - Topology (/api/v1/topology)
    """

    def __init__(
        self,
        registry: SessionRegistry | None = None,
        config: ManagerConfig | None = None,
    ):
        if config is None:
            config = registry.config if registry is not None else ManagerConfig.from_env()
        if registry is None:
            registry = SessionRegistry(config)
        self.config = config
        self.registry = registry

        self.interfaces = InterfaceService(self.registry)
        self.vlans = VlanService(self.registry)
        self.routing = RoutingService(self.registry)
        self.commands = CommandService(self.registry)
        self.topology = TopologyBuilder(self.registry)

        self.app = Flask(__name__)
        self._setup_error_handlers()
        self._setup_routes()

    def _setup_error_handlers(self):
        """Map eosmanager errors to HTTP responses."""

        @self.app.errorhandler(ValidationError)
        def handle_validation(e):
            return jsonify({"error": str(e)}), 400

        @self.app.errorhandler(NotFoundError)
        def handle_not_found(e):
            return jsonify({"error": str(e)}), 404

        @self.app.errorhandler(RemoteCommandError)
        def handle_remote(e):
            return jsonify(e.to_dict()), 502

        @self.app.errorhandler(SwitchConnectionError)
        @self.app.errorhandler(IncompleteDataError)
        def handle_upstream(e):
            return jsonify({"error": str(e)}), 502

        @self.app.errorhandler(EosManagerError)
        def handle_other(e):
            logger.error(f"Unhandled eosmanager error: {e}")
            return jsonify({"error": str(e)}), 500

    def _setup_routes(self):
        """Setup Flask routes."""
        app = self.app
        registry = self.registry

        @app.after_request
        def after_request(response):
            response.headers["X-EosManager-Version"] = __version__
            return response

        # ================================================================
        # Health check
        # ================================================================

        @app.route("/health")
        def health():
            return jsonify({
                "status": "ok",
                "switches": len(registry),
                "timestamp": datetime.now().isoformat(),
            })

        # ================================================================
        # Sessions
        # ================================================================

        @app.route("/api/v1/switches", methods=["GET"])
        def list_switches():
            return jsonify([s.to_dict() for s in registry.get_all_switch_data()])

        @app.route("/api/v1/switches", methods=["POST"])
        async def create_switch():
            data = _json_body()
            _require(data, "ip_address", "username")
            summary = await registry.create_connection(
                data["ip_address"],
                data["username"],
                data.get("password", ""),
                data.get("protocol") or None,
            )
            return jsonify(summary.to_dict()), 201

        @app.route("/api/v1/switches/refresh", methods=["POST"])
        async def refresh_all():
            summaries = await registry.refresh_all_connections()
            return jsonify([s.to_dict() for s in summaries])

        @app.route("/api/v1/switches/<switch_id>", methods=["GET"])
        def get_switch(switch_id):
            session = registry.get_connection(switch_id)
            if session is None:
                raise NotFoundError(switch_id)
            return jsonify(session.switch_data.to_dict())

        @app.route("/api/v1/switches/<switch_id>", methods=["DELETE"])
        def delete_switch(switch_id):
            if not registry.remove_connection(switch_id):
                raise NotFoundError(switch_id)
            return jsonify({"removed": switch_id})

        @app.route("/api/v1/switches/<switch_id>/refresh", methods=["POST"])
        async def refresh_switch(switch_id):
            summary = await registry.refresh_switch_data(switch_id)
            return jsonify(summary.to_dict())

        @app.route("/api/v1/switches/<switch_id>/commands", methods=["POST"])
        async def execute_commands(switch_id):
            data = _json_body()
            _require(data, "commands")
            results = await registry.execute_commands(
                switch_id, data["commands"], fmt=data.get("format", "json")
            )
            return jsonify({"results": results})

        # ================================================================
        # Interfaces
        # ================================================================

        @app.route("/api/v1/switches/<switch_id>/interfaces", methods=["GET"])
        async def list_interfaces(switch_id):
            records = await self.interfaces.get_interface_details(switch_id)
            return jsonify([r.to_dict() for r in records])

        @app.route("/api/v1/switches/<switch_id>/interfaces/<path:name>", methods=["PATCH"])
        async def update_interface(switch_id, name):
            data = _json_body()
            results = []
            if "description" in data:
                results += await self.interfaces.set_interface_description(
                    switch_id, name, data["description"]
                )
            if "enabled" in data:
                results += await self.interfaces.set_interface_enabled(
                    switch_id, name, bool(data["enabled"])
                )
            if "mode" in data:
                results += await self.interfaces.set_interface_mode(
                    switch_id, name, data["mode"], data.get("vlan")
                )
            if not results:
                raise ValidationError("Nothing to update: expected description, enabled or mode")
            return jsonify({"results": results})

        # ================================================================
        # VLANs
        # ================================================================

        @app.route("/api/v1/switches/<switch_id>/vlans", methods=["GET"])
        async def list_vlans(switch_id):
            vlans = await self.vlans.get_vlans(switch_id)
            return jsonify([v.to_dict() for v in vlans])

        @app.route("/api/v1/switches/<switch_id>/vlans", methods=["POST"])
        async def create_vlan(switch_id):
            data = _json_body()
            _require(data, "id")
            results = await self.vlans.create_vlan(switch_id, data["id"], data.get("name", ""))
            return jsonify({"results": results}), 201

        @app.route("/api/v1/switches/<switch_id>/vlans/<vlan_id>", methods=["PATCH"])
        async def rename_vlan(switch_id, vlan_id):
            data = _json_body()
            if "name" not in data:
                raise ValidationError("Missing required field(s): name")
            results = await self.vlans.rename_vlan(switch_id, vlan_id, data["name"])
            return jsonify({"results": results})

        @app.route("/api/v1/switches/<switch_id>/vlans/<vlan_id>", methods=["DELETE"])
        async def delete_vlan(switch_id, vlan_id):
            results = await self.vlans.delete_vlan(switch_id, vlan_id)
            return jsonify({"results": results})

        # ================================================================
        # Routing
        # ================================================================

        @app.route("/api/v1/switches/<switch_id>/routes", methods=["GET"])
        async def list_routes(switch_id):
            routes = await self.routing.get_static_routes(switch_id)
            return jsonify([r.to_dict() for r in routes])

        @app.route("/api/v1/switches/<switch_id>/routes", methods=["POST"])
        async def add_route(switch_id):
            data = _json_body()
            _require(data, "prefix", "next_hop")
            results = await self.routing.add_static_route(
                switch_id, data["prefix"], data["next_hop"], data.get("admin_distance", 1)
            )
            return jsonify({"results": results}), 201

        @app.route("/api/v1/switches/<switch_id>/routes", methods=["DELETE"])
        async def delete_route(switch_id):
            data = _json_body()
            _require(data, "prefix", "next_hop")
            results = await self.routing.delete_static_route(
                switch_id, data["prefix"], data["next_hop"]
            )
            return jsonify({"results": results})

        @app.route("/api/v1/switches/<switch_id>/bgp", methods=["GET"])
        async def get_bgp(switch_id):
            config = await self.routing.get_bgp_config(switch_id)
            return jsonify(config.to_dict())

        @app.route("/api/v1/switches/<switch_id>/bgp", methods=["POST"])
        async def configure_bgp(switch_id):
            data = _json_body()
            _require(data, "asn")
            results = await self.routing.configure_bgp(
                switch_id, data["asn"], data.get("router_id")
            )
            return jsonify({"results": results})

        @app.route("/api/v1/switches/<switch_id>/bgp/neighbors", methods=["POST"])
        async def add_bgp_neighbor(switch_id):
            data = _json_body()
            _require(data, "asn", "neighbor_ip", "remote_asn")
            results = await self.routing.add_bgp_neighbor(
                switch_id, data["asn"], data["neighbor_ip"], data["remote_asn"]
            )
            return jsonify({"results": results}), 201

        @app.route("/api/v1/switches/<switch_id>/bgp/neighbors", methods=["DELETE"])
        async def remove_bgp_neighbor(switch_id):
            data = _json_body()
            _require(data, "asn", "neighbor_ip")
            results = await self.routing.remove_bgp_neighbor(
                switch_id, data["asn"], data["neighbor_ip"]
            )
            return jsonify({"results": results})

        # ================================================================
        # CLI
        # ================================================================

        @app.route("/api/v1/switches/<switch_id>/cli", methods=["POST"])
        async def run_cli(switch_id):
            data = _json_body()
            _require(data, "commands")
            commands = data["commands"]
            if data.get("config"):
                if isinstance(commands, str):
                    commands = [line for line in commands.splitlines() if line.strip()]
                results = await self.commands.execute_config_commands(switch_id, commands)
            else:
                results = await self.commands.execute_cli(
                    switch_id, commands, fmt=data.get("format", "json")
                )
            return jsonify({"results": results})

        # ================================================================
        # Topology
        # ================================================================

        @app.route("/api/v1/topology", methods=["GET"])
        async def get_topology():
            graph = await self.topology.build_network_topology()
            return jsonify(graph.to_dict())

    def run(self, host: str | None = None, port: int | None = None, debug: bool = False):
        """Run the development server."""
        self.app.run(
            host=host or self.config.server_host,
            port=port or self.config.server_port,
            debug=debug,
        )


def create_app(
    registry: SessionRegistry | None = None,
    config: ManagerConfig | None = None,
) -> Flask:
    """Application factory."""
    return DashboardServer(registry=registry, config=config).app
