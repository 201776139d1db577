"""Cluster status rendering."""

import json
from io import StringIO

import yaml
from rich.console import Console
from rich.table import Table

from ..model.cluster import ClusterHandle, ClusterStatus
from ..model.report import OutputFormat

STATUS_STYLES = {
    ClusterStatus.RUNNING: "green",
    ClusterStatus.PROVISIONING: "yellow",
    ClusterStatus.RECONCILING: "yellow",
    ClusterStatus.STOPPING: "yellow",
    ClusterStatus.ERROR: "red",
    ClusterStatus.DEGRADED: "red",
}


class ClusterReporter:
    """Renders a cluster handle in one of the supported output formats."""

    def render(self, handle: ClusterHandle, output_format: OutputFormat) -> str:
        """Render the handle's snapshot; raises ClusterNotFoundError if it has none."""
        data = self.to_dict(handle)

        if output_format == OutputFormat.JSON:
            return json.dumps(data, indent=2)
        elif output_format == OutputFormat.YAML:
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        else:
            return self._format_text(handle)

    def to_dict(self, handle: ClusterHandle) -> dict:
        snapshot = handle.require_snapshot()

        return {
            "project": handle.config.project,
            "location": handle.config.location,
            "name": snapshot.name,
            "status": ClusterStatus(snapshot.status).value,
            "status_message": snapshot.status_message,
            "master_version": snapshot.current_master_version,
            "node_version": snapshot.current_node_version,
            "node_count": snapshot.node_count,
            "locations": list(snapshot.locations),
            "endpoint": snapshot.endpoint,
        }

    def _format_text(self, handle: ClusterHandle) -> str:
        data = self.to_dict(handle)
        style = STATUS_STYLES.get(ClusterStatus(data["status"]), "white")

        table = Table(title=f"Cluster {data['name']}", show_header=True)
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value", style="white")

        table.add_row("Project", data["project"])
        table.add_row("Location", data["location"])
        table.add_row("Status", f"[{style}]{data['status']}[/{style}]")
        if data["status_message"]:
            table.add_row("Status Message", data["status_message"])
        table.add_row("Master Version", data["master_version"])
        table.add_row("Node Version", data["node_version"])
        table.add_row("Node Count", str(data["node_count"]))
        table.add_row("Zones", ", ".join(data["locations"]))
        if data["endpoint"]:
            table.add_row("Endpoint", data["endpoint"])

        buffer = StringIO()
        Console(file=buffer, force_terminal=False, width=100).print(table)
        return buffer.getvalue()
