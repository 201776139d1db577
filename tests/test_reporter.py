"""Test cluster status rendering."""

import json

import pytest
import yaml

from gke_manager.core.reporter import ClusterReporter
from gke_manager.exceptions import ClusterNotFoundError
from gke_manager.model.cluster import ClusterHandle
from gke_manager.model.report import OutputFormat


class TestClusterReporter:
    def setup_method(self):
        """Set up test fixtures."""
        self.reporter = ClusterReporter()

    def test_json(self, cluster_config, running_snapshot):
        """Test JSON output."""
        handle = ClusterHandle(config=cluster_config, snapshot=running_snapshot)

        data = json.loads(self.reporter.render(handle, OutputFormat.JSON))

        assert data["name"] == "hola"
        assert data["status"] == "RUNNING"
        assert data["master_version"] == "1.9.2-gke.1"
        assert data["locations"] == ["us-central1-a"]

    def test_yaml(self, cluster_config, running_snapshot):
        """Test YAML output."""
        handle = ClusterHandle(config=cluster_config, snapshot=running_snapshot)

        data = yaml.safe_load(self.reporter.render(handle, OutputFormat.YAML))

        assert data["project"] == "hello"
        assert data["node_version"] == "1.9.1-gke.0"
        assert data["node_count"] == 3

    def test_text(self, cluster_config, running_snapshot):
        """Test text output includes the versions."""
        handle = ClusterHandle(config=cluster_config, snapshot=running_snapshot)

        text = self.reporter.render(handle, OutputFormat.TEXT)

        assert "Cluster hola" in text
        assert "1.9.2-gke.1" in text
        assert "RUNNING" in text

    def test_missing_snapshot(self, cluster_config):
        """Test rendering an unfetched cluster fails."""
        with pytest.raises(ClusterNotFoundError):
            self.reporter.render(ClusterHandle(config=cluster_config), OutputFormat.JSON)
