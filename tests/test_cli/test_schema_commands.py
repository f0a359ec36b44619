"""Tests for the AutoML and provenance CLI commands."""

import pytest
import yaml
from click.testing import CliRunner

from adsmodel.automl.io import GcsSource, InputConfig
from adsmodel.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestAutomlValidate:
    def test_valid_input(self, runner, tmp_path):
        path = tmp_path / "input.yaml"
        path.write_text(yaml.dump({"gcs_source": {"input_uris": ["gs://bucket/a.csv"]}}))
        result = runner.invoke(cli, ["automl", "validate", str(path)])
        assert result.exit_code == 0
        assert "Input configuration is valid" in result.output

    def test_bad_output_prefix(self, runner, tmp_path):
        path = tmp_path / "output.yaml"
        path.write_text(yaml.dump({"gcs_destination": {"output_uri_prefix": "s3://x"}}))
        result = runner.invoke(cli, ["automl", "validate", str(path), "--kind", "output"])
        assert result.exit_code == 1
        assert "invalid_gcs_uri" in result.output

    def test_binary_input(self, runner, tmp_path):
        path = tmp_path / "input.bin"
        path.write_bytes(InputConfig(gcs_source=GcsSource(input_uris=["gs://a/1"])).encode())
        result = runner.invoke(cli, ["automl", "validate", str(path), "--binary"])
        assert result.exit_code == 0

    def test_malformed_binary(self, runner, tmp_path):
        path = tmp_path / "input.bin"
        path.write_bytes(b"\x0a\x14gs")
        result = runner.invoke(cli, ["automl", "validate", str(path), "--binary"])
        assert result.exit_code == 1


class TestProvenanceValidate:
    def test_valid(self, runner, tmp_path):
        path = tmp_path / "build.yaml"
        path.write_text(yaml.dump({
            "id": "build-1",
            "commands": [{"name": "docker", "id": "build"}],
            "start_time": {"seconds": 100},
            "finish_time": {"seconds": 200},
        }))
        result = runner.invoke(cli, ["provenance", "validate", str(path)])
        assert result.exit_code == 0
        assert "build-1" in result.output

    def test_unknown_dependency(self, runner, tmp_path):
        path = tmp_path / "build.yaml"
        path.write_text(yaml.dump({
            "commands": [{"name": "docker", "wait_for": ["missing"]}],
        }))
        result = runner.invoke(cli, ["provenance", "validate", str(path)])
        assert result.exit_code == 1
        assert "1 error(s)" in result.output

    def test_unreadable_document(self, runner, tmp_path):
        path = tmp_path / "build.yaml"
        path.write_text("commandz: []\n")
        result = runner.invoke(cli, ["provenance", "validate", str(path)])
        assert result.exit_code == 1
        assert "Validation failed" in result.output
