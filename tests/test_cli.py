import json
from unittest.mock import MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from matrioska.cli import app, parse_rule_flags

runner = CliRunner()


def invoke(*args):
    return runner.invoke(app, ["--log-level", "WARNING", *args])


class TestParseRuleFlags:
    def test_values(self):
        assert parse_rule_flags(["a=true", "b=No", "c = 1"]) == {
            "a": True,
            "b": False,
            "c": True,
        }
        assert parse_rule_flags(None) == {}

    @pytest.mark.parametrize("flag", ["a", "=true", "a=maybe"])
    def test_malformed(self, flag):
        with pytest.raises(typer.BadParameter):
            parse_rule_flags([flag])


class TestCLI:
    @pytest.fixture(autouse=True)
    def setup_document(self, tmp_path, app_document, restore_root_logger):
        self.path = tmp_path / "app.json"
        self.path.write_text(json.dumps(app_document))

    def test_inspect(self):
        result = invoke("inspect", str(self.path))
        assert result.exit_code == 0
        description = json.loads(result.stdout)
        assert description["kind"] == "cluster"
        assert len(description["children"]) == 2

    def test_inspect_with_rule(self):
        result = invoke("inspect", str(self.path), "--rule", "is_gold_member=true")
        assert result.exit_code == 0
        home = json.loads(result.stdout)["children"][0]
        assert [c["gated"] for c in home["children"]] == [False, True]

    def test_inspect_unregistered_root(self, tmp_path):
        path = tmp_path / "unknown.json"
        path.write_text(json.dumps({"structure": {"type": "carousel"}}))
        result = invoke("inspect", str(path))
        assert result.exit_code == 0
        assert result.stdout.strip() == "null"

    def test_inspect_bad_rule_flag(self):
        result = invoke("inspect", str(self.path), "-r", "is_gold_member")
        assert result.exit_code != 0

    def test_validate(self):
        result = invoke("validate", str(self.path))
        assert result.exit_code == 0
        assert f"{self.path} is valid" in result.output

    def test_validate_yaml(self, tmp_path):
        path = tmp_path / "app.yaml"
        path.write_text("structure:\n  type: label\n")
        result = invoke("validate", str(path))
        assert result.exit_code == 0
        assert "is valid" in result.output

    def test_validate_unregistered_root(self, tmp_path):
        path = tmp_path / "unknown.json"
        path.write_text(json.dumps({"structure": {"type": "carousel"}}))
        result = invoke("validate", str(path))
        assert result.exit_code == 0
        assert "root type is not registered" in result.output

    def test_validate_missing_type(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"structure": {"children": []}}))
        result = invoke("validate", str(path))
        assert result.exit_code == 1
        assert "missing mandatory key 'type'" in result.output

    def test_validate_missing_structure(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"type": "stack"}))
        result = invoke("validate", str(path))
        assert result.exit_code == 1
        assert "missing mandatory key 'structure'" in result.output

    def test_validate_unreadable(self, tmp_path):
        result = invoke("validate", str(tmp_path / "missing.json"))
        assert result.exit_code == 1
        assert "Cannot read document" in result.output

    def test_serve(self):
        with patch("matrioska.cli.create_ui") as create_ui:
            demo = MagicMock()
            create_ui.return_value = demo
            result = invoke(
                "serve", str(self.path), "--title", "Demo", "--port", "7861"
            )
        assert result.exit_code == 0
        component = create_ui.call_args.args[0]
        assert component.kind.value == "cluster"
        assert create_ui.call_args.kwargs["title"] == "Demo"
        demo.launch.assert_called_once_with(server_port=7861)

    def test_serve_reads_env(self, monkeypatch):
        monkeypatch.setenv("MATRIOSKA_DOCUMENT", str(self.path))
        monkeypatch.setenv("MATRIOSKA_PORT", "7870")
        with patch("matrioska.cli.create_ui") as create_ui:
            result = invoke("serve")
        assert result.exit_code == 0
        create_ui.return_value.launch.assert_called_once_with(server_port=7870)
