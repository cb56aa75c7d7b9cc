"""
Unit tests for the 'tree' command.
"""

import json

import pytest
from click.testing import CliRunner

from depspy.cli.commands.tree import tree


@pytest.fixture
def records_file(tmp_path, make_record):
    f = tmp_path / "modules.json"
    f.write_text(json.dumps([
        make_record("src/main.ts", imports=["src/utils/format.ts"], rendered=["main"],
                    reasons={"main": {"src/utils/format.ts": ["format"]}}, import_change=True),
        make_record("src/utils/format.ts", imports=["src/utils/pad.ts"], rendered=["format"],
                    reasons={"format": {"src/utils/pad.ts": ["pad"]}}, import_change=True),
        make_record("src/utils/pad.ts", imports=["src/utils/str.ts"], rendered=["pad"],
                    reasons={"pad": {"src/utils/str.ts": ["trim"]}}, import_change=True),
        make_record("src/utils/str.ts", rendered=["trim"], git=True),
    ]))
    return f


class TestTreeCommand:
    def test_forward_tree_text(self, records_file):
        runner = CliRunner()
        result = runner.invoke(tree, ["src/main.ts", "-i", str(records_file)])

        assert result.exit_code == 0
        assert "Forward impact of" in result.output
        assert "src/utils/format.ts-1" in result.output
        assert "src/utils/pad.ts-1" in result.output
        assert "1 collapsed" in result.output

    def test_json_output(self, records_file):
        runner = CliRunner()
        result = runner.invoke(tree, ["src/main.ts", "-i", str(records_file), "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        root = payload["data"]
        assert root["id"] == "src/main.ts-1"
        assert root["children"][0]["relativeId"] == "src/utils/format.ts"
        assert root["children"][0]["children"][0]["collapsed"] is True
        assert payload["meta"]["reverse"] is False

    def test_expand_collapsed_node(self, records_file):
        runner = CliRunner()
        result = runner.invoke(tree, [
            "src/main.ts", "-i", str(records_file), "--json", "-e", "src/utils/pad.ts-1",
        ])

        assert result.exit_code == 0
        pad = json.loads(result.output)["data"]["children"][0]["children"][0]
        assert pad["collapsed"] is False
        assert [c["id"] for c in pad["children"]] == ["src/utils/str.ts-1"]

    def test_reverse_tree_with_partial_name(self, records_file):
        runner = CliRunner()
        result = runner.invoke(tree, ["str.ts", "-i", str(records_file), "--reverse", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["data"]["relativeId"] == "src/utils/str.ts"
        assert payload["data"]["children"][0]["relativeId"] == "src/utils/pad.ts"

    def test_max_level(self, records_file):
        runner = CliRunner()
        result = runner.invoke(tree, ["src/main.ts", "-i", str(records_file), "-l", "1", "--json"])

        assert result.exit_code == 0
        root = json.loads(result.output)["data"]
        assert root["collapsed"] is True
        assert root["children"] == []

    def test_unknown_module(self, records_file):
        runner = CliRunner()
        result = runner.invoke(tree, ["ghost.ts", "-i", str(records_file)])

        assert result.exit_code == 1
        assert "Module not found: ghost.ts" in result.output

    def test_missing_records_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(tree, ["src/main.ts", "-i", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Records file not found" in result.output
