"""Unit tests for the 'changes' and 'graph' commands."""

import json

from click.testing import CliRunner

from depspy.cli.commands.changes import changes
from depspy.cli.commands.graph import graph


class TestChangesCommand:
    def test_json_output(self, tmp_path, simple_records):
        f = tmp_path / "modules.json"
        f.write_text(json.dumps(simple_records))

        result = CliRunner().invoke(changes, ["-i", str(f), "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"git_changes": ["B"], "import_changes": ["A"]}

    def test_text_output_from_directory(self, tmp_path, simple_records):
        depspy_dir = tmp_path / ".depspy"
        depspy_dir.mkdir()
        (depspy_dir / "modules.json").write_text(json.dumps(simple_records))

        result = CliRunner().invoke(changes, ["-i", str(tmp_path)])

        assert result.exit_code == 0
        assert "Git changes" in result.output
        assert "Import changes" in result.output

    def test_empty_directory(self, tmp_path):
        result = CliRunner().invoke(changes, ["-i", str(tmp_path)])
        assert result.exit_code == 1
        assert "No module records found" in result.output


class TestGraphCommand:
    def test_stats(self, tmp_path, diamond_records):
        f = tmp_path / "modules.json"
        f.write_text(json.dumps(diamond_records))

        result = CliRunner().invoke(graph, ["-i", str(f)])

        assert result.exit_code == 0
        assert "Modules:             4" in result.output

    def test_json_export_includes_importers(self, tmp_path, diamond_records):
        f = tmp_path / "modules.json"
        f.write_text(json.dumps(diamond_records))

        result = CliRunner().invoke(graph, ["-i", str(f), "--json"])

        assert result.exit_code == 0
        modules = {m["relativeId"]: m for m in json.loads(result.output)["data"]["modules"]}
        assert modules["D"]["importers"] == ["B", "C"]

    def test_invalid_json(self, tmp_path):
        f = tmp_path / "modules.json"
        f.write_text("{not json")

        result = CliRunner().invoke(graph, ["-i", str(f)])

        assert result.exit_code == 1
        assert "Failed to load module records" in result.output

    def test_non_utf8_file(self, tmp_path):
        f = tmp_path / "modules.json"
        f.write_bytes(b"\xff\xfe[")

        result = CliRunner().invoke(graph, ["-i", str(f)])

        assert result.exit_code == 1
        assert "Failed to load module records" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)
