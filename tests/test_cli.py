"""Tests for CLI commands."""

from pathlib import Path

from typer.testing import CliRunner

from gqldoc.cli import app
from tests.conftest import TESTDATA

runner = CliRunner()

VALID = str(TESTDATA / "valid.gql")


class TestDocCommand:
    """Test the doc CLI command."""

    def test_gfm_output(self) -> None:
        """Default format renders Markdown to stdout."""
        result = runner.invoke(app, ["doc", VALID])

        assert result.exit_code == 0
        assert "# Schema Documentation" in result.stdout
        assert "- [Queries](#queries)" in result.stdout
        assert "### [widget](#widget)" in result.stdout
        assert "Look up a widget by id." in result.stdout

    def test_graphql_output(self) -> None:
        """The graphql format reprints the schema."""
        result = runner.invoke(app, ["doc", VALID, "--format", "graphql"])

        assert result.exit_code == 0
        assert "type Widget {" in result.stdout
        assert "# Schema Documentation" not in result.stdout

    def test_invalid_format(self) -> None:
        result = runner.invoke(app, ["doc", VALID, "--format", "html"])

        assert result.exit_code == 1
        assert "Invalid format 'html'" in result.output

    def test_parse_error(self) -> None:
        result = runner.invoke(app, ["doc", str(TESTDATA / "invalid.gql")])

        assert result.exit_code == 1
        assert "Error: Unable to parse" in result.output

    def test_multiple_files(self) -> None:
        result = runner.invoke(app, ["doc", str(TESTDATA / "1.gql"), str(TESTDATA / "2.gql")])

        assert result.exit_code == 0
        assert "### [Gadget](#gadget)" in result.stdout

    def test_output_file(self, tmp_path: Path) -> None:
        output = tmp_path / "schema.md"

        result = runner.invoke(app, ["doc", VALID, "--output", str(output)])

        assert result.exit_code == 0
        assert output.read_text().startswith("# Schema Documentation")
        assert f"Documentation written to {output}" in result.output

    def test_title_override(self) -> None:
        result = runner.invoke(app, ["doc", VALID, "--title", "Widget API"])

        assert result.exit_code == 0
        assert result.stdout.startswith("# Widget API")

    def test_no_minify(self) -> None:
        """Tables keep their indentation without minification."""
        minified = runner.invoke(app, ["doc", VALID])
        plain = runner.invoke(app, ["doc", VALID, "--no-minify"])

        assert plain.exit_code == 0
        assert "\t<tbody>" in plain.stdout
        assert "\t<tbody>" not in minified.stdout

    def test_config_file(self, tmp_path: Path) -> None:
        config = tmp_path / "custom.yaml"
        config.write_text("title: From Config\ntoc: false\n")

        result = runner.invoke(app, ["-c", str(config), "doc", VALID])

        assert result.exit_code == 0
        assert result.stdout.startswith("# From Config")
        assert "Table of Contents" not in result.stdout

    def test_config_discovered_next_to_schema(self, tmp_path: Path) -> None:
        schema = tmp_path / "api.graphql"
        schema.write_text(Path(VALID).read_text())
        (tmp_path / "gqldoc.yaml").write_text("title: Discovered\n")

        result = runner.invoke(app, ["doc", str(schema)])

        assert result.exit_code == 0
        assert result.stdout.startswith("# Discovered")

    def test_title_overrides_config(self, tmp_path: Path) -> None:
        config = tmp_path / "custom.yaml"
        config.write_text("title: From Config\n")

        result = runner.invoke(app, ["-c", str(config), "doc", VALID, "--title", "From Flag"])

        assert result.exit_code == 0
        assert result.stdout.startswith("# From Flag")

    def test_invalid_config(self, tmp_path: Path) -> None:
        config = tmp_path / "custom.yaml"
        config.write_text("layout:\n  field_description_width: 5\n")

        result = runner.invoke(app, ["-c", str(config), "doc", VALID])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_missing_config(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["-c", str(tmp_path / "nope.yaml"), "doc", VALID])

        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_verbose_logs_to_stderr(self) -> None:
        result = runner.invoke(app, ["-v", "1", "doc", VALID])

        assert result.exit_code == 0
        assert "Rendered Queries (1 entries)" in result.output
