"""Tests for the command line entry point."""

import json
from pathlib import Path

import pytest

from fix_locator.__main__ import main, parse_args, to_jsonable
from fix_locator.models import CodeLocation, ConfidenceLevel, Instance

BUTTON_HTML = '<button class="btn-primary">Click Me</button>'
FIXED_HTML = '<button class="btn-primary" type="button">Click Me</button>'


@pytest.fixture
def hero_file(tmp_path: Path, hero_source: str) -> Path:
    """Write the hero component to a temporary file."""
    path = tmp_path / "Hero.tsx"
    path.write_text(hero_source)
    return path


def run(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, object]:
    """Run the CLI and decode its JSON output."""
    code = main(list(argv))
    out = capsys.readouterr().out
    return code, json.loads(out) if out else None


class TestParseArgs:
    """Test argument parsing."""

    def test_global_options(self):
        """Test options shared by all subcommands."""
        args = parse_args(["--debug", "--format", "json", "convert", "--html", "<br>"])
        assert args.debug
        assert args.format == "json"
        assert args.command == "convert"
        assert args.config is None

    def test_markup_required(self):
        """Test that subcommands require markup."""
        with pytest.raises(SystemExit):
            parse_args(["convert"])


class TestToJsonable:
    """Test result serialization."""

    def test_location(self):
        """Test converting a location with instances."""
        location = CodeLocation(
            line_start=1,
            line_end=2,
            confidence=ConfidenceLevel.HIGH,
            matched_code="x",
            reason="r",
            all_instances=(Instance(1, 2, False), Instance(5, 5, True)),
        )
        result = to_jsonable(location)
        assert result["confidence"] == "high"
        assert result["all_instances"][1] == {"line_start": 5, "line_end": 5, "is_comment": True}


class TestCommands:
    """Test subcommands end to end."""

    def test_convert(self, capsys):
        """Test converting HTML to JSX."""
        code, output = run(capsys, "convert", "--html", '<img class="logo" src="a.png">')
        assert code == 0
        assert output == {"jsx": '<img className="logo" src="a.png" />'}

    def test_locate(self, capsys, hero_file):
        """Test locating markup in a file."""
        code, output = run(capsys, "locate", str(hero_file), "--html", BUTTON_HTML)

        assert code == 0
        assert output["line_start"] == 6
        assert output["confidence"] == "high"
        assert output["is_comment"] is False
        assert output["all_instances"] is None

    def test_locate_no_match_prints_null(self, capsys, hero_file):
        """Test that no match is a successful null result."""
        code = main(["locate", str(hero_file), "--html", '<table class="data-grid"></table>'])
        assert code == 0
        assert capsys.readouterr().out.strip() == "null"

    def test_locate_missing_file(self, capsys, tmp_path):
        """Test that a missing source file exits with 1."""
        code = main(["locate", str(tmp_path / "missing.tsx"), "--html", BUTTON_HTML])
        assert code == 1
        assert capsys.readouterr().out == ""

    def test_locate_directory_exits_with_error(self, capsys, tmp_path):
        """Test that a directory given as the source file exits with 1."""
        code = main(["locate", str(tmp_path), "--html", BUTTON_HTML])
        assert code == 1
        assert capsys.readouterr().out == ""

    def test_unreadable_markup_file_exits_with_error(self, capsys, tmp_path, hero_file):
        """Test that a markup file that cannot be read exits with 1."""
        code = main(["locate", str(hero_file), "--html-file", str(tmp_path)])
        assert code == 1
        assert capsys.readouterr().out == ""

    def test_rank(self, capsys, hero_file, tmp_path, card_source):
        """Test ranking candidate files."""
        card_file = tmp_path / "Card.tsx"
        card_file.write_text(card_source)

        code, output = run(capsys, "rank", str(card_file), str(hero_file), "--html", BUTTON_HTML)

        assert code == 0
        assert [r["path"] for r in output] == [str(hero_file), str(card_file)]
        assert output[0]["is_best_match"] is True
        assert output[0]["confidence"]["level"] == "high"

    def test_apply_and_write(self, capsys, tmp_path):
        """Test applying a fix and writing it back."""
        source_file = tmp_path / "page.html"
        source_file.write_text(f"<main>{BUTTON_HTML}</main>")
        fixed_file = tmp_path / "fixed.html"
        fixed_file.write_text(FIXED_HTML)

        code, output = run(
            capsys,
            "apply",
            str(source_file),
            "--html",
            BUTTON_HTML,
            "--fixed-file",
            str(fixed_file),
            "--write",
        )

        assert code == 0
        assert output["method"] == "direct"
        assert source_file.read_text() == f"<main>{FIXED_HTML}</main>"

    def test_apply_unapplied_not_written(self, capsys, hero_file):
        """Test that an unapplied fix leaves the file untouched."""
        before = hero_file.read_text()

        code, output = run(
            capsys,
            "apply",
            str(hero_file),
            "--html",
            '<a class="external-link">Docs</a>',
            "--fixed",
            '<a class="external-link" rel="noopener">Docs</a>',
            "--write",
        )

        assert code == 0
        assert output["method"] == "unapplied"
        assert output["content"] == '<a className="external-link" rel="noopener">Docs</a>'
        assert hero_file.read_text() == before

    def test_config_file(self, capsys, tmp_path, hero_file):
        """Test that locator settings are read from the config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("locator:\n  min_text_anchor_length: 20\n")

        code, output = run(
            capsys, "--config", str(config_file), "locate", str(hero_file), "--html", BUTTON_HTML
        )

        # The anchor is too short for text search, so the tag fallback wins
        assert code == 0
        assert output["confidence"] == "low"

    def test_invalid_config(self, capsys, tmp_path, hero_file):
        """Test that an invalid config exits with 1."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- not\n- a mapping\n")

        code = main(["--config", str(config_file), "locate", str(hero_file), "--html", BUTTON_HTML])
        assert code == 1
