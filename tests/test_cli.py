# tests/test_cli.py
"""End-to-end tests for the swiftemplate command line."""

import pytest
from pathlib import Path
from click.testing import CliRunner

from swiftemplate.cli.interface import main_cli
from swiftemplate.config import loader

PAGE_TEMPLATE = (
    "// page templates\n"
    "%% template page(title:String, items:[String])\n"
    "<h1><%= title %></h1>\n"
    "%% if items.isEmpty\n"
    "<p>Nothing here</p>\n"
    "%% else\n"
    "<ul>\n"
    "%% for item in items\n"
    "<li><%=! item %></li>\n"
    "%% endfor\n"
    "</ul>\n"
    "%% endif\n"
    "%% endtemplate\n"
)


@pytest.fixture(autouse=True)
def no_user_config(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(loader, "USER_CONFIG_FILE", tmp_path / "no-user-config.toml")


def test_cli_writes_generated_swift_to_stdout():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("page.swtpl").write_text(PAGE_TEMPLATE, encoding="utf-8")

        result = runner.invoke(main_cli, ["page.swtpl"], catch_exceptions=False)

        assert result.exit_code == 0
        output = result.stdout
        assert output.startswith("func page(title:String, items:[String]) -> String {\nvar _ℜ=[String]()\n")
        assert "_ℜ.append(String(title))" in output
        assert "if items.isEmpty {" in output
        assert "} else {" in output
        assert "for item in items {" in output
        assert output.endswith('return _ℜ.joinWithSeparator(" ")\n}\n')


def test_cli_html_quote_flag():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("page.swtpl").write_text(PAGE_TEMPLATE, encoding="utf-8")

        result = runner.invoke(main_cli, ["--html-quote", "page.swtpl"], catch_exceptions=False)

        assert result.exit_code == 0
        assert "_ℜ.append(String(title).HTMLQuote)" in result.stdout
        assert "_ℜ.append(String(item))" in result.stdout


def test_cli_output_file_is_utf8_bytes():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("a.swtpl").write_text("%% template a()\nA\n%% endtemplate\n", encoding="utf-8")
        Path("b.swtpl").write_text("%% template b()\nB\n%% endtemplate", encoding="utf-8")

        result = runner.invoke(main_cli, ["a.swtpl", "b.swtpl", "-o", "Templates.swift"], catch_exceptions=False)

        assert result.exit_code == 0
        assert result.stdout == ""
        written = Path("Templates.swift").read_bytes().decode("utf-8")
        assert written.index("func a()") < written.index("func b()")
        assert "_ℜ" in written


def test_cli_parse_error_reports_file_and_line_and_writes_nothing():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("good.swtpl").write_text("%% template good()\nok\n%% endtemplate\n", encoding="utf-8")
        Path("bad.swtpl").write_text("%% template bad()\n<%\nlet x = 1\n", encoding="utf-8")

        result = runner.invoke(main_cli, ["good.swtpl", "bad.swtpl", "-o", "out.swift"])

        assert result.exit_code == 1
        assert "bad.swtpl:2: Unclosed code block" in result.stderr
        assert not Path("out.swift").exists()


def test_cli_emit_runtime_and_summary():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("page.swtpl").write_text(PAGE_TEMPLATE, encoding="utf-8")

        result = runner.invoke(main_cli, ["--emit-runtime", "--console-summary", "page.swtpl"], catch_exceptions=False)

        assert result.exit_code == 0
        assert "extension String {" in result.stdout
        assert "Templates generated: 1 (from 1 files)" in result.stderr


def test_cli_uses_project_config_profile():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("page.swtpl").write_text(PAGE_TEMPLATE, encoding="utf-8")
        Path(".swiftemplate.toml").write_text("[profiles.web]\nhtml_quote = true\n", encoding="utf-8")

        quoted = runner.invoke(main_cli, ["--config-profile", "web", "page.swtpl"], catch_exceptions=False)
        overridden = runner.invoke(main_cli, ["--config-profile", "web", "--no-html-quote", "page.swtpl"], catch_exceptions=False)

        assert ".HTMLQuote" in quoted.stdout
        assert ".HTMLQuote" not in overridden.stdout


def test_cli_unknown_profile_fails():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("page.swtpl").write_text(PAGE_TEMPLATE, encoding="utf-8")

        result = runner.invoke(main_cli, ["--config-profile", "nope", "page.swtpl"])

        assert result.exit_code == 1
        assert "Profile 'nope' not found" in result.stderr


def test_cli_requires_input_files():
    result = CliRunner().invoke(main_cli, [])
    assert result.exit_code == 2


def test_cli_profile_that_is_not_a_table_is_config_error():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("page.swtpl").write_text(PAGE_TEMPLATE, encoding="utf-8")
        Path(".swiftemplate.toml").write_text("[profiles]\ndev = 1\n", encoding="utf-8")

        result = runner.invoke(main_cli, ["--config-profile", "dev", "page.swtpl"])

        assert result.exit_code == 1
        assert "Profile 'dev' must be a table" in result.stderr
        assert "Unexpected critical error" not in result.stderr


def test_cli_json_logs_carry_input_file():
    runner = CliRunner()
    with runner.isolated_filesystem():
        Path("page.swtpl").write_text(PAGE_TEMPLATE, encoding="utf-8")

        result = runner.invoke(main_cli, ["-v", "--force-json-logs", "page.swtpl"], catch_exceptions=False)

        assert result.exit_code == 0
        assert '"event": "file_parsed"' in result.stderr
        assert '"input_file": "page.swtpl"' in result.stderr
        assert result.stdout.startswith("func page(")
