# swiftemplate/cli/interface.py
import sys
from pathlib import Path
from typing import Any, Dict

import click
from click_option_group import optgroup
import structlog

from swiftemplate import __version__ as app_version
from swiftemplate.config.settings import (
    GeneratorConfig, DEFAULT_HTML_QUOTE_EXPRESSIONS, DEFAULT_CONSOLE_SHOW_SUMMARY,
)
from swiftemplate.config.loader import load_and_merge_configs, build_generator_config
from swiftemplate.logging_setup import configure_logging
from swiftemplate.core.output import write_to_stdout, write_to_file
from swiftemplate.core.pipeline import TemplateCompiler
from swiftemplate.exceptions import SwiftemplateError, TemplateParseError

log = structlog.get_logger(__name__)

# cli parameter name -> GeneratorConfig attribute, for values given explicitly on the command line.
CLI_PARAM_TO_CONFIG_ATTR_MAP: Dict[str, str] = {
    "output_file": "output_file",
    "html_quote_expressions": "html_quote_expressions",
    "emit_runtime": "emit_runtime",
    "console_show_summary": "console_show_summary",
}

def _print_cli_summary_output(config: GeneratorConfig, compiler: TemplateCompiler):
    if not config.console_show_summary:
        return
    click.secho("--- generation summary ---", fg="cyan", err=True)
    click.echo(f"Templates generated: {len(compiler.templates)} (from {compiler.files_processed} files)", err=True)
    for template in compiler.templates:
        click.echo(f"  func {template.spec}", err=True)
    quoting = "on" if config.html_quote_expressions else "off"
    click.echo(f"HTML quoting of expressions: {quoting}", err=True)

def _run_generation_flow(effective_config: GeneratorConfig):
    log.info("generation_orchestration_started", inputs=[str(p) for p in effective_config.input_paths])
    compiler = TemplateCompiler(effective_config)
    generated_source = compiler.generate()

    if effective_config.output_file:
        write_to_file(effective_config.output_file, generated_source)
        click.echo(f"Info: Output written to: {effective_config.output_file}", err=True)
    else:
        log.info("writing_final_output_to_stdout")
        write_to_stdout(generated_source)

    _print_cli_summary_output(effective_config, compiler)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.argument("input_paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path))
@optgroup.group("Output Options", help="Where and how the generated Swift source is written.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Path to write the generated Swift source to. Default: stdout.")
@optgroup.option("--html-quote/--no-html-quote", "html_quote_expressions", default=None, help=f"HTML-escape '<%= %>' expression output by default ('<%=! %>' is never escaped). Default: {'on' if DEFAULT_HTML_QUOTE_EXPRESSIONS else 'off'}.")
@optgroup.option("--emit-runtime", "emit_runtime", is_flag=True, default=False, help="Prepend the Swift String.HTMLQuote runtime extension to the output.")
@optgroup.group("Console Feedback", help="Customize terminal output during execution (stderr).")
@optgroup.option("--console-summary/--no-console-summary", "console_show_summary", default=None, help=f"Show a summary of generated templates. Default: {'on' if DEFAULT_CONSOLE_SHOW_SUMMARY else 'off'}.")
@optgroup.group("Application Behavior", help="Configuration profiles and logging.")
@optgroup.option("--config-profile", "active_config_profile_name", default=None, help="Load a profile from config file(s).")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="swiftemplate", prog_name="swiftemplate", help="Show version and exit.")
@click.pass_context
def main_cli(ctx: click.Context, **cli_params: Any):
    """swiftemplate: compile template files (INPUT_PATHS) into Swift functions
    that render their text, with inline expressions and control flow."""

    log_level = "warning"
    if cli_params.get("verbosity_level", 0) == 1: log_level = "info"
    elif cli_params.get("verbosity_level", 0) >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=cli_params.get("force_json_logs_cli", False))

    log.debug("cli_command_invoked", params={k: str(v) for k, v in cli_params.items()})

    try:
        raw_configs_from_toml_files = load_and_merge_configs()

        cli_overrides: Dict[str, Any] = {"input_paths": list(cli_params["input_paths"])}
        for param_name, config_attr in CLI_PARAM_TO_CONFIG_ATTR_MAP.items():
            if ctx.get_parameter_source(param_name) == click.core.ParameterSource.COMMANDLINE \
               and cli_params.get(param_name) is not None:
                cli_overrides[config_attr] = cli_params[param_name]

        final_config = build_generator_config(
            raw_configs_from_toml_files, cli_overrides,
            profile_name=cli_params.get("active_config_profile_name"),
        )
        _run_generation_flow(final_config)

    except click.exceptions.Exit as e: raise e
    except TemplateParseError as e:
        log.error("template_parse_failed", error_type=type(e).__name__, file=e.filename, line=e.line_number)
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except SwiftemplateError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except click.ClickException as e:
        log.error("click_exception_in_cli", error_type=type(e).__name__, message=str(e))
        e.show(); sys.exit(e.exit_code)
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
        sys.exit(1)
