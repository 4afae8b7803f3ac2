# swiftemplate/core/pipeline.py
import sys
from pathlib import Path
from typing import List

from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn
from rich.console import Console as RichConsole
import structlog
import logging as stdlib_logging

from swiftemplate.config.settings import GeneratorConfig
from swiftemplate.exceptions import InputError
from swiftemplate.logging_setup import APP_LOGGER_NAME
from swiftemplate.util import strip_utf8_bom, split_source_lines
from swiftemplate.core.codegen import generate_code
from swiftemplate.core.runtime import HTML_QUOTE_RUNTIME_SOURCE
from swiftemplate.core.scanner import parse_templates
from swiftemplate.core.template import Template


log = structlog.get_logger(__name__)


def read_source_lines(file_path: Path) -> List[str]:
    # reads one template source file as utf-8 and splits it into lines.
    try:
        raw = file_path.read_bytes()
    except OSError as e:
        raise InputError(f"cannot read '{file_path}': {e}") from e
    try:
        text = strip_utf8_bom(raw).decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputError(f"contents of '{file_path}' are not valid UTF-8: {e}") from e
    return split_source_lines(text)


def parse_file(file_path: Path) -> List[Template]:
    # parses every template in one file; any error aborts that file.
    return parse_templates(read_source_lines(file_path), filename=str(file_path))


class TemplateCompiler:
    # orchestrates the parse -> generate pipeline over all input files.
    def __init__(self, config: GeneratorConfig):
        self.config: GeneratorConfig = config
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")
        self.templates: List[Template] = []
        self.files_processed: int = 0

    def _parse_all(self, progress: Progress) -> None:
        task = progress.add_task("parsing templates...", total=len(self.config.input_paths))
        for file_path in self.config.input_paths:
            progress.update(task, description=f"parsing {file_path.name}")
            with structlog.contextvars.bound_contextvars(input_file=str(file_path)):
                file_templates = parse_file(file_path)
                self.log.info("file_parsed", templates=len(file_templates))
            self.templates.extend(file_templates)
            self.files_processed += 1
            progress.update(task, advance=1)
        progress.update(task, description=f"parsed {len(self.templates)} templates from {self.files_processed} files.")

    def generate(self) -> str:
        # runs the full pipeline and returns the concatenated swift source.
        app_log_level = stdlib_logging.getLogger(APP_LOGGER_NAME).getEffectiveLevel()
        progress_disabled = app_log_level > stdlib_logging.INFO or not sys.stderr.isatty()
        stderr_console = RichConsole(file=sys.stderr)

        self.templates = []
        self.files_processed = 0
        with Progress(
            SpinnerColumn(), TextColumn("[bold blue]{task.description}"), BarColumn(),
            transient=True, disable=progress_disabled, console=stderr_console
        ) as progress:
            self._parse_all(progress)

        options = self.config.code_generation_options()
        generated = generate_code(self.templates, options)
        if self.config.emit_runtime:
            generated = HTML_QUOTE_RUNTIME_SOURCE + "\n" + generated
        self.log.info("generation_complete", templates=len(self.templates), bytes=len(generated.encode("utf-8")))
        return generated
