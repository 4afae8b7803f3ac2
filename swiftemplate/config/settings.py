from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


DEFAULT_HTML_QUOTE_EXPRESSIONS = False
DEFAULT_EMIT_RUNTIME = False
DEFAULT_CONSOLE_SHOW_SUMMARY = False

@dataclass(frozen=True)
class CodeGenerationOptions:
    # run-wide options for the code generator; never mutated during generation.
    html_quote_expressions: bool = DEFAULT_HTML_QUOTE_EXPRESSIONS

@dataclass
class GeneratorConfig:
    # holds all configuration parameters for a single run.
    input_paths: List[Path] = field(default_factory=list)
    output_file: Optional[Path] = None
    html_quote_expressions: bool = DEFAULT_HTML_QUOTE_EXPRESSIONS
    emit_runtime: bool = DEFAULT_EMIT_RUNTIME
    console_show_summary: bool = DEFAULT_CONSOLE_SHOW_SUMMARY
    active_config_profile_name: Optional[str] = None

    def code_generation_options(self) -> CodeGenerationOptions:
        return CodeGenerationOptions(html_quote_expressions=self.html_quote_expressions)
