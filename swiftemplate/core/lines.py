# swiftemplate/core/lines.py
"""
Classification of single source lines.

A line is either plain text or a directive. Directives start (after optional
leading spaces/tabs) with the escape prefix ``%%`` followed by a keyword:

    %% template page(title: String)
    %% for item in items
    %% if items.isEmpty
    %% else if items.count == 1
    %% endtemplate

Directive arguments are captured verbatim and never validated.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import structlog

from swiftemplate.exceptions import InvalidDirective

log = structlog.get_logger(__name__)

ESCAPE_PREFIX = "%%"
# only space and tab separate words in a directive.
DIRECTIVE_WHITESPACE = " \t"


@dataclass(frozen=True)
class Text:
    text: str

    def __str__(self):
        return self.text


@dataclass(frozen=True)
class TemplateStart:
    spec: str

    def __str__(self):
        return f"template {self.spec}"


@dataclass(frozen=True)
class TemplateEnd:
    def __str__(self):
        return "endtemplate"


@dataclass(frozen=True)
class ForStart:
    variable: str
    iterable: str

    def __str__(self):
        return f"for {self.variable} in {self.iterable}"


@dataclass(frozen=True)
class ForEnd:
    def __str__(self):
        return "endfor"


@dataclass(frozen=True)
class IfStart:
    expression: str

    def __str__(self):
        return f"if {self.expression}"


@dataclass(frozen=True)
class IfElif:
    expression: str

    def __str__(self):
        return f"else if {self.expression}"


@dataclass(frozen=True)
class IfElse:
    def __str__(self):
        return "else"


@dataclass(frozen=True)
class IfEnd:
    def __str__(self):
        return "endif"


TemplateLine = Union[
    Text, TemplateStart, TemplateEnd, ForStart, ForEnd, IfStart, IfElif, IfElse, IfEnd
]


def text_after_escape(line: str) -> Optional[str]:
    """
    If the line starts with the escape prefix (only whitespace before it),
    returns what follows, trimmed. Returns None for non-directive lines and
    for a prefix with nothing after it.
    """
    stripped = line.lstrip(DIRECTIVE_WHITESPACE)
    if not stripped.startswith(ESCAPE_PREFIX):
        return None
    rest = stripped[len(ESCAPE_PREFIX):].strip(DIRECTIVE_WHITESPACE)
    return rest or None


def first_word_and_rest(text: str) -> Optional[Tuple[str, str]]:
    # splits off the first whitespace-delimited word; None if there is no word.
    stripped = text.lstrip(DIRECTIVE_WHITESPACE)
    if not stripped:
        return None
    end = 0
    while end < len(stripped) and stripped[end] not in DIRECTIVE_WHITESPACE:
        end += 1
    return stripped[:end], stripped[end:].lstrip(DIRECTIVE_WHITESPACE)


def _classify_for(rest: str, filename: str, line_number: int) -> ForStart:
    split = first_word_and_rest(rest)
    if split:
        variable, after_variable = split
        in_split = first_word_and_rest(after_variable)
        if in_split and in_split[0] == "in" and in_split[1]:
            return ForStart(variable=variable, iterable=in_split[1])
    raise InvalidDirective(filename, line_number, rest)


def classify_line(line: str, filename: str = "<input>", line_number: int = 0) -> TemplateLine:
    """
    Classifies one raw source line.

    Args:
        line: The raw line, without its line terminator.
        filename: Source name, used only in error reports.
        line_number: 1-based line number, used only in error reports.

    Raises:
        InvalidDirective: For an unknown keyword or a malformed ``for``.
    """
    directive = text_after_escape(line)
    if directive is None:
        return Text(line)

    word, rest = first_word_and_rest(directive)

    if word == "if":
        return IfStart(rest)
    if word == "elif":
        return IfElif(rest)
    if word == "else":
        # "else if" is accepted as a synonym for "elif"
        else_split = first_word_and_rest(rest)
        if else_split and else_split[0] == "if":
            return IfElif(else_split[1])
        return IfElse()
    if word == "endif":
        return IfEnd()
    if word == "for":
        return _classify_for(rest, filename, line_number)
    if word == "endfor":
        return ForEnd()
    if word == "template":
        return TemplateStart(rest)
    if word == "endtemplate":
        return TemplateEnd()

    log.debug("unknown_directive_keyword", keyword=word, file=filename, line=line_number)
    raise InvalidDirective(filename, line_number, directive)
