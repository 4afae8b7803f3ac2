# swiftemplate/core/scanner.py
"""
Turns a stream of source lines into Template records.

Outside a template only blank lines and ``//`` comments may appear before the
next ``%% template`` directive. Inside a template, lines are literal text
(with optional ``<%= expr %>`` / ``<%=! expr %>`` inline expressions),
control-flow directives, comments, or a ``<%`` ... ``%>`` block of raw Swift.
"""
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

import structlog

from swiftemplate.exceptions import (
    UnclosedCodeBlock,
    UnclosedExpression,
    UnexpectedAtTopLevel,
    UnexpectedInTemplate,
)

from .lines import (
    ESCAPE_PREFIX,
    ForEnd,
    ForStart,
    IfElif,
    IfElse,
    IfEnd,
    IfStart,
    TemplateEnd,
    TemplateStart,
    Text,
    classify_line,
)
from .template import (
    Code,
    Expression,
    Literal,
    Template,
    TemplateElement,
    simplify_template_elements,
)

log = structlog.get_logger(__name__)

EXPRESSION_OPEN = "<%="
UNFILTERED_FLAG = "!"
EXPRESSION_CLOSE = "%>"
CODE_BLOCK_OPEN = "<%"
CODE_BLOCK_CLOSE = "%>"
COMMENT_PREFIX = "//"


class ScanState(Enum):
    SEEKING = "seeking"
    IN_TEMPLATE = "in_template"
    IN_CODE_BLOCK = "in_code_block"


def is_comment_line(line: str) -> bool:
    # a line comment is "//" at the start, bare or after the escape prefix.
    stripped = line.strip()
    if stripped.startswith(ESCAPE_PREFIX):
        stripped = stripped[len(ESCAPE_PREFIX):].lstrip()
    return stripped.startswith(COMMENT_PREFIX)


def scan_literal_line(line: str, filename: str = "<input>", line_number: int = 0) -> List[TemplateElement]:
    """
    Splits a text line into Literal and Expression elements.

    An expression whose code is empty after trimming (``<%= %>``) produces no
    element. The text after the last close marker is always scanned, so a line
    ending in an expression yields a trailing empty Literal.

    Raises:
        UnclosedExpression: An open marker without a matching ``%>``.
    """
    start = line.find(EXPRESSION_OPEN)
    if start < 0:
        return [Literal(line)]

    elements: List[TemplateElement] = []
    if start > 0:
        elements.append(Literal(line[:start]))

    code_start = start + len(EXPRESSION_OPEN)
    unfiltered = line.startswith(UNFILTERED_FLAG, code_start)
    if unfiltered:
        code_start += len(UNFILTERED_FLAG)

    end = line.find(EXPRESSION_CLOSE, code_start)
    if end < 0:
        raise UnclosedExpression(filename, line_number, line)

    code = line[code_start:end].strip()
    if code:
        elements.append(Expression(code, unfiltered=unfiltered))
    else:
        log.debug("empty_expression_dropped", file=filename, line=line_number)

    elements.extend(scan_literal_line(line[end + len(EXPRESSION_CLOSE):], filename, line_number))
    return elements


class TemplateScanner:
    """
    Stateful scanner over the lines of one source file.

    Each call to ``next_template`` consumes lines up to and including the next
    ``%% endtemplate`` and returns the finished Template, or None once the
    input holds no further template.
    """

    def __init__(self, lines: Iterable[str], filename: str = "<input>"):
        self.filename = filename
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}").bind(file=filename)
        self._lines: Iterator[Tuple[int, str]] = enumerate(lines, start=1)
        self.state = ScanState.SEEKING
        self._elements: List[TemplateElement] = []
        self._spec: Optional[str] = None
        self._code_block_lines: List[str] = []
        self._code_block_start: Tuple[int, str] = (0, "")

    def __iter__(self) -> Iterator[Template]:
        template = self.next_template()
        while template is not None:
            yield template
            template = self.next_template()

    def next_template(self) -> Optional[Template]:
        for line_number, line in self._lines:
            if self.state is ScanState.SEEKING:
                self._seek(line, line_number)
            elif self.state is ScanState.IN_CODE_BLOCK:
                self._collect_code_block_line(line)
            else:
                template = self._scan_template_line(line, line_number)
                if template is not None:
                    return template

        if self.state is ScanState.IN_CODE_BLOCK:
            opening_line_number, opening_line = self._code_block_start
            raise UnclosedCodeBlock(self.filename, opening_line_number, opening_line)
        if self.state is ScanState.IN_TEMPLATE:
            self.log.warning("template_not_closed_before_end_of_input", spec=self._spec)
            return self._finish_template()
        return None

    def _seek(self, line: str, line_number: int) -> None:
        if not line.strip() or is_comment_line(line):
            return
        classified = classify_line(line, self.filename, line_number)
        if not isinstance(classified, TemplateStart):
            raise UnexpectedAtTopLevel(self.filename, line_number, str(classified))
        self.log.debug("template_started", spec=classified.spec, line=line_number)
        self._spec = classified.spec
        self._elements = []
        self.state = ScanState.IN_TEMPLATE

    def _collect_code_block_line(self, line: str) -> None:
        if line.strip() == CODE_BLOCK_CLOSE:
            self._elements.append(Code("\n".join(self._code_block_lines)))
            self.log.debug("code_block_closed", lines=len(self._code_block_lines))
            self._code_block_lines = []
            self.state = ScanState.IN_TEMPLATE
        else:
            self._code_block_lines.append(line)

    def _scan_template_line(self, line: str, line_number: int) -> Optional[Template]:
        if line.strip() == CODE_BLOCK_OPEN:
            self.log.debug("code_block_opened", line=line_number)
            self._code_block_start = (line_number, line)
            self._code_block_lines = []
            self.state = ScanState.IN_CODE_BLOCK
            return None
        if is_comment_line(line):
            return None

        classified = classify_line(line, self.filename, line_number)
        if isinstance(classified, Text):
            self._elements.extend(scan_literal_line(classified.text, self.filename, line_number))
        elif isinstance(classified, TemplateStart):
            raise UnexpectedInTemplate(self.filename, line_number, str(classified))
        elif isinstance(classified, TemplateEnd):
            return self._finish_template()
        elif isinstance(classified, ForStart):
            self._elements.append(Code(f"for {classified.variable} in {classified.iterable} {{"))
        elif isinstance(classified, IfStart):
            self._elements.append(Code(f"if {classified.expression} {{"))
        elif isinstance(classified, IfElif):
            self._elements.append(Code(f"}} else if {classified.expression} {{"))
        elif isinstance(classified, IfElse):
            self._elements.append(Code("} else {"))
        elif isinstance(classified, (ForEnd, IfEnd)):
            self._elements.append(Code("}"))
        return None

    def _finish_template(self) -> Template:
        template = Template(spec=self._spec or "", elements=simplify_template_elements(self._elements))
        self.log.debug("template_finished", spec=template.spec, elements=len(template.elements))
        self._spec = None
        self._elements = []
        self.state = ScanState.SEEKING
        return template


def parse_templates(lines: Iterable[str], filename: str = "<input>") -> List[Template]:
    """
    Parses every template in one file's line stream, in order.

    The first error aborts the whole file; no partial list is returned.
    """
    templates = list(TemplateScanner(lines, filename))
    log.info("templates_parsed", file=filename, count=len(templates))
    return templates
