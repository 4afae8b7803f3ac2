# swiftemplate/core/codegen.py
"""
Renders parsed templates as Swift source.

Each template becomes one function that appends its fragments to a local
``[String]`` buffer and returns them joined with a single space.
"""
from typing import Iterable

import structlog

from swiftemplate.config.settings import CodeGenerationOptions

from .template import (
    Code,
    Expression,
    Literal,
    Template,
    TemplateElement,
    simplify_template_elements,
)

log = structlog.get_logger(__name__)

# local buffer in every generated function; must not clash with template parameters.
BUFFER_NAME = "_ℜ"
# provided by the runtime extension, see swiftemplate.core.runtime
HTML_QUOTE_PROPERTY = "HTMLQuote"

_SWIFT_LITERAL_ESCAPES = {
    '"': '\\"',
    "\r": "\\r",
    "\n": "\\n",
    "\t": "\\t",
    "\0": "\\0",
}


def swift_literal_quoted(text: str) -> str:
    # backslashes pass through so "\(name)" interpolation in literal text still works.
    return '"' + "".join(_SWIFT_LITERAL_ESCAPES.get(ch, ch) for ch in text) + '"'


def element_as_code(element: TemplateElement, options: CodeGenerationOptions) -> str:
    if isinstance(element, Literal):
        return f"{BUFFER_NAME}.append({swift_literal_quoted(element.text)})"
    if isinstance(element, Code):
        return element.code
    if isinstance(element, Expression):
        converted = f"String({element.code})"
        if options.html_quote_expressions and not element.unfiltered:
            converted = f"{converted}.{HTML_QUOTE_PROPERTY}"
        return f"{BUFFER_NAME}.append({converted})"
    raise TypeError(f"not a template element: {element!r}")


def template_as_code(template: Template, options: CodeGenerationOptions) -> str:
    """Emits the Swift function for one template."""
    start = f"func {template.spec} -> String {{\nvar {BUFFER_NAME}=[String]()\n"
    end = f'\nreturn {BUFFER_NAME}.joinWithSeparator(" ")\n}}\n'
    body = "\n".join(
        element_as_code(element, options)
        for element in simplify_template_elements(template.elements)
    )
    return start + body + end


def generate_code(templates: Iterable[Template], options: CodeGenerationOptions) -> str:
    # concatenates the generated functions in input order.
    sources = [template_as_code(template, options) for template in templates]
    log.debug("code_generated", templates=len(sources), html_quote=options.html_quote_expressions)
    return "".join(sources)
