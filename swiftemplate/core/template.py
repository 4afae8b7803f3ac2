# swiftemplate/core/template.py
"""
The in-memory representation of a parsed template.

A template body is an ordered sequence of elements, each of which maps
one-to-one onto a statement in the generated Swift function:

- ``Literal``: text emitted verbatim at runtime
- ``Code``: Swift statements inserted verbatim into the function body
- ``Expression``: Swift expression whose ``String(...)`` conversion is emitted,
  optionally HTML-escaped
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple, Union


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Code:
    code: str


@dataclass(frozen=True)
class Expression:
    code: str
    unfiltered: bool = False


TemplateElement = Union[Literal, Code, Expression]


@dataclass(frozen=True)
class Template:
    # the name and arguments of the generated function, emitted verbatim.
    spec: str
    elements: Tuple[TemplateElement, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))


def simplify_template_elements(elements: Iterable[TemplateElement]) -> List[TemplateElement]:
    """
    Merges runs of adjacent Literal elements into one, joining their text with
    a line break, so the generated function has fewer append statements.
    Every other element is kept in place and breaks a run.
    """
    literals_seen: List[str] = []
    result: List[TemplateElement] = []

    for element in elements:
        if isinstance(element, Literal):
            literals_seen.append(element.text)
            continue
        if literals_seen:
            result.append(Literal("\n".join(literals_seen)))
            literals_seen = []
        result.append(element)

    if literals_seen:
        result.append(Literal("\n".join(literals_seen)))
    return result
