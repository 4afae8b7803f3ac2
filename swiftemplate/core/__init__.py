# swiftemplate/core/__init__.py
"""
Core template compiler: line classification, template scanning, element
simplification and Swift code generation.
"""
from .codegen import generate_code, template_as_code
from .scanner import parse_templates
from .template import Code, Expression, Literal, Template, simplify_template_elements

__all__ = [
    "Code",
    "Expression",
    "Literal",
    "Template",
    "generate_code",
    "parse_templates",
    "simplify_template_elements",
    "template_as_code",
]
