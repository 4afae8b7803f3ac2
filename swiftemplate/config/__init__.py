# swiftemplate/config/__init__.py
"""
Configuration for swiftemplate runs: the GeneratorConfig/CodeGenerationOptions
dataclasses and the TOML loader that fills them.
"""
from .settings import CodeGenerationOptions, GeneratorConfig

__all__ = ["CodeGenerationOptions", "GeneratorConfig"]
