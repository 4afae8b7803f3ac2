"""swiftemplate: compile line-oriented HTML templates into Swift functions."""

__version__ = "0.3.0"
