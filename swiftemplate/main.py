# swiftemplate/main.py
"""Main entry point for the swiftemplate CLI application."""

from swiftemplate.cli.interface import main_cli


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli(prog_name="swiftemplate")

if __name__ == '__main__':
    entrypoint()
