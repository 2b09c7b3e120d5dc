# mdcollect/main.py
"""Main entry point for the mdcollect CLI application."""

from mdcollect.cli.interface import main_cli


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli(prog_name="mdcollect")

if __name__ == '__main__':
    entrypoint()
