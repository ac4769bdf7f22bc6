"""Entry point for ``python -m dirwm``."""

from dirwm.cli.commands import app

if __name__ == "__main__":
    app()
