"""Allow running cmdkit with ``python -m cmdkit``."""

from cmdkit.cli import app

if __name__ == "__main__":
    app()
