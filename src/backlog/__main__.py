"""
backlog CLI entrypoint.

Executed via:
  python -m backlog
"""

from backlog.cli.app import app

if __name__ == "__main__":
    app()
