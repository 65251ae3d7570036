"""CLI entry point for configwatch.

Usage:
    python -m configwatch scan /etc/agent/conf/local /etc/agent/conf/remote
    python -m configwatch watch --interval 5
"""

import sys


def main() -> int:
    """Main entry point for the configwatch CLI."""
    from configwatch.cli import run_cli

    return run_cli(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
