"""
Main entry point for the action package.

Usage:
    python -m govulners_action scan [OPTIONS]
    python -m govulners_action download [OPTIONS]
    python -m govulners_action cache [OPTIONS]
"""

import sys


def main() -> int:
    """Main entry point."""
    from .cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
