#!/usr/bin/env python3
"""Main CLI entry point for crop-yield-waffle

This allows running CLI commands via:
    python -m cli plot_yield_distribution --help
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def main():
    """Main CLI dispatcher"""
    if len(sys.argv) < 2:
        print("Usage: python -m cli <command> [args...]")
        print("\nAvailable commands:")
        print(
            "  plot_yield_distribution  Plot country mean yields by yield class and continent"
        )
        print("\nFor help on a specific command:")
        print("  python -m cli <command> --help")
        sys.exit(1)

    command = sys.argv[1]
    # Remove the command from sys.argv so the subcommand can parse its own args
    sys.argv = [sys.argv[0]] + sys.argv[2:]

    if command == "plot_yield_distribution":
        from cli.plot_yield_distribution import main as plot_main

        plot_main()
    else:
        print(f"Unknown command: {command}")
        print("Available commands: plot_yield_distribution")
        sys.exit(1)


if __name__ == "__main__":
    main()
