"""Package entry point.

Allows running the game as: python -m taboo
"""

from taboo.cli.main import cli_main

if __name__ == "__main__":
    cli_main()
