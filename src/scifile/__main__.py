"""Run the table query tool with ``python -m scifile``."""

from .cli import main as cli_main


def main() -> None:
    """Entry point for ``python -m scifile``."""
    raise SystemExit(cli_main())


if __name__ == "__main__":
    main()
