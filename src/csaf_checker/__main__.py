"""Permite `python -m csaf_checker ...`."""

from __future__ import annotations

from csaf_checker.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
