"""Module entrypoint for ``python -m workitems``."""

from workitems.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
