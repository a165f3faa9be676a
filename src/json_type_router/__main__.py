"""Module entry point for `python -m json_type_router`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
