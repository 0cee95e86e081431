"""Module entrypoint for `python -m waitloop`."""

from waitloop.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
