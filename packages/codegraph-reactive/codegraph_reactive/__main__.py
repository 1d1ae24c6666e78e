"""Allow `python -m codegraph_reactive`."""

from codegraph_reactive.cli import run

run()
