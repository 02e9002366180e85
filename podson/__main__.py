"""Allow ``python -m podson``."""

from podson.app import run

run()
