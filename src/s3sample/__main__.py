"""Allow ``python -m s3sample``."""

from s3sample.cli import run

run()
