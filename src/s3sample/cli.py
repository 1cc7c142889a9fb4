"""CLI entry point for s3sample.

Usage: ``s3sample [selector]``. The single positional argument is taken
verbatim (there are no flags), so any string is a valid selector.
Configuration comes from the YAML file named by ``S3SAMPLE_CONFIG``.
"""

import logging
import sys
from collections.abc import Sequence

import yaml
from botocore.exceptions import BotoCoreError

from s3sample.config import load_config_from_env
from s3sample.console import Console
from s3sample.dispatcher import dispatch, report, resolve_selector
from s3sample.errors import classify_error
from s3sample.logging_config import configure_logging
from s3sample.storage.s3 import S3StorageClient

BANNER = (
    "===========================================",
    "Getting Started with Amazon S3",
    "===========================================",
    "",
)


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    """Main entry point for the s3sample CLI.

    Loads configuration, builds the S3 client and runs one dispatch.
    Storage failures are printed and still yield exit status 0.

    Args:
        argv: Argument list. Defaults to sys.argv[1:].
        console: Transcript output. Defaults to stdout.

    Returns:
        Process exit status.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    console = console or Console()

    # Use a basic stderr logger for config-loading errors
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    logger = logging.getLogger("s3sample")

    try:
        config = load_config_from_env()
    except FileNotFoundError as exc:
        logger.error("Config file not found: %s", exc.filename)
        return 1
    except (yaml.YAMLError, ValueError) as exc:
        logger.error("Failed to load config: %s", exc)
        return 1

    configure_logging(level=config.logging.level, fmt=config.logging.format)

    selector = resolve_selector(args)
    logger.info(
        "Running selector %r against bucket %s (region=%s)",
        selector,
        config.storage.bucket,
        config.storage.region,
    )

    console.write_lines(list(BANNER))

    client = S3StorageClient.from_config(config.storage)
    try:
        client.init()
    except BotoCoreError as exc:
        logger.error("Could not create S3 client: %s", exc)
        report(classify_error(exc), console)
        return 0

    try:
        result = dispatch(
            selector,
            client,
            console,
            bucket=config.storage.bucket,
            download_key=config.storage.download_key,
        )
    finally:
        client.close()
    report(result, console)
    return 0


def run() -> None:
    """Console-script wrapper around main()."""
    sys.exit(main())


if __name__ == "__main__":
    run()
