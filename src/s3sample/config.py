"""Configuration loading and Pydantic models for s3sample."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

# Environment variables consulted by load_config_from_env().
CONFIG_ENV = "S3SAMPLE_CONFIG"
LOG_LEVEL_ENV = "S3SAMPLE_LOG_LEVEL"
LOG_FORMAT_ENV = "S3SAMPLE_LOG_FORMAT"

DEFAULT_CONFIG_PATH = Path("s3sample.yaml")


class StorageConfig(BaseModel):
    """Target bucket, object and S3 client configuration."""

    bucket: str = "ig-s3-test-bucket"
    download_key: str = "MyObjectKey2"
    region: str = "ap-northeast-1"
    endpoint_url: str = ""
    use_path_style: bool = False
    access_key_id: str = ""
    secret_access_key: str = ""


class LoggingConfig(BaseModel):
    """Diagnostic logging configuration."""

    level: str = "INFO"
    format: str = "text"


class SampleConfig(BaseModel):
    """Top-level s3sample configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _parse_storage(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the storage section from YAML data into a dict for Pydantic."""
    if data is None:
        return {}
    return {
        "bucket": data.get("bucket", "ig-s3-test-bucket"),
        "download_key": data.get("download_key", "MyObjectKey2"),
        "region": data.get("region", "ap-northeast-1"),
        "endpoint_url": data.get("endpoint_url") or "",
        "use_path_style": data.get("use_path_style", False),
        "access_key_id": data.get("access_key_id") or "",
        "secret_access_key": data.get("secret_access_key") or "",
    }


def _parse_logging(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the logging section from YAML data."""
    if data is None:
        return {}
    return {
        "level": str(data.get("level", "INFO")).upper(),
        "format": data.get("format", "text"),
    }


def load_config(path: Path) -> SampleConfig:
    """Load a SampleConfig from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A fully populated SampleConfig validated by Pydantic.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
    """
    with open(path, "r") as fh:
        raw: dict[str, Any] = yaml.safe_load(fh) or {}

    return SampleConfig(
        storage=StorageConfig(**_parse_storage(raw.get("storage"))),
        logging=LoggingConfig(**_parse_logging(raw.get("logging"))),
    )


def load_config_from_env(environ: dict[str, str] | None = None) -> SampleConfig:
    """Resolve the configuration for a CLI run.

    The file named by ``S3SAMPLE_CONFIG`` is loaded when set. Otherwise
    ``s3sample.yaml`` in the working directory is used if it exists, and
    built-in defaults if it does not. Log level and format may then be
    overridden by ``S3SAMPLE_LOG_LEVEL`` and ``S3SAMPLE_LOG_FORMAT``.

    Raises:
        FileNotFoundError: If ``S3SAMPLE_CONFIG`` names a missing file.
        yaml.YAMLError: If the selected file is not valid YAML.
    """
    env = os.environ if environ is None else environ

    explicit = env.get(CONFIG_ENV)
    if explicit:
        config = load_config(Path(explicit))
    elif DEFAULT_CONFIG_PATH.is_file():
        config = load_config(DEFAULT_CONFIG_PATH)
    else:
        config = SampleConfig()

    if env.get(LOG_LEVEL_ENV):
        config.logging.level = env[LOG_LEVEL_ENV].upper()
    if env.get(LOG_FORMAT_ENV):
        config.logging.format = env[LOG_FORMAT_ENV]
    return config
