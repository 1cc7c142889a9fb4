"""s3sample - a small Amazon S3 walkthrough driven by a single mode argument."""

__version__ = "0.1.0"
