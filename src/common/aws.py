"""AWS client factories."""

import os

import boto3
from botocore.config import Config as BotoConfig
from dotenv import load_dotenv

load_dotenv()


def _client_config(connect_timeout: float, read_timeout: float) -> BotoConfig:
    # Retries are owned by the pipeline's retry policy, not botocore.
    return BotoConfig(
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        retries={"max_attempts": 1, "mode": "standard"},
    )


def get_s3_client(region: str | None = None, connect_timeout: float = 5, read_timeout: float = 15):
    """Create S3 client."""
    return boto3.client(
        "s3",
        region_name=region or os.environ.get("AWS_REGION"),
        endpoint_url=os.environ.get("S3_ENDPOINT"),
        config=_client_config(connect_timeout, read_timeout),
    )


def get_bedrock_client(region: str | None = None, connect_timeout: float = 5, read_timeout: float = 60):
    """Create Bedrock runtime client."""
    return boto3.client(
        "bedrock-runtime",
        region_name=region or os.environ.get("AWS_REGION"),
        config=_client_config(connect_timeout, read_timeout),
    )


def get_ses_client(region: str | None = None, connect_timeout: float = 5, read_timeout: float = 15):
    """Create SES client."""
    return boto3.client(
        "ses",
        region_name=region or os.environ.get("AWS_REGION"),
        config=_client_config(connect_timeout, read_timeout),
    )
