"""
S3-backed webhook provider.

The routing document lives in a single S3 object owned by an operator. It is
read through a ``WebhookDefinitionCache`` so at most one GetObject is issued
per refresh period.
"""

import json
import time
from typing import Any, Callable, Optional

import boto3

from orderbook_notifier.constants import WEBHOOK_CONFIG_REFRESH_SECONDS
from orderbook_notifier.handlers.models.env_vars import NotificationHandlerEnvVars
from orderbook_notifier.handlers.utils.observability import logger, tracer
from orderbook_notifier.models.webhook import WebhookDefinition
from orderbook_notifier.providers.base import BaseWebhookProvider
from orderbook_notifier.providers.definition_cache import WebhookDefinitionCache


class S3WebhookProvider(BaseWebhookProvider):
    """Resolves endpoints against a routing document stored in S3."""

    def __init__(
        self,
        bucket: str,
        key: str,
        s3_client: Optional[Any] = None,
        refresh_period_seconds: float = WEBHOOK_CONFIG_REFRESH_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            bucket: Bucket holding the routing document
            key: Object key of the routing document
            s3_client: boto3 S3 client, created on first fetch when omitted
            refresh_period_seconds: How long a fetched document is served from cache
            clock: Time source in seconds, injectable for tests
        """
        self.bucket = bucket
        self.key = key
        self._s3_client = s3_client
        self.cache = WebhookDefinitionCache(
            fetch=self.fetch_definition,
            refresh_period_seconds=refresh_period_seconds,
            clock=clock,
        )

    @property
    def s3_client(self) -> Any:
        if self._s3_client is None:
            self._s3_client = boto3.client('s3')
        return self._s3_client

    def get_definition(self) -> WebhookDefinition:
        return self.cache.get_definition()

    @tracer.capture_method
    def fetch_definition(self) -> WebhookDefinition:
        """
        Read and validate the routing document from S3.

        Raises:
            botocore.exceptions.ClientError: If the object cannot be read
            pydantic.ValidationError: If the document does not match the expected shape
        """
        response = self.s3_client.get_object(Bucket=self.bucket, Key=self.key)
        document = json.loads(response['Body'].read())
        definition = WebhookDefinition.model_validate(document)

        logger.info(
            'Fetched webhook definition',
            extra={
                'bucket': self.bucket,
                'key': self.key,
                'catch_all_count': len(definition.catch_all),
            },
        )
        return definition


def build_webhook_provider(env: NotificationHandlerEnvVars, s3_client: Optional[Any] = None) -> S3WebhookProvider:
    """Build the provider for the deployment stage described by ``env``."""
    return S3WebhookProvider(
        bucket=env.webhook_config_bucket,
        key=env.webhook_config_key,
        s3_client=s3_client,
        refresh_period_seconds=env.WEBHOOK_CONFIG_REFRESH_SECONDS,
    )
