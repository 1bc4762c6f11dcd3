"""
Environment variable models for type-safe configuration.

This module defines the Pydantic model for environment variables used by the
order notification handler.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import BaseModel, get_environment_variables
from pydantic import Field

from orderbook_notifier.constants import (
    BETA_WEBHOOK_CONFIG_KEY,
    PRODUCTION_WEBHOOK_CONFIG_KEY,
    WEBHOOK_CONFIG_BUCKET,
)


class NotificationHandlerEnvVars(BaseModel):
    """Environment variables for the order notification handler."""

    # Deployment stage, selects the webhook config bucket and key
    STAGE: Annotated[str, Field(
        default='beta',
        description='Deployment stage name',
        min_length=1
    )] = 'beta'

    WEBHOOK_CONFIG_BUCKET: Annotated[str, Field(
        default=WEBHOOK_CONFIG_BUCKET,
        description='S3 bucket prefix holding the webhook routing document',
        min_length=1
    )] = WEBHOOK_CONFIG_BUCKET

    # Overrides the stage-derived object key when set
    WEBHOOK_CONFIG_KEY: Annotated[Optional[str], Field(
        default=None,
        description='S3 object key of the webhook routing document'
    )] = None

    WEBHOOK_TIMEOUT_MS: Annotated[int, Field(
        default=200,
        description='Per-request timeout for webhook POSTs in milliseconds',
        ge=1,
        le=30000
    )] = 200

    WEBHOOK_CONFIG_REFRESH_SECONDS: Annotated[int, Field(
        default=300,
        description='Maximum age in seconds of the cached routing document',
        ge=1,
        le=3600
    )] = 300

    STALE_ORDER_THRESHOLD_SECONDS: Annotated[int, Field(
        default=20,
        description='Order age in seconds past which a notification counts as stale',
        ge=0
    )] = 20

    STALE_ORDER_THRESHOLD_BLOCKS: Annotated[int, Field(
        default=5,
        description='Blocks past the auction start after which a notification counts as stale',
        ge=0
    )] = 5

    # Service name for observability
    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='order-notifier',
        description='Service name for AWS Powertools'
    )] = 'order-notifier'

    # Metrics namespace
    POWERTOOLS_METRICS_NAMESPACE: Annotated[str, Field(
        default='OrderNotifier',
        description='Namespace for CloudWatch metrics'
    )] = 'OrderNotifier'

    # Log level for AWS Powertools Logger
    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    @property
    def is_production(self) -> bool:
        """Check if running in the production stage."""
        return self.STAGE == 'prod'

    @property
    def webhook_config_bucket(self) -> str:
        """Stage-qualified bucket name."""
        return f'{self.WEBHOOK_CONFIG_BUCKET}-{self.STAGE}'

    @property
    def webhook_config_key(self) -> str:
        """Object key for the routing document, production or beta."""
        if self.WEBHOOK_CONFIG_KEY:
            return self.WEBHOOK_CONFIG_KEY
        return PRODUCTION_WEBHOOK_CONFIG_KEY if self.is_production else BETA_WEBHOOK_CONFIG_KEY

    @property
    def webhook_timeout_seconds(self) -> float:
        return self.WEBHOOK_TIMEOUT_MS / 1000


def get_handler_env_vars() -> NotificationHandlerEnvVars:
    """
    Get typed environment variables for the notification handler.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=NotificationHandlerEnvVars)
