"""
Order Notification Lambda Function - Entry point for the orders table stream.

This module serves as the Lambda function entry point that delegates to the
order notification handler.
"""

import os
import sys
from typing import Any, Dict

# Add the service module to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from orderbook_notifier.handlers.order_notification_handler import lambda_handler as order_notification_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for order change notifications.

    Args:
        event: DynamoDB stream event
        context: Lambda context object

    Returns:
        Partial batch response dictionary
    """
    return order_notification_handler(event, context)
