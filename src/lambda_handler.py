"""AWS Lambda entry point.

Mangum translates API Gateway events into ASGI calls on the lazily
built app from src/serverless.py.
"""

import json

from mangum import Mangum

from src.logging.structured import get_logger
from src.main import INTERNAL_ERROR_BODY
from src.serverless import app

mangum_handler = Mangum(app, lifespan="off")


def handler(event: dict, context) -> dict:
    """Lambda handler. Events Mangum cannot translate get a generic 500."""
    try:
        return mangum_handler(event, context)
    except Exception:
        get_logger().exception("Failed to handle Lambda event")
        return {
            "statusCode": 500,
            "headers": {"content-type": "application/json"},
            "body": json.dumps(INTERNAL_ERROR_BODY),
            "isBase64Encoded": False,
        }
