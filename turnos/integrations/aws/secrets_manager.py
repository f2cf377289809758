"""
AWS Secrets Manager client.

Retrieves JSON secrets (e.g. the Google service-account key) at runtime.
"""

import json
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from turnos.core.exceptions import SecretRetrievalError

logger = logging.getLogger(__name__)


class SecretsManagerClient:
    """
    Thin wrapper over the boto3 ``secretsmanager`` client.

    boto3 is synchronous; async callers should run ``get_secret_json`` in a
    worker thread.
    """

    def __init__(self, region: str, client: Any = None):
        """
        Initialize Secrets Manager client.

        Args:
            region: AWS region of the secrets
            client: Optional preconfigured boto3 client (used by tests)
        """
        self.region = region
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("secretsmanager", region_name=self.region)
            logger.info(f"Secrets Manager client initialized for region: {self.region}")
        return self._client

    def get_secret_json(self, secret_name: str) -> dict[str, Any]:
        """
        Retrieve a secret and parse its ``SecretString`` as JSON.

        Raises:
            SecretRetrievalError: If the secret cannot be read, is empty or
                binary, or is not a JSON object
        """
        try:
            response = self.client.get_secret_value(SecretId=secret_name)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"Error retrieving secret {secret_name}: {error_code}")
            raise SecretRetrievalError(f"Could not retrieve secret {secret_name}", details=str(e)) from e
        except BotoCoreError as e:
            logger.error(f"Error retrieving secret {secret_name}: {e}")
            raise SecretRetrievalError(f"Could not retrieve secret {secret_name}", details=str(e)) from e

        secret_string = response.get("SecretString")
        if not secret_string:
            raise SecretRetrievalError(f"Secret {secret_name} is empty or binary")

        try:
            secret_value = json.loads(secret_string)
        except json.JSONDecodeError as e:
            raise SecretRetrievalError(f"Secret {secret_name} is not valid JSON", details=str(e)) from e

        if not isinstance(secret_value, dict):
            raise SecretRetrievalError(f"Secret {secret_name} must be a JSON object")

        logger.info(f"Retrieved secret: {secret_name}")
        return secret_value
