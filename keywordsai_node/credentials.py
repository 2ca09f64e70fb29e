"""Keywords AI API credential record and bearer authenticator."""

from collections.abc import Generator
from typing import Annotated

import httpx
from pydantic import BaseModel, Field, SecretStr

from keywordsai_node import config

CREDENTIAL_NAME = "keywordsAIApi"
DOCUMENTATION_URL = "https://docs.keywordsai.co/get-started/api-keys"

# Any non-error response to this request means the key is accepted.
TEST_REQUEST_METHOD = "GET"
TEST_REQUEST_PATH = "/models"


class KeywordsAICredentials(BaseModel):
    api_key: Annotated[SecretStr, Field(description="Keywords AI API key")]

    @classmethod
    def from_settings(cls) -> "KeywordsAICredentials":
        """Build credentials from KEYWORDSAI_API_KEY.

        Raises:
            ValueError: If no API key is configured
        """
        api_key = config.get_settings().api_key
        if api_key is None or not api_key.get_secret_value():
            raise ValueError("Keywords AI API key not configured (set KEYWORDSAI_API_KEY)")
        return cls(api_key=api_key)

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key.get_secret_value()}"}


class BearerAuth(httpx.Auth):
    """Attach the credential's bearer token to every request."""

    def __init__(self, credentials: KeywordsAICredentials):
        self._credentials = credentials

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers.update(self._credentials.auth_headers())
        yield request
