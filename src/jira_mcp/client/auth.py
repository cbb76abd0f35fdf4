"""HTTP Basic authentication for Jira."""

from __future__ import annotations

import base64
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer


class BasicAuth(BaseModel):
    """Jira username with a password or personal API token.

    The secret stays wrapped in SecretStr; only the Authorization header
    exposes it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    username: Annotated[str, Field(min_length=1)]
    password: SecretStr

    @property
    def header_value(self) -> str:
        token = f"{self.username}:{self.password.get_secret_value()}".encode()
        return f"Basic {base64.b64encode(token).decode()}"

    def apply(self, headers: dict[str, str]) -> dict[str, str]:
        """Add the Authorization header to ``headers`` and return them."""
        headers["Authorization"] = self.header_value
        return headers

    @field_serializer("password", when_used="json")
    def _mask(self, _: SecretStr) -> str:
        return "***"
