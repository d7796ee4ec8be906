from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CredentialSet(BaseModel):
    """Endpoint/key/secret triple for one upstream media tenant."""

    url: str = Field(min_length=1)
    api_key: str = Field(min_length=1, alias="apiKey")
    api_secret: str = Field(min_length=1, alias="apiSecret")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def __repr__(self) -> str:
        return f"CredentialSet(url={self.url!r}, api_key={self.api_key!r})"
