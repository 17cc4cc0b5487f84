"""
Process configuration for the Modrinth client.

Credentials are never hard-coded; they come from the environment:

    MODRINTH_TOKEN      personal access token (sent as the Authorization header)
    MODRINTH_AGENT      User-Agent identifying the application
    MODRINTH_API_BASE   alternative API root, e.g. the staging server
    MODRINTH_TIMEOUT    per-request timeout in seconds
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from .routes import MODRINTHAPIURLS
from .utils import DEFAULT_USER_AGENT


class ModrinthConfig(BaseModel):
    token: Optional[str] = Field(default=None, description="Personal access token")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User agent string")
    base_url: str = Field(default=MODRINTHAPIURLS.BASE_URL, description="Base URL of the REST API")
    timeout: float = Field(default=15.0, description="Per-request timeout in seconds")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ModrinthConfig":
        """Build a config from `environ` (defaults to os.environ); unset variables keep their defaults."""
        env = os.environ if environ is None else environ
        values = {}
        if env.get("MODRINTH_TOKEN"):
            values["token"] = env["MODRINTH_TOKEN"]
        if env.get("MODRINTH_AGENT"):
            values["user_agent"] = env["MODRINTH_AGENT"]
        if env.get("MODRINTH_API_BASE"):
            values["base_url"] = env["MODRINTH_API_BASE"].rstrip("/")
        if env.get("MODRINTH_TIMEOUT"):
            values["timeout"] = env["MODRINTH_TIMEOUT"]
        return cls(**values)
