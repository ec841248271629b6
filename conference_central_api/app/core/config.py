"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables or a dedicated configuration service.

Client ids and the e‑mail scope belong to the transport layer: the
core services never read them, only ``core.security`` does when it
decides whether a bearer token may be turned into a caller identity.
"""

import os
from dataclasses import dataclass
from typing import List


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Conference Central API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Path to the SQLite database file.  If a relative path is provided,
    # it will be resolved relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "conference_central.db")

    # OAuth client ids allowed to call the API.  Tokens carrying an ``azp``
    # claim outside this list do not resolve to an identity.  Leave all of
    # them empty to accept tokens from any client (useful in development).
    web_client_id: str = os.getenv("WEB_CLIENT_ID", "")
    android_client_id: str = os.getenv("ANDROID_CLIENT_ID", "")
    ios_client_id: str = os.getenv("IOS_CLIENT_ID", "")
    api_explorer_client_id: str = os.getenv("API_EXPLORER_CLIENT_ID", "")
    email_scope: str = os.getenv("EMAIL_SCOPE", "https://www.googleapis.com/auth/userinfo.email")

    @property
    def allowed_client_ids(self) -> List[str]:
        ids = [
            self.web_client_id,
            self.android_client_id,
            self.ios_client_id,
            self.api_explorer_client_id,
        ]
        return [client_id for client_id in ids if client_id]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables should
# be set before importing this module.
settings = Settings()
