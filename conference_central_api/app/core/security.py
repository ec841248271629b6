"""
Security helpers for bearer token authentication and the auth gate.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed
the caller's user id (``sub``), e‑mail address (``email``) and
optionally the OAuth client they were issued to (``azp``) and the
granted scopes (``scope``), plus an expiration timestamp (``exp``).

The FastAPI dependency ``get_current_identity`` never rejects a
request by itself: it resolves the token to an ``Identity`` or to
``None``.  Rejection is the job of ``require_identity``, which every
gated service operation calls before touching the datastore.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """A verified caller as reported by the authentication provider."""

    user_id: str
    email: Optional[str] = None


def require_identity(identity: Optional[Identity]) -> Identity:
    """Return ``identity`` or raise ``UnauthorizedError`` if it is missing."""
    if identity is None or not identity.user_id:
        logger.warning("Rejected call without a caller identity")
        raise UnauthorizedError()
    return identity


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field representing the
    expiration time as a UNIX timestamp.  The token is a string of the
    form ``header.payload.signature``, where each part is base64url
    encoded.  Clients must include this token in the ``Authorization``
    header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token, e.g.
        ``{"sub": "1234", "email": "lemoncake@example.com"}``.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature = _sign(signing_input, settings.secret_key)
    signature_b64 = _b64_url_encode(signature)
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, str]]:
    """Verify and decode a JWT token.

    Splits the token into header, payload and signature, verifies the
    HMAC signature and checks the ``exp`` field.  If validation
    succeeds, returns the payload dictionary; otherwise returns
    ``None``.
    """
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        if not isinstance(data, dict):
            return None
        if data.get("exp") is None or int(data["exp"]) < int(time.time()):
            return None
    except (ValueError, TypeError, UnicodeDecodeError):
        return None
    return data


def identity_from_claims(claims: Dict[str, str]) -> Optional[Identity]:
    """Build an ``Identity`` from decoded token claims.

    Returns ``None`` when the subject is missing or the token was issued
    to a client id that is not in ``settings.allowed_client_ids``.  A
    token carrying a ``scope`` claim only exposes its e‑mail when
    ``settings.email_scope`` was granted; tokens without ``scope`` are
    trusted as they are.
    """
    user_id = claims.get("sub")
    if not user_id:
        return None
    allowed = settings.allowed_client_ids
    if allowed and claims.get("azp") not in allowed:
        logger.warning("Token issued to unknown client id %r", claims.get("azp"))
        return None
    email = claims.get("email")
    scope = claims.get("scope")
    if scope is not None and settings.email_scope not in str(scope).split():
        email = None
    return Identity(user_id=str(user_id), email=email)


security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Identity]:
    """Dependency that resolves the bearer token to an ``Identity``.

    Anonymous requests and invalid or expired tokens yield ``None``;
    gated operations turn that into ``UnauthorizedError``.
    """
    if credentials is None:
        return None
    claims = decode_access_token(credentials.credentials)
    if not claims:
        return None
    return identity_from_claims(claims)
