"""API key signing for the realtime endpoint.

BitMEX authenticates a websocket with an ``authKeyExpires`` request whose
signature is HEX(HMAC_SHA256(secret, verb + path + expires + data)).

Reference: https://www.bitmex.com/app/wsAPI#API-Keys
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, UTC
from typing import Optional
import hashlib
import hmac

from bitmex_realtime.subscriptions import Request


AUTH_OP = "authKeyExpires"
AUTH_VERB = "GET"
AUTH_PATH = "/realtime"
DEFAULT_AUTH_TTL = timedelta(hours=24)


@dataclass(frozen=True)
class Credential:
    """API key identifier and secret. The secret is kept out of repr."""

    key: str
    secret: str = field(repr=False)


def generate_signature(secret: str, verb: str, path: str, expires: int, data: str = "") -> str:
    """Sign a request the way BitMEX expects.

    Args:
        secret: API secret used as the HMAC key
        verb: HTTP verb ("GET" for the realtime endpoint)
        path: Request path ("/realtime")
        expires: Expiry as epoch seconds
        data: Request body, empty for websocket auth

    Returns:
        Lowercase hex digest
    """
    message = f"{verb}{path}{expires}{data}"
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


def build_auth_request(
    credential: Credential,
    now: Optional[datetime] = None,
    ttl: timedelta = DEFAULT_AUTH_TTL,
) -> Request:
    """Build the signed authKeyExpires request.

    Args:
        credential: Key and secret to sign with
        now: Current time, defaults to datetime.now(UTC)
        ttl: How long the signature stays valid

    Returns:
        Request with args [key, expires, signature]
    """
    if now is None:
        now = datetime.now(UTC)
    expires = int((now + ttl).timestamp())
    signature = generate_signature(credential.secret, AUTH_VERB, AUTH_PATH, expires)
    return Request(op=AUTH_OP, args=(credential.key, expires, signature), id=1)
