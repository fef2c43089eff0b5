from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from typing import Any

"""JWT utilities (HS256 only).

Tokens are minted by the authentication service; this module only needs to
verify them and read the principal. encode() exists for tooling and tests.
Claims enforced: signature, exp (with leeway), nbf.
"""

ALG_HS256 = "HS256"
SKEW_SECS = 30
DEFAULT_TTL = 7 * 24 * 3600


class JWTError(Exception):
    pass


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + pad)


def _sign(msg: bytes, secret: str) -> str:
    sig = hmac.new(secret.encode(), msg, hashlib.sha256).digest()
    return _b64url(sig)


def encode(payload: dict[str, Any], *, secret: str, ttl: int = DEFAULT_TTL) -> str:
    now = int(time.time())
    header = {"alg": ALG_HS256, "typ": "JWT"}
    pl = payload.copy()
    pl.setdefault("iat", now)
    pl.setdefault("exp", now + ttl)
    header_b = _b64url(json.dumps(header, separators=(",", ":")).encode())
    payload_b = _b64url(json.dumps(pl, separators=(",", ":")).encode())
    msg = f"{header_b}.{payload_b}".encode()
    return f"{header_b}.{payload_b}.{_sign(msg, secret)}"


def decode(token: str, *, secret: str, leeway: int = SKEW_SECS) -> dict[str, Any]:
    try:
        header_b, payload_b, sig = token.split(".")
    except ValueError as e:
        raise JWTError("malformed token") from e
    try:
        header = json.loads(_b64url_decode(header_b))
    except (ValueError, UnicodeDecodeError) as e:
        raise JWTError("bad header") from e
    if not isinstance(header, dict) or header.get("alg") != ALG_HS256:
        raise JWTError("alg")
    expected = _sign(f"{header_b}.{payload_b}".encode(), secret)
    if not hmac.compare_digest(expected.encode(), sig.encode("utf-8", "surrogatepass")):
        raise JWTError("bad signature")
    try:
        payload = json.loads(_b64url_decode(payload_b))
    except (ValueError, UnicodeDecodeError) as e:
        raise JWTError("bad payload") from e
    if not isinstance(payload, dict):
        raise JWTError("bad payload")
    now = int(time.time())
    exp = payload.get("exp")
    if exp is not None and (not isinstance(exp, int | float) or now > exp + leeway):
        raise JWTError("expired")
    nbf = payload.get("nbf")
    if isinstance(nbf, int | float) and now + leeway < nbf:
        raise JWTError("not yet valid")
    return payload


def principal_from_claims(payload: dict[str, Any]) -> str | None:
    # Older tokens carry the account id as userId instead of sub
    raw = payload.get("sub") or payload.get("userId")
    if raw is None or raw == "":
        return None
    return str(raw)


__all__ = ["JWTError", "encode", "decode", "principal_from_claims"]
