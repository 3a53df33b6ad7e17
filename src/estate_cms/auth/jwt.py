"""
estate_cms.auth.jwt

JWT issuing and verification (the credential verifier).

Responsibilities:
- Issue access tokens at login/registration.
- Decode and validate tokens with strict claim requirements (iss/aud/exp/iat/sub).
- Classify failures as expired, malformed or otherwise invalid.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

import jwt
from jwt import DecodeError, ExpiredSignatureError, InvalidTokenError


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str


@dataclass(frozen=True, slots=True)
class VerifiedCredential:
    identity: str
    issued_role: str
    permissions: frozenset[str]
    expiry: datetime


FailureKind = Literal["expired", "malformed", "invalid"]


class JwtValidationError(Exception):
    def __init__(self, kind: FailureKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    role: str,
    permissions: list[str],
    ttl: timedelta = timedelta(hours=24),
) -> str:
    now = datetime.now(tz=UTC)
    # Role/permissions are informational for clients; authorization always re-reads the role.
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "role": role,
        "permissions": permissions,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub"],
            },
        )
    except ExpiredSignatureError as e:
        raise JwtValidationError("expired", str(e)) from e
    except DecodeError as e:
        # DecodeError covers undecodable segments and bad signatures alike.
        kind: FailureKind = "invalid" if isinstance(e, jwt.InvalidSignatureError) else "malformed"
        raise JwtValidationError(kind, str(e)) from e
    except InvalidTokenError as e:
        raise JwtValidationError("invalid", str(e)) from e


class JwtCredentialVerifier:
    def __init__(self, cfg: JwtConfig) -> None:
        self._cfg = cfg

    def verify(self, token: str) -> VerifiedCredential:
        payload = decode_and_validate(cfg=self._cfg, token=token)
        subject = str(payload.get("sub") or "")
        if not subject:
            raise JwtValidationError("invalid", "empty subject")
        perms = payload.get("permissions") or []
        if not isinstance(perms, list):
            raise JwtValidationError("malformed", "permissions claim must be a list")
        return VerifiedCredential(
            identity=subject,
            issued_role=str(payload.get("role") or ""),
            permissions=frozenset(str(p) for p in perms),
            expiry=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
        )


# --- Module Notes -----------------------------------------------------------
# Production systems often prefer RS256 + JWKS; HS256 keeps local setups self-contained.
