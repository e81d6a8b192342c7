# bookr/core/security.py
"""
Session tokens.

BookR has no passwords: logging in looks a user up by email and returns a
signed JWT naming that user. Later requests present it as a Bearer token.
"""

import uuid
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from enum import Enum

from jose import jwt, JWTError

from bookr.core.config import Settings, settings
from bookr.core.exceptions import InvalidToken, TokenExpired, TokenTypeInvalid

logger = logging.getLogger(__name__)

MIN_SECRET_LENGTH = 32

# Sent on every response by SecurityHeadersMiddleware.
SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class TokenType(str, Enum):
    ACCESS = "access"


@dataclass(frozen=True)
class TokenSettings:
    """Signing parameters, checked once when the module is imported."""

    secret: str
    algorithm: str
    expire_minutes: int
    issuer: str
    audience: str

    def __post_init__(self):
        if len(self.secret or "") < MIN_SECRET_LENGTH:
            raise ValueError(
                f"JWT_SECRET must be configured and be at least {MIN_SECRET_LENGTH} characters long."
            )

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "TokenSettings":
        return cls(
            secret=app_settings.JWT_SECRET,
            algorithm=app_settings.JWT_ALGORITHM,
            expire_minutes=app_settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            issuer=app_settings.TOKEN_ISSUER,
            audience=app_settings.TOKEN_AUDIENCE,
        )


class TokenManager:
    def __init__(self, config: TokenSettings):
        self.config = config

    @property
    def expires_in_seconds(self) -> int:
        return self.config.expire_minutes * 60

    def create_token(
        self,
        subject: str,
        token_type: TokenType = TokenType.ACCESS,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """Sign a token whose ``sub`` claim is ``subject`` (a user id)."""
        issued_at = datetime.now(timezone.utc)
        lifetime = expires_delta or timedelta(minutes=self.config.expire_minutes)
        claims = {
            "sub": str(subject),
            "type": token_type.value,
            "iat": issued_at,
            "nbf": issued_at,
            "exp": issued_at + lifetime,
            "iss": self.config.issuer,
            "aud": self.config.audience,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(claims, self.config.secret, algorithm=self.config.algorithm)

    def verify_token(
        self, token: str, expected_type: TokenType = TokenType.ACCESS
    ) -> Dict[str, Any]:
        """
        Decode ``token`` and return its claims.

        Raises:
            TokenExpired: the ``exp`` claim has passed.
            TokenTypeInvalid: the token was issued for another purpose.
            InvalidToken: anything else is wrong with it.
        """
        if not token:
            raise InvalidToken("Token cannot be empty.")

        try:
            claims = jwt.decode(
                token,
                self.config.secret,
                algorithms=[self.config.algorithm],
                audience=self.config.audience,
                issuer=self.config.issuer,
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired() from None
        except JWTError as e:
            logger.debug(f"Rejected token: {e}")
            raise InvalidToken(f"Token is invalid: {e}") from e

        if claims.get("type") != expected_type.value:
            raise TokenTypeInvalid(
                f"Expected '{expected_type.value}' token, but got '{claims.get('type')}'."
            )
        if not claims.get("sub"):
            raise InvalidToken("Token is missing the required 'sub' claim.")
        return claims


token_manager = TokenManager(TokenSettings.from_settings(settings))
