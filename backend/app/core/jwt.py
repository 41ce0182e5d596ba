from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt

from app.core.config import settings
from app.core.errors import TokenExpired, TokenInvalid


class TokenIssuer:
    """
    Issues and verifies admin session tokens.

    The signing key is handed in at construction and never changes for the
    life of the instance. Tokens carry user_id, iat and exp claims; there is
    no refresh, callers log in again once a token expires.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    def issue_token(self, admin_id: int, issued_at: Optional[datetime] = None) -> str:
        """
        Create a signed token for admin_id.

        Args:
            admin_id: Id of the authenticated admin
            issued_at: Issuance time, defaults to now (UTC)

        Returns:
            Encoded JWT string
        """
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "user_id": admin_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> int:
        """
        Return the admin id encoded in token.

        Raises:
            TokenExpired: exp is in the past
            TokenInvalid: bad signature, malformed token or payload
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "user_id"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired()
        except jwt.InvalidTokenError:
            raise TokenInvalid()

        admin_id = payload["user_id"]
        if not isinstance(admin_id, int) or isinstance(admin_id, bool):
            raise TokenInvalid("Invalid token payload: bad user_id")
        return admin_id


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    """Process-wide issuer built once from settings"""
    return TokenIssuer(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MIN,
    )
