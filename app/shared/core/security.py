"""
Security utilities for bearer credential signing and password hashing.
Provides the primitives the Authentication Guard and the auth endpoints build on.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from ..config.settings import get_settings
from .exceptions import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


class SecurityManager:
    """
    Centralized security manager for authentication.
    Handles JWT tokens and password hashing.
    """

    def __init__(self):
        self.settings = get_settings()
        self.algorithm = self.settings.JWT_ALGORITHM
        self.secret_key = self.settings.JWT_SECRET_KEY
        self.access_token_expire_minutes = self.settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=self.settings.BCRYPT_ROUNDS,
        )

    def create_access_token(
        self,
        user_id: str,
        expires_delta: Optional[timedelta] = None,
        extra_claims: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Create a signed access token carrying the user id as ``sub``.

        Tokens only carry an ``exp`` claim when an expiry is configured
        or passed explicitly.

        Args:
            user_id: Identifier of the authenticated user
            expires_delta: Custom expiration time
            extra_claims: Additional claims to embed

        Returns:
            str: Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        to_encode: Dict[str, Any] = dict(extra_claims or {})
        to_encode.update({
            "sub": str(user_id),
            "iat": now,
            "type": ACCESS_TOKEN_TYPE,
        })

        if expires_delta is None and self.access_token_expire_minutes:
            expires_delta = timedelta(minutes=self.access_token_expire_minutes)
        if expires_delta is not None:
            to_encode["exp"] = now + expires_delta

        encoded_jwt = jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for user: {user_id}")
        return encoded_jwt

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode an access token.

        Args:
            token: JWT token to verify

        Returns:
            dict: Decoded token payload

        Raises:
            TokenExpiredError: If the token is past its ``exp``
            InvalidTokenError: If the signature or claims are wrong
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Token has expired")
            raise TokenExpiredError()
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise InvalidTokenError(reason=str(e))

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            logger.warning(f"Token type mismatch. Got: {payload.get('type')}")
            raise InvalidTokenError(reason="Unexpected token type")

        if not payload.get("sub"):
            logger.warning("Token missing subject (user_id)")
            raise InvalidTokenError(reason="Token missing subject")

        return payload

    def get_password_hash(self, password: str) -> str:
        """Hash password using bcrypt."""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify password against hash.

        Returns:
            bool: True if password matches; False for a mismatch or unreadable hash
        """
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError as e:
            logger.error(f"Password verification error: {e}")
            return False

    @staticmethod
    def generate_random_password(length: int = 16) -> str:
        """Random password for federated sign-ups that never use one."""
        return secrets.token_urlsafe(length)[:length]


@lru_cache()
def get_security_manager() -> SecurityManager:
    """Get the process-wide security manager."""
    return SecurityManager()
