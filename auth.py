import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import InvalidTokenError
from sqlalchemy.orm import Session

from database import get_db, store_errors
from errors import UnauthenticatedError
from models import User, UserDB

logger = logging.getLogger(__name__)

TESTING_SECRET = "testing-secret-not-for-production-use-0000"

bearer_scheme = HTTPBearer(auto_error=False)


class TokenVerifier:
    """
    Verifies bearer tokens issued to restaurant owners and guests.

    Built once at startup and kept on ``app.state``; handlers reach it
    through the ``get_token_verifier`` dependency.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", token_minutes: int = 60):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.token_minutes = token_minutes

    @classmethod
    def from_env(cls) -> "TokenVerifier":
        secret = os.getenv("AUTH_SECRET")
        if not secret:
            if os.getenv("TESTING") != "1":
                raise RuntimeError("AUTH_SECRET is not set")
            secret = TESTING_SECRET
        return cls(
            secret,
            algorithm=os.getenv("AUTH_ALGORITHM", "HS256"),
            token_minutes=int(os.getenv("AUTH_TOKEN_MINUTES", "60")),
        )

    def create_access_token(self, uid: str, email: Optional[str] = None,
                            expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.token_minutes))
        claims = {"sub": uid, "exp": expire}
        if email:
            claims["email"] = email
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[dict]:
        """Returns the token claims, or None when the token is invalid or expired."""
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except InvalidTokenError as e:
            logger.info("Rejected bearer token: %s", e)
            return None


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def _resolve_user(claims: dict, db: Session) -> User:
    uid = claims["sub"]
    with store_errors(db, "role lookup"):
        user = db.query(UserDB).filter(UserDB.id == uid).first()
    return User(
        uid=uid,
        email=claims.get("email") or (user.email if user else None),
        role=(user.role if user and user.role else "user"),
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise UnauthenticatedError("Unauthorized: No token provided")
    claims = verifier.verify_token(credentials.credentials)
    if claims is None:
        raise UnauthenticatedError("Unauthorized: Invalid token")
    return _resolve_user(claims, db)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Like get_current_user, but anonymous callers get None instead of a 401."""
    if credentials is None:
        return None
    return get_current_user(credentials, verifier, db)
