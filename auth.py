"""Account signup/login and bearer session tokens.

Credentials are stored and compared as plain strings (trimmed on both sides),
and the admin login entry point accepts any valid account regardless of role.
Both are current product behaviour; see DESIGN.md before changing either.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.errors import DuplicateKeyError, PyMongoError

from database import USERS, Database
from errors import AuthError, ConflictError, ForbiddenError, StoreError, UnauthorizedError, ValidationError
from schemas import Account, Role

logger = logging.getLogger("storefront.auth")

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class SessionResult:
    """Token plus the profile fields returned to the client."""

    token: str
    name: Optional[str]
    email: str
    role: str

    def signup_payload(self) -> Dict[str, Any]:
        return {"token": self.token, "name": self.name, "email": self.email}

    def login_payload(self) -> Dict[str, Any]:
        return {"token": self.token, "name": self.name, "email": self.email, "role": self.role}


@dataclass
class SessionClaims:
    """Identity carried by a verified token."""

    user_id: str
    role: str


class AuthService:
    def __init__(self, database: Database, secret: str, algorithm: str = "HS256", ttl_seconds: int = 3600):
        self.database = database
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = timedelta(seconds=ttl_seconds)

    # ---------- Tokens ----------

    def issue_token(self, account: Dict[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "userId": str(account["_id"]),
            "role": account.get("role", Role.USER.value),
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: Optional[str]) -> SessionClaims:
        if not token:
            raise UnauthorizedError()
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise ForbiddenError("Token has expired.")
        except jwt.InvalidTokenError:
            raise ForbiddenError()
        if "userId" not in payload:
            raise ForbiddenError()
        return SessionClaims(user_id=payload["userId"], role=payload.get("role", Role.USER.value))

    # ---------- Accounts ----------

    def signup(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> SessionResult:
        if not email or not password:
            raise ValidationError("Email and password are required.")

        account = Account(name=name, email=email, password=password, role=Role.USER)
        doc = account.model_dump(mode="json")
        try:
            result = self.database.collection(USERS).insert_one(doc)
        except DuplicateKeyError:
            logger.info("Signup rejected, email already registered: %s", email)
            raise ConflictError("User with this email already exists.")
        except PyMongoError as e:
            logger.error("Signup failed for %s: %s", email, e, exc_info=True)
            raise StoreError("Server error during signup.") from e

        doc["_id"] = result.inserted_id
        logger.info("Account created: %s", email)
        return SessionResult(
            token=self.issue_token(doc),
            name=doc.get("name"),
            email=doc["email"],
            role=doc["role"],
        )

    def _check_credentials(self, email: Optional[str], password: Optional[str], context: str) -> Dict[str, Any]:
        if not email or not password:
            raise ValidationError("Email and password are required.")
        try:
            account = self.database.collection(USERS).find_one({"email": email})
        except PyMongoError as e:
            logger.error("Credential lookup failed for %s: %s", email, e, exc_info=True)
            raise StoreError(f"Server error during {context}.") from e

        if not account or str(account.get("password", "")).strip() != password.strip():
            logger.info("Rejected %s for %s", context, email)
            raise AuthError("Invalid credentials.")
        return account

    def _session_for(self, account: Dict[str, Any]) -> SessionResult:
        return SessionResult(
            token=self.issue_token(account),
            name=account.get("name"),
            email=account["email"],
            role=account.get("role", Role.USER.value),
        )

    def login(self, email: Optional[str], password: Optional[str]) -> SessionResult:
        account = self._check_credentials(email, password, "login")
        logger.info("Login succeeded for %s", email)
        return self._session_for(account)

    def admin_login(self, email: Optional[str], password: Optional[str]) -> SessionResult:
        account = self._check_credentials(email, password, "admin login")
        # Role is not enforced here; any valid account is let through.
        if account.get("role") != Role.ADMIN.value:
            logger.warning("Admin login granted to non-admin account %s", email)
        else:
            logger.info("Admin login succeeded for %s", email)
        return self._session_for(account)


# ---------- FastAPI dependencies ----------

def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def require_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> SessionClaims:
    if credentials:
        token = credentials.credentials
    else:
        # Other schemes still carry a token, which then fails verification.
        parts = request.headers.get("Authorization", "").split()
        token = parts[1] if len(parts) > 1 else None
    return auth_service.verify_token(token)
