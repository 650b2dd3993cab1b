"""Account registration, login and session handling."""

from __future__ import annotations

import logging
import secrets
import uuid
from typing import Any

from app.config import settings
from app.schemas.user import (
    AuthResponse,
    ProfileUpdate,
    RegisterRequest,
    Session,
    UserRecord,
    UserResponse,
)
from app.services.common import RecordStore, ensure_organization, ensure_same_region
from app.services.repositories import (
    SessionRepository,
    UserRepository,
    avatar_for,
    check_password,
    hash_password,
)
from app.utils.errors import ConflictError, InvalidInputError, NotFoundError, UnauthorizedError
from app.utils.time import expiry_from_now, is_expired, now_utc
from app.utils.validation import (
    format_cnpj,
    format_cpf,
    format_phone,
    validate_cnpj,
    validate_cpf,
    validate_name,
    validate_phone,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """User accounts and absolute-expiry sessions."""

    def __init__(self, store: RecordStore) -> None:
        self.users = UserRepository(store)
        self.sessions = SessionRepository(store)

    def _open_session(self, user: UserRecord) -> AuthResponse:
        session = Session(
            token=secrets.token_urlsafe(32),
            user_id=user.id,
            expires_at=expiry_from_now(settings.session_duration_minutes),
        )
        live = [row for row in self.sessions.all() if not is_expired(row.expires_at)]
        self.sessions.save_all([*live, session])
        return AuthResponse(user=user.public(), token=session.token, expires_at=session.expires_at)

    @staticmethod
    def _validate_registration(payload: RegisterRequest) -> None:
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError("Password must have at least 6 characters")
        if not validate_name(payload.name):
            raise InvalidInputError("Name must have at least 3 letters and no digits")
        if payload.phone and not validate_phone(payload.phone):
            raise InvalidInputError("Phone number is invalid")
        if payload.role == "resident":
            if payload.cpf and not validate_cpf(payload.cpf):
                raise InvalidInputError("CPF is invalid")
            return
        if payload.organization_data is None or not payload.organization_data.cnpj:
            raise InvalidInputError("CNPJ is required for organizations")
        if not validate_cnpj(payload.organization_data.cnpj):
            raise InvalidInputError("CNPJ is invalid")

    def register(self, payload: RegisterRequest) -> AuthResponse:
        """Create an account and sign it in."""
        self._validate_registration(payload)
        if self.users.find_by_email(payload.email) is not None:
            raise ConflictError("Email is already registered", code="EMAIL_TAKEN")

        user = UserRecord(
            id=uuid.uuid4().hex,
            name=payload.name.strip(),
            email=payload.email.strip().lower(),
            role=payload.role,
            avatar=avatar_for(payload.name.strip()),
            region=payload.region.strip(),
            phone=format_phone(payload.phone) if payload.phone else None,
            password_hash=hash_password(payload.password),
        )
        if payload.role == "resident":
            user.address = payload.address
            user.cpf = format_cpf(payload.cpf) if payload.cpf else None
            user.household_size = payload.household_size or 1
        else:
            organization = payload.organization_data
            user.organization_data = organization.model_copy(
                update={"cnpj": format_cnpj(organization.cnpj)}
            )

        self.users.append(user)
        logger.info("Registered %s account %s in %s", user.role, user.id, user.region)
        return self._open_session(user)

    def login(self, email: str, password: str) -> AuthResponse:
        """Check credentials and open a new session."""
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError("Password must have at least 6 characters")
        user = self.users.find_by_email(email)
        if user is None or not check_password(password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")
        return self._open_session(user)

    def resolve_session(self, token: str) -> UserResponse:
        """Return the session's user, dropping the session if it has expired."""
        session = self.sessions.find_token(token)
        if session is None:
            raise UnauthorizedError("Session not found")
        if is_expired(session.expires_at):
            self.logout(token)
            raise UnauthorizedError("Session expired, please sign in again")
        user = self.users.find(session.user_id)
        if user is None:
            raise UnauthorizedError("Session user no longer exists")
        return user.public()

    def logout(self, token: str) -> None:
        """Remove the session carrying ``token``."""
        sessions = self.sessions.all()
        self.sessions.save_all([row for row in sessions if row.token != token])

    def sweep_expired_sessions(self) -> int:
        """Delete expired sessions and return how many were removed."""
        now = now_utc()
        sessions = self.sessions.all()
        live = [row for row in sessions if not is_expired(row.expires_at, now)]
        removed = len(sessions) - len(live)
        if removed:
            self.sessions.save_all(live)
        return removed

    def update_profile(self, user_id: str, payload: ProfileUpdate) -> UserResponse:
        """Apply profile edits; the password hash is never touched here."""
        user = self.users.get(user_id)
        changes: dict[str, Any] = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            if not validate_name(changes["name"]):
                raise InvalidInputError("Name must have at least 3 letters and no digits")
            changes["avatar"] = avatar_for(changes["name"])
        if "phone" in changes and not validate_phone(changes["phone"]):
            raise InvalidInputError("Phone number is invalid")
        if "organization_data" in changes:
            changes["organization_data"] = payload.organization_data
        updated = self.users.replace(user.model_copy(update=changes))
        return updated.public()

    def list_users(self, actor: UserResponse) -> list[UserResponse]:
        """Return the accounts in the administrator's region."""
        ensure_organization(actor, "Only administrators can list users")
        return [user.public() for user in self.users.all() if user.region == actor.region]

    def delete_user(self, user_id: str, actor: UserResponse) -> list[str]:
        """Remove an account in the administrator's region.

        Returns the tokens of the sessions that were revoked with it.
        """
        ensure_organization(actor, "Only administrators can remove users")
        user = self.users.find(user_id)
        if user is None:
            raise NotFoundError("User")
        ensure_same_region(actor, user.region, "User belongs to another region")
        self.users.remove(user_id)
        sessions = self.sessions.all()
        self.sessions.save_all([row for row in sessions if row.user_id != user_id])
        return [row.token for row in sessions if row.user_id == user_id]
