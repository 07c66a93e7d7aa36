"""Auth Service: signup, login, refresh and logout.

Every operation returns ``Ok(value)`` or ``Err(AuthError)``; nothing in
here raises for an expected failure. The service owns the transaction:
the main writes of an operation are committed together, then the audit
event is written on a best-effort basis.
"""

import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nutrilens.core.clock import utcnow
from nutrilens.core.logging import get_logger
from nutrilens.domain.entities import (
    AccessGrant,
    AuthConfig,
    AuthError,
    AuthSession,
    Err,
    ErrorCode,
    LoginCommand,
    LogoutCommand,
    Ok,
    Result,
    SignupCommand,
    validation_error,
)
from nutrilens.domain.services import (
    LOGIN_REQUIRED_FIELDS,
    SIGNUP_REQUIRED_FIELDS,
    FieldValidator,
    PasswordValidator,
)
from nutrilens.infrastructure.auth import (
    CredentialHasher,
    InvalidTokenError,
    TokenCodec,
)
from nutrilens.infrastructure.persistence.models import ConsentType, UserModel
from nutrilens.infrastructure.persistence.repositories import (
    AuditLogRepository,
    ConsentRepository,
    RefreshTokenRepository,
    UserRepository,
)

logger = get_logger(__name__)

INVALID_CREDENTIALS = AuthError(
    ErrorCode.INVALID_CREDENTIALS, "Invalid email or password"
)
INVALID_REFRESH_TOKEN = AuthError(
    ErrorCode.INVALID_TOKEN, "Invalid or expired refresh token"
)


class AuthService:
    """Orchestrates the authentication token lifecycle."""

    def __init__(
        self,
        session: AsyncSession,
        config: AuthConfig,
        codec: TokenCodec | None = None,
        hasher: CredentialHasher | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session scoped to one request.
            config: Auth configuration (TTLs, password policy, secrets).
            codec: Token codec; built from ``config`` when omitted.
            hasher: Credential hasher; built from ``config`` when omitted.
        """
        self.session = session
        self.config = config
        self.codec = codec or TokenCodec(config)
        self.hasher = hasher or CredentialHasher(config.hash_cost)
        self.password_validator = PasswordValidator.from_config(config)
        self.users = UserRepository(session)
        self.tokens = RefreshTokenRepository(session)
        self.consents = ConsentRepository(session)
        self.audit = AuditLogRepository(session)

    async def signup(self, command: SignupCommand) -> Result[AuthSession]:
        """Create an account and issue a token pair.

        Checks run in a fixed order and the first failure is returned:
        required fields, policy acceptance, email format, name, email
        uniqueness, password confirmation, strength, common passwords.
        """
        missing = FieldValidator.missing_fields(command, SIGNUP_REQUIRED_FIELDS)
        if missing:
            return validation_error("Missing required fields", {"missing": missing})

        if not (command.accept_terms and command.accept_privacy and command.accept_gdpr):
            return validation_error("You must accept all policies to create an account")

        email = FieldValidator.normalize_email(command.email)
        if not FieldValidator.is_valid_email(email):
            return validation_error("Invalid email format")

        name = FieldValidator.sanitize(command.name)
        name_error = FieldValidator.validate_name(name)
        if name_error:
            return validation_error(name_error)

        if await self.users.email_exists(email):
            logger.info("Signup failed: email exists", email=email)
            return Err(AuthError(ErrorCode.EMAIL_EXISTS, "Email already registered"))

        if command.password != command.confirm_password:
            return validation_error("Passwords do not match")

        password_errors = self.password_validator.validate(command.password)
        if password_errors:
            return validation_error(
                "Password does not meet requirements",
                {"errors": [e.message for e in password_errors]},
            )

        if self.password_validator.is_common(command.password):
            return validation_error(
                "Password is too common. Please choose a stronger password."
            )

        password_hash = await self.hasher.hash_async(command.password)
        user_id = str(uuid.uuid4())
        user = UserModel(
            id=user_id,
            email=email,
            password_hash=password_hash,
            name=name,
        )
        refresh_token = self.codec.issue_refresh(user_id)

        try:
            await self.users.create(user)
            await self.consents.record_many(
                user_id,
                {
                    ConsentType.TERMS: command.accept_terms,
                    ConsentType.PRIVACY: command.accept_privacy,
                    ConsentType.GDPR: command.accept_gdpr,
                    ConsentType.MARKETING: command.consent_marketing,
                    ConsentType.ANALYTICS: command.consent_analytics,
                },
                ip_address=command.ip_address,
            )
            await self.tokens.record(
                user_id,
                self.codec.hash_token(refresh_token),
                expires_at=utcnow() + self.codec.refresh_ttl,
                platform=command.platform,
                ip_address=command.ip_address,
            )
            await self.session.commit()
        except IntegrityError:
            # Concurrent signup won the partial unique index on email
            await self.session.rollback()
            logger.info("Signup failed: email registered concurrently", email=email)
            return Err(AuthError(ErrorCode.EMAIL_EXISTS, "Email already registered"))

        access_token = self.codec.issue_access(user_id, email)
        await self._audit("USER_SIGNUP", user_id, command.ip_address)

        logger.info("User signed up", user_id=user_id, platform=command.platform)
        return Ok(
            AuthSession(
                user_id=user_id,
                email=email,
                name=name,
                access_token=access_token,
                refresh_token=refresh_token,
                expires_in=self.codec.access_ttl_seconds,
            )
        )

    async def login(self, command: LoginCommand) -> Result[AuthSession]:
        """Authenticate with email and password and issue a token pair.

        An unknown email and a wrong password produce the same error, and
        both paths perform one hash verification.
        """
        missing = FieldValidator.missing_fields(command, LOGIN_REQUIRED_FIELDS)
        if missing:
            return validation_error(
                "Email and password are required", {"missing": missing}
            )

        email = FieldValidator.normalize_email(command.email)
        if not FieldValidator.is_valid_email(email):
            return validation_error("Invalid email format")

        user = await self.users.get_active_by_email(email)
        if user is None:
            await self.hasher.verify_dummy_async(command.password)
            logger.info("Login failed: user not found")
            return Err(INVALID_CREDENTIALS)

        if not await self.hasher.verify_async(command.password, user.password_hash):
            logger.info("Login failed: invalid password", user_id=user.id)
            return Err(INVALID_CREDENTIALS)

        # Audit rollback expires ORM state, so keep plain values
        user_id, name, password_hash = user.id, user.name, user.password_hash

        last_login = await self.users.update_last_login(user_id)
        if self.hasher.needs_rehash(password_hash):
            await self.users.update_password_hash(
                user_id, await self.hasher.hash_async(command.password)
            )
            logger.info("Password rehashed with current parameters", user_id=user_id)

        refresh_token = self.codec.issue_refresh(user_id)
        await self.tokens.record(
            user_id,
            self.codec.hash_token(refresh_token),
            expires_at=utcnow() + self.codec.refresh_ttl,
            device_id=command.device_id,
            platform=command.platform,
            ip_address=command.ip_address,
        )
        await self.session.commit()

        access_token = self.codec.issue_access(user_id, email)
        await self._audit("USER_LOGIN", user_id, command.ip_address)

        logger.info("User logged in", user_id=user_id, platform=command.platform)
        return Ok(
            AuthSession(
                user_id=user_id,
                email=email,
                name=name,
                access_token=access_token,
                refresh_token=refresh_token,
                expires_in=self.codec.access_ttl_seconds,
                last_login=last_login,
            )
        )

    async def refresh(self, refresh_token: str | None) -> Result[AccessGrant]:
        """Exchange a live refresh token for a new access token.

        The refresh token itself is not rotated.
        """
        if not refresh_token:
            return validation_error("Refresh token is required")

        try:
            self.codec.verify_refresh(refresh_token)
        except InvalidTokenError as e:
            logger.info("Refresh failed: token rejected by codec", reason=str(e))
            return Err(INVALID_REFRESH_TOKEN)

        # The store is authoritative for revocation
        user_id = await self.tokens.resolve_user(self.codec.hash_token(refresh_token))
        if user_id is None:
            logger.info("Refresh failed: token not live")
            return Err(INVALID_REFRESH_TOKEN)

        user = await self.users.get_by_id(user_id)
        if user is None:
            logger.info("Refresh failed: user not found", user_id=user_id)
            return Err(AuthError(ErrorCode.NOT_FOUND, "User not found"))

        return Ok(
            AccessGrant(
                access_token=self.codec.issue_access(user.id, user.email),
                expires_in=self.codec.access_ttl_seconds,
            )
        )

    async def logout(self, command: LogoutCommand) -> Result[None]:
        """Revoke the supplied refresh token, if any. Always succeeds."""
        if command.refresh_token:
            revoked = await self.tokens.revoke(
                self.codec.hash_token(command.refresh_token)
            )
            await self.session.commit()
            logger.info("Refresh token revoked", user_id=command.user_id, revoked=revoked)

        await self._audit("USER_LOGOUT", command.user_id, command.ip_address)
        logger.info("User logged out", user_id=command.user_id)
        return Ok(None)

    async def _audit(self, action: str, user_id: str, ip_address: str | None) -> None:
        """Write an audit event after the main commit. Failures are only logged."""
        try:
            await self.audit.create(action, user_id=user_id, ip_address=ip_address)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning("Audit log write failed", action=action, error=str(e))
