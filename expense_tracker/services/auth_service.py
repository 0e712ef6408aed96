"""Account service: registration, login, tokens and password reset.

Passwords are stored as salted hashes (werkzeug.security). Sessions are
stateless JSON Web Tokens carrying the user id in a ``userId`` claim.
Password reset works with a 6-digit one-time code sent by email.
"""

import datetime as dt
import logging
import secrets
from typing import Optional

import jwt
from sqlalchemy import select
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from expense_tracker.config.settings import TrackerConfig, get_config
from expense_tracker.db.tables import UserRecord, utcnow
from expense_tracker.errors import (
    AuthenticationError,
    ConflictError,
    EmailDeliveryError,
    NotFoundError,
    ValidationFailedError,
)
from expense_tracker.models.user import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    User,
    VerifyOtpRequest,
)
from expense_tracker.services.email_service import EmailService

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If the email exists, an OTP has been sent."


def generate_otp() -> str:
    """Random 6-digit code (100000-999999)."""
    return str(secrets.randbelow(900000) + 100000)


class AuthService:
    """Handles user accounts and authentication tokens."""

    def __init__(
        self,
        db: Session,
        config: Optional[TrackerConfig] = None,
        email_service: Optional[EmailService] = None,
    ):
        self.db = db
        self.config = config or get_config()
        self.email_service = email_service or EmailService(self.config)

    def _find_by_email(self, email: Optional[str]) -> Optional[UserRecord]:
        if not email:
            return None
        return self.db.scalar(select(UserRecord).where(UserRecord.email == email))

    def issue_token(self, user_id: str) -> str:
        """Create a signed token for a user."""
        now = dt.datetime.now(dt.timezone.utc)
        payload = {
            "userId": user_id,
            "iat": now,
            "exp": now + dt.timedelta(days=self.config.jwt_expires_days),
        }
        return jwt.encode(
            payload, self.config.jwt_secret, algorithm=self.config.jwt_algorithm
        )

    def decode_token(self, token: str) -> str:
        """Validate a token and return the user id it was issued for.

        Raises:
            AuthenticationError: If the token is malformed, tampered with
                or expired
        """
        try:
            payload = jwt.decode(
                token, self.config.jwt_secret, algorithms=[self.config.jwt_algorithm]
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token") from e

        user_id = payload.get("userId")
        if not user_id:
            raise AuthenticationError("Invalid token")
        return user_id

    def get_user(self, user_id: str) -> User:
        """Look up the account a token belongs to.

        Raises:
            AuthenticationError: If the account no longer exists
        """
        record = self.db.get(UserRecord, user_id)
        if record is None:
            raise AuthenticationError("User not found")
        return User.model_validate(record)

    def authenticate(self, token: str) -> User:
        return self.get_user(self.decode_token(token))

    def get_user_by_email(self, email: str) -> User:
        """Look up an account by email (command-line tools act on behalf of
        a user identified this way).

        Raises:
            NotFoundError: If no account uses the email
        """
        record = self._find_by_email(email.strip().lower())
        if record is None:
            raise NotFoundError("User not found")
        return User.model_validate(record)

    def register(self, data: RegisterRequest) -> AuthResponse:
        if not data.email or not data.password:
            raise ValidationFailedError("Email and password are required")
        if self._find_by_email(data.email) is not None:
            raise ConflictError("User already exists")

        record = UserRecord(
            email=data.email,
            password_hash=generate_password_hash(data.password),
            name=(data.name or "").strip() or None,
        )
        self.db.add(record)
        self.db.commit()
        logger.info(f"Registered user {record.id}")
        return AuthResponse(
            token=self.issue_token(record.id), user=User.model_validate(record)
        )

    def login(self, data: LoginRequest) -> AuthResponse:
        if not data.email or not data.password:
            raise ValidationFailedError("Email and password are required")

        record = self._find_by_email(data.email)
        if record is None or not check_password_hash(record.password_hash, data.password):
            logger.warning("Failed login attempt")
            raise AuthenticationError("Invalid credentials")

        logger.info(f"User {record.id} logged in")
        return AuthResponse(
            token=self.issue_token(record.id), user=User.model_validate(record)
        )

    def forgot_password(self, data: ForgotPasswordRequest) -> str:
        """Email a reset code to the user.

        The same message is returned whether or not the email is
        registered, so the endpoint cannot be used to discover accounts.

        Raises:
            EmailDeliveryError: If the code could not be sent; the code is
                discarded in that case
        """
        record = self._find_by_email(data.email)
        if record is None:
            logger.info("Password reset requested for an unknown email")
            return FORGOT_PASSWORD_MESSAGE

        otp = generate_otp()
        record.reset_password_otp = otp
        record.reset_password_otp_expiry = utcnow() + dt.timedelta(
            minutes=self.config.otp_expiry_minutes
        )
        self.db.commit()

        try:
            self.email_service.send_otp_email(record.email, otp)
        except EmailDeliveryError:
            self._clear_otp(record)
            raise

        logger.info(f"Password reset code sent to user {record.id}")
        return FORGOT_PASSWORD_MESSAGE

    def _clear_otp(self, record: UserRecord) -> None:
        record.reset_password_otp = None
        record.reset_password_otp_expiry = None
        self.db.commit()

    def _check_otp(self, email: Optional[str], otp: Optional[str]) -> UserRecord:
        record = self._find_by_email(email)
        if record is None:
            raise NotFoundError("User not found")

        stored = record.reset_password_otp
        if not stored or not otp or not secrets.compare_digest(stored, otp.strip()):
            raise ValidationFailedError("Invalid OTP")

        expiry = record.reset_password_otp_expiry
        if expiry is None or expiry < utcnow():
            self._clear_otp(record)
            raise ValidationFailedError("OTP has expired. Please request a new one.")
        return record

    def verify_otp(self, data: VerifyOtpRequest) -> str:
        if not data.email or not data.otp:
            raise ValidationFailedError("Email and OTP are required")
        self._check_otp(data.email, data.otp)
        return "OTP verified successfully"

    def reset_password(self, data: ResetPasswordRequest) -> str:
        if not data.email or not data.otp or not data.new_password:
            raise ValidationFailedError("Email, OTP, and new password are required")
        minimum = self.config.min_password_length
        if len(data.new_password) < minimum:
            raise ValidationFailedError(
                f"Password must be at least {minimum} characters"
            )

        record = self._check_otp(data.email, data.otp)
        record.password_hash = generate_password_hash(data.new_password)
        self._clear_otp(record)
        logger.info(f"Password reset for user {record.id}")
        return "Password reset successfully"
