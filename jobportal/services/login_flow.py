"""Headless controller for the sign-in / sign-up / password-reset form.

The controller never raises: every outcome ends up in ``error`` or
``success`` and, where the flow continues, in a new ``mode``.
"""
import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Callable

from jobportal.core.errors import NetworkError, PortalError, VerificationRequiredError
from jobportal.services.auth_service import PASSWORD_RESET, SIGNUP_VERIFICATION, AuthSessionManager

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Unable to reach the server. Please check your connection and try again."


class AuthMode(str, Enum):
    SIGNIN = "signin"
    SIGNUP = "signup"
    FORGOT_PASSWORD = "forgot-password"
    OTP_VERIFY = "otp-verify"
    RESET_PASSWORD = "reset-password"


@dataclass
class LoginForm:
    full_name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    otp_code: str = ""
    new_password: str = ""


class LoginFlow:
    def __init__(self, auth: AuthSessionManager, mode: AuthMode = AuthMode.SIGNIN):
        self.auth = auth
        self.mode = mode
        self.form = LoginForm()
        self.error = ""
        self.success = ""
        self.is_loading = False

    def set_field(self, name: str, value: str) -> None:
        """Update one form field; editing clears any banner."""
        if name not in {f.name for f in fields(LoginForm)}:
            raise AttributeError(f"Unknown form field: {name}")
        setattr(self.form, name, value)
        self.error = ""
        self.success = ""

    def switch_mode(self, mode: AuthMode) -> None:
        self.mode = mode
        self.form = LoginForm()
        self.error = ""
        self.success = ""

    def _run(self, action: Callable[[], None], fallback: str) -> bool:
        self.is_loading = True
        self.error = ""
        try:
            action()
            return True
        except NetworkError as e:
            logger.error(f"{self.mode.value} failed: {e.message}")
            self.error = NETWORK_ERROR_MESSAGE
        except PortalError as e:
            logger.error(f"{self.mode.value} failed: {e.message}")
            self.error = e.message or fallback
        finally:
            self.is_loading = False
        return False

    def sign_in(self) -> bool:
        self.is_loading = True
        self.error = ""
        try:
            self.auth.login(self.form.email, self.form.password)
        except VerificationRequiredError as e:
            # Unverified accounts continue straight into email verification.
            self.mode = AuthMode.OTP_VERIFY
            self.success = e.message
            return False
        except NetworkError:
            self.error = NETWORK_ERROR_MESSAGE
            return False
        except PortalError as e:
            self.error = e.message or "Login failed"
            return False
        finally:
            self.is_loading = False
        self.success = "Login successful! Redirecting..."
        return True

    def sign_up(self) -> bool:
        if self.form.password != self.form.confirm_password:
            self.error = "Passwords do not match"
            return False
        ok = self._run(
            lambda: self.auth.register(self.form.full_name, self.form.email, self.form.password),
            "Registration failed",
        )
        if ok:
            self.success = "Registration successful! Please check your email for verification code."
            self.mode = AuthMode.OTP_VERIFY
        return ok

    def request_password_reset(self) -> bool:
        ok = self._run(lambda: self.auth.forgot_password(self.form.email), "Failed to send reset code")
        if ok:
            self.success = "Password reset code sent to your email!"
            self.mode = AuthMode.RESET_PASSWORD
        return ok

    def submit_code(self) -> bool:
        if self.mode == AuthMode.OTP_VERIFY:
            ok = self._run(
                lambda: self.auth.verify_email(self.form.email, self.form.otp_code), "Verification failed"
            )
            message = "Email verified successfully! You can now login."
        elif self.mode == AuthMode.RESET_PASSWORD:
            ok = self._run(
                lambda: self.auth.reset_password(self.form.email, self.form.otp_code, self.form.new_password),
                "Verification failed",
            )
            message = "Password reset successfully! You can now login."
        else:
            return False
        if ok:
            self.success = message
            self.mode = AuthMode.SIGNIN
        return ok

    def resend_code(self) -> bool:
        purpose = PASSWORD_RESET if self.mode == AuthMode.RESET_PASSWORD else SIGNUP_VERIFICATION
        ok = self._run(lambda: self.auth.resend_otp(self.form.email, purpose), "Failed to resend OTP")
        if ok:
            self.success = "OTP code resent to your email!"
        return ok
