import hmac
from typing import Optional

from loguru import logger
from pydantic import SecretStr

from codehunt.config.settings import AppSettings


class AuthenticationError(Exception):
    """Raised when an administrative action is attempted without logging in."""

    pass


class AdminGate:
    """Username/password gate in front of the administrative operations."""

    def __init__(self, username: str, password: SecretStr):
        self._username = username
        self._password = password
        self.current_user: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "AdminGate":
        return cls(settings.admin_username, settings.admin_password)

    def login(self, username: str, password: str) -> bool:
        user_ok = hmac.compare_digest(username.encode(), self._username.encode())
        password_ok = hmac.compare_digest(
            password.encode(), self._password.get_secret_value().encode()
        )
        if user_ok and password_ok:
            self.current_user = username
            logger.info(f"Admin '{username}' logged in")
            return True
        logger.warning(f"Failed admin login for '{username}'")
        return False

    def logout(self) -> None:
        if self.current_user:
            logger.info(f"Admin '{self.current_user}' logged out")
        self.current_user = None

    def is_admin(self) -> bool:
        return self.current_user is not None

    def require_admin(self) -> None:
        if not self.is_admin():
            raise AuthenticationError("Administrator login required")
