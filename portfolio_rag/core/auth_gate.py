"""
Admin password gate.

Stateless comparison of a submitted password against the configured
secret. This is a deterrent for the upload page, not a security boundary:
there are no sessions, tokens, lockouts or rate limits, and the client keeps
its own authenticated flag.

Dependencies: hmac (stdlib), portfolio_rag.core.exceptions
System role: Admin page access check
"""

import hmac

from portfolio_rag.core.exceptions import AuthDisabledError, AuthError
from portfolio_rag.models.auth import AuthResult

# Probe value the admin page sends to learn whether the gate is enabled
CONFIG_CHECK_SENTINEL = "config-check"


class AdminAuthGate:
    """Compares submitted passwords with the configured admin secret."""

    def __init__(self, secret: str | None) -> None:
        self._secret = secret or None

    @property
    def enabled(self) -> bool:
        return self._secret is not None

    def authenticate(self, password: str) -> AuthResult:
        """
        Check a submitted password.

        Args:
            password: Password from the admin page

        Returns:
            AuthResult: success=True for a correct password, or
                configured=True for the configuration probe

        Raises:
            AuthDisabledError: If no admin secret is configured
            AuthError: If the password is wrong
        """
        if self._secret is None:
            raise AuthDisabledError("Admin panel disabled")

        if password == CONFIG_CHECK_SENTINEL:
            return AuthResult(success=False, configured=True)

        if hmac.compare_digest(password.encode("utf-8"), self._secret.encode("utf-8")):
            return AuthResult(success=True)

        raise AuthError("Invalid password")
