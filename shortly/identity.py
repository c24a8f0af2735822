"""Identity provider adapters."""

import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional, Tuple

import httpx

from .errors import AuthError
from .models import Principal

FIREBASE_SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"

CredentialsPrompt = Callable[[], Awaitable[Tuple[str, str]]]


class IdentityProvider(ABC):
    """Abstract interactive identity provider."""

    @abstractmethod
    async def sign_in(self) -> Principal:
        """Run the interactive handshake.

        Returns:
            The authenticated principal

        Raises:
            AuthError: On provider error or user cancellation
        """
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """Terminate the provider session.

        Raises:
            AuthError: If the provider reports a failure
        """
        pass


class FirebaseIdentityProvider(IdentityProvider):
    """Email/password sign-in against the Firebase Identity Toolkit REST API.

    The handshake asks ``prompt`` for credentials, so a CLI can read them
    from the terminal. Firebase has no server-side sign-out for this flow;
    ``sign_out`` drops the locally held ID token.
    """

    def __init__(
        self,
        api_key: str,
        prompt: CredentialsPrompt,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        logger: Optional[logging.Logger] = None,
    ):
        self.api_key = api_key
        self.prompt = prompt
        self.logger = logger or logging.getLogger(__name__)
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(timeout=timeout)
        self.id_token: Optional[str] = None

    async def sign_in(self) -> Principal:
        try:
            email, password = await self.prompt()
        except (EOFError, KeyboardInterrupt) as e:
            raise AuthError("Sign-in cancelled") from e

        if not email or not password:
            raise AuthError("Sign-in cancelled")

        try:
            response = await self.http.post(
                FIREBASE_SIGN_IN_URL,
                params={"key": self.api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
            )
        except httpx.HTTPError as e:
            raise AuthError(f"Identity provider unreachable: {e!r}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.is_success:
            message = data.get("error", {}).get("message", f"HTTP {response.status_code}")
            raise AuthError(f"Sign-in rejected: {message}")

        self.id_token = data.get("idToken")
        principal = Principal(
            email=data.get("email", email),
            display_name=data.get("displayName", ""),
            avatar_url=data.get("profilePicture", ""),
        )
        self.logger.debug(f"Firebase sign-in succeeded for {principal.email}")
        return principal

    async def sign_out(self) -> None:
        self.id_token = None

    async def close(self) -> None:
        if self._owns_client:
            await self.http.aclose()
