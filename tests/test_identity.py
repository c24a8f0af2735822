"""Tests for the identity provider and verification widget adapters."""

import httpx
import pytest

from shortly.errors import AuthError, ValidationError
from shortly.identity import FirebaseIdentityProvider
from shortly.verification import PromptVerificationWidget


def firebase(handler, email="alice@example.com", password="secret"):
    async def prompt():
        return email, password

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FirebaseIdentityProvider(api_key="key-123", prompt=prompt, http_client=http)


class TestFirebaseIdentityProvider:
    """Test email/password sign-in."""

    @pytest.mark.asyncio
    async def test_sign_in_returns_principal(self):
        """Test profile fields map onto the principal and sign-out drops the token."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={
                "email": "alice@example.com",
                "displayName": "Alice",
                "profilePicture": "https://img.example.com/a.png",
                "idToken": "id-token",
            })

        provider = firebase(handler)
        principal = await provider.sign_in()

        assert principal.email == "alice@example.com"
        assert principal.display_name == "Alice"
        assert principal.avatar_url == "https://img.example.com/a.png"
        assert provider.id_token == "id-token"
        assert seen[0].url.params["key"] == "key-123"

        await provider.sign_out()
        assert provider.id_token is None

    @pytest.mark.asyncio
    async def test_rejected_credentials_raise(self):
        """Test the provider's error message is carried in AuthError."""
        def handler(request):
            return httpx.Response(400, json={"error": {"message": "INVALID_PASSWORD"}})

        with pytest.raises(AuthError, match="INVALID_PASSWORD"):
            await firebase(handler).sign_in()

    @pytest.mark.asyncio
    async def test_cancelled_prompt_raises(self):
        """Test empty credentials never reach the provider."""
        def handler(request):
            raise AssertionError("no request expected")

        with pytest.raises(AuthError, match="cancelled"):
            await firebase(handler, email="", password="").sign_in()

    @pytest.mark.asyncio
    async def test_unreachable_provider_raises(self):
        """Test transport failures become AuthError."""
        def handler(request):
            raise httpx.ConnectError("connection refused")

        with pytest.raises(AuthError, match="unreachable"):
            await firebase(handler).sign_in()


class TestPromptVerificationWidget:
    """Test the operator-driven widget."""

    @pytest.mark.asyncio
    async def test_returns_pasted_token(self):
        """Test pasted tokens are trimmed and reset forgets them."""
        async def prompt(site_key):
            assert site_key == "site-key"
            return "  tok-1 \n"

        widget = PromptVerificationWidget("site-key", prompt)

        assert await widget.request_token() == "tok-1"
        widget.reset()
        assert widget.last_token is None
        assert widget.resets == 1

    @pytest.mark.asyncio
    async def test_empty_token_is_rejected(self):
        """Test an empty paste asks for the CAPTCHA again."""
        async def prompt(site_key):
            return ""

        with pytest.raises(ValidationError, match="CAPTCHA"):
            await PromptVerificationWidget("site-key", prompt).request_token()
