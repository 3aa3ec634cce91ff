# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the token bridge and its cookie transports."""

import pytest
from starlette.requests import Request
from starlette.responses import Response

from learnhub.core.config import SessionCookieSettings, Settings
from learnhub.domains.identity.provider import IdentityHandle
from learnhub.domains.session.token_bridge import TokenBridge
from learnhub.domains.session.transport import CookieTransport, MemoryTransport


def make_request(cookie_header: str | None = None) -> Request:
    """Build a bare Starlette request carrying a Cookie header."""
    headers = [(b"cookie", cookie_header.encode())] if cookie_header else []
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


@pytest.fixture
def handle() -> IdentityHandle:
    """Provide a signed-in principal."""
    return IdentityHandle(uid="uid-1", token="token-1")


class TestTokenBridge:
    """Tests for TokenBridge."""

    @pytest.mark.asyncio
    async def test_establish_writes_cookie_with_configured_attributes(
        self,
        token_bridge: TokenBridge,
        transport: MemoryTransport,
        handle: IdentityHandle,
    ) -> None:
        """The cookie carries the token and the configured attributes."""
        await token_bridge.establish(handle)

        cookie = transport.cookies["session"]
        assert cookie.value == "token-1"
        assert cookie.max_age == 5 * 24 * 60 * 60
        assert cookie.httponly is True
        assert cookie.samesite == "lax"
        assert cookie.path == "/"
        assert token_bridge.is_established is True

    @pytest.mark.asyncio
    async def test_establish_twice_writes_once(
        self,
        token_bridge: TokenBridge,
        transport: MemoryTransport,
        handle: IdentityHandle,
    ) -> None:
        """Establishing the same handle twice leaves the same state as once."""
        await token_bridge.establish(handle)
        state_after_one = dict(transport.cookies)
        await token_bridge.establish(handle)

        assert transport.cookies == state_after_one
        assert transport.writes == 1

    @pytest.mark.asyncio
    async def test_establish_new_token_replaces_cookie(
        self,
        token_bridge: TokenBridge,
        transport: MemoryTransport,
        handle: IdentityHandle,
    ) -> None:
        """A different token overwrites the cookie."""
        await token_bridge.establish(handle)
        await token_bridge.establish(IdentityHandle(uid="uid-1", token="token-2"))

        assert transport.get("session") == "token-2"
        assert transport.writes == 2

    @pytest.mark.asyncio
    async def test_clear_twice_equals_clear_once(
        self,
        token_bridge: TokenBridge,
        transport: MemoryTransport,
        handle: IdentityHandle,
    ) -> None:
        """Clearing twice leaves the same state as clearing once."""
        await token_bridge.establish(handle)
        await token_bridge.clear()
        await token_bridge.clear()

        assert transport.get("session") is None
        assert transport.writes == 2
        assert token_bridge.is_established is False

    @pytest.mark.asyncio
    async def test_clear_without_cookie_does_nothing(
        self,
        token_bridge: TokenBridge,
        transport: MemoryTransport,
    ) -> None:
        """Clearing an absent cookie touches nothing."""
        await token_bridge.clear()

        assert transport.writes == 0

    @pytest.mark.asyncio
    async def test_uses_configured_cookie_name(
        self,
        settings: Settings,
        handle: IdentityHandle,
    ) -> None:
        """The cookie name comes from the settings."""
        transport = MemoryTransport()
        bridge = TokenBridge(transport, SessionCookieSettings(name="lh_session", secure=False))

        await bridge.establish(handle)

        assert transport.get("lh_session") == "token-1"
        assert transport.get(settings.session.name) is None


class TestCookieTransport:
    """Tests for CookieTransport."""

    def test_reads_request_cookies(self) -> None:
        """Cookies sent by the client are visible."""
        transport = CookieTransport(make_request("session=abc; theme=dark"), Response())

        assert transport.get("session") == "abc"
        assert transport.get("missing") is None

    def test_set_writes_set_cookie_header(self) -> None:
        """set() emits a Set-Cookie header and updates the local view."""
        response = Response()
        transport = CookieTransport(make_request(), response)

        transport.set(
            "session",
            "token-1",
            max_age=60,
            secure=True,
            httponly=True,
            samesite="lax",
            path="/",
        )

        header = response.headers["set-cookie"]
        assert header.startswith("session=token-1")
        assert "HttpOnly" in header
        assert "Secure" in header
        assert "Max-Age=60" in header
        assert transport.get("session") == "token-1"

    def test_delete_expires_cookie(self) -> None:
        """delete() expires the cookie and hides it from the local view."""
        response = Response()
        transport = CookieTransport(make_request("session=abc"), response)

        transport.delete("session", path="/")

        assert "Max-Age=0" in response.headers["set-cookie"]
        assert transport.get("session") is None
