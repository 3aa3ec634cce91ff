# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cookie transports the token bridge writes the session artifact to.

CookieTransport binds one HTTP exchange: it reads the cookies the client
sent and writes Set-Cookie headers on the response. MemoryTransport is a
plain cookie jar for non-HTTP callers and tests.
"""

from dataclasses import dataclass
from typing import Literal, Protocol

from starlette.requests import Request
from starlette.responses import Response

SameSite = Literal["lax", "strict", "none"]


class SessionTransport(Protocol):
    """Cookie jar abstraction."""

    def get(self, name: str) -> str | None:
        """Current value of a cookie, as the client will see it."""
        ...

    def set(
        self,
        name: str,
        value: str,
        *,
        max_age: int,
        secure: bool,
        httponly: bool,
        samesite: SameSite,
        path: str,
    ) -> None:
        """Write a cookie."""
        ...

    def delete(self, name: str, *, path: str) -> None:
        """Remove a cookie."""
        ...


class CookieTransport:
    """Transport over one Starlette request/response pair.

    Writes are tracked locally so that get() reflects what the client will
    hold once the response is applied, not only what it sent.
    """

    def __init__(self, request: Request, response: Response) -> None:
        self._response = response
        self._jar: dict[str, str] = dict(request.cookies)

    def get(self, name: str) -> str | None:
        return self._jar.get(name)

    def set(
        self,
        name: str,
        value: str,
        *,
        max_age: int,
        secure: bool,
        httponly: bool,
        samesite: SameSite,
        path: str,
    ) -> None:
        self._response.set_cookie(
            name,
            value,
            max_age=max_age,
            secure=secure,
            httponly=httponly,
            samesite=samesite,
            path=path,
        )
        self._jar[name] = value

    def delete(self, name: str, *, path: str) -> None:
        self._response.delete_cookie(name, path=path)
        self._jar.pop(name, None)


@dataclass
class StoredCookie:
    """Cookie held by a MemoryTransport."""

    value: str
    max_age: int
    secure: bool
    httponly: bool
    samesite: SameSite
    path: str


class MemoryTransport:
    """In-memory cookie jar.

    Attributes:
        cookies: Cookies currently held, by name.
        writes: Number of set() and delete() calls that reached the jar.
    """

    def __init__(self) -> None:
        self.cookies: dict[str, StoredCookie] = {}
        self.writes = 0

    def get(self, name: str) -> str | None:
        cookie = self.cookies.get(name)
        return cookie.value if cookie else None

    def set(
        self,
        name: str,
        value: str,
        *,
        max_age: int,
        secure: bool,
        httponly: bool,
        samesite: SameSite,
        path: str,
    ) -> None:
        self.cookies[name] = StoredCookie(value, max_age, secure, httponly, samesite, path)
        self.writes += 1

    def delete(self, name: str, *, path: str) -> None:
        self.cookies.pop(name, None)
        self.writes += 1
