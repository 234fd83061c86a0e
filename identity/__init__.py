"""Session identity providers."""

from .abstract_provider import SessionProvider
from .cookie_provider import CookieSessionProvider

__all__ = ["SessionProvider", "CookieSessionProvider"]
