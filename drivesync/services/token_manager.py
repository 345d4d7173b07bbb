"""
Bridge the interactive Google consent flow to a stored access token.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from drivesync.clients.google_auth import (
    GoogleOAuthClient,
    OAuthStateEncoder,
    OAuthTokenExchangeError,
)
from drivesync.core.config import GoogleSettings
from drivesync.core.errors import ConfigurationError, ConsentFlowError
from drivesync.services.token_store import TokenStore

logger = logging.getLogger(__name__)

OAuthClientFactory = Callable[..., GoogleOAuthClient]


class TokenManager:
    """Drives sign-in through the consent flow and terminates sessions."""

    def __init__(
        self,
        session: TokenStore,
        state_encoder: OAuthStateEncoder,
        google_settings: GoogleSettings,
        *,
        state_ttl_seconds: int = 900,
        oauth_client_factory: OAuthClientFactory = GoogleOAuthClient,
    ) -> None:
        self._session = session
        self._state_encoder = state_encoder
        self._google = google_settings
        self._state_ttl = timedelta(seconds=state_ttl_seconds)
        self._oauth_client_factory = oauth_client_factory
        self._oauth_client: Optional[GoogleOAuthClient] = None
        self._on_success: Optional[Callable[[str], Any]] = None

    @property
    def is_initialized(self) -> bool:
        return self._oauth_client is not None

    def initialize(
        self, client_id: Optional[str], on_success: Optional[Callable[[str], Any]] = None
    ) -> bool:
        """Configure the consent client; leaves the manager uninitialized on failure."""
        if not client_id:
            logger.warning("No Google client id configured; sign-in is disabled.")
            return False
        if not self._google.client_secret:
            logger.warning("No Google client secret configured; sign-in is disabled.")
            return False

        self._oauth_client = self._oauth_client_factory(
            client_id=client_id,
            client_secret=self._google.client_secret,
            redirect_uri=str(self._google.redirect_uri),
        )
        self._on_success = on_success
        return True

    def sign_in(self, redirect_to: Optional[str] = None) -> str:
        """Start the consent flow and return the URL the user must visit."""
        if self._oauth_client is None:
            raise ConfigurationError(
                "Auth client not initialized. Check the Google client id and secret."
            )
        state = self._state_encoder.encode(
            {
                "nonce": uuid.uuid4().hex,
                "redirect_to": redirect_to,
                "issued_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        return self._oauth_client.build_authorization_url(state=state)

    async def complete_sign_in(
        self,
        *,
        state: str,
        code: Optional[str] = None,
        error: Optional[str] = None,
        error_description: Optional[str] = None,
    ) -> Optional[str]:
        """Finish the consent flow and store the token.

        Returns the ``redirect_to`` value carried by the state. Nothing is
        stored unless the whole exchange succeeds.
        """
        if self._oauth_client is None:
            raise ConfigurationError(
                "Auth client not initialized. Check the Google client id and secret."
            )

        state_data = self._state_encoder.decode(state)
        self._check_state_age(state_data)

        if error:
            logger.error("Google consent flow returned %s", error)
            raise ConsentFlowError(f"Google Auth Error: {error_description or error}")
        if not code:
            raise ConsentFlowError("Missing authorization code.")

        try:
            access_token = await self._oauth_client.exchange_authorization_code(code)
        except OAuthTokenExchangeError as exc:
            raise ConsentFlowError("Failed to exchange authorization code.") from exc

        self._session.set_access_token(access_token)
        logger.info("Signed in to Google Drive.")
        if self._on_success is not None:
            self._on_success(access_token)
        return state_data.get("redirect_to")

    def sign_out(self) -> None:
        self._session.clear()

    def _check_state_age(self, state_data: dict) -> None:
        issued_at_raw = state_data.get("issued_at")
        if not issued_at_raw:
            raise ConsentFlowError("Missing issued_at in state token.")
        try:
            issued_at = datetime.fromisoformat(issued_at_raw)
        except ValueError as exc:
            raise ConsentFlowError("Invalid issued_at in state token.") from exc
        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)
        if datetime.now(timezone.utc) - issued_at > self._state_ttl:
            raise ConsentFlowError("OAuth state token has expired.")


__all__ = ["TokenManager"]
