"""Async authentication handler for pyhmdm."""

import logging
import time
from typing import Optional

import aiohttp

from .const import (
    DEFAULT_BASE_URL,
    DEFAULT_CLIENT_ID,
    DEFAULT_TIMEOUT,
    TOKEN_ENDPOINT,
    TOKEN_EXPIRY_SKEW,
)
from .exceptions import ApiError, AuthError, PyHmDmException

_LOGGER = logging.getLogger(__name__)


class AuthHandler:
    """Handles OAuth2 tokens for the ioBroker web server using aiohttp."""

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str = DEFAULT_BASE_URL,
        client_id: str = DEFAULT_CLIENT_ID,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """Initialize the authentication handler."""
        self._username = username
        self._password = password
        self._base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._access_token: Optional[str] = None
        self._refresh_token: Optional[str] = None
        self._token_expires_at: Optional[float] = None
        # Use provided session or create a new one
        self._session = session
        self._managed_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            _LOGGER.debug("Creating new aiohttp ClientSession for AuthHandler.")
            self._session = aiohttp.ClientSession()
            self._managed_session = True
        return self._session

    async def close_session(self) -> None:
        """Close the aiohttp session if it's managed by this instance."""
        if self._session and not self._session.closed and self._managed_session:
            await self._session.close()
            self._session = None
            _LOGGER.debug("Managed aiohttp session closed by AuthHandler.")
        elif self._session and not self._managed_session:
            _LOGGER.debug("Session provided externally, not closing.")

    def _is_token_expired(self) -> bool:
        """Check if the access token is expired or close to expiring."""
        if not self._token_expires_at:
            return True
        return time.time() >= (self._token_expires_at - TOKEN_EXPIRY_SKEW)

    def _clear_tokens(self) -> None:
        self._access_token = None
        self._refresh_token = None
        self._token_expires_at = None

    async def get_access_token(self) -> str:
        """Return the current access token, refreshing if necessary."""
        if not self._access_token:
            _LOGGER.debug("No access token found, performing full authentication.")
            await self.authenticate()
        elif self._is_token_expired():
            _LOGGER.debug("Token is expired or nearing expiration.")
            if self._refresh_token:
                try:
                    await self._refresh_access_token()
                except AuthError:
                    _LOGGER.warning(
                        "Token refresh failed, attempting full authentication.",
                    )
                    await self.authenticate()
            else:
                await self.authenticate()

        if not self._access_token:
            err_msg = "Failed to obtain a valid access token."
            raise AuthError(err_msg)

        return self._access_token

    async def authenticate(self) -> None:
        """Perform the password grant to get access and refresh tokens."""
        payload = {
            "grant_type": "password",
            "username": self._username,
            "password": self._password,
            "client_id": self._client_id,
        }
        token_data = await self._async_request_token(payload, "authentication")
        if "access_token" not in token_data:
            err_msg = "Authentication failed: Missing access token in response"
            raise AuthError(err_msg)
        self._store_tokens(token_data)
        _LOGGER.info("Authentication successful. Access token obtained.")

    async def _refresh_access_token(self) -> None:
        """Refresh the access token using the refresh token."""
        if not self._refresh_token:
            err_msg = "Cannot refresh token: No refresh token available."
            raise AuthError(err_msg)

        payload = {
            "grant_type": "refresh_token",
            "refresh_token": self._refresh_token,
            "client_id": self._client_id,
        }
        _LOGGER.info("Refreshing access token...")
        try:
            token_data = await self._async_request_token(payload, "token refresh")
        except AuthError:
            self._clear_tokens()
            raise
        except ApiError as err:
            self._clear_tokens()
            raise AuthError(f"Token refresh failed: {err.error_message}") from err
        if "access_token" not in token_data:
            self._clear_tokens()
            err_msg = "Token refresh failed: Missing access token in response"
            raise AuthError(err_msg)
        self._store_tokens(token_data)
        _LOGGER.info("Access token refreshed successfully.")

    def _store_tokens(self, token_data: dict) -> None:
        self._access_token = token_data["access_token"]
        self._refresh_token = token_data.get("refresh_token", self._refresh_token)
        expires_in = token_data.get("expires_in")
        if expires_in:
            self._token_expires_at = time.time() + int(expires_in)
            _LOGGER.debug("Token expires at: %s", self._token_expires_at)
        else:
            self._token_expires_at = None
            _LOGGER.warning("No 'expires_in' found in token response.")

    async def _async_request_token(self, payload: dict, purpose: str) -> dict:
        """Post a token request and return the decoded response."""
        url = self._base_url + TOKEN_ENDPOINT
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        session = await self._get_session()

        try:
            _LOGGER.debug("Requesting token from %s", url)
            async with session.post(
                url,
                data=payload,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=DEFAULT_TIMEOUT),
            ) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    _LOGGER.error(
                        "HTTP error %s during %s: %s",
                        response.status,
                        purpose,
                        error_text,
                    )
                    if response.status in (400, 401):
                        err_msg = f"{purpose.capitalize()} failed: Invalid credentials or grant"
                        raise AuthError(err_msg)
                    raise ApiError(response.status, error_text)

                token_data = await response.json()
                _LOGGER.debug("Token response received for %s", purpose)
                return token_data

        except PyHmDmException:
            raise
        except aiohttp.ClientError as req_err:
            _LOGGER.exception("Request error during %s", purpose)
            err_msg = f"{purpose.capitalize()} failed: Request error - {req_err}"
            raise AuthError(err_msg) from req_err
        except TimeoutError as timeout_err:
            _LOGGER.exception("Timeout during %s request", purpose)
            err_msg = f"{purpose.capitalize()} failed: Request timed out"
            raise AuthError(err_msg) from timeout_err
