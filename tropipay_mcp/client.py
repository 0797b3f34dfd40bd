"""
TropiPay REST client and the process-wide client accessor.

The client authenticates with the OAuth client-credentials grant and exposes
one method per API operation used by the MCP tools. Every response passes
through a single error check so callers only ever see a decoded payload or a
TropiPayAPIError.
"""

import time
import logging
import threading
from typing import Any, Callable, Dict, Optional

import requests

from tropipay_mcp.config import TropiPayConfig
from tropipay_mcp.exceptions import ConfigurationError, TropiPayAPIError

logger = logging.getLogger(__name__)

TOKEN_PATH = "/api/v2/access/token"
TOKEN_EXPIRY_MARGIN = 60  # seconds
DEFAULT_TOKEN_LIFETIME = 3600

MISSING_CREDENTIALS_MESSAGE = (
    "TropiPay credentials not configured. Please set TROPIPAY_CLIENT_ID and "
    "TROPIPAY_CLIENT_SECRET environment variables."
)


def _error_message(payload: Any) -> Optional[str]:
    """Pull a readable message out of an error payload"""
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            return str(error.get("message") or error.get("code") or error)
        if error:
            return str(error)
        if payload.get("message"):
            return str(payload["message"])
        return None
    if isinstance(payload, str) and payload.strip():
        return payload.strip()[:500]
    return None


def check_payload(payload: Any) -> Any:
    """
    Raise TropiPayAPIError for payloads that report a failure despite a 2xx status.

    The API signals application errors with a non-null "error" field or a
    numeric "code" of 400 or more.
    """
    if not isinstance(payload, dict):
        return payload

    code = payload.get("code")
    numeric_code = isinstance(code, (int, float)) and not isinstance(code, bool)
    if payload.get("error") is not None or (numeric_code and code >= 400):
        message = _error_message(payload) or f"API returned error code {code}"
        raise TropiPayAPIError(
            message,
            status_code=int(code) if numeric_code else None,
            payload=payload,
        )
    return payload


class TropiPayClient:
    """Thin requests-based client for the TropiPay API"""

    def __init__(self, client_id: str, client_secret: str, base_url: str,
                 timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        self._access_token: Optional[str] = None
        self._token_expires_at = 0.0

    @classmethod
    def from_config(cls, config: TropiPayConfig) -> "TropiPayClient":
        """Create a client for the configured host; requires credentials"""
        if not config.has_credentials:
            raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE)
        return cls(
            client_id=config.client_id,
            client_secret=config.client_secret,
            base_url=config.server_url,
            timeout=config.timeout,
        )

    # --- Transport ---

    def _send(self, method: str, path: str, headers: Optional[Dict[str, str]] = None, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TropiPayAPIError(f"Request to {path} failed: {e}") from e

        if not response.content:
            payload: Any = {}
        else:
            try:
                payload = response.json()
            except ValueError:
                payload = response.text

        if not response.ok:
            message = _error_message(payload) or f"HTTP {response.status_code} from {path}"
            logger.error(f"TropiPay API error on {method} {path}: {response.status_code} {message}")
            raise TropiPayAPIError(message, status_code=response.status_code, payload=payload)

        return check_payload(payload)

    def _authenticate(self) -> str:
        """Return a valid bearer token, requesting a new one when the cached one expired"""
        if self._access_token and time.monotonic() < self._token_expires_at:
            return self._access_token

        payload = self._send("POST", TOKEN_PATH, json={
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        })
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise TropiPayAPIError("Authentication response did not include an access token", payload=payload)

        try:
            lifetime = float(payload.get("expires_in") or DEFAULT_TOKEN_LIFETIME)
        except (TypeError, ValueError):
            lifetime = DEFAULT_TOKEN_LIFETIME

        self._access_token = token
        self._token_expires_at = time.monotonic() + max(0.0, lifetime - TOKEN_EXPIRY_MARGIN)
        logger.info("Obtained TropiPay access token")
        return token

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = {"Authorization": f"Bearer {self._authenticate()}"}
        return self._send(method, path, headers=headers, **kwargs)

    # --- API operations ---

    def get_balance(self) -> Any:
        """Balance of the account selected as default (amounts in cents)"""
        return self._request("GET", "/api/v2/users/balance")

    def get_profile(self) -> Any:
        return self._request("GET", "/api/users/profile")

    def list_movements(self, limit: int = 10, offset: int = 0) -> Any:
        return self._request("GET", "/api/v2/movements", params={"limit": limit, "offset": offset})

    def list_accounts(self) -> Any:
        return self._request("GET", "/api/v2/accounts")

    def list_deposit_accounts(self) -> Any:
        return self._request("GET", "/api/v2/deposit_accounts")

    def create_deposit_account(self, payload: Dict[str, Any]) -> Any:
        return self._request("POST", "/api/v2/deposit_accounts", json=payload)

    def list_payment_cards(self) -> Any:
        return self._request("GET", "/api/v2/paymentcards")

    def create_payment_card(self, payload: Dict[str, Any]) -> Any:
        return self._request("POST", "/api/v2/paymentcards", json=payload)


class ClientProvider:
    """
    Builds the client on first use and hands out the same instance afterwards.

    Initialization is guarded by a lock so concurrent first callers cannot
    create two clients. A failed construction leaves the slot empty.
    """

    def __init__(self, factory: Callable[[TropiPayConfig], TropiPayClient] = TropiPayClient.from_config):
        self._factory = factory
        self._client: Optional[TropiPayClient] = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._client is not None

    def get(self, config: TropiPayConfig) -> TropiPayClient:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = self._factory(config)
                    logger.info(f"TropiPay client initialized ({config.server_mode}, {config.server_url})")
        return self._client

    def reset(self) -> None:
        with self._lock:
            self._client = None


# Process-wide slot used by the MCP server
_provider = ClientProvider()


def get_client(config: TropiPayConfig) -> TropiPayClient:
    """
    Return the shared client, creating it on first call.

    Later calls return the cached client even if a different config is passed.

    Raises:
        ConfigurationError: If the credentials are not configured.
    """
    return _provider.get(config)


def client_initialized() -> bool:
    return _provider.initialized


def reset_client() -> None:
    """Forget the shared client (used by tests)"""
    _provider.reset()
