import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

PRODUCTION_URL = 'https://www.tropipay.com'
SANDBOX_URL = 'https://tropipay-dev.herokuapp.com'
API_PREFIX = '/api/v2'

ENVIRONMENTS = ('sandbox', 'production')
DEFAULT_TIMEOUT = 30.0

@dataclass(frozen=True)
class TropiPayConfig:
    """Settings for talking to the TropiPay API"""
    environment: str = 'sandbox'
    base_url: Optional[str] = None  # Overrides the environment host when set
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @property
    def server_mode(self) -> str:
        return 'LIVE' if self.environment == 'production' else 'SANDBOX'

    @property
    def server_url(self) -> str:
        """Host the client talks to: the custom base URL or the one for the server mode"""
        if self.base_url:
            return self.base_url
        return PRODUCTION_URL if self.server_mode == 'LIVE' else SANDBOX_URL

    @property
    def api_url(self) -> str:
        return f"{self.server_url}{API_PREFIX}"

    @property
    def masked_client_id(self) -> str:
        if not self.client_id:
            return 'Not configured'
        return f"{self.client_id[:8]}..."


def load_config() -> TropiPayConfig:
    """
    Build the configuration from environment variables.

    A .env file in the working directory is loaded first; variables already
    present in the environment take precedence. Missing credentials are not an
    error at this point, the client accessor reports them on first use.
    """
    if load_dotenv(find_dotenv(usecwd=True)):
        logger.info("Loaded environment overrides from .env")

    environment = os.getenv('TROPIPAY_ENVIRONMENT', 'sandbox').strip().lower() or 'sandbox'
    if environment not in ENVIRONMENTS:
        logger.warning(f"Unknown TROPIPAY_ENVIRONMENT '{environment}', falling back to sandbox")
        environment = 'sandbox'

    base_url = os.getenv('TROPIPAY_BASE_URL', '').strip().rstrip('/') or None

    raw_timeout = os.getenv('TROPIPAY_TIMEOUT', '')
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError:
        logger.warning(f"Invalid TROPIPAY_TIMEOUT '{raw_timeout}', using {DEFAULT_TIMEOUT}s")
        timeout = DEFAULT_TIMEOUT

    config = TropiPayConfig(
        environment=environment,
        base_url=base_url,
        client_id=os.getenv('TROPIPAY_CLIENT_ID') or None,
        client_secret=os.getenv('TROPIPAY_CLIENT_SECRET') or None,
        timeout=timeout,
    )

    logger.info(f"Configuration loaded. Environment: {config.environment}, Server: {config.server_url}")
    if not config.has_credentials:
        logger.warning("TROPIPAY_CLIENT_ID / TROPIPAY_CLIENT_SECRET are not set; API tools will fail")
    return config
