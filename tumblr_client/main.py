"""tumblr_client composition root: config -> logger -> transport."""

from typing import Optional

from requests.auth import AuthBase

from tumblr_client.adapters.requests_transport import RequestsTransport
from tumblr_client.core.config_manager import ConfigManager
from tumblr_client.core.logger import setup_logger


def create_transport(
    config: Optional[ConfigManager] = None,
    auth: Optional[AuthBase] = None,
) -> RequestsTransport:
    """Build a RequestsTransport from configuration.

    Startup sequence:
    1. ConfigManager init (loads or creates settings.yaml)
    2. Logger init (reads log level and masking from config)
    3. Transport creation (base URL, timeout, api key; auth from caller)

    Args:
        config: Configuration to read; defaults to the ConfigManager singleton
        auth: requests auth object used to sign requests (e.g. OAuth1)
    """
    # 1. ConfigManager (loads or creates settings.yaml)
    config = config or ConfigManager()

    # 2. Logger
    logger = setup_logger(
        log_level=config.get("app.log_level", "INFO"),
        mask_logs=config.get("security.mask_logs", True),
    )

    # 3. Transport
    base_url = config.get("api.base_url", "https://api.tumblr.com/v2")
    transport = RequestsTransport(
        base_url=base_url,
        auth=auth,
        api_key=config.get("api.api_key") or None,
        timeout=config.get("api.timeout", 30),
    )
    logger.info(f"Transport ready for {base_url}")
    return transport
