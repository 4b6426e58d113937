# ingestion/fetcher.py
from __future__ import annotations

import logging
import requests
from typing import Any, Dict, List, Optional, Union

from common.categories import Category
from common.settings import ConfigError, Settings, load_settings

logger = logging.getLogger(__name__)

NO_TRANSACTIONS = "No transactions found"


class EtherscanFetcher:
    """
    Pulls one transaction category at a time from the explorer's account
    module. Failures are logged and surface as an empty list.
    """

    def __init__(self, address: str, settings: Optional[Settings] = None):
        st = settings or load_settings()
        cfg = st.providers.etherscan
        if not cfg.api_key:
            raise ConfigError("ETHERSCAN_API_KEY environment variable not set.")
        self.address = address
        self.api_key = cfg.api_key
        self.base_url = cfg.base_url
        self.chain_id = cfg.chain_id
        self.timeout = cfg.timeout

    def _params(self, action: str) -> Dict[str, Any]:
        return {
            "chainid": self.chain_id,
            "module": "account",
            "action": action,
            "address": self.address,
            "apikey": self.api_key,
        }

    def fetch(self, category: Union[Category, str]) -> List[dict]:
        action = Category(category).action
        try:
            resp = requests.get(self.base_url, params=self._params(action), timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Exception fetching '%s': %s", action, e)
            return []

        if resp.status_code != 200:
            logger.error("HTTP error for action '%s': %s", action, resp.status_code)
            return []

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Malformed response for action '%s': %s", action, e)
            return []

        if not isinstance(data, dict) or data.get("status") != "1":
            message = data.get("message") if isinstance(data, dict) else None
            if message == NO_TRANSACTIONS:
                logger.warning("No '%s' transactions for %s", action, self.address)
            else:
                logger.error("API error for action '%s': %s", action, message or repr(data))
            return []

        result = data.get("result")
        if not isinstance(result, list):
            logger.error("Unexpected result for action '%s': %r", action, result)
            return []
        logger.info("Fetched %d '%s' transactions", len(result), action)
        return result


__all__ = [
    "EtherscanFetcher",
]
