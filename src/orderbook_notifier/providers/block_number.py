"""
Current block number lookups over JSON-RPC.

Block-based auctions (Dutch_V3, Priority) measure staleness in blocks, which
needs the chain head. RPC urls come from ``RPC_<chainId>`` environment
variables.
"""

import os
from typing import Dict, Mapping, Optional, Protocol

import httpx

from orderbook_notifier.handlers.utils.errors import BlockNumberFetchError, NoRpcUrlConfiguredError

RPC_ENV_PREFIX = 'RPC_'
RPC_TIMEOUT_SECONDS = 1.0


class BlockNumberSource(Protocol):
    def get_block_number(self, chain_id: int) -> int: ...


def rpc_urls_from_environment(environ: Optional[Mapping[str, str]] = None) -> Dict[int, str]:
    """Collect ``RPC_<chainId>`` variables into a chain id to url mapping."""
    environ = os.environ if environ is None else environ
    urls = {}
    for name, value in environ.items():
        if not name.startswith(RPC_ENV_PREFIX) or not value:
            continue
        suffix = name[len(RPC_ENV_PREFIX):]
        if suffix.isdigit():
            urls[int(suffix)] = value
    return urls


class RpcBlockNumberProvider:
    """Fetches the latest block number with ``eth_blockNumber``."""

    def __init__(self, rpc_urls: Mapping[int, str], client: Optional[httpx.Client] = None) -> None:
        self.rpc_urls = dict(rpc_urls)
        self._client = client or httpx.Client(timeout=RPC_TIMEOUT_SECONDS)

    @classmethod
    def from_environment(cls, client: Optional[httpx.Client] = None) -> 'RpcBlockNumberProvider':
        return cls(rpc_urls_from_environment(), client=client)

    def get_block_number(self, chain_id: int) -> int:
        """
        Get the latest block number of a chain.

        Raises:
            NoRpcUrlConfiguredError: If no RPC url is configured for the chain
            BlockNumberFetchError: If the node call fails or returns no result
        """
        url = self.rpc_urls.get(chain_id)
        if not url:
            raise NoRpcUrlConfiguredError(chain_id)

        payload = {'jsonrpc': '2.0', 'id': 1, 'method': 'eth_blockNumber', 'params': []}
        try:
            response = self._client.post(url, json=payload)
            response.raise_for_status()
            result = response.json().get('result')
        except (httpx.HTTPError, ValueError) as e:
            raise BlockNumberFetchError(chain_id, str(e), original_error=e) from e

        if not isinstance(result, str):
            raise BlockNumberFetchError(chain_id, f'unexpected result {result!r}')
        try:
            return int(result, 16)
        except ValueError as e:
            raise BlockNumberFetchError(chain_id, f'unexpected result {result!r}', original_error=e) from e
