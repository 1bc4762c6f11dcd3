"""
Time-bounded cache for the webhook routing document.

The document is fetched on first use and kept for ``refresh_period_seconds``.
After that the next access blocks on a refetch. Fetch errors reach the caller
unchanged; a stale document is never served in their place.
"""

import threading
import time
from enum import Enum
from typing import Callable, Optional

from cachetools import TTLCache

from orderbook_notifier.constants import WEBHOOK_CONFIG_REFRESH_SECONDS
from orderbook_notifier.handlers.utils.observability import logger
from orderbook_notifier.models.webhook import WebhookDefinition

_DEFINITION_KEY = 'definition'


class CacheState(str, Enum):
    EMPTY = 'EMPTY'
    FRESH = 'FRESH'
    STALE = 'STALE'


class WebhookDefinitionCache:
    """Caches one routing document, refreshing it synchronously on expiry."""

    def __init__(
        self,
        fetch: Callable[[], WebhookDefinition],
        refresh_period_seconds: float = WEBHOOK_CONFIG_REFRESH_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            fetch: Loads the routing document from its store
            refresh_period_seconds: How long a fetched document stays fresh
            clock: Time source in seconds, injectable for tests
        """
        self._fetch = fetch
        self._clock = clock
        self.refresh_period_seconds = refresh_period_seconds
        self._cache: TTLCache = TTLCache(maxsize=1, ttl=refresh_period_seconds, timer=clock)
        # held across the refetch so concurrent callers share one fetch
        self._lock = threading.Lock()
        self.last_fetched_at: Optional[float] = None

    @property
    def state(self) -> CacheState:
        if self.last_fetched_at is None:
            return CacheState.EMPTY
        if _DEFINITION_KEY in self._cache:
            return CacheState.FRESH
        return CacheState.STALE

    def get_definition(self) -> WebhookDefinition:
        """
        Get the routing document, fetching it when empty or stale.

        Returns:
            The cached or freshly fetched routing document

        Raises:
            Exception: Whatever the fetch function raised
        """
        with self._lock:
            definition = self._cache.get(_DEFINITION_KEY)
            if definition is not None:
                return definition

            logger.debug('Webhook definition cache miss', extra={'state': self.state.value})
            definition = self._fetch()
            self._cache[_DEFINITION_KEY] = definition
            self.last_fetched_at = self._clock()
            return definition
