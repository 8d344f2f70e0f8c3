"""
Fire-and-forget ingredient rule discovery.

Unmatched ingredient names are posted to the rule discovery endpoint (a
separate service that synthesizes rules and skips names it already knows).
The scorer never waits on it: dispatch() hands a send job to a ``submit``
callable and returns. In the API that callable is FastAPI's
``BackgroundTasks.add_task``; elsewhere a small shared thread pool is used.

A failed or dropped dispatch only means those ingredients stay unscored
until a later request misses them again.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Sequence

import requests

from config.constants import MAX_DISCOVERY_BATCH
from config.settings import Settings, get_settings
from core.errors import DiscoveryDispatchError
from core.logging import get_logger


logger = get_logger(__name__)

SubmitFn = Callable[..., Any]

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _get_executor() -> ThreadPoolExecutor:
    """Shared background pool, created once on first use."""
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="rule-discovery")
        return _executor


def _default_submit(fn: Callable[..., Any], *args: Any) -> None:
    """Run ``fn(*args)`` on the shared background pool."""
    _get_executor().submit(fn, *args)


class RuleDiscoveryClient:
    """HTTP client for the rule discovery endpoint."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    @property
    def endpoint(self) -> str:
        return self._settings.discovery_endpoint

    def request_rules(self, names: Sequence[str]) -> None:
        """
        POST ``{"ingredients": names}``. The response body is not used.

        Raises:
            DiscoveryDispatchError: On HTTP status >= 400.
        """
        resp = requests.post(
            self.endpoint,
            json={"ingredients": list(names)},
            headers={"Authorization": f"Bearer {self._settings.supabase_service_key}"},
            timeout=self._settings.rule_discovery_timeout_seconds,
        )
        if resp.status_code >= 400:
            raise DiscoveryDispatchError(
                f"Rule discovery failed ({resp.status_code}): {resp.text}",
                status_code=resp.status_code,
            )


class DiscoveryDispatcher:
    """
    One-way dispatch of unmatched ingredient names.

    Usage:
        dispatcher = DiscoveryDispatcher(RuleDiscoveryClient(), submit=background_tasks.add_task)
        dispatcher.dispatch(missing_names)   # returns immediately
    """

    def __init__(
        self,
        client: RuleDiscoveryClient,
        submit: Optional[SubmitFn] = None,
        batch_size: int = MAX_DISCOVERY_BATCH,
        enabled: bool = True,
    ) -> None:
        self._client = client
        self._submit = submit or _default_submit
        self.batch_size = min(batch_size, MAX_DISCOVERY_BATCH)
        self.enabled = enabled

    def dispatch(self, missing_names: Sequence[str]) -> Optional[List[str]]:
        """
        Queue discovery for the first ``batch_size`` names.

        Returns the queued batch, or None when nothing was queued.
        """
        if not self.enabled or not missing_names:
            return None

        batch = list(missing_names[: self.batch_size])
        try:
            self._submit(self._send, batch)
        except Exception as e:
            logger.warning("Could not queue rule discovery", error=str(e), count=len(batch))
            return None
        return batch

    def _send(self, batch: List[str]) -> None:
        try:
            self._client.request_rules(batch)
            logger.info("Rule discovery requested", count=len(batch))
        except Exception as e:
            logger.warning(
                "Failed to trigger rule discovery",
                error=str(e),
                error_type=type(e).__name__,
                count=len(batch),
            )


def build_dispatcher(submit: Optional[SubmitFn] = None, settings: Optional[Settings] = None) -> DiscoveryDispatcher:
    """Dispatcher configured from settings."""
    settings = settings or get_settings()
    return DiscoveryDispatcher(
        RuleDiscoveryClient(settings),
        submit=submit,
        batch_size=settings.rule_discovery_batch_size,
        enabled=settings.rule_discovery_enabled,
    )
