"""Measurement Protocol tracker backed by HTTPX.

The default provider behind :class:`~screen_analytics.facade.AnalyticsFacade`.
Each hit is delivered with one synchronous POST to the collect endpoint.
There is no queue and no retry; a failed delivery is logged and dropped.

The tracker configuration is the value of the ``global_tracker`` xml
resource, a mapping such as::

    {
        "tracking_id": "UA-000000-1",
        "client_id": "35009a79-1a05-49d7-b876-2b884d0f825b",  # optional
        "endpoint": "https://www.google-analytics.com/collect",  # optional
        "timeout": 5.0,  # optional, seconds
    }
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Mapping, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://www.google-analytics.com/collect"
DEFAULT_TIMEOUT = 5.0
PROTOCOL_VERSION = "1"


class MeasurementProtocolTracker:
    """Tracker that posts hits as Measurement Protocol form data."""

    def __init__(
        self,
        tracking_id: str,
        *,
        client_id: Optional[str] = None,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        self.tracking_id = tracking_id
        self.client_id = client_id or str(uuid.uuid4())
        self.endpoint = endpoint

        self.auto_activity_tracking = True
        self.advertising_id_collection = True
        self.exception_reporting = True
        self.screen_name: Optional[str] = None

        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    # -- toggles --

    def enable_auto_activity_tracking(self, enabled: bool) -> None:
        self.auto_activity_tracking = enabled

    def enable_advertising_id_collection(self, enabled: bool) -> None:
        self.advertising_id_collection = enabled

    def enable_exception_reporting(self, enabled: bool) -> None:
        self.exception_reporting = enabled

    # -- hits --

    def set_screen_name(self, name: str) -> None:
        self.screen_name = name

    def build_payload(self, hit: Mapping[str, str]) -> Dict[str, str]:
        payload = {
            "v": PROTOCOL_VERSION,
            "tid": self.tracking_id,
            "cid": self.client_id,
        }
        if self.screen_name is not None:
            payload["cd"] = self.screen_name
        payload.update(hit)
        return payload

    def send(self, hit: Mapping[str, str]) -> None:
        payload = self.build_payload(hit)
        try:
            response = self._client.post(self.endpoint, data=payload)
            response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Failed to deliver %s hit", hit.get("t", "?"))
            return
        logger.debug("Delivered %s hit to %s", hit.get("t", "?"), self.endpoint)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class MeasurementProtocolProvider:
    """Creates :class:`MeasurementProtocolTracker` instances from config resources.

    ``context`` must offer ``get_value(resource_id)``, as
    :class:`~screen_analytics.context.ResourceContext` does.
    """

    def __init__(self, context: Any, http_client: Optional[httpx.Client] = None):
        self._context = context
        self._http_client = http_client

    def new_tracker(self, config_id: int) -> MeasurementProtocolTracker:
        config = self._context.get_value(config_id)
        if not isinstance(config, Mapping) or not config.get("tracking_id"):
            raise ValueError(
                f"Tracker configuration {config_id:#x} has no tracking_id"
            )
        return MeasurementProtocolTracker(
            config["tracking_id"],
            client_id=config.get("client_id"),
            endpoint=config.get("endpoint", DEFAULT_ENDPOINT),
            timeout=float(config.get("timeout", DEFAULT_TIMEOUT)),
            http_client=self._http_client,
        )
