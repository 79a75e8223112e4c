"""AnalyticsFacade: record screen views and events through one shared tracker.

The facade resolves its tracker from a configuration resource the first
time it is needed.  When that resource is missing every send becomes a
no-op; nothing here ever raises to the caller.

Usage, process-wide::

    from screen_analytics import ResourceContext, acquire

    analytics = acquire(ResourceContext.from_file("resources.json"))
    analytics.send_screen(R_SCREEN_PRODUCT, product_name)
    analytics.send_event(R_CATEGORY_CART, R_ACTION_ADD, label=sku)

Usage, injected by the host's composition root::

    analytics = AnalyticsFacade(ctx, provider=my_provider)
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Optional, Union

from screen_analytics.context import NOT_FOUND, ApplicationContext
from screen_analytics.events import ActionEvent, ClientState, ScreenEvent
from screen_analytics.measurement import MeasurementProtocolProvider
from screen_analytics.provider import Tracker, TrackerProvider

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_RESOURCE = "global_tracker"
CONFIG_RESOURCE_TYPE = "xml"
DEBUG_ENV_VAR = "SCREEN_ANALYTICS_DEBUG"

# Identifier meaning "not provided" for screens, categories and actions.
UNSET_ID = 0


def _debug_from_env() -> bool:
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in ("1", "true", "yes", "on")


def _application_context(
    context: Optional[ApplicationContext],
) -> Optional[ApplicationContext]:
    if context is None:
        logger.error("No application context given; analytics disabled")
        return None
    try:
        return context.get_application_context()
    except Exception:
        logger.exception(
            "Could not obtain the application context; analytics disabled"
        )
        return None


class AnalyticsFacade:
    """Owns one tracker and exposes best-effort send operations.

    Args:
        context: Host environment.  Only its application-scoped context is
            kept.  ``None`` leaves the facade permanently disabled.
        provider: Tracker factory.  Defaults to the Measurement Protocol
            provider reading its configuration from ``context``.
        config_resource: Name of the ``xml`` resource holding the tracker
            configuration.
        debug: Log every screen name and event at INFO.  ``None`` reads the
            ``SCREEN_ANALYTICS_DEBUG`` environment variable.
        retry_failed_resolution: Look the configuration up again on every
            send after a failure instead of caching the negative result.
    """

    def __init__(
        self,
        context: Optional[ApplicationContext],
        *,
        provider: Optional[TrackerProvider] = None,
        config_resource: str = DEFAULT_CONFIG_RESOURCE,
        debug: Optional[bool] = None,
        retry_failed_resolution: bool = False,
    ):
        self._context = _application_context(context)
        self._provider = provider
        self.config_resource = config_resource
        self.debug = _debug_from_env() if debug is None else debug
        self.retry_failed_resolution = retry_failed_resolution

        self._tracker: Optional[Tracker] = None
        self._state = ClientState.UNRESOLVED
        self._lock = threading.Lock()

        if self._context is None:
            self._state = ClientState.UNAVAILABLE
        else:
            self._get_tracker()

    @property
    def client_state(self) -> ClientState:
        return self._state

    @property
    def is_available(self) -> bool:
        return self._get_tracker() is not None

    # ------------------------------------------------------------------ #
    # Tracker resolution
    # ------------------------------------------------------------------ #

    def _get_provider(self) -> TrackerProvider:
        if self._provider is None:
            self._provider = MeasurementProtocolProvider(self._context)
        return self._provider

    def _should_resolve(self) -> bool:
        if self._context is None:
            return False
        if self._state is ClientState.UNRESOLVED:
            return True
        return self._state is ClientState.UNAVAILABLE and self.retry_failed_resolution

    def _get_tracker(self) -> Optional[Tracker]:
        if not self._should_resolve():
            return self._tracker
        with self._lock:
            if self._should_resolve():
                self._tracker = self._resolve_tracker()
                self._state = (
                    ClientState.AVAILABLE
                    if self._tracker is not None
                    else ClientState.UNAVAILABLE
                )
        return self._tracker

    def _resolve_tracker(self) -> Optional[Tracker]:
        try:
            package = self._context.get_package_name()
            config_id = self._context.get_identifier(
                self.config_resource, CONFIG_RESOURCE_TYPE, package
            )
        except Exception:
            logger.exception(
                "Lookup of tracker configuration %r failed", self.config_resource
            )
            return None
        if config_id == NOT_FOUND:
            logger.error(
                "Tracker configuration %r (%s) not found in package %s; "
                "analytics disabled",
                self.config_resource,
                CONFIG_RESOURCE_TYPE,
                package,
            )
            return None

        try:
            tracker = self._get_provider().new_tracker(config_id)
            # Instrumentation is explicit only.
            tracker.enable_auto_activity_tracking(False)
            tracker.enable_advertising_id_collection(False)
            tracker.enable_exception_reporting(False)
        except Exception:
            logger.exception(
                "Failed to create tracker from configuration %r", self.config_resource
            )
            return None
        return tracker

    def _get_string(self, resource_id: int, *format_args: Any) -> Optional[str]:
        try:
            return self._context.get_string(resource_id, *format_args)
        except Exception:
            logger.exception("Could not resolve string resource %r", resource_id)
            return None

    # ------------------------------------------------------------------ #
    # Screens
    # ------------------------------------------------------------------ #

    def send_screen(self, screen_id: int, *label_args: str) -> None:
        """Send a screen view named by a string resource.

        ``label_args`` are substituted into the resource's format
        placeholders.  A ``screen_id`` of 0 is ignored.
        """
        if screen_id == UNSET_ID:
            return
        if self._get_tracker() is None:
            return

        name = self._get_string(screen_id, *label_args)
        if name is not None:
            self.send_screen_name(name)

    def send_screen_resource(self, name_resource_id: int) -> None:
        """Send a screen view whose name is a plain string resource."""
        self.send_screen(name_resource_id)

    def send_screen_name(self, name: str) -> None:
        """Send a screen view for an already resolved screen name."""
        tracker = self._get_tracker()
        if tracker is None:
            return

        if self.debug:
            logger.info("Setting screen name: %s", name)

        try:
            tracker.set_screen_name(name)
            tracker.send(ScreenEvent(name).to_hit())
        except Exception:
            logger.exception("Screen view recording failed")

    # ------------------------------------------------------------------ #
    # Events
    # ------------------------------------------------------------------ #

    def send_event(
        self, category_id: int, action_id: int, label: Optional[str] = None
    ) -> None:
        """Send an event whose category and action are string resources.

        Both ids are mandatory; the event is dropped when either is 0.
        """
        if self._get_tracker() is None:
            return
        if category_id == UNSET_ID or action_id == UNSET_ID:
            return

        category = self._get_string(category_id)
        if category is None:
            return
        action = self._get_string(action_id)
        if action is None:
            return

        self.record(ActionEvent(category=category, action=action, label=label))

    def record(self, event: Union[ScreenEvent, ActionEvent]) -> None:
        """Send a manually constructed event."""
        if isinstance(event, ScreenEvent):
            self.send_screen_name(event.name)
            return
        if not isinstance(event, ActionEvent):
            logger.error("Unsupported analytics event type: %s", type(event).__name__)
            return

        tracker = self._get_tracker()
        if tracker is None:
            return

        if self.debug:
            logger.info("Setting event category: %s", event.category)
            logger.info("Setting event action: %s", event.action)

        try:
            tracker.send(event.to_hit())
        except Exception:
            logger.exception("Event recording failed")


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------

_instance: Optional[AnalyticsFacade] = None
_instance_lock = threading.Lock()


def acquire(context: ApplicationContext, **options: Any) -> AnalyticsFacade:
    """Return the process-wide facade, creating it on first use.

    The first caller's context and ``options`` win; later calls get the
    same instance regardless of what they pass.
    """
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = AnalyticsFacade(context, **options)
        return _instance


def reset() -> None:
    """Forget the process-wide facade so the next acquire() builds a new one."""
    global _instance
    with _instance_lock:
        _instance = None
