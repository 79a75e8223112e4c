"""Screen Analytics: screen-view and event tracking behind one shared tracker.

Resolves a single analytics tracker from the host application's
``global_tracker`` configuration resource and exposes two verbs:

    1. send_screen / send_screen_name  - record a screen view
    2. send_event                      - record a category/action/label event

Telemetry is best effort: a missing configuration turns every call into a
no-op and nothing is ever raised to the caller.
"""

from screen_analytics.context import (
    ApplicationContext,
    ResourceContext,
    ResourceNotFoundError,
)
from screen_analytics.events import (
    ActionEvent,
    ClientState,
    EventBuilder,
    HitType,
    ScreenEvent,
    ScreenViewBuilder,
)
from screen_analytics.facade import AnalyticsFacade, acquire, reset
from screen_analytics.measurement import (
    MeasurementProtocolProvider,
    MeasurementProtocolTracker,
)
from screen_analytics.provider import Tracker, TrackerProvider

__all__ = [
    "AnalyticsFacade",
    "acquire",
    "reset",
    "ApplicationContext",
    "ResourceContext",
    "ResourceNotFoundError",
    "ActionEvent",
    "ClientState",
    "EventBuilder",
    "HitType",
    "ScreenEvent",
    "ScreenViewBuilder",
    "Tracker",
    "TrackerProvider",
    "MeasurementProtocolProvider",
    "MeasurementProtocolTracker",
]

__version__ = "0.1.0"
