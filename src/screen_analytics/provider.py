"""Narrow contract between the facade and an analytics provider.

Any SDK can sit behind the facade as long as it offers a factory that turns
a configuration resource id into a tracker with these methods.
"""

from __future__ import annotations

from typing import Dict, Protocol, runtime_checkable


@runtime_checkable
class Tracker(Protocol):
    """A provider tracker, responsible for actually delivering hits."""

    def enable_auto_activity_tracking(self, enabled: bool) -> None: ...

    def enable_advertising_id_collection(self, enabled: bool) -> None: ...

    def enable_exception_reporting(self, enabled: bool) -> None: ...

    def set_screen_name(self, name: str) -> None: ...

    def send(self, hit: Dict[str, str]) -> None: ...


@runtime_checkable
class TrackerProvider(Protocol):
    """Creates trackers from a configuration resource id."""

    def new_tracker(self, config_id: int) -> Tracker: ...
