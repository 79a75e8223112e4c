"""Screen-view and event hit model.

A hit is the flat ``dict[str, str]`` payload handed to a tracker's
``send()``.  Keys follow the Google Analytics hit model (``t`` for the hit
type, ``ec``/``ea``/``el`` for event category, action and label).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class HitType(str, Enum):
    """Hit types understood by the tracker."""

    SCREEN_VIEW = "screenview"
    EVENT = "event"


class ClientState(str, Enum):
    """Outcome of the tracker resolution held by a facade."""

    UNRESOLVED = "unresolved"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


# ---------------------------------------------------------------------------
# Hit builders
# ---------------------------------------------------------------------------


class ScreenViewBuilder:
    """Builds a screen-view hit.

    The screen name itself is carried by the tracker's current-screen state
    (``tracker.set_screen_name``), not by the hit.
    """

    def __init__(self) -> None:
        self._fields: Dict[str, str] = {"t": HitType.SCREEN_VIEW.value}

    def build(self) -> Dict[str, str]:
        return dict(self._fields)


class EventBuilder:
    """Builds an event hit with a category, an action and an optional label."""

    def __init__(self) -> None:
        self._fields: Dict[str, str] = {"t": HitType.EVENT.value}

    def set_category(self, category: str) -> EventBuilder:
        self._fields["ec"] = category
        return self

    def set_action(self, action: str) -> EventBuilder:
        self._fields["ea"] = action
        return self

    def set_label(self, label: str) -> EventBuilder:
        self._fields["el"] = label
        return self

    def build(self) -> Dict[str, str]:
        return dict(self._fields)


# ---------------------------------------------------------------------------
# Event data classes
# ---------------------------------------------------------------------------


@dataclass
class ScreenEvent:
    """A screen view with an already resolved name."""

    name: str

    def to_hit(self) -> Dict[str, str]:
        return ScreenViewBuilder().build()


@dataclass
class ActionEvent:
    """A user action.  ``label`` is optional and omitted from the hit when None."""

    category: str
    action: str
    label: Optional[str] = None

    def to_hit(self) -> Dict[str, str]:
        builder = EventBuilder().set_category(self.category).set_action(self.action)
        if self.label is not None:
            builder.set_label(self.label)
        return builder.build()
