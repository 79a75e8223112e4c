#!/usr/bin/env python3
"""
Screen Tracking Demo
====================

Bootstraps the process-wide facade from examples/resources.json and
records a short shopping session: two screen views and one event.

The resources point at the Measurement Protocol validation endpoint, so
nothing is counted in a real property.

Run:
    SCREEN_ANALYTICS_DEBUG=1 python examples/screen_tracking_demo.py
"""

from __future__ import annotations

import logging
from pathlib import Path

from screen_analytics import ResourceContext, acquire

RESOURCES = Path(__file__).with_name("resources.json")


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    ctx = ResourceContext.from_file(RESOURCES)
    analytics = acquire(ctx)

    print(f"Tracker state: {analytics.client_state.value}")

    analytics.send_screen(ctx.id_of("screen_home"))
    analytics.send_screen(ctx.id_of("screen_product"), "SKU-1042")
    analytics.send_event(
        ctx.id_of("category_cart"),
        ctx.id_of("action_add"),
        label="SKU-1042",
    )

    # Sentinel ids are ignored.
    analytics.send_screen(0)
    analytics.send_event(0, ctx.id_of("action_add"))


if __name__ == "__main__":
    main()
