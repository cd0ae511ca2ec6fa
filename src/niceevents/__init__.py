"""
niceevents: interactive event classification over tracking time series with NiceGUI.

This package provides:
- SessionController: click-pairing state machine + ordered interval store with per-identity undo
- EventClassifierWidget: NiceGUI view (Plotly time series, Reset/Undo, interval table)
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from niceevents.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library, logging is handled by the parent application's configuration.
"""

import logging

from niceevents.utils.logging import configure_logging, get_logger

from niceevents.event_classifier import (
    ClickBuffer,
    EventClassifierError,
    IdentitySelector,
    Interval,
    IntervalStore,
    MalformedClick,
    NoIdentitySelected,
    SessionController,
)

# NullHandler so library logs don't reach the root logger until an
# application calls configure_logging().
_logger = logging.getLogger("niceevents")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ClickBuffer",
    "EventClassifierError",
    "IdentitySelector",
    "Interval",
    "IntervalStore",
    "MalformedClick",
    "NoIdentitySelected",
    "SessionController",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
