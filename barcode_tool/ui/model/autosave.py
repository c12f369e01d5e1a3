"""Config auto-save helpers for the barcode page.

This module lives in the *model* layer so that configuration persistence
is decoupled from any particular view implementation.  It exposes a
decorator that can be applied to event handlers (such as
``BarcodeController.handle_event``) to write the config file after the
events that change the saved rule list.
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable
import logging


# Events that persist the config when routed through the barcode
# controller's event handler.  Only rule-list mutations are listed;
# close-to-tray saves explicitly from the window.
AUTOSAVE_EVENTS: set[str] = {
    "save_rule_clicked",
    "delete_rule_clicked",
}


def should_autosave(event: str) -> bool:
    """Return True when the given event name should trigger auto-save."""
    return str(event or "").strip() in AUTOSAVE_EVENTS


def autosave_config(handler: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that saves the config after rule-mutating events.

    The wrapped function must accept the controller as its first argument
    and an ``event`` string as its second.  After the handler returns,
    ``controller.save_config()`` is invoked when:

    - the event name is listed in :data:`AUTOSAVE_EVENTS`, and
    - the handler did not return ``False`` (nothing changed), and
    - the controller is not currently in a refresh pass (``_refreshing``).
    """

    @wraps(handler)
    def wrapper(controller: Any, event: str, *args: Any, **kwargs: Any) -> Any:
        result = handler(controller, event, *args, **kwargs)

        evt = str(event or "").strip() if event is not None else ""
        if not should_autosave(evt) or result is False:
            return result
        if getattr(controller, "_refreshing", False):
            return result

        ok, message = controller.save_config()
        if not ok:
            logging.debug("autosave_config failed for event=%s: %s", evt, message)
        return result

    return wrapper


__all__ = ["AUTOSAVE_EVENTS", "should_autosave", "autosave_config"]
