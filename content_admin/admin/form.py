"""Editor form lifecycle: connection, dirty tracking and cached initial values."""

import logging
from typing import Any, Dict, Mapping, Optional

from .messages import MessageChannel


logger = logging.getLogger(__name__)


class FormHandle:
    """In-memory field store a form state binds to."""

    def __init__(self):
        self._values: Dict[str, Any] = {}

    def get_fields_value(self) -> Dict[str, Any]:
        return dict(self._values)

    def get_field_value(self, name: str) -> Any:
        return self._values.get(name)

    def set_fields_value(self, values: Mapping[str, Any]) -> None:
        self._values.update(values)

    def set_field(self, name: str, value: Any) -> None:
        self._values[name] = value

    def reset_fields(self) -> None:
        self._values.clear()


class FormState:
    """Tracks one editor form.

    Initial values are cached until a form handle is attached; only then are
    they written into the fields, and every later change of initial values
    clears the fields first so nothing from a previously loaded record stays
    visible.
    """

    def __init__(self, initial_values: Optional[Mapping[str, Any]] = None, messages: Optional[MessageChannel] = None):
        self.form: Optional[FormHandle] = None
        self.connected = False
        self.dirty = False
        self.messages = messages or MessageChannel()
        self._initial_values: Dict[str, Any] = dict(initial_values or {})

    @property
    def form_values(self) -> Dict[str, Any]:
        return dict(self._initial_values)

    def attach(self, form: Any) -> bool:
        """Bind a form handle; returns whether the form is now connected."""
        if form is None or not callable(getattr(form, "get_fields_value", None)):
            logger.debug("Form handle is not attachable yet")
            return False
        self.form = form
        self.connected = True
        self._apply_initial_values()
        return True

    def detach(self) -> None:
        self.form = None
        self.connected = False

    def set_initial_values(self, values: Optional[Mapping[str, Any]]) -> None:
        self._initial_values = dict(values or {})
        self._apply_initial_values()

    def _apply_initial_values(self) -> None:
        # an empty mapping never resets a connected form; use clear() for that
        if not self.connected or not self._initial_values:
            return
        self.form.reset_fields()
        self.form.set_fields_value(self._initial_values)

    def clear(self) -> None:
        self._initial_values = {}
        if self.connected:
            self.form.reset_fields()
        self.dirty = False

    def set_dirty(self, dirty: bool) -> None:
        self.dirty = dirty

    def edit(self, name: str, value: Any) -> None:
        if not self.connected:
            raise RuntimeError("Cannot edit a form before it is connected")
        self.form.set_field(name, value)
        self.dirty = True

    def get_latest_values(self) -> Dict[str, Any]:
        if self.connected:
            return self.form.get_fields_value()
        return self.form_values
