from dataclasses import dataclass, replace
from typing import Any, Callable, List, Optional, Sequence


@dataclass(frozen=True)
class HeaderButton:
    key: str
    text: str
    type: str = "default"
    loading: bool = False
    disabled: bool = False
    on_click: Optional[Callable[[], Any]] = None


def _same_buttons(left: Sequence[HeaderButton], right: Sequence[HeaderButton]) -> bool:
    if len(left) != len(right):
        return False
    for a, b in zip(left, right):
        if (a.key, a.text, a.type, a.loading, a.disabled) != (b.key, b.text, b.type, b.loading, b.disabled):
            return False
    return True


class HeaderState:
    """Page header buttons and title, owned by the page that is currently shown."""

    def __init__(self):
        self.buttons: List[HeaderButton] = []
        self.custom_page_title: Optional[str] = None
        self.revision = 0

    def set_buttons(self, buttons: Sequence[HeaderButton]) -> bool:
        """Replace the buttons; returns False when nothing visible changed."""
        if _same_buttons(buttons, self.buttons):
            return False
        self.buttons = list(buttons)
        self.revision += 1
        return True

    def set_button(self, key: str, **changes: Any) -> bool:
        for position, button in enumerate(self.buttons):
            if button.key == key:
                self.buttons[position] = replace(button, **changes)
                self.revision += 1
                return True
        return False

    def set_custom_page_title(self, title: Optional[str]) -> None:
        self.custom_page_title = title

    def click(self, key: str) -> Any:
        for button in self.buttons:
            if button.key == key:
                if button.disabled or button.loading or button.on_click is None:
                    return None
                return button.on_click()
        raise KeyError(key)

    def clear(self) -> None:
        self.set_buttons([])
        self.custom_page_title = None
