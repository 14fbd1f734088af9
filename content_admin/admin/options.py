import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionItem:
    value: Any
    label: str


OptionSource = Union[str, Sequence[OptionItem], Sequence[Mapping[str, Any]]]

STATIC_OPTION_SETS: Dict[str, List[OptionItem]] = {
    "displayStatus": [
        OptionItem("DRAFT", "Draft"),
        OptionItem("ENABLED", "Enabled"),
        OptionItem("DISABLED", "Disabled"),
    ],
    "statusList": [
        OptionItem("DRAFT", "Draft"),
        OptionItem("ENABLED", "Enabled"),
        OptionItem("DISABLED", "Disabled"),
    ],
    "defaultStatus": [
        OptionItem(1, "Yes"),
        OptionItem(0, "No"),
    ],
}


def to_option_items(items: Iterable[Any]) -> List[OptionItem]:
    """Normalise inline option lists; dict items may use ``label`` or ``name``."""
    normalised = []
    for item in items:
        if isinstance(item, OptionItem):
            normalised.append(item)
        else:
            label = item.get("label") or item.get("name") or str(item.get("value"))
            normalised.append(OptionItem(item.get("value"), label))
    return normalised


class EnumRegistry:
    """Named option sets resolved at render time.

    Seeded with the static status sets; business enums are added from the
    backend enum listing with ``load_enum_groups``.
    """

    def __init__(self, seed: Optional[Mapping[str, Sequence[OptionItem]]] = None):
        self._sets: Dict[str, List[OptionItem]] = {
            name: list(items) for name, items in (STATIC_OPTION_SETS if seed is None else seed).items()
        }

    def register(self, name: str, items: Iterable[Any]) -> None:
        self._sets[name] = to_option_items(items)

    def load_enum_groups(self, groups: Iterable[Mapping[str, Any]]) -> int:
        count = 0
        for group in groups:
            name = group.get("displayName") or group.get("name")
            if not name:
                continue
            self._sets[name] = [
                OptionItem(data.get("enumName"), data.get("displayName") or data.get("name"))
                for data in group.get("datas") or []
            ]
            count += 1
        logger.debug(f"Loaded {count} enum groups")
        return count

    def names(self) -> List[str]:
        return sorted(self._sets)

    def resolve(self, source: Optional[OptionSource]) -> List[OptionItem]:
        if source is None:
            return []
        if isinstance(source, str):
            return list(self._sets.get(source, []))
        return to_option_items(source)

    def label_for(self, source: Optional[OptionSource], value: Any) -> Any:
        """Return the label for ``value``; unknown values and lists fall back to the raw value."""
        options = self.resolve(source)
        if not options:
            return value
        if isinstance(value, (list, tuple)):
            return ", ".join(str(self._lookup(options, item)) for item in value)
        return self._lookup(options, value)

    @staticmethod
    def _lookup(options: Sequence[OptionItem], value: Any) -> Any:
        for option in options:
            if option.value == value:
                return option.label or value
        return value
