"""Admin-side state containers for configurable tables and editor forms.

Nothing here knows about transport: tables receive an async list loader,
forms receive a field-binding handle, and both report problems through a
``MessageChannel`` instead of raising into the caller.
"""

from .columns import ColumnDescriptor, FilterSection, VisibleColumn, default_is_button_visible
from .form import FormHandle, FormState
from .header import HeaderButton, HeaderState
from .messages import MessageChannel
from .options import EnumRegistry, OptionItem
from .table import ListParams, ListResult, TableController

__all__ = [
    "ColumnDescriptor",
    "EnumRegistry",
    "FilterSection",
    "FormHandle",
    "FormState",
    "HeaderButton",
    "HeaderState",
    "ListParams",
    "ListResult",
    "MessageChannel",
    "OptionItem",
    "TableController",
    "VisibleColumn",
    "default_is_button_visible",
]
