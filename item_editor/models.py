"""Data models for the item editor."""

from dataclasses import dataclass, field

GROUP_ITEM = "GroupItem"
NO_GROUP_TYPE = "none"

GROUP_BASE_TYPES = (
    "Switch",
    "Rollershutter",
    "Contact",
    "String",
    "Number",
    "Dimmer",
    "DateTime",
    "Color",
    "Image",
    "Player",
    "Location",
    "Call",
)
ITEM_TYPES = tuple(f"{base}Item" for base in GROUP_BASE_TYPES) + (GROUP_ITEM,)

LOGICAL_FUNCTIONS = ("AND", "OR", "NAND", "NOR")
ARITHMETIC_FUNCTIONS = ("AVG", "MAX", "MIN", "SUM", "THRESHOLD", "BETWEEN")

# Parameter count per function kind. Kinds not listed take no parameters.
FUNCTION_ARITY: dict[str, int] = {
    "THRESHOLD": 2,
    "BETWEEN": 2,
}


@dataclass(frozen=True)
class AggregationFunction:
    """Aggregation applied over the members of a typed group."""

    kind: str = ""
    params: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.kind

    @property
    def is_complete(self) -> bool:
        """Whether the parameter count matches the kind's arity."""
        return bool(self.kind) and len(self.params) == FUNCTION_ARITY.get(self.kind, 0)


@dataclass
class Item:
    """An item as stored by the registry.

    ``group_type`` is the bare base type (``Number``) and ``function`` the
    compact wire string (``THRESHOLD_10_20``). Tags and group names behave
    as sets and are kept sorted so that equal items compare equal.
    """

    name: str
    type: str = ""
    group_type: str | None = None
    category: str | None = None
    label: str = ""
    tags: list[str] = field(default_factory=list)
    group_names: list[str] = field(default_factory=list)
    function: str | None = None

    def __post_init__(self) -> None:
        self.tags = sorted(set(self.tags))
        self.group_names = sorted(set(self.group_names))

    @property
    def is_group(self) -> bool:
        return self.type == GROUP_ITEM


@dataclass
class ItemForm:
    """Editable copy of an item in display form.

    ``group_type`` holds the display token (``NumberItem`` or ``none``) and
    ``function`` a decoded descriptor, empty when nothing is configured.
    """

    name: str = ""
    type: str = ""
    group_type: str = NO_GROUP_TYPE
    category: str | None = None
    label: str = ""
    tags: list[str] = field(default_factory=list)
    group_names: list[str] = field(default_factory=list)
    function: AggregationFunction = field(default_factory=AggregationFunction)
