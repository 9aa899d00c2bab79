"""Value types for qsval."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union


@dataclass
class VNull:
    def __str__(self) -> str:
        return "null"


@dataclass
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass
class VNumber:
    value: float

    def __post_init__(self) -> None:
        self.value = float(self.value)

    def __str__(self) -> str:
        v = self.value
        if v != v or v in (float("inf"), float("-inf")):
            return str(v)
        if v == int(v):
            return str(int(v))
        return str(v)


@dataclass
class VText:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class VDate:
    value: datetime

    def __post_init__(self) -> None:
        # Naive datetimes are UTC; the wire form always carries "Z".
        if self.value.tzinfo is None:
            self.value = self.value.replace(tzinfo=timezone.utc)

    def __str__(self) -> str:
        return self.value.isoformat()


@dataclass
class VList:
    items: list["Value"] = field(default_factory=list)

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


@dataclass
class VDict:
    entries: dict[str, "Value"] = field(default_factory=dict)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.entries.items()) + "}"


class _Absent:
    """Singleton marking an object field that must be left out."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Absent"

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "Absent"


Absent = _Absent()

Value = Union[VNull, VBool, VNumber, VText, VDate, VList, VDict]
