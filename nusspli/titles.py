"""Title identifiers, categories and the title database lookups."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import IntEnum
from itertools import chain

from nusspli.utils import hex_string, hex_to_bytes

MAX_TITLENAME_LENGTH = 256
MCP_REGION_UNKNOWN = 0
UNKNOWN_NAME = "UNKNOWN"


class TitleCategory(IntEnum):
    GAME = 0
    UPDATE = 1
    DLC = 2
    DEMO = 3
    ALL = 4
    DISC = 5


class TitleKey(IntEnum):
    """Password used to derive a title key."""

    MYPASS = 0
    NINTENDO = 1
    TEST = 2
    KEY_1234567890 = 3
    LUCY131211 = 4
    FBF10 = 5
    KEY_5678 = 6
    KEY_1234 = 7
    EMPTY = 8
    MAGIC = 9


class TidHigh(IntEnum):
    """Upper 32 bits of a title ID, naming the kind of title."""

    GAME = 0x00050000
    DEMO = 0x00050002
    SYSTEM_APP = 0x00050010
    SYSTEM_DATA = 0x0005001B
    SYSTEM_APPLET = 0x00050030
    VWII_IOS = 0x00000007
    VWII_SYSTEM_APP = 0x00070002
    VWII_SYSTEM = 0x00070008
    DLC = 0x0005000C
    UPDATE = 0x0005000E


@dataclass(frozen=True)
class TitleEntry:
    name: str
    tid: int
    region: int
    key: int


_CATEGORY_BY_HIGH = {
    TidHigh.GAME: TitleCategory.GAME,
    TidHigh.UPDATE: TitleCategory.UPDATE,
    TidHigh.DLC: TitleCategory.DLC,
    TidHigh.DEMO: TitleCategory.DEMO,
}


def tid_high(tid: int) -> int:
    """Return the upper 32 bits of a 64-bit title ID."""
    if not 0 <= tid < (1 << 64):
        raise ValueError(f"title ID out of unsigned 64-bit range: {tid}")
    return tid >> 32


def category_for_tid(tid: int) -> TitleCategory:
    """Return the category whose list a title ID is looked up in."""
    return _CATEGORY_BY_HIGH.get(tid_high(tid), TitleCategory.ALL)


class TitleDatabase:
    """Lists of known titles per category.

    When no ALL list is given it is built from the other categories.
    """

    def __init__(self, categories: Mapping[TitleCategory, Iterable[TitleEntry]]) -> None:
        self._lists: dict[TitleCategory, tuple[TitleEntry, ...]] = {
            TitleCategory(cat): tuple(entries) for cat, entries in categories.items()
        }
        if TitleCategory.ALL not in self._lists:
            self._lists[TitleCategory.ALL] = tuple(
                chain.from_iterable(
                    entries for cat, entries in self._lists.items() if cat != TitleCategory.ALL
                )
            )
        self._by_name: dict[str, int] = {}
        for entry in self._lists[TitleCategory.ALL]:
            self._by_name.setdefault(entry.name, entry.tid)

    def entries(self, category: TitleCategory) -> tuple[TitleEntry, ...]:
        return self._lists.get(TitleCategory(category), ())

    def entry_by_tid(self, tid: int) -> TitleEntry | None:
        """Find a title by ID; games are also looked up among disc titles."""
        category = category_for_tid(tid)
        searched = [self.entries(category)]
        if category == TitleCategory.GAME:
            searched.append(self.entries(TitleCategory.DISC))
        return next((e for e in chain.from_iterable(searched) if e.tid == tid), None)

    def tid_to_name(self, tid: str) -> str:
        """Name the title with a 16-digit hex ID, or "UNKNOWN"."""
        if len(tid) != 16:
            raise ValueError(f"title ID must be 16 hex digits, got {tid!r}")
        entry = self.entry_by_tid(int.from_bytes(hex_to_bytes(tid), "big"))
        return UNKNOWN_NAME if entry is None else entry.name

    def name_to_tid(self, name: str) -> str | None:
        """Return the 16-digit hex ID of the title with this exact name."""
        tid = self._by_name.get(name)
        return None if tid is None else hex_string(tid, 16)