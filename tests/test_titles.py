import pytest

from nusspli.titles import (
    TidHigh,
    TitleCategory,
    TitleDatabase,
    TitleEntry,
    TitleKey,
    category_for_tid,
    tid_high,
)

GAME = TitleEntry("Sample Game", 0x0005000010101A00, 2, TitleKey.MYPASS)
UPDATE = TitleEntry("Sample Update", 0x0005000E10101A00, 2, TitleKey.NINTENDO)
DLC = TitleEntry("Sample DLC", 0x0005000C10101A00, 2, TitleKey.EMPTY)
DISC = TitleEntry("Sample Disc", 0x0005000010102B00, 1, TitleKey.MAGIC)
DISC_UPDATE_TID = TitleEntry("Stray", 0x0005000E10102B00, 1, TitleKey.TEST)


@pytest.fixture
def db():
    return TitleDatabase(
        {
            TitleCategory.GAME: [GAME],
            TitleCategory.UPDATE: [UPDATE],
            TitleCategory.DLC: [DLC],
            TitleCategory.DISC: [DISC, DISC_UPDATE_TID],
        }
    )


def test_tid_high():
    assert tid_high(0x0005000E10101A00) == TidHigh.UPDATE


def test_tid_high_out_of_range():
    with pytest.raises(ValueError):
        tid_high(1 << 64)


@pytest.mark.parametrize(
    "high,category",
    [
        (TidHigh.GAME, TitleCategory.GAME),
        (TidHigh.UPDATE, TitleCategory.UPDATE),
        (TidHigh.DLC, TitleCategory.DLC),
        (TidHigh.DEMO, TitleCategory.DEMO),
        (TidHigh.SYSTEM_APP, TitleCategory.ALL),
        (TidHigh.VWII_IOS, TitleCategory.ALL),
    ],
)
def test_category_for_tid(high, category):
    assert category_for_tid((int(high) << 32) | 0x1234) == category


def test_entry_by_tid_in_own_category(db):
    assert db.entry_by_tid(UPDATE.tid) == UPDATE
    assert db.entry_by_tid(GAME.tid) == GAME


def test_game_falls_back_to_disc(db):
    assert db.entry_by_tid(DISC.tid) == DISC


def test_non_game_does_not_search_disc(db):
    assert db.entry_by_tid(DISC_UPDATE_TID.tid) is None


def test_unknown_tid(db):
    assert db.entry_by_tid(0x0005000099999900) is None


def test_entries(db):
    assert db.entries(TitleCategory.DLC) == (DLC,)
    assert db.entries(TitleCategory.DEMO) == ()


def test_all_built_from_categories(db):
    assert set(db.entries(TitleCategory.ALL)) == {GAME, UPDATE, DLC, DISC, DISC_UPDATE_TID}


def test_tid_to_name(db):
    assert db.tid_to_name("0005000010101a00") == "Sample Game"
    assert db.tid_to_name("0005000010101A00") == "Sample Game"


def test_tid_to_name_unknown(db):
    assert db.tid_to_name("0005000099999900") == "UNKNOWN"


def test_tid_to_name_bad_length(db):
    with pytest.raises(ValueError):
        db.tid_to_name("0005")


def test_name_to_tid(db):
    assert db.name_to_tid("Sample DLC") == "0005000c10101a00"


def test_name_to_tid_missing(db):
    assert db.name_to_tid("No Such Title") is None


@pytest.mark.parametrize("entry", [GAME, UPDATE, DLC, DISC])
def test_name_tid_round_trip(db, entry):
    assert db.tid_to_name(db.name_to_tid(entry.name)) == entry.name


def test_explicit_all_list_used_for_names():
    db = TitleDatabase({TitleCategory.GAME: [GAME], TitleCategory.ALL: [DLC]})
    assert db.name_to_tid(GAME.name) is None
    assert db.entry_by_tid(GAME.tid) == GAME