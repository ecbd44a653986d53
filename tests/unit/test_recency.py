from placeholder.models import SizePair
from placeholder.recency import RecencyList, SizeRecencyList


def test_record_moves_existing_value_to_front_without_duplicates() -> None:
    recent: RecencyList[str] = RecencyList()
    for value in ["a", "b", "c", "a", "b", "a"]:
        recent.record(value)
        snapshot = recent.snapshot()
        assert snapshot[0] == value
        assert len(snapshot) == len(set(snapshot))

    assert recent.snapshot() == ["a", "b", "c"]


def test_top_recent_returns_bounded_copy_in_order() -> None:
    recent: RecencyList[str] = RecencyList()
    for idx in range(15):
        recent.record(f"/img/{idx}/{idx}")

    top = recent.top_recent()
    assert len(top) == 10
    assert top[0] == "/img/14/14"
    assert top[-1] == "/img/5/5"

    top.clear()
    assert len(recent) == 15
    assert recent.top_recent(3) == ["/img/14/14", "/img/13/13", "/img/12/12"]


def test_top_recent_on_short_list_returns_everything() -> None:
    recent: RecencyList[str] = RecencyList()
    recent.record("only")
    assert recent.top_recent(10) == ["only"]
    assert recent.top_recent(0) == []


def test_size_recency_list_dedupes_by_dimensions() -> None:
    sizes = SizeRecencyList()
    sizes.record(SizePair(100, 100))
    sizes.record(SizePair(200, 200))
    sizes.record(SizePair(100, 100))

    assert sizes.top_recent_json() == [{"w": 100, "h": 100}, {"w": 200, "h": 200}]


def test_clear_empties_the_list() -> None:
    recent: RecencyList[str] = RecencyList()
    recent.record("x")
    recent.clear()
    assert recent.top_recent() == []
    assert len(recent) == 0
