"""Shared fixtures for depspy tests."""

from typing import Any, Dict, Iterable, List, Optional

import pytest


def _record(
    relative_id: str,
    imports: Iterable[str] = (),
    dynamic: Iterable[str] = (),
    rendered: Iterable[str] = (),
    removed: Iterable[str] = (),
    reasons: Optional[Dict[str, Dict[str, List[str]]]] = None,
    git: bool = False,
    import_change: bool = False,
    side_effect: bool = False,
) -> Dict[str, Any]:
    return {
        "relativeId": relative_id,
        "importedIds": list(imports),
        "dynamicallyImportedIds": list(dynamic),
        "renderedExports": list(rendered),
        "removedExports": list(removed),
        "isGitChange": git,
        "isImportChange": import_change,
        "isSideEffectChange": side_effect,
        "exportEffectedNamesToReasons": {
            name: {"importEffectedNames": names}
            for name, names in (reasons or {}).items()
        },
    }


@pytest.fixture
def make_record():
    """Factory for raw module records in the adapter wire shape."""
    return _record


@pytest.fixture
def simple_records(make_record):
    """A imports B; A.x changed because of B.y."""
    return [
        make_record("A", imports=["B"], rendered=["x"], reasons={"x": {"B": ["y"]}}, import_change=True),
        make_record("B", rendered=["y"], git=True),
    ]


@pytest.fixture
def chain_records(make_record):
    """A -> B -> C -> D -> E, each export caused by the next module's export."""
    ids = ["A", "B", "C", "D", "E"]
    records = []
    for current, nxt in zip(ids, ids[1:] + [None]):
        if nxt is None:
            records.append(make_record(current, rendered=[current.lower()], git=True))
        else:
            records.append(make_record(
                current,
                imports=[nxt],
                rendered=[current.lower()],
                reasons={current.lower(): {nxt: [nxt.lower()]}},
                import_change=True,
            ))
    return records


@pytest.fixture
def cycle_records(make_record):
    """A imports B and B imports A, each export caused by the other."""
    return [
        make_record("A", imports=["B"], rendered=["x"], reasons={"x": {"B": ["y"]}}),
        make_record("B", imports=["A"], rendered=["y"], reasons={"y": {"A": ["x"]}}),
    ]


@pytest.fixture
def diamond_records(make_record):
    """A imports B and C, both of which import D."""
    return [
        make_record("A", imports=["B", "C"], rendered=["x"],
                    reasons={"x": {"B": ["b"], "C": ["c"]}}),
        make_record("B", imports=["D"], rendered=["b"], reasons={"b": {"D": ["d"]}}),
        make_record("C", imports=["D"], rendered=["c"], reasons={"c": {"D": ["d"]}}),
        make_record("D", rendered=["d"], git=True),
    ]
