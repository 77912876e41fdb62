"""Mapping between the nested screening representation and flat table columns.

Inside the engine, per-test data is kept as ``{test: {phase: {field: value}}}``.
Only at the row boundary is it flattened to ``{test}_{phase}_{field}`` columns.
"""

from typing import Any, Dict, Iterator, Tuple

TEST_TYPES = ("vision", "hearing", "acanthosis", "scoliosis")
PHASES = ("initial", "rescreen")

# Phase fields recorded per test, in column order
TEST_FIELDS: Dict[str, Tuple[str, ...]] = {
    "vision": ("screener", "date", "glasses", "right_eye", "left_eye", "result"),
    "hearing": ("screener", "date", "result",
                "right_1000", "right_2000", "right_4000",
                "left_1000", "left_2000", "left_4000"),
    "acanthosis": ("screener", "date", "result"),
    "scoliosis": ("screener", "date", "observations", "result"),
}

# Tests whose overall PASS/FAIL determination is stored
OVERALL_TESTS = ("vision", "hearing")

# Database-generated columns; never written back
COMPLETION_COLUMNS = frozenset(f"{test}_complete" for test in TEST_TYPES)

NestedResults = Dict[str, Dict[str, Dict[str, Any]]]


def column_name(test: str, phase: str, field: str) -> str:
    return f"{test}_{phase}_{field}"


def required_column(test: str) -> str:
    return f"{test}_required"


def overall_column(test: str) -> str:
    return f"{test}_overall"


def iter_columns() -> Iterator[Tuple[str, str, str, str]]:
    """Yield (test, phase, field, column) for every per-phase column."""
    for test in TEST_TYPES:
        for phase in PHASES:
            for field in TEST_FIELDS[test]:
                yield test, phase, field, column_name(test, phase, field)


def flatten(results: NestedResults) -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for test, phases in results.items():
        for phase, fields in phases.items():
            for field, value in fields.items():
                flat[column_name(test, phase, field)] = value
    return flat
