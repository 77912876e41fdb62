from vhsa.models.screening_result import GENERATED_COLUMNS, ScreeningResult
from vhsa.screening.fields import (
    COMPLETION_COLUMNS,
    OVERALL_TESTS,
    TEST_TYPES,
    flatten,
    iter_columns,
    overall_column,
    required_column,
)


def table_columns():
    return set(ScreeningResult.__table__.columns.keys())


def test_every_phase_field_has_a_column():
    missing = [column for _, _, _, column in iter_columns() if column not in table_columns()]
    assert missing == []


def test_required_and_overall_columns_exist():
    columns = table_columns()
    for test in TEST_TYPES:
        assert required_column(test) in columns
    for test in OVERALL_TESTS:
        assert overall_column(test) in columns


def test_completion_columns_are_generated():
    assert GENERATED_COLUMNS == COMPLETION_COLUMNS


def test_flatten():
    flat = flatten({"hearing": {"rescreen": {"right_4000": "35", "result": "pass"}}})
    assert flat == {"hearing_rescreen_right_4000": "35", "hearing_rescreen_result": "pass"}
