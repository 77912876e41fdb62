"""Unit tests for the screening eligibility rules.

Covers:
- Pre-K (3) exemption and the Pre-K (4) birthday cutoff
- Vision/hearing for K-12
- Acanthosis by grade and enrollment status
- Scoliosis by grade and gender
"""

from datetime import date

import pytest

from vhsa.screening.rules import (
    StudentProfile,
    born_before_pre_k4_cutoff,
    calculate_requirements,
    is_recognized_grade,
)


def requirements(grade, gender="Female", status="Returning", dob=None):
    return calculate_requirements(
        StudentProfile(grade=grade, gender=gender, status=status, date_of_birth=dob)
    )


class TestPreK:
    @pytest.mark.parametrize("gender", ["Male", "Female", "Other"])
    @pytest.mark.parametrize("status", ["New", "Returning"])
    def test_pre_k3_requires_nothing(self, gender, status):
        result = requirements("Pre-K (3)", gender, status, date(2021, 1, 1))
        assert not any([result.vision, result.hearing, result.acanthosis, result.scoliosis])

    def test_pre_k4_born_on_cutoff_is_screened(self):
        result = requirements("Pre-K (4)", dob=date(2020, 9, 1))
        assert result.vision is True
        assert result.hearing is True
        assert result.acanthosis is False
        assert result.scoliosis is False

    def test_pre_k4_born_after_cutoff_is_not_screened(self):
        result = requirements("Pre-K (4)", dob=date(2020, 9, 2))
        assert result.vision is False
        assert result.hearing is False

    def test_pre_k4_without_dob_is_not_screened(self):
        result = requirements("Pre-K (4)", dob=None)
        assert result.vision is False
        assert result.hearing is False

    def test_short_pre_k_labels(self):
        assert requirements("PK3").vision is False
        assert requirements("pk4", dob=date(2020, 2, 1)).vision is True

    def test_cutoff_helper(self):
        assert born_before_pre_k4_cutoff(date(2019, 1, 1)) is True
        assert born_before_pre_k4_cutoff(date(2019, 12, 31)) is False


class TestVisionHearing:
    @pytest.mark.parametrize("grade", ["K", "Kindergarten", "1st", "6th", "12th"])
    def test_k_through_12_requires_vision_and_hearing(self, grade):
        result = requirements(grade)
        assert result.vision is True
        assert result.hearing is True

    def test_grade_labels_are_case_and_space_insensitive(self):
        assert requirements("  KINDERGARTEN ").vision is True

    def test_unknown_grade_requires_nothing(self):
        result = requirements("Unknown")
        assert not any([result.vision, result.hearing, result.acanthosis, result.scoliosis])


class TestAcanthosis:
    @pytest.mark.parametrize("grade", ["1st", "3rd", "5th", "7th"])
    def test_odd_grades_always_screened(self, grade):
        assert requirements(grade, status="Returning").acanthosis is True

    @pytest.mark.parametrize("grade", ["2nd", "4th", "6th", "8th", "9th", "12th"])
    def test_other_grades_only_for_new_students(self, grade):
        assert requirements(grade, status="New").acanthosis is True
        assert requirements(grade, status="Returning").acanthosis is False

    def test_kindergarten_never_screened(self):
        assert requirements("K", status="New").acanthosis is False


class TestScoliosis:
    def test_fifth_grade_female(self):
        assert requirements("5th", gender="Female").scoliosis is True

    def test_fifth_grade_male(self):
        assert requirements("5th", gender="Male").scoliosis is False

    def test_seventh_grade_female(self):
        assert requirements("7th", gender="Female").scoliosis is True

    @pytest.mark.parametrize("gender", ["Male", "Female", "Other"])
    def test_eighth_grade_new_any_gender(self, gender):
        assert requirements("8th", gender=gender, status="New").scoliosis is True

    def test_eighth_grade_returning_male(self):
        assert requirements("8th", gender="Male", status="Returning").scoliosis is True

    def test_eighth_grade_returning_female(self):
        assert requirements("8th", gender="Female", status="Returning").scoliosis is False

    def test_sixth_grade_never_screened(self):
        assert requirements("6th", gender="Female", status="New").scoliosis is False


class TestProfile:
    def test_from_record_reads_dob(self):
        class Record:
            grade = "Pre-K (4)"
            gender = "Male"
            status = "New"
            dob = date(2020, 4, 4)

        profile = StudentProfile.from_record(Record())
        assert profile.date_of_birth == date(2020, 4, 4)
        assert calculate_requirements(profile).vision is True

    @pytest.mark.parametrize("grade, expected", [
        ("Pre-K (3)", True),
        ("Pre-K (4)", True),
        ("K", True),
        ("10th", True),
        ("13th", False),
        ("", False),
        (None, False),
    ])
    def test_is_recognized_grade(self, grade, expected):
        assert is_recognized_grade(grade) is expected
