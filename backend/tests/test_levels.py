"""Tests for level time limits and answer checking."""

import pytest
from gapgame.levels import check_answer, check_answers, level_time_limit, time_limit
from gapgame.models import GapSpan


class TestTimeLimit:
    def test_ten_percent_less(self):
        assert time_limit(100) == 90

    def test_rounds_down(self):
        assert time_limit(55) == 49

    def test_floor_of_twenty_seconds(self):
        assert time_limit(10) == 20

    def test_default_previous_time(self):
        assert time_limit() == 270

    def test_untimed_levels(self):
        assert level_time_limit(1) is None
        assert level_time_limit(2, 120) is None

    def test_timed_levels(self):
        assert level_time_limit(3, 120) == 108
        assert level_time_limit(4, 108) == 97

    @pytest.mark.parametrize("level", [0, 5])
    def test_unknown_level(self, level):
        with pytest.raises(ValueError):
            level_time_limit(level)


class TestCheckAnswers:
    def test_letter_by_letter(self):
        check = check_answer("שלום", "שלוט")
        assert check.letters == [True, True, True, False]
        assert not check.correct

    def test_short_answer(self):
        assert check_answer("בית", "ב").letters == [True, False, False]

    def test_correct(self):
        assert check_answer("בית", "בית").correct

    def test_all_correct(self):
        spans = [GapSpan(start=5, end=8, word="בית"), GapSpan(start=0, end=4, word="שלום")]
        report = check_answers(spans, ["שלום", "בית"])
        assert report.all_correct
        assert [g.word for g in report.gaps] == ["שלום", "בית"]

    def test_missing_answers_are_wrong(self):
        spans = [GapSpan(start=0, end=4, word="שלום"), GapSpan(start=5, end=8, word="בית")]
        report = check_answers(spans, ["שלום"])
        assert not report.all_correct
        assert report.gaps[1].letters == [False, False, False]
