"""Tests for folding flat join rows into survey and response trees."""
from datetime import datetime, UTC

from surveygenie.services import build_response_tree, build_survey_tree


def _survey_row(question_id=None, question_text=None, question_type=None, choice_id=None, choice_text=None):
    return {
        "survey_id": 1,
        "survey_title": "Colors",
        "survey_description": "About colors",
        "question_id": question_id,
        "question_text": question_text,
        "question_type": question_type,
        "choice_id": choice_id,
        "choice_text": choice_text,
    }


class TestBuildSurveyTree:
    """Survey/question/choice row reconstruction."""

    def test_no_rows_returns_none(self):
        assert build_survey_tree([]) is None

    def test_survey_without_questions(self):
        """A lone row with a null question id gives an empty question list."""
        survey = build_survey_tree([_survey_row()])

        assert survey.id == 1
        assert survey.title == "Colors"
        assert survey.description == "About colors"
        assert survey.questions == []

    def test_groups_choices_under_first_seen_question(self):
        rows = [
            _survey_row(10, "Favorite?", "Multiple Choice", 100, "Red"),
            _survey_row(10, "Favorite?", "Multiple Choice", 101, "Blue"),
            _survey_row(11, "Why?", "Text"),
            _survey_row(12, "Like it?", "Yes/No"),
        ]

        survey = build_survey_tree(rows)

        assert [q.id for q in survey.questions] == [10, 11, 12]
        assert [(c.id, c.text) for c in survey.questions[0].options] == [(100, "Red"), (101, "Blue")]
        assert survey.questions[1].options == []
        assert survey.questions[2].type == "Yes/No"


class TestBuildResponseTree:
    """Response/answer row reconstruction."""

    def test_no_rows_returns_none(self):
        assert build_response_tree([]) is None

    def test_response_without_answers(self):
        completed_at = datetime(2025, 1, 1, 12, 0)
        rows = [{
            "response_id": 5,
            "survey_id": 1,
            "completed_at": completed_at,
            "answer_id": None,
            "question_id": None,
            "answer_text": None,
            "question_text": None,
        }]

        response = build_response_tree(rows)

        assert response.id == 5
        assert response.answers == []
        assert response.completed_at == completed_at.replace(tzinfo=UTC)

    def test_collects_every_answer(self):
        completed_at = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
        rows = [
            {
                "response_id": 5,
                "survey_id": 1,
                "completed_at": completed_at,
                "answer_id": 50 + idx,
                "question_id": 10 + idx,
                "answer_text": text,
                "question_text": f"Question {idx}",
            }
            for idx, text in enumerate(["A", "B"])
        ]

        response = build_response_tree(rows)

        assert [(a.question_id, a.answer_text) for a in response.answers] == [(10, "A"), (11, "B")]
        assert response.answers[0].question_text == "Question 0"
