import pytest

from notequiz.domain import GenerationParameters
from notequiz.inference import infer_difficulty, infer_parameters, infer_question_type


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Give me something SIMPLE", "easy"),
        ("a beginner question please", "easy"),
        ("make it challenging", "hard"),
        ("An ADVANCED one", "hard"),
        ("quiz me on chapter two", "medium"),
        ("", "medium"),
    ],
)
def test_infer_difficulty(text, expected):
    assert infer_difficulty(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Please explain photosynthesis", "essay"),
        ("Discuss the causes", "essay"),
        ("a TRUE or false one", "true-false"),
        ("quiz me on chapter two", "multiple-choice"),
    ],
)
def test_infer_question_type(text, expected):
    assert infer_question_type(text) == expected


def test_easy_keywords_win_over_hard_keywords():
    assert infer_difficulty("an easy question that is not too hard") == "easy"


def test_essay_keywords_win_over_true_false_keywords():
    assert infer_question_type("true or false, or explain it") == "essay"


def test_substring_matching_counts_embedded_keywords():
    # "know" contains "no", "hardware" contains "hard"
    assert infer_parameters("What do you know about hardware") == GenerationParameters(
        difficulty="hard", question_type="true-false"
    )


def test_infer_parameters_is_pure():
    text = "Give me a hard essay question"
    first = infer_parameters(text)
    second = infer_parameters(text)
    assert first == second == GenerationParameters(difficulty="hard", question_type="essay")


def test_overrides_replace_only_given_fields():
    params = GenerationParameters(difficulty="hard", question_type="essay")
    assert params.with_overrides(None, "true-false") == GenerationParameters("hard", "true-false")
    assert params.with_overrides("easy", None) == GenerationParameters("easy", "essay")
