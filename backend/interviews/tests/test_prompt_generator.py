import pytest

from interviews.interviewer.prompt_generator import COVERAGE_AREAS, InterviewerPromptGenerator


@pytest.fixture
def builder():
    return InterviewerPromptGenerator()


def test_prompt_states_technology_and_progress(builder):
    prompt = builder.build_question_prompt(3, 5, "I mostly use hooks.", "React")
    assert "React developer position" in prompt
    assert "question 3 out of 5" in prompt


def test_previous_text_is_embedded_verbatim(builder):
    previous = 'Closures capture "outer" scope;\n  even after return.'
    prompt = builder.build_question_prompt(2, 5, previous, "JavaScript")
    assert previous in prompt


def test_prompt_carries_guidance_and_output_rules(builder):
    prompt = builder.build_question_prompt(1, 5, "", "Python")
    assert "build on or challenge" in prompt
    assert "probing question" in prompt
    assert "go deeper into advanced concepts" in prompt
    for area in COVERAGE_AREAS:
        assert area in prompt
    assert "Only return the next question text" in prompt


def test_prompt_is_deterministic(builder):
    assert builder.build_question_prompt(2, 4, "x", "Go") == builder.build_question_prompt(2, 4, "x", "Go")


@pytest.mark.parametrize("number,total", [(0, 5), (-1, 5), (6, 5)])
def test_invalid_numbers_raise(builder, number, total):
    with pytest.raises(ValueError):
        builder.build_question_prompt(number, total, "", "Python")
