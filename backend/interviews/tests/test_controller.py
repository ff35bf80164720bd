import asyncio

import pytest

from interviews.interviewer.config import InterviewConfig
from interviews.interviewer.controller import SessionSequencer, build_sequencer
from interviews.interviewer.exceptions import (
    AlreadyAnswered,
    EmptyAnswer,
    InterviewNotFound,
    QuestionLimitReached,
    QuestionNotFound,
    SessionBusy,
    SessionComplete,
)
from interviews.interviewer.question_bank import QuestionBank
from interviews.models import Interview
from interviews.tests.doubles import GatedGenerator, InMemoryStore, ScriptedGenerator, make_interview

EXPECTED = "REST uses multiple endpoints with HTTP methods"
ANSWER = "REST has multiple endpoints using HTTP methods and is simple"


@pytest.fixture(scope="module")
def bank():
    return QuestionBank.load()


def _dynamic(store, bank, generator=None, **config):
    return build_sequencer(InterviewConfig(**config), generator or ScriptedGenerator(), bank, store=store)


def _static(store, bank, **config):
    return build_sequencer(InterviewConfig(use_dynamic_generation=False, **config), ScriptedGenerator(), bank, store=store)


@pytest.mark.asyncio
async def test_first_question_starts_the_interview(memory_store, bank):
    seq = _dynamic(memory_store, bank, ScriptedGenerator("Q: What is JSX"))

    q, created = await seq.request_next_question("INT-0000TEST")

    assert created is True
    assert q.question_text == "What is JSX?"
    assert memory_store.interviews["INT-0000TEST"].status == Interview.Status.IN_PROGRESS


@pytest.mark.asyncio
async def test_pending_question_is_returned_instead_of_a_new_one(memory_store, bank):
    generator = ScriptedGenerator("First?", "Second?")
    seq = _dynamic(memory_store, bank, generator)

    first, _ = await seq.request_next_question("INT-0000TEST")
    again, created = await seq.request_next_question("INT-0000TEST")

    assert created is False
    assert again.id == first.id
    assert len(generator.prompts) == 1
    assert len(memory_store.questions) == 1


@pytest.mark.asyncio
async def test_next_question_after_answer(memory_store, bank):
    seq = _dynamic(memory_store, bank, ScriptedGenerator("First?", "Second?"))

    first, _ = await seq.request_next_question("INT-0000TEST")
    await seq.record_answer(first.id, "I would start by profiling the slow requests.")
    second, created = await seq.request_next_question("INT-0000TEST")

    assert created is True
    assert second.question_text == "Second?"
    assert [q.id for q in await seq.list_questions("INT-0000TEST")] == [first.id, second.id]


@pytest.mark.asyncio
async def test_session_completes_after_total_answers(memory_store, bank):
    seq = _dynamic(memory_store, bank, total_questions=2)

    for _ in range(2):
        q, _ = await seq.request_next_question("INT-0000TEST")
        await seq.record_answer(q.id, "A reasonably detailed answer.")

    assert memory_store.interviews["INT-0000TEST"].status == Interview.Status.COMPLETED
    with pytest.raises(SessionComplete):
        await seq.request_next_question("INT-0000TEST")
    assert len(memory_store.questions) == 2


@pytest.mark.asyncio
async def test_larger_question_limit_cannot_extend_a_completed_session(memory_store, bank):
    seq = _dynamic(memory_store, bank, total_questions=2)
    for _ in range(2):
        q, _ = await seq.request_next_question("INT-0000TEST", 10)
        await seq.record_answer(q.id, "A reasonably detailed answer.")

    with pytest.raises(SessionComplete):
        await seq.request_next_question("INT-0000TEST", 10)

    assert len(memory_store.questions) == 2
    assert memory_store.interviews["INT-0000TEST"].status == Interview.Status.COMPLETED


@pytest.mark.asyncio
async def test_smaller_question_limit_only_bounds_the_request(memory_store, bank):
    generator = ScriptedGenerator("First?", "Second?")
    seq = _dynamic(memory_store, bank, generator, total_questions=5)
    q, _ = await seq.request_next_question("INT-0000TEST", 1)
    await seq.record_answer(q.id, "A reasonably detailed answer.")

    assert memory_store.interviews["INT-0000TEST"].status == Interview.Status.IN_PROGRESS
    with pytest.raises(QuestionLimitReached):
        await seq.request_next_question("INT-0000TEST", 1)

    second, created = await seq.request_next_question("INT-0000TEST")
    assert created is True
    assert second.question_text == "Second?"
    assert memory_store.interviews["INT-0000TEST"].status == Interview.Status.IN_PROGRESS
    # the prompt always counts against the configured total
    assert all("out of 5" in prompt for prompt in generator.prompts)


@pytest.mark.asyncio
async def test_unknown_interview(memory_store, bank):
    seq = _dynamic(memory_store, bank)
    with pytest.raises(InterviewNotFound):
        await seq.request_next_question("INT-MISSING")


@pytest.mark.asyncio
async def test_record_answer_scores_against_expected_answer(memory_store, bank):
    seq = _static(memory_store, bank)
    q = await memory_store.insert_question("INT-0000TEST", "REST vs GraphQL?", expected_answer=EXPECTED)

    answered = await seq.record_answer(q.id, ANSWER)

    assert answered.answer_text == ANSWER
    assert answered.score == 6
    assert answered.feedback.startswith("Good answer!")
    assert answered.answered_at is not None


@pytest.mark.asyncio
async def test_record_answer_errors(memory_store, bank):
    seq = _dynamic(memory_store, bank)
    q, _ = await seq.request_next_question("INT-0000TEST")

    with pytest.raises(QuestionNotFound):
        await seq.record_answer(999, ANSWER)
    with pytest.raises(EmptyAnswer):
        await seq.record_answer(q.id, "   ")


@pytest.mark.asyncio
async def test_second_answer_is_rejected_and_leaves_first_untouched(memory_store, bank):
    seq = _static(memory_store, bank)
    q, _ = await seq.request_next_question("INT-0000TEST")
    first = await seq.record_answer(q.id, ANSWER)
    snapshot = (first.answer_text, first.score, first.feedback, first.answered_at)

    with pytest.raises(AlreadyAnswered):
        await seq.record_answer(q.id, "A completely different and much longer answer " * 5)

    stored = await seq.get_question(q.id)
    assert (stored.answer_text, stored.score, stored.feedback, stored.answered_at) == snapshot


@pytest.mark.asyncio
async def test_overwrite_policy_is_last_write_wins(memory_store, bank):
    seq = _static(memory_store, bank, allow_answer_overwrite=True)
    q = await memory_store.insert_question("INT-0000TEST", "REST vs GraphQL?", expected_answer=EXPECTED)
    await seq.record_answer(q.id, ANSWER)

    second = await seq.record_answer(q.id, "Not sure.")

    assert second.answer_text == "Not sure."
    assert second.score == 0
    assert second.feedback.startswith("Incomplete answer.")


@pytest.mark.asyncio
async def test_stats_without_answers(memory_store, bank):
    seq = _dynamic(memory_store, bank)
    await seq.request_next_question("INT-0000TEST")

    stats = await seq.get_stats("INT-0000TEST")

    assert (stats.total_questions, stats.answered_questions) == (1, 0)
    assert stats.average_score is None
    assert stats.highest_score is None
    assert stats.lowest_score is None


@pytest.mark.asyncio
async def test_static_mode_follows_the_bank(memory_store, bank):
    seq = _static(memory_store, bank)
    expected = bank.lookup("Full Stack Developer", ["React", "Node.js"], 5)

    texts = []
    for _ in range(len(expected)):
        q, _ = await seq.request_next_question("INT-0000TEST")
        texts.append(q.question_text)
        assert q.expected_answer
        await seq.record_answer(q.id, "Some answer text here.")

    assert texts == [e.text for e in expected]


@pytest.mark.asyncio
async def test_static_mode_completes_when_bank_runs_out(bank):
    store = InMemoryStore(make_interview(technologies=["Git"]))
    seq = _static(store, bank, total_questions=5)
    # only one Full Stack entry is tagged Git
    q, _ = await seq.request_next_question("INT-0000TEST")
    await seq.record_answer(q.id, "Branching, rebasing and pull requests.")

    with pytest.raises(SessionComplete):
        await seq.request_next_question("INT-0000TEST")
    assert store.interviews["INT-0000TEST"].status == Interview.Status.COMPLETED


@pytest.mark.asyncio
async def test_concurrent_requests_for_one_session_are_rejected(bank):
    store = InMemoryStore(make_interview("INT-AAAA0001"), make_interview("INT-BBBB0002"))
    generator = GatedGenerator()
    seq = _dynamic(store, bank, generator)

    pending = asyncio.create_task(seq.request_next_question("INT-AAAA0001"))
    await generator.started.wait()

    with pytest.raises(SessionBusy):
        await seq.request_next_question("INT-AAAA0001")

    other, created = await seq.request_next_question("INT-BBBB0002")
    assert created is True
    assert other.interview_id == "INT-BBBB0002"

    generator.release.set()
    q, created = await pending
    assert created is True
    assert len(await seq.list_questions("INT-AAAA0001")) == 1


@pytest.mark.asyncio
async def test_get_question_unknown(memory_store, bank):
    with pytest.raises(QuestionNotFound):
        await _dynamic(memory_store, bank).get_question(42)


def test_mode_requires_its_collaborator(memory_store, bank):
    with pytest.raises(ValueError):
        SessionSequencer(memory_store, config=InterviewConfig(use_dynamic_generation=True))
    with pytest.raises(ValueError):
        SessionSequencer(memory_store, config=InterviewConfig(use_dynamic_generation=False))
