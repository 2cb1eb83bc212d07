import pytest

from notequiz.errors import (
    InvalidConversation,
    InvalidNote,
    MalformedResponse,
    MissingRequiredField,
    ModelCallFailed,
    NoContentFound,
    NoteNotFound,
)
from notequiz.llm import ModelInvoker
from notequiz.metrics import PROCESSING_TIME_WINDOW, MetricsRegistry
from notequiz.models import ConversationTurn, QuizOptions
from notequiz.services import ASSISTANT_INTRO, NoteService, QuizService
from notequiz.storage import InMemoryNoteRepository


class ExplodingModel:
    def __init__(self) -> None:
        self.calls = 0

    def complete(self, prompt: str, temperature: float) -> str:
        self.calls += 1
        raise ConnectionError("upstream unavailable")


def user(content: str) -> ConversationTurn:
    return ConversationTurn(role="user", content=content)


def assistant(content: str) -> ConversationTurn:
    return ConversationTurn(role="assistant", content=content)


def test_end_to_end_hard_essay(quiz_service, stub_model):
    conversation = [user("Give me a hard essay question")]

    updated, elapsed = quiz_service.generate(conversation, [])

    assert len(updated) == 2
    reply = updated[-1]
    assert reply.role == "assistant"
    assert reply.content == ASSISTANT_INTRO
    assert reply.question.difficulty == "hard"
    assert reply.question.type == "essay"
    assert reply.question.based_on_notes == []
    assert elapsed >= 0

    prompt, temperature = stub_model.calls[0]
    assert temperature == 0.9
    assert "Note 1: Spaced repetition" in prompt
    assert "Note 2: Active recall" in prompt
    assert "Make it hard difficulty and format it as essay." in prompt


def test_caller_conversation_is_not_mutated(quiz_service):
    conversation = [assistant("Hi there"), user("quiz me")]

    updated, _ = quiz_service.generate(conversation, [1])

    assert len(conversation) == 2
    assert updated[:2] == conversation
    assert updated[-1].question.based_on_notes == [1]


@pytest.mark.parametrize(
    "conversation",
    [
        [],
        [user("quiz me"), assistant("Here you go")],
        [user("   \n\t")],
        [ConversationTurn(role="system", content="quiz me")],
        [ConversationTurn(role="user")],
    ],
)
def test_invalid_conversations(quiz_service, stub_model, conversation):
    with pytest.raises(InvalidConversation):
        quiz_service.generate(conversation, [])
    assert stub_model.calls == []


def test_no_content_aborts_before_model_call(quiz_service, stub_model):
    with pytest.raises(NoContentFound):
        quiz_service.generate([user("quiz me")], [40, 41])
    assert stub_model.calls == []


def test_model_failure_is_wrapped_and_not_retried(repository, metrics):
    model = ExplodingModel()
    service = QuizService(repository, ModelInvoker(model), metrics=metrics)

    with pytest.raises(ModelCallFailed) as excinfo:
        service.generate_quiz([user("quiz me")], [])

    assert model.calls == 1
    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert metrics.generation_failure_reasons["MODEL_CALL_FAILED"] == 1


@pytest.mark.parametrize(
    "completion, error",
    [
        ("I cannot help with that.", MalformedResponse),
        ('{"type": "essay", "difficulty": "hard"}', MissingRequiredField),
    ],
)
def test_unusable_completion_fails_generation(quiz_service, stub_model, metrics, completion, error):
    stub_model.completion = completion

    with pytest.raises(error):
        quiz_service.generate_quiz([user("quiz me")], [])
    assert metrics.generation_failures == 1
    assert metrics.generation_successes == 0


def test_explicit_options_override_inference(quiz_service, stub_model):
    options = QuizOptions(difficulty="easy")

    quiz_service.generate([user("Give me a hard essay question")], [], options)

    prompt, _ = stub_model.calls[0]
    assert "Make it easy difficulty and format it as essay." in prompt


def test_generate_quiz_metadata(quiz_service, metrics):
    result = quiz_service.generate_quiz([user("an easy one")], [2, 99])

    assert len(result.conversation) == 2
    assert result.metadata.tokens_used is None
    assert result.metadata.processing_time_ms >= 0
    assert result.metadata.generated_at.endswith("+00:00")
    assert metrics.generation_attempts == 1
    assert metrics.generation_successes == 1
    assert metrics.skipped_notes == 1
    assert metrics.inferred_parameters[("easy", "multiple-choice")] == 1


class TestNoteService:
    def setup_method(self):
        self.service = NoteService(InMemoryNoteRepository())

    def test_create_trims_content(self):
        note = self.service.create("  remember this  ")
        assert note.content == "remember this"
        assert self.service.get(note.id) == note

    @pytest.mark.parametrize("content", [None, "", "   ", "x" * 2001])
    def test_create_rejects_invalid_content(self, content):
        with pytest.raises(InvalidNote):
            self.service.create(content)

    def test_update_and_delete(self):
        note = self.service.create("draft")

        updated = self.service.update(note.id, "final")
        assert updated.content == "final"

        self.service.delete(note.id)
        with pytest.raises(NoteNotFound):
            self.service.get(note.id)

    @pytest.mark.parametrize("note_id", [0, -3])
    def test_non_positive_ids_are_rejected(self, note_id):
        with pytest.raises(InvalidNote):
            self.service.get(note_id)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ({"difficulty": "Hard"}, ("hard", None)),
        ({"difficulty": " EASY ", "questionType": "True-False"}, ("easy", "true-false")),
        ({"difficulty": "extreme", "questionType": "riddle"}, (None, None)),
        ({"difficulty": 3, "questionType": ""}, (None, None)),
    ],
)
def test_quiz_options_normalise_known_values(raw, expected):
    options = QuizOptions.model_validate(raw)
    assert (options.difficulty, options.question_type) == expected


def test_unknown_option_values_fall_back_to_inference(quiz_service, stub_model):
    options = QuizOptions.model_validate({"difficulty": "extreme"})

    quiz_service.generate([user("Give me a hard essay question")], [], options)

    prompt, _ = stub_model.calls[0]
    assert "Make it hard difficulty and format it as essay." in prompt


def test_processing_times_are_bounded():
    registry = MetricsRegistry()
    for value in range(PROCESSING_TIME_WINDOW + 25):
        registry.record_generation_success(value)

    assert len(registry.processing_times_ms) == PROCESSING_TIME_WINDOW
    assert registry.processing_times_ms[0] == 25
    assert registry.generation_successes == PROCESSING_TIME_WINDOW + 25
