"""FastAPI application wiring for the NoteQuiz backend."""

from __future__ import annotations

import logging
from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from .config import QuizSettings, configure_logging
from .errors import NoteQuizError
from .llm import ModelInvoker, OpenAICompletionModel
from .models import (
    CreateNoteRequest,
    Note,
    QuizRequest,
    QuizResponse,
    QuizResponseData,
    UpdateNoteRequest,
)
from .services import NoteService, QuizService
from .storage import InMemoryNoteRepository, SqliteNoteRepository


logger = logging.getLogger(__name__)

app = FastAPI(title="NoteQuiz", version="0.1.0")


def get_note_service() -> NoteService:
    return app.state.note_service


def get_quiz_service() -> QuizService:
    return app.state.quiz_service


@app.on_event("startup")
def startup() -> None:
    settings = QuizSettings.from_env()
    configure_logging(settings.log_level)

    if settings.db_path:
        repository = SqliteNoteRepository(settings.db_path)
    else:
        repository = InMemoryNoteRepository()
    model = OpenAICompletionModel(settings.openai_api_key, model=settings.model)
    logger.info("Quiz service using model %s", settings.model)

    app.state.settings = settings
    app.state.repository = repository
    app.state.note_service = NoteService(repository)
    app.state.quiz_service = QuizService(
        repository, ModelInvoker(model, temperature=settings.temperature)
    )


@app.exception_handler(NoteQuizError)
async def handle_note_quiz_error(request: Request, exc: NoteQuizError) -> JSONResponse:
    if request.url.path.endswith("/generate-quiz") and exc.status_code >= 500:
        message = f"Failed to generate quiz: {exc}"
        status_code = 500
    else:
        message = exc.message
        status_code = exc.status_code
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "code": exc.error_code},
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"Invalid JSON payload: {location}: {first.get('msg')}" if location else "Invalid JSON payload"
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": message, "code": "INVALID_REQUEST"},
    )


@app.post("/notes/generate-quiz", response_model=QuizResponse)
def generate_quiz(
    request: QuizRequest, service: QuizService = Depends(get_quiz_service)
) -> QuizResponse:
    result = service.generate_quiz(request.conversation, request.note_ids, request.options)
    return QuizResponse(
        data=QuizResponseData(conversation=result.conversation),
        metadata=result.metadata,
    )


@app.post("/notes", response_model=Note, status_code=201)
def create_note(request: CreateNoteRequest, service: NoteService = Depends(get_note_service)) -> Note:
    return service.create(request.content)


@app.get("/notes", response_model=List[Note])
def list_notes(service: NoteService = Depends(get_note_service)) -> List[Note]:
    return service.list_all()


@app.get("/notes/{note_id}", response_model=Note)
def get_note(note_id: int, service: NoteService = Depends(get_note_service)) -> Note:
    return service.get(note_id)


@app.put("/notes/{note_id}", response_model=Note)
def update_note(
    note_id: int, request: UpdateNoteRequest, service: NoteService = Depends(get_note_service)
) -> Note:
    return service.update(note_id, request.content)


@app.delete("/notes/{note_id}", status_code=204)
def delete_note(note_id: int, service: NoteService = Depends(get_note_service)) -> Response:
    service.delete(note_id)
    return Response(status_code=204)


__all__ = ["app"]
