import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from note_gen.api.schemas import ErrorResponse, GenerateNoteRequest, GenerateNoteResponse, HealthResponse
from note_gen.config import Settings, get_settings
from note_gen.errors import InternalError, ValidationError
from note_gen.providers.llm.client import GenerationClient
from note_gen.service.generator import NoteService
from note_gen.workflow.generation import NoteWorkflow

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


def build_service(settings: Settings) -> NoteService:
    client = GenerationClient(settings.generation_config())
    return NoteService(NoteWorkflow(client))


def get_service(request: Request) -> NoteService:
    return request.app.state.service


def create_app(settings: Settings | None = None, service: NoteService | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="note-gen", version="0.1.0")
    app.state.service = service or build_service(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info("request.rejected path=%s reason=%s", request.url.path, exc.public_message)
        return JSONResponse(status_code=400, content=ErrorResponse(error=exc.public_message).model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _describe_request_errors(exc)
        logger.info("request.rejected path=%s reason=%s", request.url.path, message)
        return JSONResponse(status_code=400, content=ErrorResponse(error=message).model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request.failed path=%s", request.url.path)
        return JSONResponse(status_code=500, content=ErrorResponse(error=InternalError.public_message).model_dump())

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            message="Note Generation API is running",
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    @app.post(
        "/api/generate-note",
        response_model=GenerateNoteResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def generate_note(req: GenerateNoteRequest, service: NoteService = Depends(get_service)):
        payload = await service.generate(req.raw_text, req.note_kind)
        if not payload.get("success"):
            return JSONResponse(status_code=500, content=payload)
        return GenerateNoteResponse(content=payload["content"], note_kind=payload["noteKind"])

    @app.post("/api/test-generation")
    async def test_generation(service: NoteService = Depends(get_service)) -> JSONResponse:
        payload = await service.smoke_test()
        return JSONResponse(status_code=200, content=payload)

    return app


def _describe_request_errors(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}" if location else message


app = create_app()
