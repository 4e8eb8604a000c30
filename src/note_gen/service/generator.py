import logging

from note_gen.errors import InternalError, ValidationError
from note_gen.prompting.templates import NOTE_TEMPLATES, NoteKind
from note_gen.providers.llm.client import GenerationFailure, GenerationSuccess
from note_gen.workflow.generation import NoteWorkflow

logger = logging.getLogger(__name__)
SMOKE_TEST_PROMPT = "Write a haiku about backend development"


class NoteService:
    def __init__(self, workflow: NoteWorkflow) -> None:
        self.workflow = workflow

    @staticmethod
    def supports(note_kind: str | None) -> bool:
        try:
            return NoteKind.parse(note_kind) in NOTE_TEMPLATES
        except ValidationError:
            return False

    async def generate(self, raw_text: str, note_kind: str) -> dict:
        """Validate the request, run the workflow and return the response payload.

        Raises ``ValidationError`` before any generation work starts; every other
        failure comes back as ``{"success": False, "error": ...}``.
        """
        if not (raw_text or "").strip():
            raise ValidationError("rawText must not be empty")
        if not self.supports(note_kind):
            label = (note_kind or "").strip().lower()
            raise ValidationError(f"Unsupported note kind '{label}'" if label else "noteKind is required")
        kind = NoteKind.parse(note_kind)

        try:
            output = await self.workflow.run(raw_text, kind)
        except Exception:
            logger.exception("generate.failed kind=%s", kind.value)
            return GenerationFailure(InternalError.public_message).as_payload()

        if isinstance(output.result, GenerationSuccess):
            logger.info(
                "generate.done kind=%s subject=%s chars=%d",
                kind.value,
                output.subject,
                len(output.result.content),
            )
            return {**output.result.as_payload(), "noteKind": kind.value}
        if isinstance(output.result, GenerationFailure):
            logger.info("generate.failed kind=%s subject=%s error=%s", kind.value, output.subject, output.result.message)
            return output.result.as_payload()
        logger.error("generate.failed kind=%s missing result", kind.value)
        return GenerationFailure(InternalError.public_message).as_payload()

    async def smoke_test(self) -> dict:
        result = await self.workflow.client.generate(SMOKE_TEST_PROMPT)
        logger.info("smoke_test ok=%s", result.ok)
        return result.as_payload()
