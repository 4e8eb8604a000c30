class NoteGenerationError(Exception):
    """Base error; ``public_message`` is safe to return to callers."""

    public_message = "Note generation failed"

    def __init__(self, detail: str = "", public_message: str | None = None) -> None:
        super().__init__(detail or public_message or self.public_message)
        if public_message is not None:
            self.public_message = public_message


class ValidationError(NoteGenerationError):
    """Unsupported note kind or empty input, rejected before generation."""

    public_message = "Invalid note request"

    def __init__(self, message: str) -> None:
        super().__init__(message, public_message=message)


class UpstreamTransportError(NoteGenerationError):
    public_message = "Upstream generation request failed"


class UpstreamResponseShapeError(NoteGenerationError):
    public_message = "Upstream response did not contain generated text"


class InternalError(NoteGenerationError):
    public_message = "Note generation failed due to an internal error"
