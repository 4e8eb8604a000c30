from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class GenerateNoteRequest(BaseModel):
    raw_text: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("rawText", "content"),
        description="Free-text request, e.g. 'Create a book note for Atomic Habits'.",
    )
    note_kind: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("noteKind", "noteType"),
        description="Template selector; only 'book' is available.",
    )


class GenerateNoteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    content: str
    note_kind: str = Field(..., alias="noteKind")


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: str
