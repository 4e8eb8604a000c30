import re

from note_gen.errors import ValidationError
from note_gen.prompting.templates import BOOK_NOTE_TEMPLATE, NOTE_TEMPLATES, NoteKind, NoteTemplate

DEFAULT_SUBJECT_PLACEHOLDER = BOOK_NOTE_TEMPLATE.subject_placeholder

# Tried in order; each captures everything after the keyword up to end of text.
_SUBJECT_PATTERNS = (
    re.compile(r"\bfor\s+[\"']?([^\"']+?)[\"']?\s*$", flags=re.IGNORECASE),
    re.compile(r"\babout\s+[\"']?([^\"']+?)[\"']?\s*$", flags=re.IGNORECASE),
)


def extract_subject(raw_text: str | None, placeholder: str = DEFAULT_SUBJECT_PLACEHOLDER) -> str:
    """Pull the subject out of requests like ``Create a book note for "Atomic Habits"``.

    Falls back to ``placeholder`` when neither ``for <X>`` nor ``about <X>``
    ends the text.
    """
    text = (raw_text or "").strip()
    if not text:
        return placeholder
    for pattern in _SUBJECT_PATTERNS:
        match = pattern.search(text)
        if match:
            subject = match.group(1).strip()
            if subject:
                return subject
    return placeholder


def get_template(note_kind: NoteKind | str) -> NoteTemplate:
    kind = note_kind if isinstance(note_kind, NoteKind) else NoteKind.parse(note_kind)
    template = NOTE_TEMPLATES.get(kind)
    if template is None:
        raise ValidationError(f"No template registered for note kind '{kind.value}'")
    return template


def build_prompt(subject: str, note_kind: NoteKind | str) -> str:
    return get_template(note_kind).render(subject)
