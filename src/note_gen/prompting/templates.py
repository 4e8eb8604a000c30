from dataclasses import dataclass
from enum import Enum

from note_gen.errors import ValidationError


class NoteKind(str, Enum):
    BOOK = "book"

    @classmethod
    def parse(cls, value: str | None) -> "NoteKind":
        normalized = (value or "").strip().lower()
        if not normalized:
            raise ValidationError("noteKind is required")
        try:
            return cls(normalized)
        except ValueError:
            supported = ", ".join(kind.value for kind in cls)
            raise ValidationError(
                f"Unsupported note kind '{normalized}'. Supported kinds: {supported}"
            ) from None


@dataclass(frozen=True)
class NoteTemplate:
    """Fixed prompt skeleton for one note kind.

    ``skeleton`` holds a single ``{subject}`` field; everything else is emitted
    verbatim because generated notes are parsed against this structure.
    ``indent`` prefixes every line after the first, blank lines included.
    """

    kind: NoteKind
    subject_placeholder: str
    skeleton: str
    indent: str = ""

    def render(self, subject: str) -> str:
        head, newline, body = self.skeleton.partition("\n")
        if self.indent:
            body = "".join(self.indent + line for line in body.splitlines(keepends=True))
        return (head + newline + body).format(subject=subject)


BOOK_NOTE_SKELETON = """You are generating a structured book note for an Obsidian vault.

Book title: "{subject}"

Generate a book note using this EXACT markdown structure:

*[One-line description of the book's main focus]*

#reading #[domain-tag]

From: [[]]

Author: [Author Name]  
Category: [Book Category]  
Rating: ⭐⭐⭐⭐⭐

## Key Quotes

> ""

> ""

> ""

## Scratchpad

[Initial reactions, questions, disagreements]

*[What's worth applying? What seems questionable? How does this connect to existing knowledge?]*

---

## Core Insights

Main Argument:
- [[]]

Supporting Evidence:
- [[]]

Practical Applications:
- [[]]

---

## Connections

**Reinforces:**
- [[]]

**Challenges:**
- [[]]

**Builds on:**
- [[]]

---

Links to explore: [[Topic-Relevant Link 1]], [[Topic-Relevant Link 2]], [[Topic-Relevant Link 3]]

IMPORTANT INSTRUCTIONS:
- Fill in the description based on the book's main focus
- Research and fill in the correct author name
- Choose an appropriate category (e.g., Self-Help, Business, History, etc.)
- Leave rating at 5 stars as a placeholder
- Leave quote sections empty (user will fill these in as they read)
- Provide thoughtful suggestions for "Links to explore" based on the book's topic
- Use [[Double Brackets]] for all internal links
- Keep the exact structure and formatting shown above"""

BOOK_NOTE_TEMPLATE = NoteTemplate(
    kind=NoteKind.BOOK,
    subject_placeholder="[Book Title]",
    skeleton=BOOK_NOTE_SKELETON,
    indent="  ",
)

NOTE_TEMPLATES: dict[NoteKind, NoteTemplate] = {
    NoteKind.BOOK: BOOK_NOTE_TEMPLATE,
}
