import logging
from dataclasses import dataclass
from typing import Any, TypedDict

from note_gen.prompting.builder import build_prompt, extract_subject, get_template
from note_gen.prompting.templates import NoteKind
from note_gen.providers.llm.client import GenerationClient, GenerationResult
from note_gen.text import clip_text

logger = logging.getLogger(__name__)
PROMPT_LOG_LIMIT = 200


@dataclass(frozen=True)
class NoteOutput:
    note_kind: NoteKind
    subject: str
    prompt: str
    result: GenerationResult


class NoteState(TypedDict):
    raw_text: str
    note_kind: NoteKind
    subject: str
    prompt: str
    result: Any


class NoteWorkflow:
    """Note generation implemented as a LangGraph chain.

    extract_subject -> build_prompt -> generate, each node consuming the
    previous node's output.
    """

    def __init__(self, client: GenerationClient) -> None:
        self.client = client
        self._graph: Any | None = None

    async def run(self, raw_text: str, note_kind: NoteKind) -> NoteOutput:
        final_state = await self._get_graph().ainvoke(
            {
                "raw_text": raw_text,
                "note_kind": note_kind,
                "subject": "",
                "prompt": "",
                "result": None,
            }
        )
        return NoteOutput(
            note_kind=note_kind,
            subject=final_state["subject"],
            prompt=final_state["prompt"],
            result=final_state["result"],
        )

    def _get_graph(self):
        if self._graph is None:
            from langgraph.graph import END, START, StateGraph

            graph = StateGraph(NoteState)
            graph.add_node("extract_subject_step", self._extract_subject_node)
            graph.add_node("build_prompt_step", self._build_prompt_node)
            graph.add_node("generate_step", self._generate_node)
            graph.add_edge(START, "extract_subject_step")
            graph.add_edge("extract_subject_step", "build_prompt_step")
            graph.add_edge("build_prompt_step", "generate_step")
            graph.add_edge("generate_step", END)
            self._graph = graph.compile()
        return self._graph

    async def _extract_subject_node(self, state: NoteState) -> dict[str, str]:
        template = get_template(state["note_kind"])
        subject = extract_subject(state["raw_text"], placeholder=template.subject_placeholder)
        logger.info(
            "note.subject kind=%s subject=%s placeholder=%s",
            template.kind.value,
            clip_text(subject, 80),
            subject == template.subject_placeholder,
        )
        return {"subject": subject}

    async def _build_prompt_node(self, state: NoteState) -> dict[str, str]:
        prompt = build_prompt(state["subject"], state["note_kind"])
        logger.info("note.prompt chars=%d head=%s", len(prompt), clip_text(prompt, PROMPT_LOG_LIMIT))
        return {"prompt": prompt}

    async def _generate_node(self, state: NoteState) -> dict[str, Any]:
        result = await self.client.generate(state["prompt"])
        logger.info("note.generate ok=%s", result.ok)
        return {"result": result}
