"""Persona registry and task composition."""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from geminicode_cli.errors import InvalidRequest
from geminicode_cli.invocation import GeminiModel, InvocationRequest

from .prompt import ANSWERER_PROMPT, EXECUTOR_PROMPT, RESEARCHER_PROMPT, REVIEWER_PROMPT

# gemini-cli has no search flag; grounding is requested in the task text and
# served by the tool's built-in web search.
GROUNDING_DIRECTIVE = (
    "Use Google Search to ground your answer in current web results "
    "and cite the sources you relied on."
)

_BACKTICK_RUN = re.compile(r"`+")


@dataclass(frozen=True)
class Persona:
    """An instruction document plus the invocation defaults that go with it.

    Attributes:
        name: Identifier used on the command line
        description: One-line summary shown in listings
        system_prompt: The persona document prepended to every task
        default_model: Model used when no override is given
        ground_with_search: Whether requests are grounded with web search by default
        wants_diff: Whether the harness should attach a version-control diff
    """

    name: str
    description: str
    system_prompt: str
    default_model: GeminiModel | None = None
    ground_with_search: bool = False
    wants_diff: bool = False


_PERSONAS: dict[str, Persona] = {
    persona.name: persona
    for persona in (
        Persona(
            name="executor",
            description="Implements code changes in the repository and verifies them.",
            system_prompt=EXECUTOR_PROMPT,
            default_model=GeminiModel.PRO,
        ),
        Persona(
            name="reviewer",
            description="Reviews a change (usually a git diff) and reports findings by severity.",
            system_prompt=REVIEWER_PROMPT,
            default_model=GeminiModel.PRO,
            wants_diff=True,
        ),
        Persona(
            name="answerer",
            description="Answers questions about the codebase using the attached files.",
            system_prompt=ANSWERER_PROMPT,
            default_model=GeminiModel.FLASH,
        ),
        Persona(
            name="researcher",
            description="Researches a topic on the web and reports sourced findings.",
            system_prompt=RESEARCHER_PROMPT,
            default_model=GeminiModel.PRO,
            ground_with_search=True,
        ),
    )
}


def list_personas() -> list[Persona]:
    """Return all personas in declaration order."""
    return list(_PERSONAS.values())


def get_persona(name: str) -> Persona:
    """Look up a persona by name.

    Raises:
        InvalidRequest: If no persona has that name
    """
    persona = _PERSONAS.get(name.strip().lower()) if name else None
    if persona is None:
        known = ", ".join(_PERSONAS)
        raise InvalidRequest(f"Unknown persona {name!r}. Available personas: {known}")
    return persona


def _fence_for(text: str) -> str:
    """Backtick fence one longer than the longest run inside text (min 3)."""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)
    return "`" * max(3, longest + 1)


def compose_task(
    persona: Persona,
    task: str,
    *,
    context: str | None = None,
    ground_with_search: bool = False,
) -> str:
    """Combine a persona document with the user's task.

    Args:
        persona: Persona whose document leads the prompt
        task: The user's task description
        context: Optional extra material, e.g. a diff for the reviewer
        ground_with_search: Add a ``## Grounding`` section asking for web search

    Returns:
        The full task description passed to the AI CLI

    Raises:
        InvalidRequest: If the task is empty
    """
    if not task or not task.strip():
        raise InvalidRequest("Task description must not be empty")

    sections = [persona.system_prompt.strip()]
    if ground_with_search:
        sections.extend(["## Grounding", GROUNDING_DIRECTIVE])
    sections.extend(["## Task", task.strip()])
    if context and context.strip():
        body = context.rstrip()
        fence = _fence_for(body)
        lang = "diff" if persona.wants_diff else ""
        sections.extend(["## Context", f"{fence}{lang}\n{body}\n{fence}"])
    return "\n\n".join(sections)


def build_request(
    persona: Persona,
    task: str,
    *,
    model: GeminiModel | str | None = None,
    include_files: Sequence[str] = (),
    include_directories: Sequence[str] = (),
    ground_with_search: bool | None = None,
    context: str | None = None,
) -> InvocationRequest:
    """Build an InvocationRequest for a persona.

    Explicit arguments take precedence over the persona's defaults.
    """
    resolved_model = GeminiModel.parse(model) or persona.default_model
    grounded = persona.ground_with_search if ground_with_search is None else ground_with_search
    return InvocationRequest(
        task_description=compose_task(
            persona, task, context=context, ground_with_search=grounded
        ),
        model=resolved_model,
        include_files=tuple(include_files),
        include_directories=tuple(include_directories),
        ground_with_search=grounded,
    )
