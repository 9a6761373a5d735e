"""Built-in personas: executor, reviewer, answerer, researcher."""

from geminicode_cli.personas.personas import (
    GROUNDING_DIRECTIVE,
    Persona,
    build_request,
    compose_task,
    get_persona,
    list_personas,
)

__all__ = [
    "GROUNDING_DIRECTIVE",
    "Persona",
    "build_request",
    "compose_task",
    "get_persona",
    "list_personas",
]
