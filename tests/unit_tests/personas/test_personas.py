"""Tests for the built-in personas."""

import pytest

from geminicode_cli.errors import InvalidRequest
from geminicode_cli.invocation import GeminiModel, build_command
from geminicode_cli.personas import (
    GROUNDING_DIRECTIVE,
    build_request,
    compose_task,
    get_persona,
    list_personas,
)


class TestRegistry:
    """Tests for persona lookup."""

    def test_four_personas_in_order(self) -> None:
        assert [p.name for p in list_personas()] == ["executor", "reviewer", "answerer", "researcher"]

    def test_lookup_is_case_insensitive(self) -> None:
        assert get_persona("Reviewer").name == "reviewer"

    def test_unknown_persona(self) -> None:
        with pytest.raises(InvalidRequest, match="Available personas"):
            get_persona("poet")

    def test_defaults(self) -> None:
        assert get_persona("reviewer").wants_diff is True
        assert get_persona("researcher").ground_with_search is True
        assert get_persona("answerer").default_model is GeminiModel.FLASH
        assert get_persona("executor").ground_with_search is False

    def test_reviewer_document_has_severity_taxonomy(self) -> None:
        prompt = get_persona("reviewer").system_prompt
        for severity in ("Critical", "High", "Medium", "Low"):
            assert f"**{severity}**" in prompt


class TestComposeTask:
    """Tests for compose_task."""

    def test_task_section(self) -> None:
        persona = get_persona("executor")
        text = compose_task(persona, "  Add input validation  ")
        assert text.startswith(persona.system_prompt.strip())
        assert text.endswith("## Task\n\nAdd input validation")

    def test_diff_context_is_fenced(self) -> None:
        text = compose_task(get_persona("reviewer"), "Review", context="+added line\n")
        assert text.endswith("## Context\n\n```diff\n+added line\n```")

    def test_context_with_backtick_fence_gets_longer_fence(self) -> None:
        diff = "+```python\n+print(1)\n+```"
        text = compose_task(get_persona("reviewer"), "Review", context=diff)
        assert text.endswith(f"## Context\n\n````diff\n{diff}\n````")

    def test_grounding_section(self) -> None:
        text = compose_task(get_persona("answerer"), "Latest release?", ground_with_search=True)
        assert f"## Grounding\n\n{GROUNDING_DIRECTIVE}\n\n## Task" in text
        assert "## Grounding" not in compose_task(get_persona("answerer"), "Latest release?")

    def test_blank_context_ignored(self) -> None:
        text = compose_task(get_persona("answerer"), "Why?", context="   ")
        assert "## Context" not in text

    def test_empty_task(self) -> None:
        with pytest.raises(InvalidRequest):
            compose_task(get_persona("answerer"), " ")


class TestBuildRequest:
    """Tests for build_request."""

    def test_persona_defaults_apply(self) -> None:
        request = build_request(get_persona("researcher"), "Latest pytest release")
        assert request.model is GeminiModel.PRO
        assert request.ground_with_search is True

    def test_explicit_arguments_win(self) -> None:
        request = build_request(
            get_persona("researcher"),
            "Latest pytest release",
            model="gemini-2.5-flash",
            ground_with_search=False,
        )
        assert request.model is GeminiModel.FLASH
        assert request.ground_with_search is False

    def test_attachments(self) -> None:
        request = build_request(
            get_persona("answerer"),
            "Where is auth handled?",
            include_files=["src/auth.py"],
            include_directories=["src/api"],
        )
        command = build_command(request)
        assert command.startswith(
            "gemini-cli --model gemini-2.5-flash --include-files src/auth.py "
            '--include-directories src/api -p "'
        )
        assert command.endswith('Where is auth handled?"')

    def test_reviewer_command_escapes_backticks(self) -> None:
        request = build_request(get_persona("reviewer"), "Review this", context="-old\n+new")
        command = build_command(request)
        assert "\\`\\`\\`diff" in command
        assert "```" not in command

    def test_grounding_goes_into_task_text(self) -> None:
        request = build_request(get_persona("researcher"), "Latest pytest release")
        assert GROUNDING_DIRECTIVE in request.task_description
        command = build_command(request)
        assert command.endswith('## Task\n\nLatest pytest release"')

    def test_grounding_disabled_leaves_no_directive(self) -> None:
        request = build_request(
            get_persona("researcher"), "Latest pytest release", ground_with_search=False
        )
        assert GROUNDING_DIRECTIVE not in request.task_description
