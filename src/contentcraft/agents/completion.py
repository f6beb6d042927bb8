"""Text-completion boundary — template in, schema-validated object out."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import TYPE_CHECKING, TypeVar

from agent_framework import Agent
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from contentcraft.agents.prompts import load_prompt
from contentcraft.errors import CompletionTimeoutError, GenerationError

if TYPE_CHECKING:
    from agent_framework.azure import AzureOpenAIChatClient

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)

DEFAULT_TIMEOUT_SECONDS = 60.0


def build_instructions(template: str, output_model: type[BaseModel]) -> str:
    """Combine the step's prompt with the JSON schema its reply must follow."""
    schema = json.dumps(output_model.model_json_schema(), indent=2)
    return (
        f"{load_prompt(template)}\n\n"
        "## Output format\n\n"
        "Reply with a single JSON object that validates against this JSON Schema. "
        "Do not add commentary before or after it.\n\n"
        f"```json\n{schema}\n```\n"
    )


def extract_json(text: str) -> str:
    """Return the outermost JSON object in ``text``, dropping code fences or chatter."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start : end + 1]


class CompletionService:
    """Run a prompt template against the chat model and validate the reply.

    Every failure surfaces as ``GenerationError`` or ``CompletionTimeoutError``
    with a short reason; the underlying error is logged, never returned.
    """

    def __init__(
        self,
        client: AzureOpenAIChatClient,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self._timeout = timeout

    async def complete(
        self,
        template: str,
        inputs: BaseModel,
        output_model: type[OutputT],
    ) -> OutputT:
        agent = Agent(
            self._client,
            instructions=build_instructions(template, output_model),
            name=template,
        )
        started_at = time.monotonic()
        try:
            response = await asyncio.wait_for(
                agent.run(inputs.model_dump_json(indent=2, exclude_none=True)),
                timeout=self._timeout,
            )
        except TimeoutError as exc:
            logger.warning(
                "Completion timed out — template=%s timeout_s=%.0f", template, self._timeout
            )
            raise CompletionTimeoutError(f"The {template} step timed out") from exc
        except Exception as exc:
            logger.exception("Completion failed — template=%s", template)
            raise GenerationError(f"The {template} step failed") from exc

        text = getattr(response, "text", None) or ""
        try:
            result = output_model.model_validate_json(extract_json(text))
        except SchemaValidationError as exc:
            logger.warning(
                "Completion output rejected — template=%s errors=%d",
                template,
                exc.error_count(),
            )
            raise GenerationError(f"The {template} step returned malformed output") from exc

        logger.info(
            "Completion finished — template=%s duration_ms=%.0f",
            template,
            (time.monotonic() - started_at) * 1000,
        )
        return result
