"""
Commit message generation: one primary attempt and at most one fallback.
"""

from loguru import logger

from .ai_backends.base import AIBackend, AIResponse
from .errors import GenerationFailed
from .git_ops.changes import ChangeFragment
from .utils.message_extractor import MessageExtractor
from .utils.prompts import PromptBuilder


class MessageGenerator:
    """Ask the backend for a commit message and clean up the answer.

    The fallback prompt is sent only when the primary answer cleans up to
    nothing, so a run never issues more than two requests.
    """

    def __init__(self, backend: AIBackend, prompt_builder: PromptBuilder, extractor: MessageExtractor):
        self.backend = backend
        self.prompt_builder = prompt_builder
        self.extractor = extractor

    async def generate(self, fragment: ChangeFragment) -> str:
        """Return a non-empty commit message or raise GenerationFailed."""
        prompt = self.prompt_builder.build_primary_prompt(fragment)
        message, response = await self._attempt(prompt, "primary")
        if message:
            return message

        logger.info("Primary prompt produced no usable message, trying the fallback prompt")
        prompt = self.prompt_builder.build_fallback_prompt(fragment)
        message, response = await self._attempt(prompt, "fallback")
        if message:
            return message

        raise GenerationFailed(
            "Failed to get commit message from model",
            body=response.body,
            status=response.status
        )

    async def _attempt(self, prompt: str, label: str) -> tuple[str, AIResponse]:
        response = await self.backend.call_api(prompt)
        if not response.ok:
            raise GenerationFailed(
                f"Ollama returned HTTP {response.status} on the {label} request",
                body=response.body,
                status=response.status
            )

        message = self.extractor.extract_commit_message(response.content)
        logger.debug(f"{label.capitalize()} attempt yielded: '{message}'")
        return message, response
