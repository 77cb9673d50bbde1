"""
Abstract base class for AI backends.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from loguru import logger


@dataclass
class AIResponse:
    """Outcome of one generation request."""

    status: int
    body: str
    content: str = ""
    model: Optional[str] = None
    response_time: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.status == 200


class AIBackend(ABC):
    """Abstract base class for AI backends."""

    def __init__(self, api_url: str, model: str, timeout: int = 120, probe_timeout: float = 1.0):
        """Initialize the AI backend."""
        self.api_url = api_url.rstrip('/')
        self.model = model
        self.timeout = timeout
        self.probe_timeout = probe_timeout
        self.backend_type = self.__class__.__name__.lower().replace('backend', '')

    @abstractmethod
    async def call_api(self, prompt: str) -> AIResponse:
        """Send a prompt; raise BackendUnavailable if the server cannot be reached."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the server answers at all."""
        pass

    @abstractmethod
    async def list_models(self) -> list[str]:
        """List available models from the backend."""
        pass

    async def has_model(self, model: Optional[str] = None) -> bool:
        """Whether the configured (or given) model is available."""
        model = model or self.model
        return model in await self.list_models()

    def _log_request(self, prompt: str) -> None:
        """Log the API request details."""
        logger.debug(f"AI API request to {self.backend_type}")
        logger.debug(f"URL: {self.api_url}")
        logger.debug(f"Model: {self.model}")
        logger.debug(f"Prompt length: {len(prompt)} characters")
        logger.debug(f"Timeout: {self.timeout}s")

    def _log_response(self, response: AIResponse) -> None:
        """Log the API response details."""
        logger.debug(f"AI API response from {self.backend_type}: HTTP {response.status}")
        logger.debug(f"Response length: {len(response.content)} characters")
        if response.response_time:
            logger.debug(f"Response time: {response.response_time:.2f}s")
