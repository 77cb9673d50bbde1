"""
Ollama AI backend implementation.
"""

import asyncio
import time
from typing import Optional

import aiohttp
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from .base import AIBackend, AIResponse
from ..errors import BackendUnavailable, GenerationFailed


class GenerateResponse(BaseModel):
    """Body of a non-streaming ``/api/generate`` reply."""

    model_config = ConfigDict(extra="ignore")

    response: str = ""
    model: Optional[str] = None
    done: bool = True


class ModelInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    model: Optional[str] = None


class TagsResponse(BaseModel):
    """Body of ``/api/tags``."""

    model_config = ConfigDict(extra="ignore")

    models: list[ModelInfo] = []


class OllamaBackend(AIBackend):
    """Ollama AI backend implementation."""

    async def call_api(self, prompt: str) -> AIResponse:
        """Call the Ollama generate API once, without streaming."""
        self._log_request(prompt)

        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
        }

        start_time = time.time()
        async with aiohttp.ClientSession() as session:
            try:
                async with session.post(
                    f"{self.api_url}/api/generate",
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    status = response.status
                    body = await response.text()

            except aiohttp.ConnectionTimeoutError as e:
                logger.error(f"Ollama API connect timeout: {e}")
                raise BackendUnavailable(f"Ollama server is not reachable at {self.api_url}")
            except asyncio.TimeoutError:
                logger.error(f"Ollama API timeout after {self.timeout}s")
                raise GenerationFailed(f"Ollama did not answer within {self.timeout}s")
            except aiohttp.ClientConnectionError as e:
                logger.error(f"Ollama API connection error: {e}")
                raise BackendUnavailable(f"Ollama server is not reachable at {self.api_url}")

        result = AIResponse(
            status=status,
            body=body,
            model=self.model,
            response_time=time.time() - start_time
        )

        if result.ok:
            try:
                parsed = GenerateResponse.model_validate_json(body)
            except ValidationError as e:
                logger.error(f"Unparseable Ollama response: {e}")
                raise GenerationFailed("Ollama returned a malformed response", body=body, status=status)
            result.content = parsed.response
            result.model = parsed.model or self.model

        self._log_response(result)
        return result

    async def health_check(self) -> bool:
        """Check that something answers at the server root."""
        timeout = aiohttp.ClientTimeout(
            total=self.timeout,
            connect=self.probe_timeout,
            sock_connect=self.probe_timeout
        )
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(self.api_url, timeout=timeout) as response:
                    logger.debug(f"Ollama probe answered HTTP {response.status}")
                    return True
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"Ollama health check failed: {e}")
            return False

    async def list_models(self) -> list[str]:
        """List available Ollama models."""
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    f"{self.api_url}/api/tags",
                    timeout=aiohttp.ClientTimeout(total=10)
                ) as response:
                    response.raise_for_status()
                    body = await response.text()

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Failed to list Ollama models: {e}")
            return []

        try:
            tags = TagsResponse.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"Unparseable model list from Ollama: {e}")
            return []

        models = []
        for info in tags.models:
            for name in (info.name, info.model):
                if name and name not in models:
                    models.append(name)
        return models

    async def has_model(self, model: Optional[str] = None) -> bool:
        """Whether the model is pulled; an untagged name means ``:latest``."""
        model = model or self.model
        available = await self.list_models()
        candidates = {model}
        if ":" not in model:
            candidates.add(f"{model}:latest")
        return any(name in candidates for name in available)
