"""LLM client with NDJSON streaming support."""

import httpx
import json
from typing import AsyncIterator, Dict, Any, TypeVar, Type, Optional
from pydantic import BaseModel, ValidationError
import asyncio

from mailcraft.utils.logging import get_logger
from mailcraft.models.config import LLMConfig


logger = get_logger(__name__)

T = TypeVar('T', bound=BaseModel)


def _extract_content_from_openai_chunk(data: Dict[str, Any]) -> str | None:
    """
    Extract content from OpenAI-style streaming chunk.

    OpenAI returns chunks like:
    {
        "choices": [{
            "delta": {"content": "..."},
            "finish_reason": null
        }]
    }

    Args:
        data: Parsed JSON chunk from the API

    Returns:
        Content string if present, None otherwise
    """
    try:
        choices = data.get("choices") or []
        if choices:
            return choices[0].get("delta", {}).get("content")
    except (AttributeError, TypeError):
        pass
    return None


class LLMClient:
    """
    HTTP client for OpenAI-compatible chat APIs.

    The model is asked to answer in NDJSON; each complete line of its answer
    is parsed into a pydantic chunk model and yielded as soon as it arrives.
    Transient connection errors are retried until the first chunk has been
    yielded; after that they propagate.
    """

    def __init__(self, config: LLMConfig):
        """
        Initialize LLM client.

        Args:
            config: LLM configuration (endpoint, API key, model)
        """
        self.config = config
        self.timeout = httpx.Timeout(
            connect=10.0,
            read=60.0,  # Per-read timeout for streaming
            write=10.0,
            pool=10.0
        )

    @property
    def url(self) -> str:
        """Chat completions URL."""
        return str(self.config.endpoint).rstrip("/") + "/chat/completions"

    def _parse_line(
        self,
        line: str,
        chunk_model: Type[T],
        request_id: str,
    ) -> Optional[T]:
        """Parse one NDJSON line of model output, or None if it is unusable."""
        if not line.strip():
            return None
        try:
            chunk = chunk_model(**json.loads(line))
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning(
                "llm_chunk_skipped",
                request_id=request_id,
                line=line,
                error=str(e),
            )
            return None

        logger.debug(
            "llm_response_chunk",
            request_id=request_id,
            chunk_data=chunk.model_dump(),
        )
        return chunk

    async def stream_ndjson(
        self,
        prompt: str,
        system_prompt: str,
        chunk_model: Type[T],
        max_retries: int = 1,
        retry_delay: float = 2.0,
        request_id: Optional[str] = None
    ) -> AsyncIterator[T]:
        """
        Stream parsed chunks from the LLM.

        Handles both plain NDJSON bodies and SSE ("data: ...") bodies whose
        deltas must be accumulated before the NDJSON lines can be split out.

        Args:
            prompt: User prompt for the LLM
            system_prompt: System prompt for the LLM
            chunk_model: Pydantic model class to parse each JSON line
            max_retries: Number of automatic retries on transient errors (default: 1)
            retry_delay: Delay in seconds between retries (default: 2.0)
            request_id: Optional identifier for this request (for logging/tracing)

        Yields:
            Parsed chunk_model instances

        Raises:
            httpx.HTTPError: On network or HTTP errors after retries exhausted
        """
        if not request_id:
            current_task = asyncio.current_task()
            task_name = current_task.get_name() if current_task else None
            request_id = task_name or "unknown"

        payload = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt}
            ],
            "stream": True,
            "temperature": self.config.temperature,
        }

        logger.info(
            "llm_request_started",
            request_id=request_id,
            model=self.config.model,
            endpoint=str(self.config.endpoint),
            prompt_length=len(prompt),
        )
        logger.debug("llm_request_payload", request_id=request_id, payload=payload)

        attempt = 0
        while True:
            try:
                chunk_count = 0
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    headers = {"Authorization": f"Bearer {self.config.api_key}"}
                    accumulated = ""

                    async with client.stream("POST", self.url, json=payload, headers=headers) as response:
                        response.raise_for_status()

                        async for line in response.aiter_lines():
                            if not line.strip():
                                continue

                            if not line.startswith("data: "):
                                # Direct NDJSON body
                                chunk = self._parse_line(line, chunk_model, request_id)
                                if chunk is not None:
                                    chunk_count += 1
                                    yield chunk
                                continue

                            data_line = line[6:]
                            if data_line == "[DONE]":
                                continue

                            try:
                                data = json.loads(data_line)
                            except json.JSONDecodeError as e:
                                logger.error(
                                    "llm_malformed_json",
                                    request_id=request_id,
                                    line=line,
                                    error=str(e)
                                )
                                continue

                            fragment = _extract_content_from_openai_chunk(data)
                            if not fragment:
                                continue

                            accumulated += fragment
                            *complete, accumulated = accumulated.split("\n")
                            for complete_line in complete:
                                chunk = self._parse_line(complete_line, chunk_model, request_id)
                                if chunk is not None:
                                    chunk_count += 1
                                    yield chunk

                        # Last line of an SSE answer has no trailing newline
                        chunk = self._parse_line(accumulated, chunk_model, request_id)
                        if chunk is not None:
                            chunk_count += 1
                            yield chunk

                    logger.info(
                        "llm_request_completed",
                        request_id=request_id,
                        chunk_count=chunk_count
                    )
                    return

            except (httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout) as e:
                if chunk_count:
                    # A retry would replay chunks the caller already has
                    logger.error(
                        "llm_stream_interrupted",
                        request_id=request_id,
                        chunk_count=chunk_count,
                        error=str(e)
                    )
                    raise

                attempt += 1

                if attempt > max_retries:
                    logger.error(
                        "llm_request_failed",
                        request_id=request_id,
                        attempts=attempt,
                        error=str(e)
                    )
                    raise

                logger.warning(
                    "llm_request_retry",
                    request_id=request_id,
                    attempt=attempt,
                    max_retries=max_retries,
                    error=str(e),
                    retry_delay=retry_delay
                )
                await asyncio.sleep(retry_delay)

            except httpx.HTTPStatusError as e:
                # No retry on 4xx/5xx (bad request, auth, etc.)
                logger.error(
                    "llm_http_error",
                    request_id=request_id,
                    status_code=e.response.status_code,
                    error=str(e)
                )
                raise
