from __future__ import annotations

import json
from typing import Any, Callable
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ide_workspace_tool.domain.cancellation import CancellationToken
from ide_workspace_tool.domain.errors import TextGenerationError


class OpenAICompatibleTextGenerator:
    """`TextGeneratorPort` backed by any `/chat/completions` compatible endpoint.

    When built with a `cancellation` token, each request is refused once the
    token is cancelled and its timeout is clamped to the remaining deadline.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gpt-4o-mini",
        api_base_url: str = "https://api.openai.com/v1",
        timeout_seconds: float = 60.0,
        temperature: float = 0.2,
        cancellation: CancellationToken | None = None,
        urlopen_fn: Callable[..., Any] = urlopen,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._api_base_url = api_base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._temperature = temperature
        self._cancellation = cancellation
        self._urlopen_fn = urlopen_fn

    def generate_text(self, prompt: str) -> str:
        url = f"{self._api_base_url}/chat/completions"
        body = json.dumps(
            {
                "model": self._model,
                "temperature": self._temperature,
                "messages": [{"role": "user", "content": prompt}],
            }
        ).encode("utf-8")
        request = Request(url, data=body, headers=self._build_headers(), method="POST")
        timeout = self._timeout_seconds
        if self._cancellation is not None:
            self._cancellation.raise_if_cancelled("text generation")
            timeout = self._cancellation.bound_timeout(timeout)
        try:
            with self._urlopen_fn(request, timeout=timeout) as response:
                content = response.read()
        except HTTPError as error:
            raise TextGenerationError(
                f"Text generation request failed with HTTP {error.code} for URL: {url}"
            ) from error
        except URLError as error:
            raise TextGenerationError(f"Text generation request failed for URL: {url}: {error.reason}") from error
        except TimeoutError as error:
            raise TextGenerationError(
                f"Text generation request timed out after {timeout}s"
            ) from error

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as error:
            raise TextGenerationError(f"Invalid JSON received from text generation API for URL: {url}") from error

        return self._extract_text(parsed)

    def _build_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    @staticmethod
    def _extract_text(payload: Any) -> str:
        if not isinstance(payload, dict):
            raise TextGenerationError("Unexpected text generation payload: top-level value must be an object")
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            raise TextGenerationError("Unexpected text generation payload: 'choices' must be a non-empty list")
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        text = message.get("content") if isinstance(message, dict) else None
        if not isinstance(text, str):
            raise TextGenerationError("Unexpected text generation payload: missing message content")
        return text
