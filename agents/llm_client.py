import logging
from typing import Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class CollaboratorError(Exception):
    """An outbound LLM/search call failed or returned something unusable."""


class ChatCompletionClient:
    """Thin wrapper over an OpenRouter-style chat-completions endpoint. One attempt per call."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("An API key is required for chat completions.")
        self.api_key = api_key
        self.url = f"{base_url.rstrip('/')}/chat/completions"
        self.timeout = timeout
        self.session = session or requests.Session()

    def complete(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
    ) -> str:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        body = {"model": model, "messages": messages, "temperature": temperature}
        if max_tokens:
            body["max_tokens"] = max_tokens
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": "http://localhost",
            "X-Title": "BuyWise Agentic Assistant",
        }

        try:
            resp = self.session.post(self.url, headers=headers, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise CollaboratorError(f"request to {model} failed: {exc}") from exc

        if not resp.ok:
            raise CollaboratorError(f"API error ({resp.status_code}) for {model}: {resp.text[:300]}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise CollaboratorError(f"non-JSON envelope from {model}") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise CollaboratorError(f"unexpected response shape from {model}") from exc
        if not isinstance(content, str):
            raise CollaboratorError(f"non-text completion from {model}: {type(content).__name__}")
        if not content:
            raise CollaboratorError(f"empty completion from {model}")
        logger.debug("Completion from %s: %d chars", model, len(content))
        return content
