import json
import logging
from typing import Any

import httpx

from experience_x.config import Settings
from experience_x.errors import ConfigurationError, UpstreamQuotaError, UpstreamTransportOrFormatError

logger = logging.getLogger(__name__)
PAYLOAD_LOG_LIMIT = 4000
QUOTA_STATUS_CODE = 402
QUOTA_BODY_MARKER = "Insufficient Balance"

SYSTEM_PROMPT_TEMPLATE = """You are Experience.X, an immersive AI that creates vivid, sensory-rich realities.

USER QUERY: "{query}"

Create an immersive experience response with:
1. **Title** - Creative name for the experience
2. **Environment** - Rich sensory description (sight, sound, touch, emotion)
3. **Interaction** - Something the user can imagine doing
4. **Dynamic Element** - How the experience changes over time
5. **Connection** - How this relates to their query
6. **Return** - How to exit or continue the experience

Format with emojis and creative spacing. Keep it under 250 words."""


class DeepSeekClient:
    """DeepSeek chat-completion client returning the text of the first choice."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.model = settings.deepseek_model
        self.completions_url = f"{settings.deepseek_base_url}/v1/chat/completions"
        self.transport = transport

    def build_payload(self, query: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT_TEMPLATE.format(query=query)},
                {"role": "user", "content": f"Create an immersive experience about: {query}"},
            ],
            "max_tokens": self.settings.llm_max_tokens,
            "temperature": self.settings.llm_temperature,
            "top_p": 0.9,
            "frequency_penalty": 0.2,
            "presence_penalty": 0.1,
            "stream": False,
        }

    async def complete(self, query: str) -> str:
        if not self.settings.has_credential:
            raise ConfigurationError("DeepSeek API key is not configured")

        payload = self.build_payload(query)
        logger.info(
            "llm.request model=%s url=%s query=%s",
            self.model,
            self.completions_url,
            self._clip(query, 80),
        )
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.deepseek_api_key}",
        }
        try:
            async with httpx.AsyncClient(timeout=self.settings.llm_timeout_seconds, transport=self.transport) as client:
                http_response = await client.post(self.completions_url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamTransportOrFormatError(f"API request failed: {exc.__class__.__name__}: {exc}") from exc

        if not http_response.is_success:
            body = http_response.text
            logger.error(
                "llm.error model=%s status_code=%d body=%s",
                self.model,
                http_response.status_code,
                self._clip(body, PAYLOAD_LOG_LIMIT),
            )
            if http_response.status_code == QUOTA_STATUS_CODE or QUOTA_BODY_MARKER in body:
                raise UpstreamQuotaError(
                    "DeepSeek API has insufficient balance",
                    status_code=http_response.status_code,
                    body=body,
                )
            raise UpstreamTransportOrFormatError(
                f"API request failed with status {http_response.status_code}",
                status_code=http_response.status_code,
                body=body,
            )

        try:
            data = http_response.json()
        except ValueError as exc:
            raise UpstreamTransportOrFormatError(
                "API response is not valid JSON",
                status_code=http_response.status_code,
                body=http_response.text,
            ) from exc

        text = self.extract_text(data)
        if not text:
            raise UpstreamTransportOrFormatError(
                "API response did not contain any message content",
                status_code=http_response.status_code,
                body=self._to_json(data),
            )
        logger.info("llm.response model=%s chars=%d", self.model, len(text))
        logger.debug("llm.response.payload=%s", self._clip(self._to_json(data), PAYLOAD_LOG_LIMIT))
        return text

    @staticmethod
    def extract_text(data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if not isinstance(message, dict):
            return ""
        content = message.get("content")
        if not isinstance(content, str):
            return ""
        return content.strip()

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"

    @staticmethod
    def _to_json(payload: Any) -> str:
        try:
            return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError):
            return str(payload)
