from __future__ import annotations
import logging
import re
import httpx
from typing import Any, Dict, List, Optional
from .errors import CredentialError, InvalidRequestError, RateLimitError, ServiceError
from .settings import settings

logger = logging.getLogger(__name__)

_API_KEY_RE = re.compile(r"^sk-[a-zA-Z0-9_-]{20,}$")


def is_valid_api_key_format(api_key: Optional[str]) -> bool:
	# "sk-" followed by at least 20 alphanumeric/hyphen/underscore characters
	if not api_key:
		return False
	return bool(_API_KEY_RE.match(api_key.strip()))


def _error_detail(r: httpx.Response) -> str:
	try:
		return str(r.json()["error"]["message"])
	except Exception:
		return "Unknown error"


class OpenAIClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		key = (api_key or settings.openai_api_key or "").strip()
		if not is_valid_api_key_format(key):
			raise CredentialError(
				'Invalid API key format. OpenAI API keys should start with "sk-" followed by alphanumeric characters.'
			)
		self.api_key = key
		self.model = model or settings.openai_model
		self.base_url = base_url or settings.openai_base_url
		self._client = httpx.AsyncClient(timeout=settings.openai_timeout_seconds, transport=transport)

	async def chat(
		self,
		messages: List[Dict[str, str]],
		*,
		max_tokens: int = 150,
		temperature: Optional[float] = None,
	) -> str:
		payload: Dict[str, Any] = {
			"model": self.model,
			"messages": messages,
			"max_tokens": max_tokens,
			"temperature": settings.openai_temperature if temperature is None else temperature,
		}
		headers = {
			"Authorization": f"Bearer {self.api_key}",
			"Content-Type": "application/json",
		}
		try:
			r = await self._client.post(self.base_url, headers=headers, json=payload)
		except httpx.RequestError as net_err:
			raise ServiceError("Failed to connect to OpenAI API") from net_err
		if r.status_code == 401:
			raise CredentialError("Invalid API key. Please check your OpenAI API key.")
		if r.status_code == 429:
			raise RateLimitError("Rate limit exceeded. Please try again later.")
		if r.status_code == 400:
			raise InvalidRequestError("Invalid request. Please check your input.")
		if r.status_code >= 300:
			raise ServiceError(f"OpenAI API error: {_error_detail(r)}")
		try:
			data = r.json()
			content = data["choices"][0]["message"]["content"]
		except Exception:
			raise ServiceError("Invalid response from OpenAI API")
		if not isinstance(content, str):
			raise ServiceError("Invalid response from OpenAI API")
		logger.debug("OpenAI call ok: model=%s chars=%d", self.model, len(content))
		return content.strip()

	async def aclose(self) -> None:
		await self._client.aclose()
