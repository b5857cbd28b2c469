"""Tests for OpenAIClient error mapping and key validation."""

import json

import httpx
import pytest

from simulator.errors import (
	CredentialError,
	GenerationError,
	InvalidRequestError,
	RateLimitError,
	ServiceError,
)
from simulator.openai_client import OpenAIClient, is_valid_api_key_format


class TestApiKeyFormat:
	"""Tests for is_valid_api_key_format()."""

	@pytest.mark.parametrize("key", [
		"sk-abcdefghijklmnopqrstuvwxyz",
		"sk-proj-ABCDEFGHIJ_0123456789",
		"  sk-abcdefghijklmnopqrst0123  ",
	])
	def test_valid(self, key):
		assert is_valid_api_key_format(key)

	@pytest.mark.parametrize("key", [None, "", "sk-", "sk-tooshort", "pk-abcdefghijklmnopqrstuvwxyz", "sk-abc def ghi jkl mno pqr stu"])
	def test_invalid(self, key):
		assert not is_valid_api_key_format(key)

	def test_client_rejects_malformed_key(self):
		with pytest.raises(CredentialError):
			OpenAIClient("sk-short")


class TestChat:
	"""Tests for OpenAIClient.chat()."""

	@pytest.mark.asyncio
	async def test_success_strips_content(self, api_key, make_transport):
		calls = []
		client = OpenAIClient(api_key, transport=make_transport("  hello there \n", calls=calls))
		try:
			result = await client.chat([{"role": "user", "content": "hi"}], max_tokens=42, temperature=0.2)
		finally:
			await client.aclose()
		assert result == "hello there"
		request = calls[0]
		assert request.headers["Authorization"] == f"Bearer {api_key}"
		payload = json.loads(request.content)
		assert payload["max_tokens"] == 42
		assert payload["temperature"] == 0.2
		assert payload["model"] == "gpt-3.5-turbo"

	@pytest.mark.asyncio
	@pytest.mark.parametrize("status, error, message", [
		(401, CredentialError, "Invalid API key. Please check your OpenAI API key."),
		(429, RateLimitError, "Rate limit exceeded. Please try again later."),
		(400, InvalidRequestError, "Invalid request. Please check your input."),
		(503, ServiceError, "OpenAI API error: overloaded"),
	])
	async def test_status_mapping(self, api_key, make_transport, status, error, message):
		transport = make_transport(status_code=status, json_body={"error": {"message": "overloaded"}})
		client = OpenAIClient(api_key, transport=transport)
		try:
			with pytest.raises(error) as exc_info:
				await client.chat([{"role": "user", "content": "hi"}])
		finally:
			await client.aclose()
		assert str(exc_info.value) == message
		assert isinstance(exc_info.value, GenerationError)

	@pytest.mark.asyncio
	async def test_unknown_error_body(self, api_key, make_transport):
		client = OpenAIClient(api_key, transport=make_transport(status_code=500, json_body={}))
		try:
			with pytest.raises(ServiceError, match="Unknown error"):
				await client.chat([{"role": "user", "content": "hi"}])
		finally:
			await client.aclose()

	@pytest.mark.asyncio
	async def test_network_failure(self, api_key, make_transport):
		client = OpenAIClient(api_key, transport=make_transport(exc=httpx.ConnectError("boom")))
		try:
			with pytest.raises(ServiceError, match="Failed to connect to OpenAI API"):
				await client.chat([{"role": "user", "content": "hi"}])
		finally:
			await client.aclose()

	@pytest.mark.asyncio
	async def test_missing_content(self, api_key, make_transport):
		body = {"choices": [{"message": {"role": "assistant", "content": None}}]}
		client = OpenAIClient(api_key, transport=make_transport(json_body=body))
		try:
			with pytest.raises(ServiceError, match="Invalid response from OpenAI API"):
				await client.chat([{"role": "user", "content": "hi"}])
		finally:
			await client.aclose()
