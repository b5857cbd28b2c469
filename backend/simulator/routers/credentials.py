from typing import Optional

from fastapi import APIRouter, Header
from pydantic import BaseModel

from ..openai_client import is_valid_api_key_format
from ..settings import settings

router = APIRouter(prefix="/credentials", tags=["credentials"])

INVALID_KEY_MESSAGE = 'Invalid API key format. OpenAI API keys should start with "sk-" followed by alphanumeric characters.'


class ValidateRequest(BaseModel):
	api_key: str


def resolve_api_key(x_openai_key: Optional[str] = Header(default=None)) -> Optional[str]:
	# A per-request key wins over the server-side one
	key = (x_openai_key or "").strip()
	if key:
		return key
	return settings.openai_api_key


def credential_warning(api_key: Optional[str]) -> Optional[str]:
	if api_key and not is_valid_api_key_format(api_key):
		return INVALID_KEY_MESSAGE
	return None


@router.post("/validate")
def validate(req: ValidateRequest):
	valid = is_valid_api_key_format(req.api_key)
	return {"valid": valid, "error": None if valid else INVALID_KEY_MESSAGE}
