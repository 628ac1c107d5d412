import logging
from typing import Any, Dict, Protocol

from openai import AsyncOpenAI

from content_forge.llm.prompts import build_instruction
from content_forge.models import Failure, GenerationOutcome, GenerationRequest, Success

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while generating content."


def describe_error(message: str) -> str:
    return (
        f"An error occurred while generating content: {message}. "
        "This could be due to an invalid API key or network issues."
    )


def _error_message(exc: Exception) -> str:
    # openai.APIError keeps the provider's text in .message; plain
    # exceptions carry it in their args.
    message = getattr(exc, "message", None)
    if not isinstance(message, str) or not message.strip():
        message = str(exc)
    return message.strip()


class TextGenerator(Protocol):
    async def generate(self, request: GenerationRequest) -> GenerationOutcome: ...


class GenerationClient:
    """Turns a GenerationRequest into exactly one provider call.

    Provider failures never escape ``generate``; they come back as a
    ``Failure`` with a readable message. A missing API key does not stop
    construction; without one the SDK client is only built on the first
    call, so the missing credential comes back as a ``Failure`` too.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        base_url: str | None = DEFAULT_BASE_URL,
    ) -> None:
        self.model = model
        self.api_key = api_key
        self.base_url = base_url
        self.client: AsyncOpenAI | None = self._build_client() if api_key else None

    def _build_client(self) -> AsyncOpenAI:
        # An empty key keeps the SDK from falling back to OPENAI_API_KEY.
        kwargs: Dict[str, Any] = {"api_key": self.api_key or ""}
        if self.base_url:
            kwargs["base_url"] = self.base_url
        return AsyncOpenAI(**kwargs)

    async def generate(self, request: GenerationRequest) -> GenerationOutcome:
        instruction = build_instruction(request)
        try:
            if self.client is None:
                self.client = self._build_client()
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": instruction}],
            )
            text = response.choices[0].message.content if response.choices else None
            if text is None:
                raise ValueError("The provider returned an empty response")
        except Exception as exc:  # noqa: BLE001
            logger.error("Error generating content: %s", exc, exc_info=True)
            message = _error_message(exc)
            if not message:
                return Failure(message=UNKNOWN_ERROR_MESSAGE)
            return Failure(message=describe_error(message))

        logger.info(
            "Generated %s (%d chars) with %s",
            request.content_type.value,
            len(text),
            self.model,
        )
        return Success(text=text)
