import asyncio
import logging

from content_forge.llm.client import TextGenerator
from content_forge.models import (
    ContentType,
    Failure,
    GenerationOutcome,
    GenerationRequest,
    Length,
    SessionState,
    Success,
    Tone,
)
from content_forge.session.clipboard import Clipboard

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a prompt to generate content."
CONFIRMATION_DELAY_SECONDS = 2.0


class SessionController:
    """Owns the form state of one session and drives the generator.

    Idle accepts a submit, Busy ignores it until the in-flight call returns.
    Field edits are accepted in both states.
    """

    def __init__(
        self,
        generator: TextGenerator,
        clipboard: Clipboard,
        confirmation_delay: float = CONFIRMATION_DELAY_SECONDS,
    ) -> None:
        self.generator = generator
        self.clipboard = clipboard
        self.confirmation_delay = confirmation_delay
        self.state = SessionState()
        self._in_flight: asyncio.Task | None = None
        self._revert_handle: asyncio.TimerHandle | None = None
        self._closed = False

    @property
    def is_busy(self) -> bool:
        return self.state.is_busy

    def snapshot(self) -> SessionState:
        return self.state.model_copy(deep=True)

    def set_content_type(self, content_type: ContentType | str) -> None:
        self.state.content_type = ContentType(content_type)

    def set_prompt(self, prompt: str) -> None:
        self.state.prompt = prompt

    def set_tone(self, tone: Tone | str) -> None:
        self.state.tone = Tone(tone)

    def set_length(self, length: Length | str) -> None:
        self.state.length = Length(length)

    async def submit(self) -> GenerationOutcome | None:
        """Run one generation with the current fields.

        Returns None when the submit was ignored (busy, or the session was
        closed while the call was in flight).
        """
        if self.state.is_busy:
            logger.debug("Submit ignored, a generation is already in flight")
            return None

        if not self.state.prompt.strip():
            self.state.last_outcome = Failure(message=EMPTY_PROMPT_MESSAGE)
            return self.state.last_outcome

        request = GenerationRequest(
            content_type=self.state.content_type,
            prompt=self.state.prompt,
            tone=self.state.tone,
            length=self.state.length,
        )
        self.state.last_outcome = None
        self._clear_confirmation()
        self.state.is_busy = True
        self._in_flight = asyncio.create_task(self.generator.generate(request))
        try:
            outcome = await self._in_flight
        except asyncio.CancelledError:
            if not self._closed:
                raise
            logger.info("Generation cancelled, session closed")
            return None
        finally:
            self._in_flight = None
            self.state.is_busy = False

        self.state.last_outcome = outcome
        return outcome

    def copy(self) -> bool:
        outcome = self.state.last_outcome
        if not isinstance(outcome, Success):
            return False

        self.clipboard.write_text(outcome.text)
        self.state.clipboard_confirmed = True
        if self._revert_handle is not None:
            self._revert_handle.cancel()
        loop = asyncio.get_running_loop()
        self._revert_handle = loop.call_later(
            self.confirmation_delay, self._revert_confirmation
        )
        return True

    def close(self) -> None:
        self._closed = True
        if self._in_flight is not None and not self._in_flight.done():
            self._in_flight.cancel()
        self._clear_confirmation()

    def _revert_confirmation(self) -> None:
        self._revert_handle = None
        self.state.clipboard_confirmed = False

    def _clear_confirmation(self) -> None:
        if self._revert_handle is not None:
            self._revert_handle.cancel()
            self._revert_handle = None
        self.state.clipboard_confirmed = False
