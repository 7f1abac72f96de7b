"""
Voice assistant call state.

Models the patient-side voice consultation as a finite-state machine driven by
the event stream of a streaming voice SDK session. The SDK object is injected;
anything exposing async ``start(assistant_id)``/``stop()`` and ``on``/``off``
event registration works.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

import structlog

logger = structlog.get_logger(__name__)

EventHandler = Callable[..., None]


class VoiceEvent(str, Enum):
    """Events emitted by the voice SDK session."""

    CALL_START = "call-start"
    CALL_END = "call-end"
    SPEECH_START = "speech-start"
    SPEECH_END = "speech-end"
    MESSAGE = "message"
    ERROR = "error"


class CallState(str, Enum):
    """Lifecycle of a single voice call."""

    IDLE = "idle"
    CONNECTING = "connecting"
    ACTIVE = "active"
    ENDED = "ended"


CALL_TRANSITIONS: dict[CallState, frozenset[CallState]] = {
    CallState.IDLE: frozenset({CallState.CONNECTING}),
    CallState.CONNECTING: frozenset({CallState.ACTIVE, CallState.ENDED, CallState.IDLE}),
    CallState.ACTIVE: frozenset({CallState.ENDED, CallState.IDLE}),
    CallState.ENDED: frozenset({CallState.CONNECTING}),
}


class VoiceConfigurationError(RuntimeError):
    """Raised when a call is started without an assistant id."""


class InvalidCallTransition(RuntimeError):
    """Raised when an event would move the call to an unreachable state."""


class VoiceSession(Protocol):
    """The streaming voice SDK session object."""

    async def start(self, assistant_id: str) -> Any:
        """Start a call with the given assistant."""
        ...

    def stop(self) -> None:
        """Hang up the current call."""
        ...

    def on(self, event: str, handler: EventHandler) -> Any:
        """Register an event handler."""
        ...

    def off(self, event: str, handler: EventHandler) -> Any:
        """Remove an event handler."""
        ...


@dataclass
class TranscriptMessage:
    """One finalised utterance in the call transcript."""

    role: str
    content: str


@dataclass
class VoiceSessionController:
    """Tracks call state, the speaking indicator and the final transcript."""

    session: VoiceSession
    assistant_id: str | None = None
    state: CallState = CallState.IDLE
    is_speaking: bool = False
    messages: list[TranscriptMessage] = field(default_factory=list)
    _handlers: dict[VoiceEvent, EventHandler] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self._handlers = {
            VoiceEvent.CALL_START: self._on_call_start,
            VoiceEvent.CALL_END: self._on_call_end,
            VoiceEvent.SPEECH_START: self._on_speech_start,
            VoiceEvent.SPEECH_END: self._on_speech_end,
            VoiceEvent.MESSAGE: self._on_message,
            VoiceEvent.ERROR: self._on_error,
        }

    def attach(self) -> None:
        """Subscribe to the session's events."""
        for event, handler in self._handlers.items():
            self.session.on(event.value, handler)

    def detach(self) -> None:
        """Unsubscribe from the session's events."""
        for event, handler in self._handlers.items():
            self.session.off(event.value, handler)

    @property
    def call_active(self) -> bool:
        return self.state == CallState.ACTIVE

    @property
    def connecting(self) -> bool:
        return self.state == CallState.CONNECTING

    @property
    def call_ended(self) -> bool:
        return self.state == CallState.ENDED

    @property
    def status_label(self) -> str:
        """Assistant status line shown next to the avatar."""
        if self.is_speaking:
            return "Speaking..."
        if self.call_active:
            return "Listening..."
        if self.call_ended:
            return "Call ended"
        return "Waiting..."

    def _transition(self, new_state: CallState) -> None:
        if new_state == self.state:
            return
        if new_state not in CALL_TRANSITIONS[self.state]:
            raise InvalidCallTransition(f"{self.state.value} -> {new_state.value}")
        logger.debug("voice_call_state", old=self.state.value, new=new_state.value)
        self.state = new_state

    async def toggle_call(self) -> None:
        """
        Start a call, or hang up if one is active.

        Raises:
            VoiceConfigurationError: If no assistant id is configured
        """
        if self.call_active:
            self.session.stop()
            return
        if self.connecting:
            return

        self._transition(CallState.CONNECTING)
        self.messages = []

        if not self.assistant_id:
            logger.error("voice_assistant_id_missing")
            self._transition(CallState.IDLE)
            raise VoiceConfigurationError("Voice assistant ID is missing")

        try:
            await self.session.start(self.assistant_id)
        except Exception:
            logger.exception("voice_call_start_failed")
            self._transition(CallState.IDLE)
            raise

    def _follow(self, new_state: CallState) -> None:
        try:
            self._transition(new_state)
        except InvalidCallTransition as e:
            logger.warning("voice_event_ignored", transition=str(e))

    def _on_call_start(self, *_: Any) -> None:
        self._follow(CallState.ACTIVE)

    def _on_call_end(self, *_: Any) -> None:
        self.is_speaking = False
        self._follow(CallState.ENDED)

    def _on_speech_start(self, *_: Any) -> None:
        self.is_speaking = True

    def _on_speech_end(self, *_: Any) -> None:
        self.is_speaking = False

    def _on_message(self, message: dict[str, Any]) -> None:
        # Only final transcripts are kept
        if message.get("type") != "transcript" or message.get("transcriptType") != "final":
            return
        text = message.get("transcript")
        if not text:
            return
        self.messages.append(
            TranscriptMessage(role=message.get("role", "assistant"), content=text)
        )

    def _on_error(self, error: Any = None) -> None:
        logger.error("voice_session_error", error=str(error))
        self.is_speaking = False
        if self.state in (CallState.CONNECTING, CallState.ACTIVE):
            self._follow(CallState.IDLE)
