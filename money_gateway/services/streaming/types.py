"""
Streaming Types.

A StreamSession is owned by exactly one request. Its lifecycle is a small
state machine: it leaves Init once, and every terminal state is final.
"""
import uuid
from dataclasses import dataclass, field
from enum import Enum

from statemachine import State, StateMachine


class SessionState(str, Enum):
    """Externally visible session states."""

    INIT = "init"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class SessionLifecycle(StateMachine):
    """Allowed transitions of a stream session."""

    init = State("Init", initial=True)
    streaming = State("Streaming")
    completed = State("Completed", final=True)
    failed = State("Failed", final=True)
    cancelled = State("Cancelled", final=True)

    begin = init.to(streaming)
    finish = init.to(completed) | streaming.to(completed)
    fail = init.to(failed) | streaming.to(failed)
    cancel = init.to(cancelled) | streaming.to(cancelled)


@dataclass
class StreamSession:
    """
    State of one generation stream.

    Attributes:
        prompt: Prompt forwarded to the generator
        session_id: Identifier used in logs
        fragments_sent: Number of text frames handed to the transport
    """

    prompt: str
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    fragments_sent: int = 0
    lifecycle: SessionLifecycle = field(default_factory=SessionLifecycle, repr=False)

    @property
    def state(self) -> SessionState:
        return SessionState(self.lifecycle.current_state.id)

    @property
    def is_terminal(self) -> bool:
        return self.state in (
            SessionState.COMPLETED,
            SessionState.FAILED,
            SessionState.CANCELLED,
        )
