"""
Retry Policy - bounded retries with linear backoff on provider rate limits

The policy is a small state machine:

    ATTEMPTING --success--------------------> SUCCEEDED
    ATTEMPTING --RateLimited, attempts left--> WAITING_BACKOFF --> ATTEMPTING
    ATTEMPTING --RateLimited, none left-----> EXHAUSTED (re-raise last error)
    ATTEMPTING --any other error------------> EXHAUSTED (re-raise immediately)

Only throttling is worth waiting for. The wait before attempt n+1 is
n * backoff_step seconds, so with the defaults the waits are 2s then 4s and
no wait follows the final attempt.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Protocol

from config.settings import settings
from errors import RateLimited, UpstreamError

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str: ...


class RetryState(str, Enum):
    ATTEMPTING = "attempting"
    WAITING_BACKOFF = "waiting_backoff"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass
class RetryRun:
    """Record of a single generate_with_retry call. The policy is shared, so each call gets its own."""
    transitions: List[RetryState] = field(default_factory=list)
    attempts: int = 0

    def enter(self, state: RetryState) -> RetryState:
        self.transitions.append(state)
        return state

    @property
    def final_state(self) -> Optional[RetryState]:
        return self.transitions[-1] if self.transitions else None


class RetryPolicy:

    def __init__(
        self,
        client: TextGenerator,
        max_attempts: Optional[int] = None,
        backoff_step_seconds: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client
        self.max_attempts = max_attempts if max_attempts is not None else settings.ai_max_attempts
        self.backoff_step_seconds = (
            backoff_step_seconds if backoff_step_seconds is not None else settings.ai_backoff_step_seconds
        )
        self._sleep = sleep

    def backoff_for(self, attempt: int) -> float:
        """Seconds to wait after a rate-limited attempt (attempt is 1-based)."""
        return attempt * self.backoff_step_seconds

    async def generate_with_retry(
        self,
        prompt: str,
        max_attempts: Optional[int] = None,
        run: Optional[RetryRun] = None,
    ) -> str:
        """
        Pass a RetryRun to observe the state transitions of this call.
        """
        attempts_allowed = self.max_attempts if max_attempts is None else max_attempts
        if run is None:
            run = RetryRun()

        if attempts_allowed <= 0:
            run.enter(RetryState.EXHAUSTED)
            raise UpstreamError(f"Retry policy called with max_attempts={attempts_allowed}; no attempt made")

        attempt = 1
        last_error: Optional[Exception] = None
        state = run.enter(RetryState.ATTEMPTING)

        while True:
            if state is RetryState.ATTEMPTING:
                run.attempts = attempt
                logger.info(f"Text generation attempt {attempt}/{attempts_allowed}")
                try:
                    text = await self.client.generate(prompt)
                except RateLimited as e:
                    last_error = e
                    logger.warning(f"Attempt {attempt} rate limited: {e}")
                    if attempt < attempts_allowed:
                        state = run.enter(RetryState.WAITING_BACKOFF)
                    else:
                        state = run.enter(RetryState.EXHAUSTED)
                except Exception as e:
                    last_error = e
                    logger.error(f"Attempt {attempt} failed with non-retryable error: {e}")
                    state = run.enter(RetryState.EXHAUSTED)
                else:
                    run.enter(RetryState.SUCCEEDED)
                    logger.info(f"Text generation succeeded on attempt {attempt}")
                    return text

            elif state is RetryState.WAITING_BACKOFF:
                wait_seconds = self.backoff_for(attempt)
                logger.info(f"Waiting {wait_seconds:.1f}s before attempt {attempt + 1}")
                await self._sleep(wait_seconds)
                attempt += 1
                state = run.enter(RetryState.ATTEMPTING)

            else:
                logger.debug(f"Retry run exhausted: {[s.value for s in run.transitions]}")
                raise last_error
