"""Staged request lifecycle for the analysis forms.

A mutation issues exactly one request. Stage labels and their pauses are
display-only; the server does the work in a single call.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Sequence

import httpx

from careerpath.client.dispatcher import ApiClient, ApiError

logger = logging.getLogger(__name__)


class MutationStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Toast:
    title: str
    description: str = ""
    variant: str = "default"


@dataclass(frozen=True)
class Stage:
    name: str
    toast: Optional[Toast] = None
    delay: float = 0.0


Notifier = Callable[[Toast], None]
RequestFn = Callable[[Any], Awaitable[Any]]

INITIAL_STAGE = "initial"
COMPLETE_STAGE = "complete"


class Mutation:
    def __init__(
        self,
        request: RequestFn,
        *,
        before_request: Sequence[Stage] = (),
        after_request: Sequence[Stage] = (),
        success_toast: Optional[Toast] = None,
        error_title: str = "Request Failed",
        notify: Optional[Notifier] = None,
        delay_scale: float = 1.0,
    ):
        self._request = request
        self.before_request = tuple(before_request)
        self.after_request = tuple(after_request)
        self.success_toast = success_toast
        self.error_title = error_title
        self.notify = notify or (lambda toast: None)
        self.delay_scale = delay_scale
        self.reset()

    def reset(self) -> None:
        self.status = MutationStatus.IDLE
        self.stage: Optional[str] = None
        self.stages: list[str] = []
        self.data: Any = None
        self.error: Optional[Exception] = None

    @property
    def is_pending(self) -> bool:
        return self.status is MutationStatus.PENDING

    async def _enter(self, stage: Stage) -> None:
        self.stage = stage.name
        self.stages.append(stage.name)
        if stage.toast:
            self.notify(stage.toast)
        if stage.delay and self.delay_scale > 0:
            await asyncio.sleep(stage.delay * self.delay_scale)

    async def run(self, payload: Any) -> Any:
        """Run the request through its stages.

        Request failures are recorded on the mutation and announced with an
        error toast; the return value is then ``None``.
        """
        self.reset()
        self.status = MutationStatus.PENDING
        await self._enter(Stage(INITIAL_STAGE))
        try:
            for stage in self.before_request:
                await self._enter(stage)
            result = await self._request(payload)
            for stage in self.after_request:
                await self._enter(stage)
        except (ApiError, httpx.HTTPError) as exc:
            logger.warning("Mutation failed at stage %s: %s", self.stage, exc)
            self.status = MutationStatus.ERROR
            self.error = exc
            self.notify(Toast(self.error_title, str(exc), "destructive"))
            return None

        self.data = result
        self.status = MutationStatus.SUCCESS
        self.stage = COMPLETE_STAGE
        if self.success_toast:
            self.notify(self.success_toast)
        return result


def resource_recommendations_mutation(
    client: ApiClient,
    *,
    notify: Optional[Notifier] = None,
    delay_scale: float = 1.0,
) -> Mutation:
    return Mutation(
        lambda payload: client.post("/learning-resources", payload),
        before_request=[
            Stage(
                "searching",
                Toast("Finding Resources", "Searching for the best learning materials..."),
            ),
        ],
        after_request=[
            Stage(
                "verifying",
                Toast(
                    "Verifying Results",
                    "Validating and checking the quality of recommended resources...",
                ),
                delay=1.5,
            ),
        ],
        success_toast=Toast(
            "Recommendations Retrieved",
            "We've found high-quality, verified learning resources tailored to your needs.",
        ),
        error_title="Error Getting Recommendations",
        notify=notify,
        delay_scale=delay_scale,
    )


def learning_path_mutation(
    client: ApiClient,
    *,
    notify: Optional[Notifier] = None,
    delay_scale: float = 1.0,
) -> Mutation:
    return Mutation(
        lambda payload: client.post("/learning-path", payload),
        before_request=[
            Stage(
                "creating",
                Toast("Creating Learning Path", "Designing a customized learning journey for you..."),
            ),
        ],
        after_request=[
            Stage(
                "reviewing",
                Toast(
                    "Quality Check in Progress",
                    "Reviewing and validating your learning path resources...",
                ),
                delay=1.5,
            ),
            Stage(
                "finalizing",
                Toast("Finalizing Your Learning Path", "Completing your personalized learning journey..."),
                delay=1.0,
            ),
        ],
        success_toast=Toast(
            "Learning Path Generated",
            "We've created a verified, high-quality learning path tailored to your needs.",
        ),
        error_title="Error Generating Learning Path",
        notify=notify,
        delay_scale=delay_scale,
    )


def career_analysis_mutation(
    client: ApiClient,
    *,
    notify: Optional[Notifier] = None,
    delay_scale: float = 1.0,
) -> Mutation:
    return Mutation(
        lambda payload: client.post("/xgen/analyze", payload),
        before_request=[
            Stage(
                "analyzing",
                Toast("Analyzing Your Profile", "Mapping your background against the skill frameworks..."),
            ),
        ],
        after_request=[
            Stage(
                "structuring",
                Toast("Structuring Report", "Organizing your career analysis report..."),
                delay=1.0,
            ),
        ],
        success_toast=Toast(
            "Analysis Complete",
            "Your X-Gen AI Career Analysis report has been generated successfully.",
        ),
        error_title="Generation Failed",
        notify=notify,
        delay_scale=delay_scale,
    )
