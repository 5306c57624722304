from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pydantic import BaseModel

from careerpath.client.dispatcher import ApiClient
from careerpath.client.mutations import (
    Mutation,
    Notifier,
    career_analysis_mutation,
    learning_path_mutation,
    resource_recommendations_mutation,
)
from careerpath.schemas.forms import (
    DEFAULT_MAX_RESULTS,
    CareerAnalysisForm,
    LearningResourcesForm,
    validate_form,
)


@dataclass
class FormOutcome:
    errors: dict[str, str] = field(default_factory=dict)
    mutation: Optional[Mutation] = None
    data: Any = None

    @property
    def submitted(self) -> bool:
        return self.mutation is not None

    @property
    def ok(self) -> bool:
        return self.submitted and self.mutation.error is None


async def submit_form(
    model: type[BaseModel],
    data: Any,
    mutation: Mutation,
    to_payload: Callable[[Any], Any],
) -> FormOutcome:
    """Validate ``data`` and, only when it is valid, run ``mutation``."""
    form, errors = validate_form(model, data)
    if form is None:
        return FormOutcome(errors=errors)
    result = await mutation.run(to_payload(form))
    return FormOutcome(mutation=mutation, data=result)


async def submit_resource_recommendations(
    client: ApiClient,
    data: Any,
    *,
    max_results: int = DEFAULT_MAX_RESULTS,
    notify: Optional[Notifier] = None,
    delay_scale: float = 1.0,
) -> FormOutcome:
    return await submit_form(
        LearningResourcesForm,
        data,
        resource_recommendations_mutation(client, notify=notify, delay_scale=delay_scale),
        lambda form: form.recommendation_payload(max_results),
    )


async def submit_learning_path(
    client: ApiClient,
    data: Any,
    *,
    notify: Optional[Notifier] = None,
    delay_scale: float = 1.0,
) -> FormOutcome:
    return await submit_form(
        LearningResourcesForm,
        data,
        learning_path_mutation(client, notify=notify, delay_scale=delay_scale),
        lambda form: form.learning_path_payload(),
    )


async def submit_career_analysis(
    client: ApiClient,
    data: Any,
    *,
    notify: Optional[Notifier] = None,
    delay_scale: float = 1.0,
) -> FormOutcome:
    return await submit_form(
        CareerAnalysisForm,
        data,
        career_analysis_mutation(client, notify=notify, delay_scale=delay_scale),
        lambda form: form.payload(),
    )
