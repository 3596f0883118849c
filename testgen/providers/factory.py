from __future__ import annotations

from typing import Callable, Dict

from testgen.core.config import get_settings
from testgen.providers.base import StepSuggester
from testgen.providers.default_suggester import DefaultStepSuggester

SUGGESTERS: Dict[str, Callable[[], StepSuggester]] = {
    "default": DefaultStepSuggester,
}


def get_suggester(suggester_name: str | None = None) -> StepSuggester:
    """Return the step suggester registered under the given name."""
    settings = get_settings()
    name = (suggester_name or settings.default_suggester).strip().lower()

    factory = SUGGESTERS.get(name)
    if factory is None:
        raise ValueError(
            f"Unsupported step suggester: {suggester_name!r}. "
            f"Use one of: {', '.join(sorted(SUGGESTERS))}."
        )
    return factory()
