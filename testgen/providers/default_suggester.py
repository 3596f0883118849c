from __future__ import annotations

import logging
from typing import List

from testgen.providers.base import StepSuggester
from testgen.schemas.testcase import Focus, TestCase, TestStep

logger = logging.getLogger(__name__)


class DefaultStepSuggester(StepSuggester):
    """Deterministic stand-in that proposes a single exploratory step."""

    def suggest_steps(self, test_case: TestCase, focus: Focus) -> List[TestStep]:
        target = test_case.source_name or test_case.name
        logger.debug("Suggesting exploratory step for %s (focus=%s)", target, focus.value)
        return [
            TestStep(
                action=f"Perform exploratory testing around {target}",
                expected_result="No unexpected behavior, errors or inconsistencies should be observed",
            )
        ]
