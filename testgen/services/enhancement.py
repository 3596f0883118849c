from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from testgen.providers.base import StepSuggester
from testgen.providers.default_suggester import DefaultStepSuggester
from testgen.schemas.testcase import Focus, TestCase, TestStep, TestType


logger = logging.getLogger(__name__)

CatalogTemplate = Callable[[TestCase], List[TestStep]]


def _api_security_steps(test_case: TestCase) -> List[TestStep]:
    return [
        TestStep(
            action=f"Send a request to {test_case.url} with script tags in every parameter",
            expected_result="The API should sanitize or reject the input and never reflect executable script",
        ),
        TestStep(
            action=f"Send a request to {test_case.url} with SQL and command injection payloads",
            expected_result="The API should reject the payloads without exposing internal errors",
        ),
    ]


def _ui_security_steps(test_case: TestCase) -> List[TestStep]:
    target = test_case.source_name or test_case.name
    return [
        TestStep(
            action=f"Enter script tags into the input fields related to {target}",
            expected_result="The application should sanitize input and prevent execution of scripts",
        ),
        TestStep(
            action=f"Submit the action behind {target} from an external origin",
            expected_result="The application should validate the request origin and prevent CSRF attacks",
        ),
    ]


def _ui_accessibility_steps(test_case: TestCase) -> List[TestStep]:
    target = test_case.source_name or test_case.name
    return [
        TestStep(
            action=f"Reach and operate {target} using only the keyboard",
            expected_result="The element should be focusable and usable via keyboard",
        ),
        TestStep(
            action=f"Navigate to {target} with a screen reader",
            expected_result="The screen reader should announce a meaningful label and role",
        ),
    ]


def _performance_steps(test_case: TestCase) -> List[TestStep]:
    if not test_case.url:
        return []
    return [
        TestStep(
            action=f"Measure the response time of {test_case.url}",
            expected_result="The response should be received within the acceptable time limit",
        ),
        TestStep(
            action=f"Send concurrent requests to {test_case.url}",
            expected_result="All requests should succeed without significant degradation",
        ),
    ]


DEFAULT_CATALOG: Mapping[Tuple[Focus, TestType], CatalogTemplate] = {
    (Focus.SECURITY, TestType.API): _api_security_steps,
    (Focus.SECURITY, TestType.UI): _ui_security_steps,
    (Focus.ACCESSIBILITY, TestType.UI): _ui_accessibility_steps,
    (Focus.PERFORMANCE, TestType.API): _performance_steps,
    (Focus.PERFORMANCE, TestType.UI): _performance_steps,
}

FOCUS_TEST_TYPES: Dict[Focus, TestType] = {
    Focus.SECURITY: TestType.SECURITY,
    Focus.ACCESSIBILITY: TestType.ACCESSIBILITY,
    Focus.PERFORMANCE: TestType.PERFORMANCE,
}


class EnhancementPipeline:
    """
    Second pass that appends focus-specific steps to generated test cases.

    Test cases are immutable, so every call returns new cases and the
    input list is left as it was. The general focus delegates to the injected
    step suggester, the other foci use the fixed catalog.
    """

    def __init__(
        self,
        suggester: Optional[StepSuggester] = None,
        catalog: Optional[Mapping[Tuple[Focus, TestType], CatalogTemplate]] = None,
    ) -> None:
        self._suggester = suggester or DefaultStepSuggester()
        self._catalog = dict(DEFAULT_CATALOG if catalog is None else catalog)

    def steps_for(self, test_case: TestCase, focus: Focus) -> List[TestStep]:
        """Steps the given focus would add to ``test_case`` (possibly none)."""
        focus = Focus(focus)
        if focus is Focus.GENERAL:
            return list(self._suggester.suggest_steps(test_case, focus))
        template = self._catalog.get((focus, test_case.type))
        if template is None:
            return []
        return template(test_case)

    def enhance(self, test_cases: Sequence[TestCase], focus: Focus) -> List[TestCase]:
        focus = Focus(focus)
        enhanced: List[TestCase] = []
        for test_case in test_cases:
            enhanced.append(test_case.with_steps(self.steps_for(test_case, focus)))
        logger.debug("Enhanced %s test cases (focus=%s)", len(enhanced), focus.value)
        return enhanced

    def derive(self, test_cases: Sequence[TestCase], focus: Focus) -> List[TestCase]:
        """
        Produce separate focus-typed test cases, one per applicable source case.

        The general focus has no dedicated test type and derives nothing.
        """
        focus = Focus(focus)
        test_type = FOCUS_TEST_TYPES.get(focus)
        if test_type is None:
            return []

        derived: List[TestCase] = []
        for test_case in test_cases:
            steps = self.steps_for(test_case, focus)
            if not steps:
                continue
            target = test_case.source_name or test_case.name
            derived.append(
                TestCase(
                    name=f"{focus.value.capitalize()} test for {target}",
                    description=f"{focus.value.capitalize()} checks derived from '{test_case.name}'",
                    type=test_type,
                    steps=steps,
                    source_name=test_case.source_name,
                    url=test_case.url,
                )
            )
        logger.debug("Derived %s %s test cases", len(derived), focus.value)
        return derived
