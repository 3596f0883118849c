from typing import List

import pytest

from testgen.providers.base import StepSuggester
from testgen.schemas.testcase import Element, Endpoint, Focus, TestCase, TestStep, TestType
from testgen.services.enhancement import EnhancementPipeline
from testgen.services.generator import TestCaseGenerator


class _RecordingSuggester(StepSuggester):
    def __init__(self) -> None:
        self.seen: List[str] = []

    def suggest_steps(self, test_case: TestCase, focus: Focus) -> List[TestStep]:
        self.seen.append(test_case.name)
        return [TestStep(action=f"Probe {test_case.source_name}", expected_result="Nothing breaks")]


def _api_cases():
    return TestCaseGenerator().generate(
        [
            Endpoint(name="Get Users", url="https://api.example.com/users", method="GET"),
            Endpoint(name="Create User", url="https://api.example.com/users", method="POST"),
        ]
    )


def _ui_cases(page_url=None):
    return TestCaseGenerator().generate_for_elements(
        [Element(type="button", identifier="login-button", text="Login")],
        page_name="Login",
        page_url=page_url,
    )


@pytest.mark.parametrize("focus", list(Focus))
def test_original_steps_stay_a_prefix(focus):
    original = _api_cases() + _ui_cases("https://x/login")

    enhanced = EnhancementPipeline().enhance(original, focus)

    assert len(enhanced) == len(original)
    for before, after in zip(original, enhanced):
        assert after.steps[: len(before.steps)] == before.steps
        assert after.name == before.name


def test_input_is_not_mutated():
    original = _api_cases()
    snapshot = [tc.model_copy(deep=True) for tc in original]

    enhanced = EnhancementPipeline().enhance(original, Focus.SECURITY)

    assert original == snapshot
    assert enhanced[0] is not original[0]
    assert len(enhanced[0].steps) == len(original[0].steps) + 2


def test_security_on_api_appends_xss_and_injection_probes():
    enhanced = EnhancementPipeline().enhance(_api_cases(), Focus.SECURITY)[0]
    extra = enhanced.steps[2:]
    assert "script tags" in extra[0].action
    assert "injection" in extra[1].action


def test_accessibility_applies_to_ui_only():
    pipeline = EnhancementPipeline()

    api = pipeline.enhance(_api_cases(), Focus.ACCESSIBILITY)
    ui = pipeline.enhance(_ui_cases(), Focus.ACCESSIBILITY)

    assert api == _api_cases()
    extra = ui[0].steps[2:]
    assert "keyboard" in extra[0].action
    assert "screen reader" in extra[1].action


def test_performance_passes_through_cases_without_url():
    pipeline = EnhancementPipeline()

    without_url = pipeline.enhance(_ui_cases(), Focus.PERFORMANCE)
    with_url = pipeline.enhance(_ui_cases("https://x/login"), Focus.PERFORMANCE)

    assert without_url == _ui_cases()
    assert len(with_url[0].steps) == len(_ui_cases()[0].steps) + 2


def test_general_focus_uses_injected_suggester():
    suggester = _RecordingSuggester()
    pipeline = EnhancementPipeline(suggester=suggester)

    enhanced = pipeline.enhance(_api_cases(), Focus.GENERAL)

    assert suggester.seen == ["Test the Get Users endpoint", "Test the Create User endpoint"]
    assert enhanced[0].steps[-1].action == "Probe Get Users"


def test_default_general_focus_adds_one_exploratory_step():
    original = _api_cases()
    enhanced = EnhancementPipeline().enhance(original, Focus.GENERAL)
    assert len(enhanced[0].steps) == len(original[0].steps) + 1
    assert "exploratory" in enhanced[0].steps[-1].action


def test_focus_accepts_plain_string():
    enhanced = EnhancementPipeline().enhance(_api_cases(), "security")
    assert len(enhanced[0].steps) == 4


def test_derive_creates_focus_typed_cases_for_same_source():
    derived = EnhancementPipeline().derive(_api_cases(), Focus.SECURITY)

    assert [tc.type for tc in derived] == [TestType.SECURITY, TestType.SECURITY]
    assert [tc.source_name for tc in derived] == ["Get Users", "Create User"]
    assert derived[0].name == "Security test for Get Users"
    assert len(derived[0].steps) == 2


def test_derive_skips_cases_without_applicable_templates():
    pipeline = EnhancementPipeline()
    assert pipeline.derive(_api_cases(), Focus.ACCESSIBILITY) == []
    assert pipeline.derive(_api_cases(), Focus.GENERAL) == []


def test_focus_typed_cases_pass_through_catalog_foci():
    derived = EnhancementPipeline().derive(_api_cases(), Focus.SECURITY)
    again = EnhancementPipeline().enhance(derived, Focus.SECURITY)
    assert again == derived
