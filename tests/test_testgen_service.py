import json

import pytest

from testgen.core.config import Settings
from testgen.core.exceptions import AnalysisError, InvalidInputError
from testgen.schemas.testcase import Focus, TestType
from testgen.services.testgen_service import TestGenService

COLLECTION = {
    "info": {
        "name": "Users API",
        "schema": "https://schema.getpostman.com/json/collection/v2.1.0/collection.json",
    },
    "item": [
        {"name": "Get Users", "request": {"method": "GET", "url": "https://api.example.com/users"}},
        {"name": "Create User", "request": {"method": "POST", "url": "https://api.example.com/users"}},
    ],
}


def _service(**overrides):
    return TestGenService(settings=Settings(**overrides))


def test_collection_text_and_object_give_same_result():
    service = _service()

    from_text = service.from_collection(json.dumps(COLLECTION))
    from_object = service.from_collection(COLLECTION)

    assert from_text.test_cases == from_object.test_cases
    assert [tc.name for tc in from_text.test_cases] == [
        "Test the Get Users endpoint",
        "Test the Create User endpoint",
    ]


def test_focus_appends_steps():
    result = _service().from_collection(COLLECTION, focus=Focus.SECURITY)
    assert [len(tc.steps) for tc in result.test_cases] == [4, 4]


def test_derive_adds_focus_typed_cases_after_originals():
    result = _service().from_collection(COLLECTION, focus=Focus.PERFORMANCE, derive=True)

    assert [tc.type for tc in result.test_cases] == [
        TestType.API,
        TestType.API,
        TestType.PERFORMANCE,
        TestType.PERFORMANCE,
    ]


def test_ai_enhancement_setting_runs_general_pass():
    plain = _service().from_collection(COLLECTION)
    enhanced = _service(ai_enhancement_enabled=True).from_collection(COLLECTION)

    assert len(enhanced.test_cases[0].steps) == len(plain.test_cases[0].steps) + 1


def test_page_generation_uses_default_page_name():
    result = _service(default_page_name="Home").from_page("https://example.com")

    assert len(result.entities) == len(result.test_cases) == 4
    assert all("Home page" in tc.description for tc in result.test_cases)


def test_coverage_reports():
    service = _service()

    collection_report = service.collection_coverage(COLLECTION)
    page_report = service.page_coverage("https://spa.example.com", page_name="Shop")

    assert collection_report.covered_entities == collection_report.total_entities == 2
    assert page_report.covered_entities == page_report.total_entities == 7


def test_errors_propagate_typed():
    service = _service()
    with pytest.raises(InvalidInputError):
        service.from_collection("")
    with pytest.raises(InvalidInputError):
        service.from_page(None)
    with pytest.raises(AnalysisError):
        service.from_collection("{oops")


def test_general_focus_with_ai_enhancement_runs_once():
    plain = _service().from_collection(COLLECTION)
    enhanced = _service(ai_enhancement_enabled=True).from_collection(COLLECTION, focus=Focus.GENERAL)

    assert len(enhanced.test_cases[0].steps) == len(plain.test_cases[0].steps) + 1


def test_collection_scenarios_follow_base_cases():
    result = _service().from_collection(COLLECTION, include_scenarios=True)

    names = [tc.name for tc in result.test_cases]
    assert names[:3] == [
        "Test the Get Users endpoint",
        "Test the Create User endpoint",
        "API Authentication Test",
    ]
    assert len(names) == 2 + 1 + 2 * 4
    assert sum(tc.edge_case for tc in result.test_cases) == 8


def test_spa_page_scenarios_include_flow_cases():
    result = _service().from_page("https://spa.example.com", page_name="Shop", include_scenarios=True)

    names = [tc.name for tc in result.test_cases]
    assert "Shop - Route Navigation Test" in names
    assert "Shop - Form Submission Test" in names
    assert len(result.entities) == 7


def test_scenarios_raise_edge_case_coverage():
    report = _service().page_coverage("https://example.com/login", include_scenarios=True)

    # username: three text edge cases, login-button: rapid clicking
    assert report.edge_case_count == 4
    assert report.covered_entities == report.total_entities == 4
