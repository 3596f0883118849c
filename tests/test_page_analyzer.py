import pytest

from testgen.core.exceptions import InvalidInputError
from testgen.services.page_analyzer import PageAnalyzer


def test_static_page_yields_login_elements_in_order():
    elements = PageAnalyzer().analyze("https://example.com/login")

    assert [(e.type, e.identifier) for e in elements] == [
        ("form", "login-form"),
        ("input", "username"),
        ("input", "password"),
        ("button", "login-button"),
    ]
    assert elements[2].attributes["type"] == "password"


def test_spa_page_yields_navigation_and_contact_form():
    analyzer = PageAnalyzer()
    elements = analyzer.analyze("https://spa.example.com")

    assert analyzer.is_spa("https://spa.example.com")
    links = [e for e in elements if e.type == "link"]
    assert [link.attributes["href"] for link in links] == ["#/", "#/products", "#/contact"]
    name_input = next(e for e in elements if e.identifier == "contact-name")
    assert name_input.attributes["placeholder"] == "Your name"
    assert name_input.attributes["required"] == "true"


def test_custom_spa_keywords():
    analyzer = PageAnalyzer(spa_keywords=["dashboard"])
    assert analyzer.is_spa("https://example.com/Dashboard")
    assert not analyzer.is_spa("https://react.example.com")


@pytest.mark.parametrize("page", [None, "", "  "])
def test_empty_page_is_rejected(page):
    with pytest.raises(InvalidInputError):
        PageAnalyzer().analyze(page)


def test_analysis_is_deterministic():
    analyzer = PageAnalyzer()
    assert analyzer.analyze("https://example.com") == analyzer.analyze("https://example.com")


def test_spa_routes_ajax_calls_and_dynamic_events():
    analysis = PageAnalyzer().analyze_spa("https://spa.example.com")

    assert [route.client_path for route in analysis.routes] == ["#/", "#/products", "#/contact", "#/products/1"]
    assert [(call.method, call.url) for call in analysis.ajax_calls] == [
        ("GET", "/api/products"),
        ("GET", "/api/products/{id}"),
        ("POST", "/api/contact"),
    ]
    assert analysis.ajax_calls[2].success_status_code == 201
    assert [event.event_type for event in analysis.dynamic_events] == [
        "modal",
        "dropdown",
        "loading",
        "tab",
        "validation",
    ]
    assert analysis.dynamic_events[4].event_name == "blur"


def test_static_page_has_no_spa_analysis():
    analysis = PageAnalyzer().analyze_spa("https://example.com/login")

    assert analysis.routes == []
    assert analysis.ajax_calls == []
    assert analysis.dynamic_events == []


@pytest.mark.parametrize("page", [None, " "])
def test_spa_analysis_rejects_empty_page(page):
    with pytest.raises(InvalidInputError):
        PageAnalyzer().analyze_spa(page)
