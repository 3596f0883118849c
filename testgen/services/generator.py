from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from testgen.core.exceptions import InvalidInputError
from testgen.schemas.testcase import Element, Endpoint, TestCase, TestStep, TestType


logger = logging.getLogger(__name__)

# (action, expected result)
StepTemplate = Tuple[str, str]
EndpointTemplate = Callable[[Endpoint], List[StepTemplate]]
ElementTemplate = Callable[[Element], List[StepTemplate]]


def _get_steps(endpoint: Endpoint) -> List[StepTemplate]:
    return [
        (f"Send GET request to {endpoint.url}", "Response status code should be 200 OK"),
        ("Verify response format", "Response should be in the expected format (JSON, XML, etc.)"),
    ]


def _post_steps(endpoint: Endpoint) -> List[StepTemplate]:
    return [
        (f"Send POST request to {endpoint.url} with valid data", "Response status code should be 201 Created"),
        ("Verify the created resource", "The response should contain the created resource with an ID"),
    ]


def _put_steps(endpoint: Endpoint) -> List[StepTemplate]:
    return [
        (f"Send PUT request to {endpoint.url} with valid data", "Response status code should be 200 OK"),
        ("Verify the updated resource", "The response should contain the updated resource"),
    ]


def _delete_steps(endpoint: Endpoint) -> List[StepTemplate]:
    return [
        (f"Send DELETE request to {endpoint.url}", "Response status code should be 204 No Content"),
        ("Verify the resource was deleted", "A subsequent GET request should return 404 Not Found"),
    ]


def _generic_endpoint_steps(endpoint: Endpoint) -> List[StepTemplate]:
    return [
        (f"Send {endpoint.method} request to {endpoint.url}", "Response should have an appropriate status code"),
    ]


def _form_steps(element: Element) -> List[StepTemplate]:
    return [
        (
            f"Fill in all fields of the {element.identifier} form with valid data",
            "All fields should accept the entered values",
        ),
        (
            f"Submit the {element.identifier} form",
            "The form should be submitted successfully and validated",
        ),
    ]


def _button_steps(element: Element) -> List[StepTemplate]:
    return [
        (f"Click the {element.label} button", "The button should respond to the click"),
        (f"Verify the result of clicking {element.label}", "The expected action should be triggered"),
    ]


def _link_steps(element: Element) -> List[StepTemplate]:
    href = element.attributes.get("href") or "the linked page"
    return [
        (f"Click the {element.label} link", f"The browser should navigate to {href}"),
        ("Verify the destination page", "The destination page should load successfully"),
    ]


def _input_steps(element: Element) -> List[StepTemplate]:
    if element.attributes.get("type") == "password":
        accepted = "The value should be accepted and masked"
    else:
        accepted = "The value should be accepted"
    return [
        (f"Enter a valid value in the {element.identifier} field", accepted),
        (
            f"Validate the {element.identifier} field with invalid input",
            "A validation message should be displayed",
        ),
    ]


def _generic_element_steps(element: Element) -> List[StepTemplate]:
    return [
        (
            f"Interact with the {element.identifier} {element.type} element",
            "The element should respond as expected",
        ),
    ]


DEFAULT_METHOD_TEMPLATES: Mapping[str, EndpointTemplate] = {
    "GET": _get_steps,
    "POST": _post_steps,
    "PUT": _put_steps,
    "DELETE": _delete_steps,
}

DEFAULT_ELEMENT_TEMPLATES: Mapping[str, ElementTemplate] = {
    "form": _form_steps,
    "button": _button_steps,
    "link": _link_steps,
    "input": _input_steps,
}


class TestCaseGenerator:
    """
    Rule engine mapping each endpoint or element to one test case.

    Step templates are looked up by HTTP method or element type; values
    missing from the tables use the generic template. The tables are
    passed in at construction, so supporting another method is a matter
    of adding an entry.
    """

    __test__ = False

    def __init__(
        self,
        method_templates: Optional[Mapping[str, EndpointTemplate]] = None,
        element_templates: Optional[Mapping[str, ElementTemplate]] = None,
        generic_endpoint_template: EndpointTemplate = _generic_endpoint_steps,
        generic_element_template: ElementTemplate = _generic_element_steps,
    ) -> None:
        self._method_templates: Dict[str, EndpointTemplate] = dict(
            DEFAULT_METHOD_TEMPLATES if method_templates is None else method_templates
        )
        self._element_templates: Dict[str, ElementTemplate] = dict(
            DEFAULT_ELEMENT_TEMPLATES if element_templates is None else element_templates
        )
        self._generic_endpoint_template = generic_endpoint_template
        self._generic_element_template = generic_element_template

    def generate(self, endpoints: Sequence[Endpoint]) -> List[TestCase]:
        """Build one API test case per endpoint, in input order."""
        if endpoints is None:
            raise InvalidInputError("Endpoint list cannot be null")
        cases = [self.generate_for_endpoint(endpoint) for endpoint in endpoints]
        logger.debug("Generated %s API test cases", len(cases))
        return cases

    def generate_for_endpoint(self, endpoint: Endpoint) -> TestCase:
        template = self._method_templates.get(endpoint.method, self._generic_endpoint_template)
        return self._build(
            template(endpoint),
            name=f"Test the {endpoint.name} endpoint",
            description=f"Verify the {endpoint.method} {endpoint.url} endpoint behaves as expected",
            type=TestType.API,
            source_name=endpoint.name,
            url=endpoint.url,
        )

    def generate_for_elements(
        self,
        elements: Sequence[Element],
        page_name: str,
        page_url: Optional[str] = None,
    ) -> List[TestCase]:
        """Build one UI test case per element, in input order."""
        if elements is None:
            raise InvalidInputError("Element list cannot be null")
        cases = [self.generate_for_element(element, page_name, page_url) for element in elements]
        logger.debug("Generated %s UI test cases for %s", len(cases), page_name)
        return cases

    def generate_for_element(
        self,
        element: Element,
        page_name: str,
        page_url: Optional[str] = None,
    ) -> TestCase:
        template = self._element_templates.get(element.type, self._generic_element_template)
        return self._build(
            template(element),
            name=f"Test the {element.identifier} {element.type}",
            description=f"Verify the {element.identifier} {element.type} on the {page_name} page",
            type=TestType.UI,
            source_name=element.identifier,
            url=page_url,
        )

    @staticmethod
    def _build(steps: List[StepTemplate], **fields: Any) -> TestCase:
        if not steps:
            raise ValueError(f"Step template produced no steps for {fields['name']!r}")
        return TestCase(
            steps=[TestStep(action=action, expected_result=expected) for action, expected in steps],
            **fields,
        )
