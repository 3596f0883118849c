from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from testgen.schemas.testcase import Element, Endpoint, SpaAnalysis, TestCase, TestStep, TestType


logger = logging.getLogger(__name__)

# (scenario, action, expected result)
API_EDGE_CASES: Tuple[Tuple[str, str, str], ...] = (
    (
        "Missing Required Parameters",
        "Send request without required parameters",
        "API should return appropriate error response",
    ),
    (
        "Invalid Parameter Values",
        "Send request with invalid parameter values",
        "API should return appropriate error response",
    ),
    (
        "Rate Limiting",
        "Send multiple requests in quick succession",
        "API should handle rate limiting appropriately",
    ),
    (
        "Large Payload",
        "Send request with a very large payload",
        "API should handle large payloads appropriately",
    ),
)

# input type -> (scenario, value entered)
INPUT_EDGE_VALUES: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "text": (
        ("Empty Input", ""),
        ("Very Long Input", "A" * 1000),
        ("Special Characters", '!@#$%^&*()_+<>?:"{}|'),
    ),
    "number": (
        ("Negative Number", "-1"),
        ("Very Large Number", "9999999999"),
        ("Non-numeric Input", "abc"),
    ),
    "email": (
        ("Invalid Email Format", "notanemail"),
        ("Valid Email", "test@example.com"),
        ("Very Long Email", "a" * 100 + "@example.com"),
    ),
}

SELECT_EDGE_CASES: Tuple[Tuple[str, str], ...] = (
    ("Select First Option", "Select the first option"),
    ("Select Last Option", "Select the last option"),
)


def _step(action: str, expected_result: str) -> TestStep:
    return TestStep(action=action, expected_result=expected_result)


class ScenarioGenerator:
    """
    Cross-cutting scenarios on top of the one-case-per-entity output:
    edge cases per endpoint or element, the API authentication flow and
    the single page application flows (routing, background requests,
    dynamic UI, form submission).
    """

    def endpoint_edge_cases(self, endpoint: Endpoint) -> List[TestCase]:
        target = f"{endpoint.method} {endpoint.url}"
        prepare = _step(
            f"Prepare {target} request",
            "Request should be prepared with appropriate headers",
        )
        return [
            TestCase(
                name=f"{target} - {scenario}",
                description=f"Test {target} with {scenario.lower()}",
                type=TestType.API,
                steps=[prepare, _step(action, expected)],
                source_name=endpoint.name,
                url=endpoint.url,
                edge_case=True,
            )
            for scenario, action, expected in API_EDGE_CASES
        ]

    def element_edge_cases(
        self,
        element: Element,
        page_name: str,
        page_url: Optional[str] = None,
    ) -> List[TestCase]:
        label = element.attributes.get("name") or element.identifier

        def case(name: str, description: str, steps: List[TestStep]) -> TestCase:
            return TestCase(
                name=name,
                description=f"{description} on the {page_name} page",
                type=TestType.UI,
                steps=steps,
                source_name=element.identifier,
                url=page_url,
                edge_case=True,
            )

        if element.type == "input":
            values = INPUT_EDGE_VALUES.get(element.attributes.get("type", "text"), ())
            return [
                case(
                    f"{label} Validation - {scenario}",
                    f"Test input validation with {scenario.lower()}",
                    [
                        _step("Navigate to the page containing the input", "Page should be displayed"),
                        _step(f'Enter "{value}" in the {label} field', "Input should be entered in the field"),
                        _step(
                            "Submit the form or trigger validation",
                            "Application should handle the input appropriately",
                        ),
                    ],
                )
                for scenario, value in values
            ]

        if element.type == "button":
            return [
                case(
                    f"{element.label} Test - Rapid Clicking",
                    "Test button interaction with rapid clicking",
                    [
                        _step("Navigate to the page containing the button", "Page should be displayed"),
                        _step(
                            "Rapidly click the button multiple times",
                            "Application should handle the button interaction appropriately",
                        ),
                    ],
                )
            ]

        if element.type == "select":
            return [
                case(
                    f"{label} Test - {scenario}",
                    f"Test select element interaction with {scenario.lower()}",
                    [
                        _step("Navigate to the page containing the select element", "Page should be displayed"),
                        _step(action, "Option should be selected"),
                        _step(
                            "Submit the form or trigger an action",
                            "Application should handle the selection appropriately",
                        ),
                    ],
                )
                for scenario, action in SELECT_EDGE_CASES
            ]

        return []

    def authentication_case(self, endpoints: Sequence[Endpoint]) -> Optional[TestCase]:
        """Token handling check against the first endpoint; ``None`` without endpoints."""
        if not endpoints:
            return None
        endpoint = endpoints[0]
        return TestCase(
            name="API Authentication Test",
            description="Test API authentication with various token scenarios",
            type=TestType.API,
            steps=[
                _step(
                    "Authenticate with valid credentials",
                    "Authentication should succeed and return valid token",
                ),
                _step(
                    f"Send {endpoint.method} request to {endpoint.url} with authentication token",
                    "Request should succeed with appropriate response",
                ),
                _step(
                    "Send the same request with invalid token",
                    "Request should fail with authentication error",
                ),
                _step(
                    "Send the same request with expired token",
                    "Request should fail with authentication error or refresh token should be used",
                ),
            ],
            source_name=endpoint.name,
            url=endpoint.url,
        )

    def collection_scenarios(self, endpoints: Sequence[Endpoint]) -> List[TestCase]:
        cases: List[TestCase] = []
        auth = self.authentication_case(endpoints)
        if auth is not None:
            cases.append(auth)
        for endpoint in endpoints:
            cases.extend(self.endpoint_edge_cases(endpoint))
        logger.debug("Built %s collection scenario cases", len(cases))
        return cases

    def page_scenarios(
        self,
        elements: Sequence[Element],
        spa: SpaAnalysis,
        page_name: str,
        page_url: Optional[str] = None,
    ) -> List[TestCase]:
        cases = self.spa_flow_cases(elements, spa, page_name, page_url)
        for element in elements:
            cases.extend(self.element_edge_cases(element, page_name, page_url))
        logger.debug("Built %s page scenario cases for %s", len(cases), page_name)
        return cases

    def spa_flow_cases(
        self,
        elements: Sequence[Element],
        spa: SpaAnalysis,
        page_name: str,
        page_url: Optional[str] = None,
    ) -> List[TestCase]:
        """One case per flow the analysis found; an empty analysis gives none."""
        cases: List[TestCase] = []

        def flow(
            title: str,
            description: str,
            steps: List[TestStep],
            source_name: Optional[str] = None,
        ) -> TestCase:
            return TestCase(
                name=f"{page_name} - {title}",
                description=description,
                type=TestType.UI,
                steps=steps,
                source_name=source_name,
                url=page_url,
            )

        if spa.routes:
            steps = [
                _step(
                    f"Navigate to {page_name}",
                    f"The {page_name} page should load successfully with the home route active",
                )
            ]
            steps += [
                _step(
                    f"Click on the {route.route_name} navigation link",
                    f"URL should change to {route.client_path} and corresponding content should be displayed",
                )
                for route in spa.routes
            ]
            cases.append(
                flow(
                    "Route Navigation Test",
                    f"Test navigation between different routes in the {page_name} SPA",
                    steps,
                )
            )

        if spa.ajax_calls:
            steps = [_step(f"Navigate to {page_name}", f"The {page_name} page should load successfully")]
            steps += [
                _step(
                    f"Trigger AJAX call with {call.trigger}",
                    f"The request to {call.url} should complete successfully and update the UI",
                )
                for call in spa.ajax_calls
            ]
            cases.append(
                flow(
                    "AJAX Loading Test",
                    f"Test dynamic content loading via AJAX in the {page_name} SPA",
                    steps,
                )
            )

        if spa.dynamic_events:
            steps = [_step(f"Navigate to {page_name}", f"The {page_name} page should load successfully")]
            steps += [
                _step(
                    f"Trigger the {event.event_type} event by {event.event_name} on {event.trigger_selector}",
                    f"The target element {event.target_selector} should change from "
                    f"{event.initial_state} to {event.final_state}",
                )
                for event in spa.dynamic_events
            ]
            cases.append(
                flow(
                    "Dynamic UI Interaction Test",
                    f"Test dynamic UI elements and interactions in the {page_name} SPA",
                    steps,
                )
            )

        form = next((e for e in elements if e.type == "form"), None)
        if spa.routes and form is not None:
            steps = [_step(f"Navigate to the {form.identifier} form on {page_name}", "The form should be displayed")]
            steps += [
                _step(
                    f"Fill in the {element.attributes.get('name') or element.identifier} field",
                    "Text should be entered in the field",
                )
                for element in elements
                if element.type == "input"
            ]
            steps.append(
                _step(
                    "Click the submit button",
                    "Form should be submitted via AJAX and success message should be displayed",
                )
            )
            cases.append(
                flow(
                    "Form Submission Test",
                    f"Test form submission in the {page_name} SPA",
                    steps,
                    source_name=form.identifier,
                )
            )

        return cases
