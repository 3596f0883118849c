from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from testgen.core.exceptions import InvalidInputError
from testgen.schemas.testcase import AjaxCall, DynamicEvent, Element, RouteChange, SpaAnalysis


logger = logging.getLogger(__name__)

DEFAULT_SPA_KEYWORDS: tuple[str, ...] = ("spa", "app", "angular", "react", "vue")


def _require_page(page: Optional[str]) -> None:
    if page is None or not page.strip():
        raise InvalidInputError("Page identifier cannot be null or empty")


def _static_page_elements() -> List[Element]:
    return [
        Element(type="form", identifier="login-form", attributes={"action": "/login", "method": "POST"}),
        Element(type="input", identifier="username", attributes={"name": "username", "type": "text"}),
        Element(type="input", identifier="password", attributes={"name": "password", "type": "password"}),
        Element(type="button", identifier="login-button", text="Login", attributes={"type": "submit"}),
    ]


def _spa_elements() -> List[Element]:
    return [
        Element(type="link", identifier="nav-home", text="Home", attributes={"href": "#/"}),
        Element(type="link", identifier="nav-products", text="Products", attributes={"href": "#/products"}),
        Element(type="link", identifier="nav-contact", text="Contact", attributes={"href": "#/contact"}),
        Element(type="form", identifier="contact-form", attributes={"action": "/api/contact", "method": "POST"}),
        Element(
            type="input",
            identifier="contact-name",
            attributes={"name": "name", "type": "text", "placeholder": "Your name", "required": "true"},
        ),
        Element(
            type="input",
            identifier="contact-email",
            attributes={"name": "email", "type": "email", "placeholder": "Your email", "required": "true"},
        ),
        Element(type="button", identifier="contact-submit", text="Send", attributes={"type": "submit"}),
    ]


def _spa_routes() -> List[RouteChange]:
    return [
        RouteChange(route_name="Home", server_path="/", client_path="#/", trigger_selector="#nav-home"),
        RouteChange(
            route_name="Products",
            server_path="/products",
            client_path="#/products",
            trigger_selector="#nav-products",
        ),
        RouteChange(
            route_name="Contact",
            server_path="/contact",
            client_path="#/contact",
            trigger_selector="#nav-contact",
        ),
        RouteChange(
            route_name="Product Detail",
            server_path="/products/:id",
            client_path="#/products/1",
            trigger_selector="#product-1",
        ),
    ]


def _spa_ajax_calls() -> List[AjaxCall]:
    json_headers = {"Content-Type": "application/json"}
    return [
        AjaxCall(url="/api/products", method="GET", trigger="route:products", headers=json_headers),
        AjaxCall(url="/api/products/{id}", method="GET", trigger="click:#product-item", headers=json_headers),
        AjaxCall(
            url="/api/contact",
            method="POST",
            trigger="submit:#contact-form",
            headers=json_headers,
            request_body='{"name":"value","email":"value","message":"value"}',
            success_status_code=201,
        ),
    ]


def _spa_dynamic_events() -> List[DynamicEvent]:
    return [
        DynamicEvent(event_type="modal", trigger_selector="#show-modal-button", target_selector="#modal-dialog"),
        DynamicEvent(event_type="dropdown", trigger_selector="#user-menu-button", target_selector="#user-dropdown"),
        DynamicEvent(
            event_type="loading",
            trigger_selector="#load-more-button",
            target_selector="#loading-spinner",
            timeout_ms=3000,
        ),
        DynamicEvent(
            event_type="tab",
            trigger_selector=".tab-button",
            target_selector=".tab-content",
            depends_on_attribute="data-tab-id",
        ),
        DynamicEvent(
            event_type="validation",
            trigger_selector="input, textarea",
            target_selector=".validation-message",
            event_name="blur",
        ),
    ]


class PageAnalyzer:
    """
    Deterministic stand-in for web page analysis.

    No page is fetched: the identifier only decides whether the page is
    treated as a single page application, which selects the element set.
    """

    def __init__(self, spa_keywords: Optional[Sequence[str]] = None) -> None:
        keywords = spa_keywords if spa_keywords is not None else DEFAULT_SPA_KEYWORDS
        self._spa_keywords = tuple(k.lower() for k in keywords if k)

    def is_spa(self, page: str) -> bool:
        lowered = page.lower()
        return any(keyword in lowered for keyword in self._spa_keywords)

    def analyze(self, page: Optional[str]) -> List[Element]:
        _require_page(page)

        spa = self.is_spa(page)
        logger.info("Analyzing page %s (spa=%s)", page, spa)
        elements = _spa_elements() if spa else _static_page_elements()
        logger.debug("Page %s yielded %s elements", page, len(elements))
        return elements

    def detect_routes(self, page: Optional[str]) -> List[RouteChange]:
        _require_page(page)
        return _spa_routes()

    def capture_ajax_calls(self, page: Optional[str]) -> List[AjaxCall]:
        _require_page(page)
        return _spa_ajax_calls()

    def detect_dynamic_events(self, page: Optional[str]) -> List[DynamicEvent]:
        _require_page(page)
        return _spa_dynamic_events()

    def analyze_spa(self, page: Optional[str]) -> SpaAnalysis:
        """
        Routes, background requests and dynamic UI events of a single page app.

        Pages that are not single page applications have none of these, so
        the result is empty for them.
        """
        _require_page(page)
        if not self.is_spa(page):
            return SpaAnalysis()
        analysis = SpaAnalysis(
            routes=self.detect_routes(page),
            ajax_calls=self.capture_ajax_calls(page),
            dynamic_events=self.detect_dynamic_events(page),
        )
        logger.debug(
            "SPA %s: %s routes, %s ajax calls, %s dynamic events",
            page,
            len(analysis.routes),
            len(analysis.ajax_calls),
            len(analysis.dynamic_events),
        )
        return analysis
