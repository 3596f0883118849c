import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator

logger = logging.getLogger(__name__)


class TestType(str, Enum):
    __test__ = False

    API = "API"
    UI = "UI"
    SECURITY = "SECURITY"
    ACCESSIBILITY = "ACCESSIBILITY"
    PERFORMANCE = "PERFORMANCE"


class Focus(str, Enum):
    """Enhancement category controlling which extra steps are appended."""

    SECURITY = "security"
    ACCESSIBILITY = "accessibility"
    PERFORMANCE = "performance"
    GENERAL = "general"


class ExampleResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "Example Response"
    code: int = 200
    body: str = ""


class Endpoint(BaseModel):
    """
    One HTTP operation parsed from an API collection.

    Only ``name``, ``url`` and ``method`` drive generation; the remaining
    fields keep what the collection said about the request so downstream
    emitters can build real requests from it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    method: str = "GET"

    path: str = ""
    host: str = ""
    query_params: Dict[str, str] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    request_body: str = ""
    request_body_type: str = ""
    form_data: Dict[str, str] = Field(default_factory=dict)
    folder_path: str = ""
    collection_name: str = ""
    description: str = ""
    example_responses: List[ExampleResponse] = Field(default_factory=list)
    test_script: str = ""

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper() or "GET"
        return value


class Element(BaseModel):
    """One interactive item on a web page."""

    model_config = ConfigDict(frozen=True)

    type: str
    identifier: str
    text: str = ""
    attributes: Dict[str, str] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def label(self) -> str:
        return self.text or self.identifier


class RouteChange(BaseModel):
    """Client-side route of a single page application."""

    model_config = ConfigDict(frozen=True)

    route_name: str
    server_path: str
    client_path: str
    trigger_selector: str
    requires_authentication: bool = False


class AjaxCall(BaseModel):
    """Background request a single page application issues after a trigger."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: str = "GET"
    trigger: str
    headers: Dict[str, str] = Field(default_factory=dict)
    request_body: str = ""
    success_status_code: int = 200
    response_type: str = "application/json"


class DynamicEvent(BaseModel):
    """UI change (modal, dropdown, spinner...) caused by an interaction."""

    model_config = ConfigDict(frozen=True)

    event_type: str
    trigger_selector: str
    target_selector: str
    event_name: str = "click"
    initial_state: str = "hidden"
    final_state: str = "visible"
    depends_on_attribute: Optional[str] = None
    timeout_ms: int = 0


class SpaAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    routes: List[RouteChange] = Field(default_factory=list)
    ajax_calls: List[AjaxCall] = Field(default_factory=list)
    dynamic_events: List[DynamicEvent] = Field(default_factory=list)


class TestStep(BaseModel):
    __test__ = False

    model_config = ConfigDict(frozen=True)

    action: constr(min_length=1)
    expected_result: constr(min_length=1)


class TestCase(BaseModel):
    """
    Canonical test case produced by the generator.

    Cases are immutable once built. ``with_steps`` returns a new case with
    the given steps appended; existing steps are never reordered, so
    insertion order is execution order.
    ``source_name`` is the endpoint name or element identifier the case
    was generated for and is what coverage analysis matches on.
    ``edge_case`` marks cases probing boundary or invalid input.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True)

    name: constr(min_length=1)
    description: str = ""
    type: TestType
    steps: Tuple[TestStep, ...] = ()
    source_name: Optional[str] = None
    url: Optional[str] = None
    edge_case: bool = False

    def with_steps(self, steps: Sequence[TestStep]) -> "TestCase":
        return self.model_copy(update={"steps": self.steps + tuple(steps)})


# --- Request / response schemas for the HTTP surface ---


class CollectionGenerationRequest(BaseModel):
    collection: Union[constr(min_length=1), Dict[str, Any]] = Field(
        ...,
        description="Postman v2 collection, either as JSON text or as an object.",
    )
    focus: Optional[Focus] = Field(
        default=None,
        description="Optional enhancement focus applied after generation.",
    )
    derive: bool = Field(
        default=False,
        description="Emit separate focus-typed test cases instead of appending steps.",
    )
    include_scenarios: bool = Field(
        default=False,
        description="Also emit the authentication case and per-endpoint edge cases.",
    )


class PageGenerationRequest(BaseModel):
    page: constr(min_length=1) = Field(
        ...,
        description="Page URL or identifier to analyze.",
    )
    page_name: Optional[constr(min_length=1)] = Field(
        default=None,
        description="Human readable page name used in descriptions.",
    )
    focus: Optional[Focus] = None
    derive: bool = False
    include_scenarios: bool = Field(
        default=False,
        description="Also emit per-element edge cases and, for single page apps, flow cases.",
    )


class CollectionCoverageRequest(BaseModel):
    collection: Union[constr(min_length=1), Dict[str, Any]]
    include_scenarios: bool = False


class PageCoverageRequest(BaseModel):
    page: constr(min_length=1)
    page_name: Optional[constr(min_length=1)] = None
    include_scenarios: bool = False


class TestCaseListResponse(BaseModel):
    items: List[TestCase]
    total: int


class CoverageGap(BaseModel):
    model_config = ConfigDict(frozen=True)

    entity_name: str
    missing_aspect: str


class CoverageReport(BaseModel):
    """Structured result of comparing analyzed entities with generated cases."""

    model_config = ConfigDict(frozen=True)

    total_entities: int
    covered_entities: int
    gaps: List[CoverageGap] = Field(default_factory=list)
    type_counts: Dict[TestType, int] = Field(default_factory=dict)
    edge_case_count: int = 0

    @property
    def coverage_ratio(self) -> float:
        if self.total_entities == 0:
            return 1.0
        return self.covered_entities / self.total_entities


class CoverageResponse(BaseModel):
    report: CoverageReport
    coverage_ratio: float
    summary: str
