from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from testgen.core.config import Settings, get_settings
from testgen.providers.base import StepSuggester
from testgen.providers.factory import get_suggester
from testgen.schemas.testcase import CoverageReport, Element, Endpoint, Focus, TestCase
from testgen.services.collection_analyzer import CollectionAnalyzer
from testgen.services.coverage import analyze_coverage
from testgen.services.enhancement import EnhancementPipeline
from testgen.services.generator import TestCaseGenerator
from testgen.services.page_analyzer import PageAnalyzer
from testgen.services.scenarios import ScenarioGenerator


logger = logging.getLogger(__name__)

CollectionInput = Union[str, dict]


@dataclass
class GenerationResult:
    entities: List[Union[Endpoint, Element]] = field(default_factory=list)
    test_cases: List[TestCase] = field(default_factory=list)


class TestGenService:
    """
    Application service running analysis, generation and enhancement.

    Settings are read once here and handed to the pipeline components as
    constructor arguments. The service holds no per-request state, so a
    single instance can serve concurrent requests.
    """

    __test__ = False

    def __init__(
        self,
        settings: Optional[Settings] = None,
        suggester: Optional[StepSuggester] = None,
        generator: Optional[TestCaseGenerator] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._collection_analyzer = CollectionAnalyzer()
        self._page_analyzer = PageAnalyzer(spa_keywords=self._settings.spa_keywords)
        self._generator = generator or TestCaseGenerator()
        self._scenarios = ScenarioGenerator()
        self._pipeline = EnhancementPipeline(
            suggester=suggester or get_suggester(self._settings.default_suggester)
        )

    @property
    def ai_enhancement_enabled(self) -> bool:
        return self._settings.ai_enhancement_enabled

    def analyze_collection(self, collection: Optional[CollectionInput]) -> List[Endpoint]:
        if isinstance(collection, dict):
            return self._collection_analyzer.analyze_data(collection)
        return self._collection_analyzer.analyze(collection)

    def from_collection(
        self,
        collection: Optional[CollectionInput],
        focus: Optional[Focus] = None,
        derive: bool = False,
        include_scenarios: bool = False,
    ) -> GenerationResult:
        endpoints = self.analyze_collection(collection)
        test_cases = self._generator.generate(endpoints)
        if include_scenarios:
            test_cases += self._scenarios.collection_scenarios(endpoints)
        test_cases = self._post_process(test_cases, focus, derive)
        logger.info(
            "Generated %s test cases from %s endpoints (focus=%s, derive=%s)",
            len(test_cases),
            len(endpoints),
            focus.value if focus else None,
            derive,
        )
        return GenerationResult(entities=list(endpoints), test_cases=test_cases)

    def from_page(
        self,
        page: Optional[str],
        page_name: Optional[str] = None,
        focus: Optional[Focus] = None,
        derive: bool = False,
        include_scenarios: bool = False,
    ) -> GenerationResult:
        elements = self._page_analyzer.analyze(page)
        page_name = page_name or self._settings.default_page_name
        test_cases = self._generator.generate_for_elements(elements, page_name=page_name, page_url=page)
        if include_scenarios:
            spa = self._page_analyzer.analyze_spa(page)
            test_cases += self._scenarios.page_scenarios(elements, spa, page_name, page_url=page)
        test_cases = self._post_process(test_cases, focus, derive)
        logger.info(
            "Generated %s test cases for page %s (focus=%s, derive=%s)",
            len(test_cases),
            page,
            focus.value if focus else None,
            derive,
        )
        return GenerationResult(entities=list(elements), test_cases=test_cases)

    def collection_coverage(
        self,
        collection: Optional[CollectionInput],
        include_scenarios: bool = False,
    ) -> CoverageReport:
        result = self.from_collection(collection, include_scenarios=include_scenarios)
        return analyze_coverage(result.entities, result.test_cases)

    def page_coverage(
        self,
        page: Optional[str],
        page_name: Optional[str] = None,
        include_scenarios: bool = False,
    ) -> CoverageReport:
        result = self.from_page(page, page_name=page_name, include_scenarios=include_scenarios)
        return analyze_coverage(result.entities, result.test_cases)

    def enhance(self, test_cases: Sequence[TestCase], focus: Focus) -> List[TestCase]:
        return self._pipeline.enhance(test_cases, focus)

    def _post_process(
        self,
        test_cases: List[TestCase],
        focus: Optional[Focus],
        derive: bool,
    ) -> List[TestCase]:
        if self.ai_enhancement_enabled:
            test_cases = self._pipeline.enhance(test_cases, Focus.GENERAL)
            if focus is not None and Focus(focus) is Focus.GENERAL:
                return test_cases
        if focus is None:
            return test_cases
        if derive:
            return test_cases + self._pipeline.derive(test_cases, focus)
        return self._pipeline.enhance(test_cases, focus)

