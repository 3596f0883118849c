from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Union

from testgen.schemas.testcase import (
    CoverageGap,
    CoverageReport,
    Element,
    Endpoint,
    TestCase,
    TestType,
)


logger = logging.getLogger(__name__)

FUNCTIONAL_ASPECT = "functional"

Entity = Union[Endpoint, Element]


def entity_name(entity: Entity) -> str:
    if isinstance(entity, Endpoint):
        return entity.name
    return entity.identifier


def analyze_coverage(
    entities: Sequence[Entity],
    test_cases: Sequence[TestCase],
) -> CoverageReport:
    """
    Compare analyzed entities with the test cases generated for them.

    An entity is covered when at least one test case references its name
    through ``source_name``. Gaps keep the entity input order.
    """
    referenced = {tc.source_name for tc in test_cases if tc.source_name}

    gaps: List[CoverageGap] = []
    covered = 0
    for entity in entities:
        name = entity_name(entity)
        if name in referenced:
            covered += 1
        else:
            gaps.append(CoverageGap(entity_name=name, missing_aspect=FUNCTIONAL_ASPECT))

    type_counts: Dict[TestType, int] = {}
    for tc in test_cases:
        type_counts[tc.type] = type_counts.get(tc.type, 0) + 1

    edge_case_count = sum(1 for tc in test_cases if tc.edge_case)

    logger.debug(
        "Coverage: %s/%s entities covered, %s gaps",
        covered,
        len(entities),
        len(gaps),
    )
    return CoverageReport(
        total_entities=len(entities),
        covered_entities=covered,
        gaps=gaps,
        type_counts=type_counts,
        edge_case_count=edge_case_count,
    )


def format_coverage_summary(report: CoverageReport) -> str:
    """Render a coverage report as plain text for console or API consumers."""
    lines: List[str] = ["Functional Coverage Analysis:"]
    lines.append(
        f"- Entities covered: {report.covered_entities}/{report.total_entities} "
        f"({report.coverage_ratio:.0%})"
    )
    for test_type in TestType:
        count = report.type_counts.get(test_type, 0)
        if count:
            lines.append(f"- {test_type.value}: {count} test cases")

    lines.append("")
    lines.append("Edge Case Coverage Analysis:")
    lines.append(f"- Edge cases: {report.edge_case_count} test cases")
    if report.type_counts.get(TestType.UI):
        lines.append("")
        lines.append("Accessibility Coverage Analysis:")
        accessibility = report.type_counts.get(TestType.ACCESSIBILITY, 0)
        lines.append(f"- Accessibility tests: {accessibility} test cases")

    if report.gaps:
        lines.append("")
        lines.append("Coverage Gaps:")
        for gap in report.gaps:
            lines.append(f"- {gap.entity_name}: missing {gap.missing_aspect} test case")

    recommendations: List[str] = []
    if report.gaps:
        recommendations.append("Generate test cases for uncovered entities")
    if report.total_entities and not report.edge_case_count:
        recommendations.append("Increase edge case coverage")
    if not report.type_counts.get(TestType.SECURITY):
        recommendations.append("Increase security test coverage")
    if report.type_counts.get(TestType.UI) and not report.type_counts.get(TestType.ACCESSIBILITY):
        recommendations.append("Increase accessibility test coverage")
    if not report.type_counts.get(TestType.PERFORMANCE):
        recommendations.append("Increase performance test coverage")

    if recommendations:
        lines.append("")
        lines.append("Recommendations:")
        lines.extend(f"- {item}" for item in recommendations)
    return "\n".join(lines)
