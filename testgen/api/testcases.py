from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from testgen.schemas.testcase import (
    CollectionCoverageRequest,
    CollectionGenerationRequest,
    CoverageReport,
    CoverageResponse,
    PageCoverageRequest,
    PageGenerationRequest,
    TestCase,
    TestCaseListResponse,
)
from testgen.services.coverage import format_coverage_summary
from testgen.services.testgen_service import TestGenService
from testgen.utils.excel_exporter import export_filename, test_cases_to_excel


router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# The service keeps no per-request state, so one instance serves every request.
_service: TestGenService | None = None


def get_service() -> TestGenService:
    global _service
    if _service is None:
        _service = TestGenService()
    return _service


def _list_or_excel(
    cases: List[TestCase],
    generate_excel: bool,
    source_name: Optional[str],
) -> TestCaseListResponse | FileResponse:
    if generate_excel:
        excel_path = test_cases_to_excel(cases)
        return FileResponse(
            excel_path,
            media_type=XLSX_MEDIA_TYPE,
            filename=export_filename(source_name),
        )
    return TestCaseListResponse(items=cases, total=len(cases))


def _coverage_response(report: CoverageReport) -> CoverageResponse:
    return CoverageResponse(
        report=report,
        coverage_ratio=report.coverage_ratio,
        summary=format_coverage_summary(report),
    )


@router.get(
    "/export-filename",
    summary="Get a unique OS-safe filename for exporting test cases",
)
async def get_export_filename_route(source_name: str | None = None) -> dict:
    return {"filename": export_filename(source_name)}


@router.post(
    "/from-collection",
    response_model=TestCaseListResponse,
    summary="Generate API test cases from a Postman collection",
)
async def generate_from_collection(
    payload: CollectionGenerationRequest,
    generate_excel: bool = False,
    service: TestGenService = Depends(get_service),
) -> TestCaseListResponse | FileResponse:
    """
    Analyze the collection, generate one test case per request and, when a
    focus is given, append (or derive) focus-specific test steps.
    """
    result = service.from_collection(
        payload.collection,
        focus=payload.focus,
        derive=payload.derive,
        include_scenarios=payload.include_scenarios,
    )
    collection_name = result.entities[0].collection_name if result.entities else None
    return _list_or_excel(result.test_cases, generate_excel, collection_name)


@router.post(
    "/from-page",
    response_model=TestCaseListResponse,
    summary="Generate UI test cases for a web page",
)
async def generate_from_page(
    payload: PageGenerationRequest,
    generate_excel: bool = False,
    service: TestGenService = Depends(get_service),
) -> TestCaseListResponse | FileResponse:
    result = service.from_page(
        payload.page,
        page_name=payload.page_name,
        focus=payload.focus,
        derive=payload.derive,
        include_scenarios=payload.include_scenarios,
    )
    return _list_or_excel(result.test_cases, generate_excel, payload.page_name or payload.page)


@router.post(
    "/coverage/collection",
    response_model=CoverageResponse,
    summary="Report test coverage for a Postman collection",
)
async def collection_coverage(
    payload: CollectionCoverageRequest,
    service: TestGenService = Depends(get_service),
) -> CoverageResponse:
    report = service.collection_coverage(payload.collection, include_scenarios=payload.include_scenarios)
    return _coverage_response(report)


@router.post(
    "/coverage/page",
    response_model=CoverageResponse,
    summary="Report test coverage for a web page",
)
async def page_coverage(
    payload: PageCoverageRequest,
    service: TestGenService = Depends(get_service),
) -> CoverageResponse:
    report = service.page_coverage(
        payload.page,
        page_name=payload.page_name,
        include_scenarios=payload.include_scenarios,
    )
    return _coverage_response(report)
