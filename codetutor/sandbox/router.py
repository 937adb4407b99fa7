import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from codetutor.ai.service import AIService, get_ai_service
from codetutor.config import get_settings
from codetutor.exceptions import ResourceNotFoundError
from codetutor.middleware.security import ai_route_limit, api_route_limit, code_run_route_limit
from codetutor.storage import AbstractStorage, get_storage

from .grader import all_tests_passed, format_results, run_tests
from .models import TestCase
from .parser import parse_tests
from .runner import run_code
from .schemas import (
    CodeAnalysisResponse,
    CodeExplainRequest,
    CodeExplanationResponse,
    CodeHelpRequest,
    CodeRunRequest,
    CodeRunResponse,
    GenerateTestsRequest,
    ParseTestsRequest,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/code", tags=["code"])

StorageDep = Annotated[AbstractStorage, Depends(get_storage)]
AIServiceDep = Annotated[AIService, Depends(get_ai_service)]


async def _resolve_tests(request: CodeRunRequest, storage: AbstractStorage) -> list[TestCase]:
    if request.tests is not None:
        return request.tests
    if request.test_definitions is not None:
        return parse_tests(request.test_definitions)
    if request.slide_id is not None:
        slide = await storage.get_slide(request.slide_id)
        if slide is None:
            raise ResourceNotFoundError("Slide", request.slide_id)
        return slide.tests
    return []


def _run_and_grade(code: str, tests: list[TestCase], timeout: float) -> CodeRunResponse:
    run = run_code(code, timeout=timeout)
    if not tests:
        return CodeRunResponse(output=run.output, error=run.error)

    results = run_tests(code, tests, run.output, timeout=timeout)
    return CodeRunResponse(
        output=run.output,
        error=run.error,
        results=results,
        all_passed=all_tests_passed(results),
        summary=format_results(results),
    )


@router.post("/run", dependencies=[Depends(code_run_route_limit)])
async def run_code_endpoint(request: CodeRunRequest, storage: StorageDep) -> CodeRunResponse:
    """Run learner code and grade it against the selected tests."""
    tests = await _resolve_tests(request, storage)
    timeout = get_settings().CODE_RUN_TIMEOUT_SECONDS

    response = await run_in_threadpool(_run_and_grade, request.code, tests, timeout)

    logger.info(
        "Code run finished",
        extra={
            "slide_id": request.slide_id,
            "tests": len(tests),
            "passed": sum(result.passed for result in response.results),
            "runtime_error": response.error is not None,
        },
    )
    return response


@router.post("/tests/parse", dependencies=[Depends(api_route_limit)])
async def parse_tests_endpoint(request: ParseTestsRequest) -> list[TestCase]:
    """Parse pipe-delimited test definitions into test cases."""
    return parse_tests(request.definitions)


# Code help (AI-powered)


@router.post("/analyze", dependencies=[Depends(ai_route_limit)])
async def analyze_code_endpoint(request: CodeHelpRequest, ai_service: AIServiceDep) -> CodeAnalysisResponse:
    """Review code for errors, style and possible improvements."""
    analysis = await ai_service.analyze_code(request.code, request.language)
    return CodeAnalysisResponse(analysis=analysis)


@router.post("/explain", dependencies=[Depends(ai_route_limit)])
async def explain_code_endpoint(request: CodeExplainRequest, ai_service: AIServiceDep) -> CodeExplanationResponse:
    """Explain code line by line for the given audience level."""
    explanation = await ai_service.explain_code(request.code, request.language, request.audience)
    return CodeExplanationResponse(explanation=explanation)


@router.post("/tests/generate", dependencies=[Depends(ai_route_limit)])
async def generate_tests_endpoint(request: GenerateTestsRequest, ai_service: AIServiceDep) -> list[TestCase]:
    """Write tests for a challenge; ids are numbered test-1, test-2, ..."""
    tests = await ai_service.generate_tests(request.description, request.language, request.sample_code)
    logger.info("Generated %d tests", len(tests), extra={"language": request.language})
    return tests
