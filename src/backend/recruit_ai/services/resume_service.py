"""Resume extraction: single resume and bounded-concurrency batches."""

import asyncio
import logging
from uuid import uuid4

from recruit_ai.core.errors import IncompleteResponseError
from recruit_ai.models.schemas import (
    BatchExtractionSummary,
    BatchItemResult,
    BatchResumeItem,
    ResumeExtraction,
)
from recruit_ai.prompts.templates import Task
from recruit_ai.services.insights import enhance_extracted_data
from recruit_ai.services.llm_service import CompletionGateway, run_task

logger = logging.getLogger(__name__)

RESUME_REQUIRED_FIELDS = ["personalInfo", "skills", "experience", "education"]


async def extract_resume_data(
    gateway: CompletionGateway,
    resume_text: str,
    include_skills_analysis: bool = False,
) -> ResumeExtraction:
    """Parse raw resume text into structured data and add derived insights.

    Raises ValueError on empty input, ExtractionError on unparsable output
    and IncompleteResponseError if a required section is missing.
    """
    if not resume_text or not resume_text.strip():
        raise ValueError("No resume text available for extraction")

    outcome = await run_task(
        gateway,
        Task.resume_extraction,
        {"resumeText": resume_text},
        RESUME_REQUIRED_FIELDS,
    )
    if not outcome.is_complete:
        raise IncompleteResponseError(Task.resume_extraction.value, outcome.missing)

    return ResumeExtraction(
        extracted_data=enhance_extracted_data(outcome.payload, include_skills_analysis),
        tokens_used=outcome.tokens_used,
    )


async def batch_extract_resumes(
    gateway: CompletionGateway,
    items: list[BatchResumeItem],
    max_concurrent: int = 3,
    include_skills_analysis: bool = False,
) -> BatchExtractionSummary:
    """Extract many resumes, at most ``max_concurrent`` gateway calls in flight.

    A failing resume is recorded in its result entry; the batch carries on.
    """
    if not items:
        raise ValueError("Resumes list is required and cannot be empty")
    if max_concurrent < 1:
        raise ValueError(f"max_concurrent must be at least 1, got {max_concurrent}")

    semaphore = asyncio.Semaphore(max_concurrent)
    batch_id = f"batch_{uuid4().hex[:12]}"
    logger.info("Batch %s: processing %d resumes, max concurrency %d", batch_id, len(items), max_concurrent)

    async def _extract_one(item: BatchResumeItem) -> BatchItemResult:
        async with semaphore:
            try:
                extraction = await extract_resume_data(
                    gateway, item.resume_text, include_skills_analysis
                )
            except Exception as exc:
                logger.exception("Batch %s: extraction failed for %s", batch_id, item.candidate_id)
                return BatchItemResult(candidate_id=item.candidate_id, success=False, error=str(exc))
            return BatchItemResult(
                candidate_id=item.candidate_id,
                success=True,
                data=extraction.extracted_data,
            )

    results = await asyncio.gather(*(_extract_one(item) for item in items))

    successful = sum(1 for r in results if r.success)
    failed = len(results) - successful
    logger.info("Batch %s completed: %d successful, %d failed", batch_id, successful, failed)

    return BatchExtractionSummary(
        batch_id=batch_id,
        total=len(items),
        successful=successful,
        failed=failed,
        success_rate=round(successful / len(items) * 100),
        results=list(results),
    )
