"""Candidate to job compatibility scoring."""

import logging

from recruit_ai.core.errors import IncompleteResponseError
from recruit_ai.models.schemas import MatchResult
from recruit_ai.prompts.templates import Task
from recruit_ai.services.llm_service import CompletionGateway, build_model, run_task

logger = logging.getLogger(__name__)

MATCH_REQUIRED_FIELDS = ["overallMatchScore", "matchAnalysis"]


async def match_candidate(
    gateway: CompletionGateway,
    candidate_profile: str,
    job_requirements: str,
) -> MatchResult:
    """Score how well a candidate profile fits a set of job requirements.

    Both inputs are free text; callers flatten structured profiles first.
    """
    outcome = await run_task(
        gateway,
        Task.job_matching,
        {"candidateProfile": candidate_profile, "jobRequirements": job_requirements},
        MATCH_REQUIRED_FIELDS,
    )
    if not outcome.is_complete:
        raise IncompleteResponseError(Task.job_matching.value, outcome.missing)

    score = outcome.payload["overallMatchScore"]
    logger.info("Match score %s (model %s)", score, outcome.model)
    return build_model(
        MatchResult,
        {
            "overall_match_score": score,
            "analysis": outcome.payload,
            "tokens_used": outcome.tokens_used,
        },
        Task.job_matching,
    )
