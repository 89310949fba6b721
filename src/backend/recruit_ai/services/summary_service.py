"""Experience summarization, career advice and candidate comparison."""

import json
import logging
from typing import Any

from recruit_ai.core.errors import IncompleteResponseError
from recruit_ai.models.schemas import (
    CandidateComparison,
    CareerAdvice,
    CareerGoals,
    ComparedCandidate,
    CurrentSituation,
    ExperienceData,
    ExperienceSummary,
    JobRequirements,
    SummaryOptions,
)
from recruit_ai.prompts.templates import AuxiliaryTask, Task
from recruit_ai.services import insights
from recruit_ai.services.llm_service import CompletionGateway, run_task

logger = logging.getLogger(__name__)

SUMMARY_REQUIRED_FIELDS = [
    "professionalSummary",
    "keyHighlights",
    "skillsAssessment",
    "careerProgression",
]
CAREER_ADVICE_REQUIRED_FIELDS = ["careerAssessment", "recommendations", "skillDevelopment"]
COMPARISON_REQUIRED_FIELDS = ["overallRanking", "recommendations"]

DEFAULT_COMPARISON_CRITERIA = "Skills, Experience, Education, Cultural Fit"


def enhance_summary_data(
    summary: dict[str, Any],
    experience: ExperienceData,
    options: SummaryOptions,
) -> dict[str, Any]:
    enhanced = dict(summary)
    if options.include_skills_assessment:
        enhanced["marketAnalysis"] = insights.analyze_market_position(experience.skills)
    if options.target_role:
        enhanced["roleSuitability"] = insights.assess_role_suitability(
            experience.skills, options.target_role
        )
    if options.focus_areas:
        enhanced["focusAreaAnalysis"] = insights.analyze_focus_areas(
            experience.work_history, options.focus_areas
        )
    return enhanced


async def summarize_experience(
    gateway: CompletionGateway,
    experience: ExperienceData,
    options: SummaryOptions | None = None,
) -> ExperienceSummary:
    options = options or SummaryOptions()
    experience_json = json.dumps(experience.model_dump(by_alias=True), indent=2)

    outcome = await run_task(
        gateway,
        Task.experience_summarization,
        {"experienceData": experience_json},
        SUMMARY_REQUIRED_FIELDS,
    )
    if not outcome.is_complete:
        raise IncompleteResponseError(Task.experience_summarization.value, outcome.missing)

    return ExperienceSummary(
        summary=enhance_summary_data(outcome.payload, experience, options),
        tokens_used=outcome.tokens_used,
        data_points={
            "workExperience": len(experience.work_history),
            "education": len(experience.education),
            "skills": len(experience.skills),
            "projects": len(experience.projects),
            "certifications": len(experience.certifications),
        },
    )


def _to_json(model) -> str:
    if model is None:
        return "{}"
    return json.dumps(model.model_dump(by_alias=True, exclude_none=True), indent=2)


async def generate_career_advice(
    gateway: CompletionGateway,
    experience: ExperienceData,
    career_goals: CareerGoals | None = None,
    current_situation: CurrentSituation | None = None,
) -> CareerAdvice:
    outcome = await run_task(
        gateway,
        AuxiliaryTask.career_advice,
        {
            "experienceData": _to_json(experience),
            "careerGoals": _to_json(career_goals),
            "currentSituation": _to_json(current_situation),
        },
        CAREER_ADVICE_REQUIRED_FIELDS,
    )
    if not outcome.is_complete:
        raise IncompleteResponseError(AuxiliaryTask.career_advice.value, outcome.missing)

    return CareerAdvice(advice=outcome.payload, tokens_used=outcome.tokens_used)


async def compare_candidates(
    gateway: CompletionGateway,
    candidates: list[ComparedCandidate],
    job_requirements: JobRequirements | None = None,
    criteria: list[str] | None = None,
) -> CandidateComparison:
    """Rank two or more candidates against each other.

    With no job requirements the model compares on general strength.
    """
    if len(candidates) < 2:
        raise ValueError("At least 2 candidates are required for comparison")

    candidates_json = json.dumps(
        [c.model_dump(by_alias=True, exclude_none=True) for c in candidates], indent=2
    )
    logger.info("Comparing %d candidates", len(candidates))
    outcome = await run_task(
        gateway,
        AuxiliaryTask.candidate_comparison,
        {
            "jobRequirements": _to_json(job_requirements),
            "candidates": candidates_json,
            "comparisonCriteria": ", ".join(criteria) if criteria else DEFAULT_COMPARISON_CRITERIA,
        },
        COMPARISON_REQUIRED_FIELDS,
    )
    if not outcome.is_complete:
        raise IncompleteResponseError(AuxiliaryTask.candidate_comparison.value, outcome.missing)

    return CandidateComparison(
        comparison=outcome.payload,
        candidate_count=len(candidates),
        job_title=job_requirements.title if job_requirements else None,
        tokens_used=outcome.tokens_used,
    )
