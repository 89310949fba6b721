"""Personalized recruiting emails, A/B variations, content analysis and templates."""

import logging

from recruit_ai.core.errors import ExtractionError, IncompleteResponseError
from recruit_ai.models.schemas import (
    AnalysisType,
    CompanyInfo,
    EmailAnalysis,
    EmailDraft,
    EmailMetadata,
    EmailRequest,
    EmailTemplateSet,
    EmailVariation,
    GeneratedEmail,
    Tone,
    VariationType,
)
from recruit_ai.prompts.templates import AuxiliaryTask, Task
from recruit_ai.services.insights import estimated_read_time, word_count
from recruit_ai.services.llm_service import CompletionGateway, build_model, run_task

logger = logging.getLogger(__name__)

EMAIL_REQUIRED_FIELDS = ["subject", "body", "callToAction"]
ANALYSIS_REQUIRED_FIELDS = ["overallScore", "analysis"]
TEMPLATE_REQUIRED_FIELDS = ["subject", "body"]

MAX_VARIATIONS = 5
VARIATION_TONES = [Tone.professional, Tone.friendly, Tone.casual]
VARIATION_APPROACHES = ["direct", "storytelling", "benefit-focused"]
VARIATION_LENGTHS = ["concise (150 words)", "standard (250 words)", "detailed (350 words)"]

DEFAULT_TEMPLATE_TYPES = [
    "initial_outreach",
    "follow_up",
    "interview_invitation",
    "rejection_friendly",
    "offer_letter",
]


def build_email_variables(request: EmailRequest) -> dict[str, str]:
    """Flatten an email request into prompt variables, filling gaps with defaults."""
    candidate = request.candidate_info
    job = request.job_info
    context = request.email_context
    return {
        "candidateName": candidate.name,
        "currentRole": candidate.current_role or "Professional",
        "skills": ", ".join(candidate.skills) or "Various technical skills",
        "experienceLevel": candidate.experience_level or "Experienced",
        "jobTitle": job.title,
        "companyName": job.company_name,
        "jobRequirements": ", ".join(job.requirements) or "Role-specific requirements",
        "jobLocation": job.location or "Various locations",
        "salaryRange": job.salary_range or "Competitive salary",
        "tone": context.tone.value,
        "purpose": context.purpose.value,
        "personalizationLevel": context.personalization_level.value,
    }


async def generate_email(gateway: CompletionGateway, request: EmailRequest) -> GeneratedEmail:
    outcome = await run_task(
        gateway,
        Task.email_generation,
        build_email_variables(request),
        EMAIL_REQUIRED_FIELDS,
        extra_instructions=request.custom_instructions,
    )
    if not outcome.is_complete:
        raise IncompleteResponseError(Task.email_generation.value, outcome.missing)

    draft = build_model(EmailDraft, outcome.payload, Task.email_generation)
    return GeneratedEmail(
        email=draft,
        metadata=EmailMetadata(
            tokens_used=outcome.tokens_used,
            candidate_name=request.candidate_info.name,
            job_title=request.job_info.title,
            company_name=request.job_info.company_name,
            email_context=request.email_context,
            word_count=word_count(draft.body),
            estimated_read_time=estimated_read_time(draft.body),
        ),
    )


def build_variation(
    request: EmailRequest,
    index: int,
    variation_types: list[VariationType],
) -> EmailRequest:
    """Derive the ``index``-th variation of a base request.

    The base request's custom instructions come first; variation
    instructions are appended after them.
    """
    context = request.email_context
    instructions: list[str] = []
    if request.custom_instructions:
        instructions.append(request.custom_instructions)

    if VariationType.tone in variation_types:
        context = context.model_copy(update={"tone": VARIATION_TONES[index % len(VARIATION_TONES)]})
    if VariationType.approach in variation_types:
        approach = VARIATION_APPROACHES[index % len(VARIATION_APPROACHES)]
        instructions.append(f"Use a {approach} approach in the email.")
    if VariationType.length in variation_types:
        length = VARIATION_LENGTHS[index % len(VARIATION_LENGTHS)]
        instructions.append(f"Keep the email {length}.")

    return request.model_copy(update={
        "email_context": context,
        "custom_instructions": " ".join(instructions) or None,
    })


async def generate_email_variations(
    gateway: CompletionGateway,
    request: EmailRequest,
    count: int = 3,
    variation_types: list[VariationType] | None = None,
) -> list[EmailVariation]:
    """Generate up to five differently styled emails for A/B testing.

    Variations whose generation fails are skipped.
    """
    variation_types = variation_types or [VariationType.tone, VariationType.approach]
    count = min(count, MAX_VARIATIONS)

    variations = []
    for i in range(count):
        try:
            email = await generate_email(gateway, build_variation(request, i, variation_types))
        except Exception:
            logger.warning("Email variation %d failed, skipping", i + 1, exc_info=True)
            continue
        variations.append(
            EmailVariation(
                variation_id=i + 1,
                variation_type=variation_types[i % len(variation_types)],
                email=email,
            )
        )
    return variations


async def analyze_email_content(
    gateway: CompletionGateway,
    subject: str,
    body: str,
    analysis_type: AnalysisType = AnalysisType.all,
) -> EmailAnalysis:
    """Score an existing email for engagement, personalization and compliance."""
    if not subject or not body:
        raise ValueError("Email subject and body are required for analysis")

    outcome = await run_task(
        gateway,
        AuxiliaryTask.email_analysis,
        {"subject": subject, "body": body, "analysisType": analysis_type.value},
        ANALYSIS_REQUIRED_FIELDS,
    )
    if not outcome.is_complete:
        raise IncompleteResponseError(AuxiliaryTask.email_analysis.value, outcome.missing)

    return EmailAnalysis(
        analysis=outcome.payload,
        analysis_type=analysis_type,
        tokens_used=outcome.tokens_used,
    )


async def generate_email_templates(
    gateway: CompletionGateway,
    template_types: list[str] | None = None,
    company: CompanyInfo | None = None,
    tone: Tone = Tone.professional,
) -> EmailTemplateSet:
    """Build reusable templates, one completion per template type.

    A type whose answer cannot be decoded or lacks subject/body is logged
    and left out. Provider errors propagate.
    """
    template_types = template_types or list(DEFAULT_TEMPLATE_TYPES)
    company_name = company.name if company else "[Company Name]"
    industry = company.industry if company and company.industry else "[Industry]"

    templates = []
    tokens_used = 0
    for template_type in template_types:
        try:
            outcome = await run_task(
                gateway,
                AuxiliaryTask.email_template,
                {
                    "templateType": template_type,
                    "companyName": company_name,
                    "industry": industry,
                    "tone": tone.value,
                },
                TEMPLATE_REQUIRED_FIELDS,
            )
        except ExtractionError:
            logger.warning("Template %s could not be decoded, skipping", template_type, exc_info=True)
            continue
        tokens_used += outcome.tokens_used
        if not outcome.is_complete:
            logger.warning("Template %s missing %s, skipping", template_type, outcome.missing)
            continue
        templates.append({"type": template_type, **outcome.payload})

    logger.info("Generated %d of %d email templates", len(templates), len(template_types))
    return EmailTemplateSet(
        templates=templates,
        requested=template_types,
        company_info=company,
        tokens_used=tokens_used,
    )
