"""Pydantic schemas for service inputs and results."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# --- Enums ---

class Tone(str, Enum):
    professional = "professional"
    friendly = "friendly"
    casual = "casual"


class EmailPurpose(str, Enum):
    initial_outreach = "initial_outreach"
    follow_up = "follow_up"
    interview_invitation = "interview_invitation"
    offer_letter = "offer_letter"


class PersonalizationLevel(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class VariationType(str, Enum):
    tone = "tone"
    length = "length"
    approach = "approach"


class AnalysisType(str, Enum):
    engagement = "engagement"
    personalization = "personalization"
    compliance = "compliance"
    all = "all"


# --- Resume extraction ---

class ResumeExtraction(BaseModel):
    extracted_data: dict[str, Any]
    tokens_used: int
    extracted_at: datetime = Field(default_factory=_utcnow)


class BatchResumeItem(BaseModel):
    candidate_id: str = Field(min_length=1, examples=["cand-001"])
    resume_text: str = Field(min_length=1)


class BatchItemResult(BaseModel):
    candidate_id: str
    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None


class BatchExtractionSummary(BaseModel):
    batch_id: str
    total: int
    successful: int
    failed: int
    success_rate: int
    results: list[BatchItemResult]
    completed_at: datetime = Field(default_factory=_utcnow)


# --- Email generation ---

class CandidateInfo(BaseModel):
    name: str = Field(min_length=1, examples=["John Doe"])
    current_role: str | None = Field(default=None, examples=["Software Developer"])
    skills: list[str] = Field(default_factory=list, examples=[["JavaScript", "React"]])
    experience_level: str | None = Field(default=None, examples=["Senior"])
    location: str | None = None


class JobInfo(BaseModel):
    title: str = Field(min_length=1, examples=["Senior Full Stack Developer"])
    company_name: str = Field(min_length=1, examples=["Tech Corp"])
    requirements: list[str] = Field(default_factory=list)
    location: str | None = None
    salary_range: str | None = Field(default=None, examples=["$120k-150k"])
    description: str | None = None


class EmailContext(BaseModel):
    tone: Tone = Tone.professional
    purpose: EmailPurpose = EmailPurpose.initial_outreach
    personalization_level: PersonalizationLevel = PersonalizationLevel.medium


class EmailRequest(BaseModel):
    candidate_info: CandidateInfo
    job_info: JobInfo
    email_context: EmailContext = Field(default_factory=EmailContext)
    custom_instructions: str | None = None


class EmailDraft(BaseModel):
    """Structured output expected from the LLM."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    subject: str
    body: str
    call_to_action: str
    personalization_notes: str | None = None


class EmailMetadata(BaseModel):
    generated_at: datetime = Field(default_factory=_utcnow)
    tokens_used: int
    candidate_name: str
    job_title: str
    company_name: str
    email_context: EmailContext
    word_count: int
    estimated_read_time: int = Field(description="Minutes at 200 words per minute")


class GeneratedEmail(BaseModel):
    email: EmailDraft
    metadata: EmailMetadata


class EmailVariation(BaseModel):
    variation_id: int
    variation_type: VariationType
    email: GeneratedEmail


class EmailAnalysis(BaseModel):
    analysis: dict[str, Any]
    analysis_type: AnalysisType
    tokens_used: int
    analyzed_at: datetime = Field(default_factory=_utcnow)


class CompanyInfo(BaseModel):
    name: str = Field(min_length=1, examples=["Tech Corp"])
    industry: str | None = Field(default=None, examples=["Fintech"])
    culture: str | None = None


class EmailTemplateSet(BaseModel):
    templates: list[dict[str, Any]]
    requested: list[str]
    company_info: CompanyInfo | None = None
    tokens_used: int
    generated_at: datetime = Field(default_factory=_utcnow)

    @property
    def template_count(self) -> int:
        return len(self.templates)


# --- Experience summarization ---

class ExperienceData(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    work_history: list[dict[str, Any]] = Field(default_factory=list)
    education: list[dict[str, Any]] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    projects: list[dict[str, Any]] = Field(default_factory=list)
    certifications: list[dict[str, Any]] = Field(default_factory=list)


class SummaryOptions(BaseModel):
    include_skills_assessment: bool = False
    target_role: str | None = Field(default=None, examples=["backend"])
    focus_areas: list[str] = Field(default_factory=list, examples=[["leadership"]])


class ExperienceSummary(BaseModel):
    summary: dict[str, Any]
    tokens_used: int
    data_points: dict[str, int]
    summarized_at: datetime = Field(default_factory=_utcnow)


# --- Job matching ---

class MatchResult(BaseModel):
    overall_match_score: float | None = Field(default=None, ge=0, le=100)
    analysis: dict[str, Any]
    tokens_used: int


# --- Career advice ---

class CareerGoals(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    target_role: str | None = Field(default=None, examples=["Engineering Manager"])
    target_industry: str | None = None
    timeframe: str | None = Field(default=None, examples=["2 years"])
    priorities: list[str] = Field(default_factory=list)


class CurrentSituation(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job_satisfaction: int | None = Field(default=None, ge=1, le=10)
    career_stage: str | None = Field(default=None, examples=["mid-career"])
    challenges: list[str] = Field(default_factory=list)


class CareerAdvice(BaseModel):
    advice: dict[str, Any]
    tokens_used: int
    generated_at: datetime = Field(default_factory=_utcnow)


# --- Candidate comparison ---

class ComparedCandidate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(min_length=1, examples=["cand-001"])
    name: str | None = None
    experience_data: ExperienceData = Field(default_factory=ExperienceData)


class JobRequirements(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(min_length=1, examples=["Senior Backend Engineer"])
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    experience_level: str | None = None
    responsibilities: list[str] = Field(default_factory=list)


class CandidateComparison(BaseModel):
    comparison: dict[str, Any]
    candidate_count: int
    job_title: str | None = None
    tokens_used: int
    compared_at: datetime = Field(default_factory=_utcnow)
