"""Task lookup: pairs each template with its generation parameters."""

from recruit_ai.core.errors import UnknownTaskError
from recruit_ai.prompts.parameters import (
    AUXILIARY_PARAMETERS,
    MODEL_PARAMETERS,
    GenerationParameters,
)
from recruit_ai.prompts.templates import (
    CANDIDATE_COMPARISON,
    CAREER_ADVICE,
    EMAIL_ANALYSIS,
    EMAIL_GENERATION,
    EMAIL_TEMPLATE,
    EXPERIENCE_SUMMARIZATION,
    JOB_MATCHING,
    RESUME_EXTRACTION,
    AuxiliaryTask,
    PromptTemplate,
    Task,
)

PROMPT_TEMPLATES: dict[Task, PromptTemplate] = {
    Task.resume_extraction: RESUME_EXTRACTION,
    Task.email_generation: EMAIL_GENERATION,
    Task.experience_summarization: EXPERIENCE_SUMMARIZATION,
    Task.job_matching: JOB_MATCHING,
}

AUXILIARY_TEMPLATES: dict[AuxiliaryTask, PromptTemplate] = {
    AuxiliaryTask.career_advice: CAREER_ADVICE,
    AuxiliaryTask.candidate_comparison: CANDIDATE_COMPARISON,
    AuxiliaryTask.email_analysis: EMAIL_ANALYSIS,
    AuxiliaryTask.email_template: EMAIL_TEMPLATE,
}


def lookup(task: Task | str) -> tuple[PromptTemplate, GenerationParameters]:
    """Return (template, parameters) for a task or its string name.

    Raises UnknownTaskError for anything outside the Task enum.
    """
    try:
        key = Task(task)
    except ValueError as exc:
        raise UnknownTaskError(task) from exc
    return PROMPT_TEMPLATES[key], MODEL_PARAMETERS[key]


def lookup_auxiliary(task: AuxiliaryTask | str) -> tuple[PromptTemplate, GenerationParameters]:
    try:
        key = AuxiliaryTask(task)
    except ValueError as exc:
        raise UnknownTaskError(task) from exc
    return AUXILIARY_TEMPLATES[key], AUXILIARY_PARAMETERS[key]
