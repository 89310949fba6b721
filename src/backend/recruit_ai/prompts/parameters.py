"""Per-task generation parameters sent with each completion request."""

from pydantic import BaseModel, Field

from recruit_ai.prompts.templates import AuxiliaryTask, Task


class GenerationParameters(BaseModel):
    model_config = {"frozen": True}

    max_output_tokens: int = Field(gt=0)
    temperature: float = Field(ge=0, le=1)
    top_p: float = Field(ge=0, le=1, description="Nucleus sampling threshold")


# Extraction and matching stay near-deterministic; email copy gets room to vary.
MODEL_PARAMETERS: dict[Task, GenerationParameters] = {
    Task.resume_extraction: GenerationParameters(max_output_tokens=2000, temperature=0.1, top_p=0.1),
    Task.email_generation: GenerationParameters(max_output_tokens=800, temperature=0.7, top_p=0.9),
    Task.experience_summarization: GenerationParameters(max_output_tokens=1000, temperature=0.3, top_p=0.8),
    Task.job_matching: GenerationParameters(max_output_tokens=1500, temperature=0.2, top_p=0.7),
}

AUXILIARY_PARAMETERS: dict[AuxiliaryTask, GenerationParameters] = {
    AuxiliaryTask.career_advice: GenerationParameters(max_output_tokens=2000, temperature=0.4, top_p=0.8),
    AuxiliaryTask.candidate_comparison: GenerationParameters(max_output_tokens=2500, temperature=0.2, top_p=0.7),
    AuxiliaryTask.email_analysis: GenerationParameters(max_output_tokens=1500, temperature=0.3, top_p=0.8),
    AuxiliaryTask.email_template: GenerationParameters(max_output_tokens=800, temperature=0.4, top_p=0.8),
}
