"""Completion gateway (LangChain + Azure OpenAI) and the shared task pipeline."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import AzureChatOpenAI
from pydantic import BaseModel, ValidationError

from recruit_ai.core.config import AzureOpenAISettings
from recruit_ai.core.errors import CompletionError, PayloadShapeError
from recruit_ai.parsing.extractor import extract_payload
from recruit_ai.parsing.validator import missing_fields
from recruit_ai.prompts.parameters import GenerationParameters
from recruit_ai.prompts.renderer import render
from recruit_ai.prompts.store import lookup, lookup_auxiliary
from recruit_ai.prompts.templates import PROMPT_VERSION, AuxiliaryTask, Task

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Completion(BaseModel):
    text: str
    tokens_used: int = 0
    model: str


class TaskOutcome(BaseModel):
    """Decoded payload for one task call plus what the validator found."""

    task: Task | AuxiliaryTask
    payload: dict[str, Any]
    missing: list[str]
    tokens_used: int
    model: str
    prompt_version: str = PROMPT_VERSION

    @property
    def is_complete(self) -> bool:
        return not self.missing


class CompletionGateway:
    """Thin boundary around the Azure OpenAI deployment.

    Auth, retries and quota handling belong to the provider SDK; errors it
    raises propagate unchanged.
    """

    def __init__(self, config: AzureOpenAISettings):
        config.require()
        self.config = config

    def get_llm(self, parameters: GenerationParameters) -> AzureChatOpenAI:
        """Create a chat model for one call (stateless, no need to cache)."""
        return AzureChatOpenAI(
            azure_endpoint=self.config.endpoint,
            api_key=self.config.api_key,
            azure_deployment=self.config.deployment_name,
            api_version=self.config.api_version,
            max_tokens=parameters.max_output_tokens,
            temperature=parameters.temperature,
            top_p=parameters.top_p,
        )

    async def complete(
        self,
        prompt: str,
        parameters: GenerationParameters,
        system_prompt: str | None = None,
    ) -> Completion:
        messages = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=prompt))

        response = await self.get_llm(parameters).ainvoke(messages)
        if not response.content:
            raise CompletionError("Empty response from Azure OpenAI")

        usage = response.response_metadata.get("token_usage", {})
        return Completion(
            text=response.content,
            tokens_used=usage.get("total_tokens", 0),
            model=self.config.deployment_name,
        )


async def run_task(
    gateway: CompletionGateway,
    task: Task | AuxiliaryTask | str,
    variables: Mapping[str, str],
    required_fields: Sequence[str],
    extra_instructions: str | None = None,
) -> TaskOutcome:
    """Render a task prompt, call the gateway and decode the answer.

    Raises ExtractionError if the output holds no decodable JSON. Missing
    required fields are reported on the outcome, not raised.
    """
    if isinstance(task, AuxiliaryTask):
        template, parameters = lookup_auxiliary(task)
    else:
        template, parameters = lookup(task)
    prompt = render(template.text, variables)
    if extra_instructions:
        prompt += f"\n\nAdditional Instructions: {extra_instructions}"

    logger.info("Sending %s request to completion gateway", template.task.value)
    completion = await gateway.complete(prompt, parameters, system_prompt=template.system_prompt)
    logger.info("LLM raw response: %s", completion.text[:500])

    payload = extract_payload(completion.text)
    missing = missing_fields(payload, required_fields)
    if missing:
        logger.warning("%s response missing fields: %s", template.task.value, missing)

    return TaskOutcome(
        task=template.task,
        payload=payload,
        missing=missing,
        tokens_used=completion.tokens_used,
        model=completion.model,
    )


def build_model(model_type: type[ModelT], data: Mapping[str, Any], task: Task | AuxiliaryTask) -> ModelT:
    """Validate provider data into a result model.

    Type errors in the provider's answer become PayloadShapeError so they
    are not mistaken for bad caller input.
    """
    try:
        return model_type.model_validate(data)
    except ValidationError as exc:
        logger.error("%s response failed validation: %s", task.value, exc)
        raise PayloadShapeError(f"AI output for {task.value} failed validation: {exc}") from exc
