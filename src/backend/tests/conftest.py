import json

import pytest

from recruit_ai.prompts.parameters import GenerationParameters
from recruit_ai.services.llm_service import Completion


class FakeGateway:
    """In-memory stand-in for CompletionGateway: replays canned responses."""

    def __init__(self, *responses: str, tokens_used: int = 42):
        self.responses = list(responses)
        self.tokens_used = tokens_used
        self.calls: list[dict] = []

    async def complete(
        self,
        prompt: str,
        parameters: GenerationParameters,
        system_prompt: str | None = None,
    ) -> Completion:
        self.calls.append(
            {"prompt": prompt, "parameters": parameters, "system_prompt": system_prompt}
        )
        # Last response repeats once the queue runs dry
        text = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        return Completion(text=text, tokens_used=self.tokens_used, model="gpt-4-test")


@pytest.fixture
def fake_gateway():
    return FakeGateway


@pytest.fixture
def resume_payload() -> dict:
    return {
        "personalInfo": {"name": "Jane Doe", "email": "jane@example.com", "phone": None, "location": "Austin, TX"},
        "summary": "Backend engineer",
        "skills": {
            "technical": ["Python", "Docker", "AWS", "PostgreSQL"],
            "soft": ["Mentoring"],
            "languages": ["Python", "Go"],
            "frameworks": ["FastAPI"],
            "tools": ["Git"],
        },
        "experience": [
            {"title": "Senior Backend Engineer", "company": "Acme"},
            {"title": "Backend Engineer", "company": "StartupXYZ"},
            {"title": "Junior Developer", "company": "Initech"},
        ],
        "education": [{"degree": "BS", "field": "Computer Science", "institution": "UT Austin"}],
    }


@pytest.fixture
def resume_response(resume_payload) -> str:
    return "Here is the parsed resume:\n```json\n" + json.dumps(resume_payload) + "\n```"
