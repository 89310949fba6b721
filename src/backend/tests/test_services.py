"""End-to-end task flows against a fake completion gateway."""

import asyncio
import json

import pytest

from recruit_ai.core.errors import (
    ExtractionError,
    IncompleteResponseError,
    PayloadNotFoundError,
    PayloadShapeError,
)
from recruit_ai.models.schemas import (
    AnalysisType,
    BatchResumeItem,
    CandidateInfo,
    CareerGoals,
    CompanyInfo,
    ComparedCandidate,
    EmailRequest,
    ExperienceData,
    JobInfo,
    JobRequirements,
    SummaryOptions,
    Tone,
    VariationType,
)
from recruit_ai.parsing.validator import validate
from recruit_ai.prompts.templates import AuxiliaryTask, Task
from recruit_ai.services.email_service import (
    analyze_email_content,
    build_email_variables,
    build_variation,
    generate_email,
    generate_email_templates,
    generate_email_variations,
)
from recruit_ai.services.llm_service import Completion, run_task
from recruit_ai.services.matching_service import MATCH_REQUIRED_FIELDS, match_candidate
from recruit_ai.services.resume_service import batch_extract_resumes, extract_resume_data
from recruit_ai.services.summary_service import (
    compare_candidates,
    generate_career_advice,
    summarize_experience,
)

EMAIL_RESPONSE = json.dumps({
    "subject": "Senior Full Stack Developer at Tech Corp",
    "body": " ".join(["word"] * 250),
    "callToAction": "Reply with a time that works",
    "personalizationNotes": "Referenced React work",
})

SUMMARY_RESPONSE = json.dumps({
    "professionalSummary": "Seasoned backend engineer.",
    "keyHighlights": ["Led platform migration"],
    "skillsAssessment": {"primarySkills": ["Python"]},
    "careerProgression": {"trajectory": "Upward"},
})


def _email_request(**context) -> EmailRequest:
    return EmailRequest(
        candidate_info=CandidateInfo(
            name="John Doe",
            current_role="Software Developer",
            skills=["JavaScript", "React", "Node.js"],
            experience_level="Senior",
        ),
        job_info=JobInfo(
            title="Senior Full Stack Developer",
            company_name="Tech Corp",
            requirements=["JavaScript", "React", "AWS"],
            location="San Francisco",
            salary_range="$120k-150k",
        ),
        **context,
    )


class ConcurrencyTrackingGateway:
    """Records how many completions are in flight at once."""

    def __init__(self, response: str):
        self.response = response
        self.in_flight = 0
        self.peak = 0

    async def complete(self, prompt, parameters, system_prompt=None) -> Completion:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        await asyncio.sleep(0)
        self.in_flight -= 1
        return Completion(text=self.response, tokens_used=1, model="gpt-4-test")


class TestRunTask:
    def test_job_matching_scenario(self, fake_gateway):
        gateway = fake_gateway('Here is the result: {"overallMatchScore": 85, "interviewFocus": []}')
        outcome = asyncio.run(run_task(
            gateway,
            "jobMatching",
            {"candidateProfile": "Senior Go engineer, 8 years", "jobRequirements": "Go, Kubernetes"},
            ["overallMatchScore", "matchAnalysis"],
        ))

        prompt = gateway.calls[0]["prompt"]
        assert "Senior Go engineer, 8 years" in prompt
        assert "Go, Kubernetes" in prompt
        assert "{candidateProfile}" not in prompt

        assert outcome.payload["overallMatchScore"] == 85
        assert not validate(outcome.payload, ["overallMatchScore", "matchAnalysis"])
        assert outcome.missing == ["matchAnalysis"]
        assert not outcome.is_complete

    def test_sends_task_parameters_and_system_prompt(self, fake_gateway):
        gateway = fake_gateway('{"resumeText": "ok"}')
        asyncio.run(run_task(gateway, Task.resume_extraction, {"resumeText": "cv"}, []))
        call = gateway.calls[0]
        assert call["parameters"].max_output_tokens == 2000
        assert "resume parser" in call["system_prompt"]

    def test_extra_instructions_appended(self, fake_gateway):
        gateway = fake_gateway('{"subject": "s"}')
        asyncio.run(run_task(gateway, Task.email_generation, {}, [], extra_instructions="Be brief."))
        assert gateway.calls[0]["prompt"].endswith("\n\nAdditional Instructions: Be brief.")

    def test_unparsable_output_propagates(self, fake_gateway):
        gateway = fake_gateway("Sorry, I cannot help with that.")
        with pytest.raises(PayloadNotFoundError):
            asyncio.run(run_task(gateway, Task.job_matching, {}, []))


class TestResumeService:
    def test_extract_enhances_payload(self, fake_gateway, resume_response):
        gateway = fake_gateway(resume_response)
        result = asyncio.run(extract_resume_data(gateway, "Jane Doe resume", include_skills_analysis=True))

        data = result.extracted_data
        assert data["personalInfo"]["name"] == "Jane Doe"
        assert data["experienceAssessment"]["totalYears"] == 6
        assert data["experienceAssessment"]["careerProgression"] == "Upward"
        assert data["skillsAnalysis"]["marketDemand"] == "High"
        assert "Backend Developer" in data["careerInsights"]["recommendedRoles"]
        assert result.tokens_used == 42

    def test_empty_resume_rejected(self, fake_gateway):
        with pytest.raises(ValueError):
            asyncio.run(extract_resume_data(fake_gateway("{}"), "   "))

    def test_missing_sections_raise(self, fake_gateway):
        gateway = fake_gateway('{"personalInfo": {}, "skills": {}}')
        with pytest.raises(IncompleteResponseError) as exc_info:
            asyncio.run(extract_resume_data(gateway, "resume"))
        assert exc_info.value.missing == ["experience", "education"]

    def test_batch_records_failures(self, fake_gateway, resume_response):
        gateway = fake_gateway(resume_response, "no json here", resume_response)
        items = [
            BatchResumeItem(candidate_id=f"cand-{i}", resume_text=f"resume {i}")
            for i in range(3)
        ]
        summary = asyncio.run(batch_extract_resumes(gateway, items, max_concurrent=1))

        assert summary.total == 3
        assert summary.successful == 2
        assert summary.failed == 1
        assert summary.success_rate == 67
        assert summary.batch_id.startswith("batch_")
        failed = [r for r in summary.results if not r.success]
        assert failed[0].candidate_id == "cand-1"
        assert "No JSON found" in failed[0].error

    def test_batch_requires_items(self, fake_gateway):
        with pytest.raises(ValueError):
            asyncio.run(batch_extract_resumes(fake_gateway("{}"), []))

    @staticmethod
    def _items(count: int) -> list[BatchResumeItem]:
        return [BatchResumeItem(candidate_id=f"cand-{i}", resume_text="resume") for i in range(count)]

    def test_batch_respects_concurrency_limit(self, resume_response):
        gateway = ConcurrencyTrackingGateway(resume_response)
        summary = asyncio.run(batch_extract_resumes(gateway, self._items(5), max_concurrent=2))
        assert summary.successful == 5
        assert gateway.peak == 2

    def test_batch_default_concurrency_is_three(self, resume_response):
        gateway = ConcurrencyTrackingGateway(resume_response)
        asyncio.run(batch_extract_resumes(gateway, self._items(6)))
        assert gateway.peak == 3

    @pytest.mark.parametrize("limit", [0, -1])
    def test_batch_rejects_non_positive_limit(self, fake_gateway, resume_response, limit):
        gateway = fake_gateway(resume_response)
        with pytest.raises(ValueError, match="max_concurrent"):
            asyncio.run(batch_extract_resumes(gateway, self._items(2), max_concurrent=limit))
        assert gateway.calls == []


class TestEmailService:
    def test_variables_use_defaults(self):
        request = EmailRequest(
            candidate_info=CandidateInfo(name="John Doe"),
            job_info=JobInfo(title="Engineer", company_name="Tech Corp"),
        )
        variables = build_email_variables(request)
        assert variables["currentRole"] == "Professional"
        assert variables["skills"] == "Various technical skills"
        assert variables["jobRequirements"] == "Role-specific requirements"
        assert variables["salaryRange"] == "Competitive salary"
        assert variables["tone"] == "professional"

    def test_generate_email(self, fake_gateway):
        gateway = fake_gateway("```json\n" + EMAIL_RESPONSE + "\n```")
        result = asyncio.run(generate_email(gateway, _email_request()))

        assert result.email.subject.startswith("Senior Full Stack")
        assert result.email.call_to_action == "Reply with a time that works"
        assert result.metadata.word_count == 250
        assert result.metadata.estimated_read_time == 2
        assert "JavaScript, React, Node.js" in gateway.calls[0]["prompt"]

    def test_missing_call_to_action_raises(self, fake_gateway):
        gateway = fake_gateway('{"subject": "s", "body": "b"}')
        with pytest.raises(IncompleteResponseError):
            asyncio.run(generate_email(gateway, _email_request()))

    def test_variations_cycle_tone_and_approach(self, fake_gateway):
        gateway = fake_gateway(EMAIL_RESPONSE)
        variations = asyncio.run(generate_email_variations(gateway, _email_request(), count=3))

        assert [v.variation_id for v in variations] == [1, 2, 3]
        tones = [v.email.metadata.email_context.tone for v in variations]
        assert tones == [Tone.professional, Tone.friendly, Tone.casual]
        assert "Use a storytelling approach" in gateway.calls[1]["prompt"]

    def test_variations_capped_at_five(self, fake_gateway):
        gateway = fake_gateway(EMAIL_RESPONSE)
        variations = asyncio.run(generate_email_variations(
            gateway, _email_request(), count=9, variation_types=[VariationType.length]
        ))
        assert len(variations) == 5
        assert "Keep the email concise (150 words)." in gateway.calls[0]["prompt"]

    def test_failed_variation_skipped(self, fake_gateway):
        gateway = fake_gateway("garbage", EMAIL_RESPONSE)
        variations = asyncio.run(generate_email_variations(gateway, _email_request(), count=2))
        assert [v.variation_id for v in variations] == [2]

    def test_variation_keeps_base_instructions(self):
        request = _email_request(custom_instructions="Mention the remote-first policy.")
        variant = build_variation(request, 1, [VariationType.approach, VariationType.length])
        assert variant.custom_instructions == (
            "Mention the remote-first policy. "
            "Use a storytelling approach in the email. "
            "Keep the email standard (250 words)."
        )

    def test_tone_only_variation_keeps_base_instructions(self):
        request = _email_request(custom_instructions="Mention equity.")
        variant = build_variation(request, 2, [VariationType.tone])
        assert variant.custom_instructions == "Mention equity."
        assert variant.email_context.tone == Tone.casual

    def test_variations_send_base_instructions(self, fake_gateway):
        gateway = fake_gateway(EMAIL_RESPONSE)
        request = _email_request(custom_instructions="Mention the remote-first policy.")
        asyncio.run(generate_email_variations(gateway, request, count=2))
        assert all("Mention the remote-first policy." in call["prompt"] for call in gateway.calls)

    def test_null_body_is_provider_error(self, fake_gateway):
        gateway = fake_gateway('{"subject": "s", "body": null, "callToAction": "c"}')
        with pytest.raises(PayloadShapeError) as exc_info:
            asyncio.run(generate_email(gateway, _email_request()))
        assert isinstance(exc_info.value, ExtractionError)
        assert "emailGeneration" in str(exc_info.value)

    def test_analyze_email_content(self, fake_gateway):
        gateway = fake_gateway(json.dumps({
            "overallScore": 78,
            "analysis": {"engagement": {"score": 80}},
            "improvements": ["Shorten the subject line"],
        }))
        result = asyncio.run(analyze_email_content(
            gateway, "Quick question", "Hi Jane, ...", AnalysisType.engagement
        ))
        assert result.analysis["overallScore"] == 78
        assert result.analysis_type == AnalysisType.engagement
        assert result.tokens_used == 42
        prompt = gateway.calls[0]["prompt"]
        assert "Subject: Quick question" in prompt
        assert "Focus of this analysis: engagement" in prompt
        assert gateway.calls[0]["parameters"].max_output_tokens == 1500

    @pytest.mark.parametrize("subject, body", [("", "body"), ("subject", "")])
    def test_analysis_requires_subject_and_body(self, fake_gateway, subject, body):
        gateway = fake_gateway("{}")
        with pytest.raises(ValueError):
            asyncio.run(analyze_email_content(gateway, subject, body))
        assert gateway.calls == []

    def test_analysis_missing_score_raises(self, fake_gateway):
        gateway = fake_gateway('{"analysis": {}}')
        with pytest.raises(IncompleteResponseError) as exc_info:
            asyncio.run(analyze_email_content(gateway, "s", "b"))
        assert exc_info.value.missing == ["overallScore"]

    def test_generate_templates_defaults(self, fake_gateway):
        gateway = fake_gateway('{"subject": "Hi {candidateName}", "body": "We at {companyName}..."}')
        result = asyncio.run(generate_email_templates(gateway))

        assert result.template_count == 5
        assert result.templates[0]["type"] == "initial_outreach"
        assert result.tokens_used == 5 * 42
        prompt = gateway.calls[0]["prompt"]
        assert "Company: [Company Name]" in prompt
        assert "Industry: [Industry]" in prompt
        assert "{candidateName}" in prompt

    def test_generate_templates_skips_bad_answers(self, fake_gateway):
        gateway = fake_gateway(
            '{"subject": "s", "body": "b"}',
            "not json",
            '{"subject": "only a subject"}',
        )
        result = asyncio.run(generate_email_templates(
            gateway,
            ["follow_up", "offer_letter", "rejection_friendly"],
            CompanyInfo(name="Tech Corp", industry="Fintech"),
            Tone.friendly,
        ))
        assert [t["type"] for t in result.templates] == ["follow_up"]
        assert result.requested == ["follow_up", "offer_letter", "rejection_friendly"]
        assert "Company: Tech Corp" in gateway.calls[0]["prompt"]
        assert "Tone: friendly" in gateway.calls[0]["prompt"]


class TestSummaryService:
    def test_summarize_with_options(self, fake_gateway):
        gateway = fake_gateway(SUMMARY_RESPONSE)
        experience = ExperienceData(
            work_history=[{"title": "Tech Lead", "description": "leadership of platform team"}],
            skills=["Python", "SQL", "Analytics"],
        )
        options = SummaryOptions(
            include_skills_assessment=True,
            target_role="data",
            focus_areas=["leadership"],
        )
        result = asyncio.run(summarize_experience(gateway, experience, options))

        assert '"workHistory"' in gateway.calls[0]["prompt"]
        summary = result.summary
        assert summary["professionalSummary"] == "Seasoned backend engineer."
        assert summary["marketAnalysis"]["marketPosition"] == "Strong"
        assert summary["roleSuitability"]["suitabilityScore"] == 60
        assert summary["focusAreaAnalysis"][0]["strengthLevel"] == "Moderate"
        assert result.data_points["workExperience"] == 1
        assert result.data_points["skills"] == 3

    def test_summary_without_options_adds_nothing(self, fake_gateway):
        result = asyncio.run(summarize_experience(fake_gateway(SUMMARY_RESPONSE), ExperienceData()))
        assert "marketAnalysis" not in result.summary
        assert "roleSuitability" not in result.summary


class TestMatchingService:
    def test_match_candidate(self, fake_gateway):
        gateway = fake_gateway('Sure! {"overallMatchScore": 85, "matchAnalysis": {"skillsMatch": {"score": 90}}}')
        result = asyncio.run(match_candidate(gateway, "Senior Go engineer, 8 years", "Go, Kubernetes"))
        assert result.overall_match_score == 85
        assert result.analysis["matchAnalysis"]["skillsMatch"]["score"] == 90

    def test_match_without_analysis_raises(self, fake_gateway):
        gateway = fake_gateway('Here is the result: {"overallMatchScore": 85}')
        with pytest.raises(IncompleteResponseError) as exc_info:
            asyncio.run(match_candidate(gateway, "profile", "requirements"))
        assert exc_info.value.missing == ["matchAnalysis"]
        assert MATCH_REQUIRED_FIELDS == ["overallMatchScore", "matchAnalysis"]

    def test_fractional_score_kept(self, fake_gateway):
        gateway = fake_gateway('{"overallMatchScore": 87.5, "matchAnalysis": {}}')
        result = asyncio.run(match_candidate(gateway, "profile", "requirements"))
        assert result.overall_match_score == 87.5

    @pytest.mark.parametrize("score", [150, -5, "high"])
    def test_invalid_score_is_provider_error(self, fake_gateway, score):
        gateway = fake_gateway(json.dumps({"overallMatchScore": score, "matchAnalysis": {}}))
        with pytest.raises(PayloadShapeError):
            asyncio.run(match_candidate(gateway, "profile", "requirements"))


class TestCareerAdvice:
    RESPONSE = json.dumps({
        "careerAssessment": {"currentLevel": "Mid-level"},
        "recommendations": {"immediate": ["Lead a project"]},
        "skillDevelopment": {"technical": ["Kubernetes"]},
    })

    def test_generate_career_advice(self, fake_gateway):
        gateway = fake_gateway(self.RESPONSE)
        experience = ExperienceData(skills=["Python"], work_history=[{"title": "Engineer"}])
        goals = CareerGoals(target_role="Engineering Manager", timeframe="2 years")

        result = asyncio.run(generate_career_advice(gateway, experience, goals))

        assert result.advice["careerAssessment"]["currentLevel"] == "Mid-level"
        assert result.tokens_used == 42
        prompt = gateway.calls[0]["prompt"]
        assert '"targetRole": "Engineering Manager"' in prompt
        assert "Current Situation:\n{}" in prompt
        assert gateway.calls[0]["parameters"].max_output_tokens == 2000

    def test_missing_skill_development_raises(self, fake_gateway):
        gateway = fake_gateway('{"careerAssessment": {}, "recommendations": {}}')
        with pytest.raises(IncompleteResponseError) as exc_info:
            asyncio.run(generate_career_advice(gateway, ExperienceData()))
        assert exc_info.value.task == AuxiliaryTask.career_advice.value
        assert exc_info.value.missing == ["skillDevelopment"]


class TestCandidateComparison:
    RESPONSE = json.dumps({
        "overallRanking": [{"candidateId": "a", "rank": 1}, {"candidateId": "b", "rank": 2}],
        "recommendations": {"topChoice": "a"},
    })

    @staticmethod
    def _candidates(count: int) -> list[ComparedCandidate]:
        return [
            ComparedCandidate(id=f"cand-{i}", name=f"Candidate {i}", experience_data=ExperienceData(skills=["Go"]))
            for i in range(count)
        ]

    def test_compare_candidates(self, fake_gateway):
        gateway = fake_gateway(self.RESPONSE)
        requirements = JobRequirements(title="Platform Engineer", required_skills=["Go"])

        result = asyncio.run(compare_candidates(gateway, self._candidates(3), requirements))

        assert result.candidate_count == 3
        assert result.job_title == "Platform Engineer"
        assert result.comparison["recommendations"]["topChoice"] == "a"
        prompt = gateway.calls[0]["prompt"]
        assert "Comparison Criteria: Skills, Experience, Education, Cultural Fit" in prompt
        assert '"requiredSkills"' in prompt
        assert '"id": "cand-2"' in prompt

    def test_custom_criteria(self, fake_gateway):
        gateway = fake_gateway(self.RESPONSE)
        result = asyncio.run(compare_candidates(gateway, self._candidates(2), criteria=["Leadership", "Go"]))
        assert result.job_title is None
        assert "Comparison Criteria: Leadership, Go" in gateway.calls[0]["prompt"]

    def test_single_candidate_rejected(self, fake_gateway):
        gateway = fake_gateway(self.RESPONSE)
        with pytest.raises(ValueError, match="At least 2 candidates"):
            asyncio.run(compare_candidates(gateway, self._candidates(1)))
        assert gateway.calls == []
