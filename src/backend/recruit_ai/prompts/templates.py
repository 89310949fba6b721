"""Prompt templates for the recruiting AI tasks.

Versioned so we can track which prompt produced which output. Placeholders
use ``{name}`` and are filled by ``recruit_ai.prompts.renderer.render``, so
the JSON output formats below keep their braces unescaped.
"""

import re
from enum import Enum

from pydantic import BaseModel

PROMPT_VERSION = "v1.0"

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class Task(str, Enum):
    resume_extraction = "resumeExtraction"
    email_generation = "emailGeneration"
    experience_summarization = "experienceSummarization"
    job_matching = "jobMatching"


class AuxiliaryTask(str, Enum):
    """Follow-up analyses that reuse the pipeline but are not core tasks."""

    career_advice = "careerAdvice"
    candidate_comparison = "candidateComparison"
    email_analysis = "emailAnalysis"
    email_template = "emailTemplate"


class PromptTemplate(BaseModel):
    """One task's prompt: system message, user body and output format."""

    model_config = {"frozen": True}

    task: Task | AuxiliaryTask
    system_prompt: str
    body: str
    output_format: str

    @property
    def text(self) -> str:
        return f"{self.body}\n{self.output_format}"

    @property
    def placeholders(self) -> list[str]:
        """Placeholder names in order of first appearance."""
        seen: list[str] = []
        for name in _PLACEHOLDER.findall(self.text):
            if name not in seen:
                seen.append(name)
        return seen


RESUME_EXTRACTION = PromptTemplate(
    task=Task.resume_extraction,
    system_prompt=(
        "You are an expert resume parser. Extract structured information "
        "accurately and return only valid JSON."
    ),
    body="""\
You are an expert resume parser. Extract structured information from the following resume text.

Resume Text:
{resumeText}

Please extract and return the following information in JSON format:""",
    output_format="""\
{
  "personalInfo": {
    "name": "Full name",
    "email": "Email address",
    "phone": "Phone number",
    "location": "City, State/Country"
  },
  "summary": "Professional summary or objective",
  "skills": {
    "technical": ["List of technical skills"],
    "soft": ["List of soft skills"],
    "languages": ["Programming languages"],
    "frameworks": ["Frameworks and libraries"],
    "tools": ["Tools and technologies"]
  },
  "experience": [
    {
      "title": "Job title",
      "company": "Company name",
      "location": "Location",
      "startDate": "Start date",
      "endDate": "End date or 'Present'",
      "description": "Job description",
      "achievements": ["Key achievements"],
      "technologies": ["Technologies used"]
    }
  ],
  "education": [
    {
      "degree": "Degree type",
      "field": "Field of study",
      "institution": "Institution name",
      "location": "Location",
      "graduationDate": "Graduation date",
      "gpa": "GPA if mentioned"
    }
  ],
  "certifications": [
    {
      "name": "Certification name",
      "issuer": "Issuing organization",
      "date": "Date obtained",
      "expiryDate": "Expiry date if applicable"
    }
  ],
  "projects": [
    {
      "name": "Project name",
      "description": "Project description",
      "technologies": ["Technologies used"],
      "url": "Project URL if available"
    }
  ]
}

Only return valid JSON. If information is not available, use null or empty arrays as appropriate.""",
)

EMAIL_GENERATION = PromptTemplate(
    task=Task.email_generation,
    system_prompt=(
        "You are an expert recruiter and email writer. Create professional, "
        "engaging, and personalized recruitment emails that get responses."
    ),
    body="""\
You are an expert recruiter writing personalized outreach emails. Create a professional, engaging email to a candidate.

Candidate Information:
Name: {candidateName}
Current Role: {currentRole}
Skills: {skills}
Experience Level: {experienceLevel}

Job Information:
Position: {jobTitle}
Company: {companyName}
Key Requirements: {jobRequirements}
Location: {jobLocation}
Salary Range: {salaryRange}

Email Context:
- Tone: {tone} (professional, friendly, casual)
- Purpose: {purpose} (initial outreach, follow-up, interview invitation)
- Personalization Level: {personalizationLevel} (high, medium, low)

Please generate a personalized email that:
1. Has an engaging subject line
2. Addresses the candidate by name
3. Mentions specific skills or experience relevant to the role
4. Clearly describes the opportunity
5. Includes a clear call-to-action
6. Maintains the specified tone
7. Is concise but informative (200-300 words)

Return the response in JSON format:""",
    output_format="""\
{
  "subject": "Email subject line",
  "body": "Email body content",
  "callToAction": "Specific call-to-action",
  "personalizationNotes": "Notes about personalization used"
}""",
)

EXPERIENCE_SUMMARIZATION = PromptTemplate(
    task=Task.experience_summarization,
    system_prompt=(
        "You are an expert career counselor and recruiter. Analyze professional "
        "experience and provide insightful, actionable summaries."
    ),
    body="""\
You are an expert at summarizing professional experience. Create a concise, impactful summary of the candidate's experience.

Candidate Experience Data:
{experienceData}

Please create:
1. A professional summary (2-3 sentences)
2. Key highlights (3-5 bullet points)
3. Skills assessment based on experience
4. Career progression analysis
5. Suitability for different role levels

Return the response in JSON format:""",
    output_format="""\
{
  "professionalSummary": "2-3 sentence summary of overall experience",
  "keyHighlights": [
    "Most impressive achievement or experience",
    "Notable skills or expertise",
    "Career progression or growth",
    "Unique value proposition"
  ],
  "skillsAssessment": {
    "primarySkills": ["Top 5 skills based on experience"],
    "emergingSkills": ["Skills being developed"],
    "experienceLevel": "Junior/Mid-level/Senior/Expert",
    "yearsOfExperience": "Estimated years of experience"
  },
  "careerProgression": {
    "trajectory": "Career growth pattern",
    "nextLevelReadiness": "Assessment of readiness for next level",
    "recommendedRoles": ["Suitable role types"]
  },
  "suitabilityAnalysis": {
    "strengths": ["Key strengths"],
    "growthAreas": ["Areas for development"],
    "idealRoleType": "Best fit role characteristics"
  }
}""",
)

JOB_MATCHING = PromptTemplate(
    task=Task.job_matching,
    system_prompt=(
        "You are an expert technical recruiter. Assess candidate-job fit "
        "objectively and return only valid JSON."
    ),
    body="""\
You are an expert at matching candidates to job requirements. Analyze the compatibility between a candidate and a job.

Candidate Profile:
{candidateProfile}

Job Requirements:
{jobRequirements}

Please analyze and provide:
1. Overall match score (0-100)
2. Detailed skill matching
3. Experience level compatibility
4. Cultural fit assessment
5. Recommendations for both candidate and employer

Return the response in JSON format:""",
    output_format="""\
{
  "overallMatchScore": 85,
  "matchAnalysis": {
    "skillsMatch": {
      "score": 90,
      "matchedSkills": ["Skills that match"],
      "missingSkills": ["Required skills candidate lacks"],
      "additionalSkills": ["Extra skills candidate has"]
    },
    "experienceMatch": {
      "score": 80,
      "levelCompatibility": "Assessment of experience level fit",
      "relevantExperience": ["Relevant experience areas"],
      "experienceGaps": ["Experience gaps"]
    },
    "locationMatch": {
      "score": 95,
      "compatibility": "Location compatibility assessment"
    }
  },
  "recommendations": {
    "forCandidate": [
      "Recommendations for the candidate"
    ],
    "forEmployer": [
      "Recommendations for the employer"
    ]
  },
  "interviewFocus": [
    "Key areas to focus on during interview"
  ],
  "riskFactors": [
    "Potential concerns or risks"
  ]
}""",
)

CAREER_ADVICE = PromptTemplate(
    task=AuxiliaryTask.career_advice,
    system_prompt=(
        "You are an expert career counselor with deep knowledge of various industries "
        "and career paths. Provide actionable, personalized advice."
    ),
    body="""\
You are an expert career counselor. Provide personalized career advice based on the following information:

Experience Data:
{experienceData}

Career Goals:
{careerGoals}

Current Situation:
{currentSituation}

Please provide comprehensive career advice in JSON format:""",
    output_format="""\
{
  "careerAssessment": {
    "currentPosition": "Assessment of current career position",
    "strengths": ["Key career strengths"],
    "growthAreas": ["Areas for improvement"],
    "marketPosition": "How they stand in the job market"
  },
  "recommendations": {
    "shortTerm": [
      {
        "action": "Specific action to take",
        "timeline": "When to do it",
        "impact": "Expected impact",
        "priority": "High/Medium/Low"
      }
    ],
    "longTerm": [
      {
        "goal": "Long-term career goal",
        "steps": ["Steps to achieve it"],
        "timeline": "Expected timeframe",
        "resources": ["Resources needed"]
      }
    ]
  },
  "skillDevelopment": {
    "prioritySkills": ["Skills to focus on developing"],
    "learningPath": ["Suggested learning progression"],
    "certifications": ["Recommended certifications"],
    "resources": ["Learning resources and platforms"]
  },
  "careerPaths": [
    {
      "path": "Career path option",
      "description": "Description of this path",
      "requirements": ["What's needed for this path"],
      "timeline": "Expected progression timeline",
      "pros": ["Advantages of this path"],
      "cons": ["Potential challenges"]
    }
  ],
  "networking": {
    "strategies": ["Networking strategies"],
    "platforms": ["Professional platforms to focus on"]
  },
  "jobSearchStrategy": {
    "targetCompanies": ["Types of companies to target"],
    "applicationStrategy": "How to approach job applications",
    "interviewPrep": ["Interview preparation tips"]
  }
}""",
)

CANDIDATE_COMPARISON = PromptTemplate(
    task=AuxiliaryTask.candidate_comparison,
    system_prompt=(
        "You are an expert recruiter with extensive experience in candidate evaluation "
        "and comparison. Provide objective, detailed analysis."
    ),
    body="""\
You are an expert recruiter comparing candidates for a position. Analyze and compare the following candidates:

Job Requirements:
{jobRequirements}

Candidates:
{candidates}

Comparison Criteria: {comparisonCriteria}

Please provide a comprehensive comparison in JSON format:""",
    output_format="""\
{
  "overallRanking": [
    {
      "candidateId": "candidate_id",
      "rank": 1,
      "overallScore": 85,
      "summary": "Brief summary of why they rank here"
    }
  ],
  "detailedComparison": {
    "skills": {
      "analysis": "Skills comparison analysis",
      "rankings": [
        {"candidateId": "candidate_id", "score": 90, "strengths": ["Skill strengths"], "gaps": ["Skill gaps"]}
      ]
    },
    "experience": {
      "analysis": "Experience comparison analysis",
      "rankings": [
        {"candidateId": "candidate_id", "score": 85, "relevantExperience": "Relevant experience summary"}
      ]
    },
    "education": {
      "analysis": "Education comparison analysis",
      "rankings": [
        {"candidateId": "candidate_id", "score": 80, "educationHighlights": "Education highlights"}
      ]
    }
  },
  "recommendations": {
    "topChoice": {
      "candidateId": "candidate_id",
      "reasons": ["Why they're the top choice"],
      "considerations": ["Things to consider"]
    },
    "alternatives": [
      {"candidateId": "candidate_id", "scenario": "When this candidate might be better", "advantages": ["Their advantages"]}
    ]
  },
  "interviewStrategy": {
    "focusAreas": ["Areas to focus on during interviews"],
    "differentiatingQuestions": ["Questions to help differentiate candidates"],
    "assessmentCriteria": ["Key criteria for final assessment"]
  }
}""",
)

EMAIL_ANALYSIS = PromptTemplate(
    task=AuxiliaryTask.email_analysis,
    system_prompt=(
        "You are an expert email marketing analyst specializing in recruitment "
        "communications. Provide detailed, actionable feedback."
    ),
    body="""\
Analyze the following recruitment email and provide detailed feedback:

Subject: {subject}
Body: {body}

Please analyze the email for:
1. Engagement potential (subject line effectiveness, opening, call-to-action)
2. Personalization level (how personalized it feels)
3. Professional tone and clarity
4. Compliance considerations (avoiding discriminatory language)
5. Improvement suggestions

Focus of this analysis: {analysisType}

Return the analysis in JSON format:""",
    output_format="""\
{
  "overallScore": 85,
  "analysis": {
    "engagement": {
      "score": 80,
      "subjectLineScore": 75,
      "openingScore": 85,
      "callToActionScore": 80,
      "feedback": "Detailed feedback on engagement"
    },
    "personalization": {
      "score": 70,
      "personalElements": ["List of personal elements found"],
      "missedOpportunities": ["Areas where more personalization could help"],
      "feedback": "Personalization feedback"
    },
    "professionalism": {
      "score": 90,
      "toneAssessment": "Professional and appropriate",
      "clarityScore": 85,
      "feedback": "Professionalism feedback"
    },
    "compliance": {
      "score": 95,
      "potentialIssues": ["Any compliance concerns"],
      "recommendations": ["Compliance recommendations"],
      "feedback": "Compliance feedback"
    }
  },
  "improvements": [
    "Specific improvement suggestions"
  ],
  "rewriteSuggestions": {
    "subject": "Improved subject line",
    "opening": "Improved opening paragraph",
    "callToAction": "Improved call-to-action"
  }
}""",
)

# The example placeholders in the body are part of the generated template
# and are never filled at render time.
EMAIL_TEMPLATE = PromptTemplate(
    task=AuxiliaryTask.email_template,
    system_prompt=(
        "You are an expert at creating recruitment email templates. Create "
        "professional, effective templates with proper placeholders."
    ),
    body="""\
Create a professional email template for: {templateType}

Company: {companyName}
Industry: {industry}
Tone: {tone}

The template should:
1. Use placeholders for personalization (e.g., {candidateName}, {jobTitle})
2. Be appropriate for the {templateType} scenario
3. Include a compelling subject line
4. Have a clear call-to-action
5. Be professional yet engaging

Return in JSON format:""",
    output_format="""\
{
  "templateName": "{templateType}",
  "subject": "Subject line with placeholders",
  "body": "Email body with placeholders",
  "placeholders": ["List of all placeholders used"],
  "usage": "When to use this template",
  "tips": ["Tips for customizing this template"]
}""",
)
