"""Rule-based enrichment layered on top of LLM payloads.

These are cheap keyword heuristics, not model calls. They read the decoded
payload defensively since providers do not always honour the output format.
"""

import math
from typing import Any

HIGH_DEMAND_SKILLS = ["JavaScript", "Python", "React", "AWS", "Docker", "Kubernetes"]
EMERGING_SKILLS = ["AI/ML", "Blockchain", "IoT", "Edge Computing"]
COMMON_SKILLS = ["Git", "Docker", "AWS", "Testing"]
LEADERSHIP_MARKERS = ("senior", "lead", "manager")

ROLE_KEYWORDS: dict[str, list[str]] = {
    "frontend": ["javascript", "react", "vue", "angular", "css", "html"],
    "backend": ["python", "java", "node", "api", "database", "server"],
    "fullstack": ["javascript", "react", "node", "database", "api"],
    "devops": ["aws", "docker", "kubernetes", "ci/cd", "jenkins"],
    "data": ["python", "sql", "analytics", "machine learning", "statistics"],
}

AREA_RECOMMENDATIONS: dict[str, list[str]] = {
    "leadership": ["Take on team lead roles", "Pursue management training"],
    "technical": ["Stay updated with latest technologies", "Contribute to open source"],
    "communication": ["Practice public speaking", "Write technical blogs"],
    "project management": ["Get PMP certification", "Lead cross-functional projects"],
}

YEARS_PER_JOB = 2


def _contains_any(value: str, needles: list[str]) -> bool:
    lowered = value.lower()
    return any(needle.lower() in lowered for needle in needles)


def _strings(items: Any) -> list[str]:
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, str)]


def _skill_groups(skills: Any) -> dict[str, list[str]]:
    if isinstance(skills, dict):
        return {name: _strings(values) for name, values in skills.items()}
    # A flat list gets treated as technical skills
    return {"technical": _strings(skills)}


def _technical(data: dict[str, Any]) -> list[str]:
    return _skill_groups(data.get("skills")).get("technical", [])


# --- Resume extraction ---

def count_skills(skills: Any) -> int:
    return sum(len(values) for values in _skill_groups(skills).values())


def assess_market_demand(skills: list[str]) -> str:
    matches = sum(1 for skill in skills if _contains_any(skill, HIGH_DEMAND_SKILLS))
    if matches >= 3:
        return "High"
    if matches >= 1:
        return "Medium"
    return "Low"


def assess_skill_level(skills: Any) -> str:
    total = count_skills(skills)
    if total >= 20:
        return "Expert"
    if total >= 10:
        return "Advanced"
    if total >= 5:
        return "Intermediate"
    return "Beginner"


def analyze_skills(skills: Any) -> dict[str, Any]:
    groups = _skill_groups(skills)
    return {
        "totalSkills": count_skills(skills),
        "categories": {
            name: len(groups.get(name, []))
            for name in ("technical", "frameworks", "languages", "tools")
        },
        "marketDemand": assess_market_demand(groups.get("technical", [])),
        "skillLevel": assess_skill_level(skills),
    }


def assess_career_progression(experience: list[dict[str, Any]]) -> str:
    titles = [str(job.get("title") or "") for job in experience]
    if any(_contains_any(title, list(LEADERSHIP_MARKERS)) for title in titles):
        return "Upward"
    return "Steady"


def assess_experience_level(experience: Any) -> dict[str, Any]:
    # Dates from the model are free text, so tenure is estimated per job
    jobs = [job for job in experience if isinstance(job, dict)] if isinstance(experience, list) else []
    total_years = len(jobs) * YEARS_PER_JOB
    if total_years >= 8:
        level = "Senior"
    elif total_years >= 4:
        level = "Mid-level"
    elif total_years >= 2:
        level = "Junior"
    else:
        level = "Entry"

    return {
        "totalYears": total_years,
        "level": level,
        "jobCount": len(jobs),
        "averageJobDuration": total_years / max(len(jobs), 1),
        "careerProgression": assess_career_progression(jobs),
    }


def identify_strengths(data: dict[str, Any]) -> list[str]:
    strengths = []
    if len(_technical(data)) >= 10:
        strengths.append("Strong technical skill set")
    if (data.get("experienceAssessment") or {}).get("totalYears", 0) >= 5:
        strengths.append("Extensive experience")
    if data.get("education"):
        strengths.append("Strong educational background")
    return strengths


def suggest_roles(data: dict[str, Any]) -> list[str]:
    skills = _technical(data)
    roles = []
    if any("javascript" in skill.lower() for skill in skills):
        roles += ["Frontend Developer", "Full Stack Developer"]
    if any("python" in skill.lower() for skill in skills):
        roles += ["Backend Developer", "Data Scientist"]
    return roles


def identify_skill_gaps(data: dict[str, Any]) -> list[str]:
    current = _technical(data)
    return [
        skill for skill in COMMON_SKILLS
        if not any(skill.lower() in existing.lower() for existing in current)
    ]


def generate_career_advice(data: dict[str, Any]) -> list[str]:
    advice = []
    if (data.get("experienceAssessment") or {}).get("totalYears", 0) < 2:
        advice.append("Focus on building foundational skills and gaining more experience")
    if (data.get("skillsAnalysis") or {}).get("marketDemand") == "Low":
        advice.append("Consider learning high-demand technologies like cloud platforms")
    return advice


def enhance_extracted_data(data: dict[str, Any], include_skills_analysis: bool = False) -> dict[str, Any]:
    """Return a copy of an extracted resume with derived assessments added."""
    enhanced = dict(data)
    if include_skills_analysis:
        enhanced["skillsAnalysis"] = analyze_skills(data.get("skills"))
    enhanced["experienceAssessment"] = assess_experience_level(data.get("experience"))
    enhanced["careerInsights"] = {
        "strengths": identify_strengths(enhanced),
        "recommendedRoles": suggest_roles(enhanced),
        "skillGaps": identify_skill_gaps(enhanced),
        "careerAdvice": generate_career_advice(enhanced),
    }
    return enhanced


# --- Experience summarization ---

def analyze_market_position(skills: list[str]) -> dict[str, Any]:
    high_demand = any(_contains_any(skill, HIGH_DEMAND_SKILLS + ["TypeScript"]) for skill in skills)
    emerging = any(_contains_any(skill, EMERGING_SKILLS) for skill in skills)
    return {
        "marketPosition": "Strong" if high_demand else "Moderate",
        "demandLevel": "High" if high_demand else "Medium",
        "futureProof": "High" if emerging else "Medium",
        "recommendations": (
            ["Leverage current high-demand skills"]
            if high_demand
            else ["Consider learning high-demand technologies"]
        ),
    }


def assess_role_suitability(skills: list[str], target_role: str) -> dict[str, Any]:
    keywords = ROLE_KEYWORDS.get(target_role.lower(), [])
    matched = sum(1 for keyword in keywords if any(keyword in skill.lower() for skill in skills))
    # Unknown roles have no keywords and score zero
    score = round(matched / len(keywords) * 100) if keywords else 0

    if score >= 70:
        recommendation = "Highly Suitable"
    elif score >= 50:
        recommendation = "Suitable with training"
    else:
        recommendation = "Not suitable"

    return {
        "suitabilityScore": score,
        "matchedSkills": matched,
        "totalRequiredSkills": len(keywords),
        "recommendation": recommendation,
    }


def find_relevant_experience(work_history: list[dict[str, Any]], area: str) -> list[str]:
    needle = area.lower()
    return [
        job.get("title") or "Relevant Position"
        for job in work_history
        if needle in str(job.get("description") or "").lower()
        or needle in str(job.get("title") or "").lower()
    ]


def analyze_focus_areas(work_history: list[dict[str, Any]], focus_areas: list[str]) -> list[dict[str, Any]]:
    analysis = []
    for area in focus_areas:
        relevant = find_relevant_experience(work_history, area)
        if len(relevant) >= 3:
            strength = "Strong"
        elif relevant:
            strength = "Moderate"
        else:
            strength = "Limited"
        analysis.append({
            "area": area,
            "relevantExperience": relevant,
            "strengthLevel": strength,
            "recommendations": AREA_RECOMMENDATIONS.get(
                area.lower(), ["Gain more experience in this area"]
            ),
        })
    return analysis


# --- Email generation ---

def word_count(text: str) -> int:
    return len(text.split())


def estimated_read_time(text: str, words_per_minute: int = 200) -> int:
    return math.ceil(word_count(text) / words_per_minute)
