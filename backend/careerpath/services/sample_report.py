from __future__ import annotations

from datetime import datetime
from typing import Any

from careerpath.schemas.forms import split_skills

DEFAULT_DESIRED_ROLE = "Data Scientist"
DEFAULT_CURRENT_ROLE = "Product Manager"

# Fit score by professional level; later-career profiles transfer more.
LEVEL_FIT_SCORES = {
    "Entry-Level": 5,
    "Junior": 6,
    "Mid-Level": 7,
    "Senior": 7,
    "Lead": 8,
    "Manager": 7,
    "Director": 6,
    "Executive": 6,
}


def _current_role(career_history: str) -> str:
    first = (career_history or "").split(",")[0].strip()
    if not first:
        return DEFAULT_CURRENT_ROLE
    # "Product Manager for a retail tech company (3 years)" -> "Product Manager"
    for marker in (" for ", " at ", " (", " in "):
        if marker in first:
            first = first.split(marker, 1)[0]
    return first.strip() or DEFAULT_CURRENT_ROLE


def generate_sample_report(request_data: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build a complete, static Career Analysis Report without calling a model.

    Used when no AI provider is configured so the analysis flow still returns
    a realistic report. Only the role names, skills and location come from
    ``request_data``; everything else is fixed.
    """
    data = request_data or {}
    target = (data.get("desiredRole") or "").strip() or DEFAULT_DESIRED_ROLE
    current = _current_role(data.get("careerHistory", ""))
    level = (data.get("professionalLevel") or "Mid-Level").strip()
    skills = split_skills(data.get("currentSkills", "")) or [
        "Project management",
        "Stakeholder management",
        "User research",
    ]
    location = ", ".join(
        part for part in ((data.get("state") or "").strip(), (data.get("country") or "").strip()) if part
    ) or "your region"
    top_skill = skills[0]
    second_skill = skills[1] if len(skills) > 1 else "Communication"
    fit = LEVEL_FIT_SCORES.get(level, 7)

    return {
        "executiveSummary": {
            "summary": (
                f"This analysis outlines a transition plan from {current} to {target}. "
                f"It builds on your strengths in {top_skill} and {second_skill} while closing "
                "the technical gaps the target role demands."
            ),
            "careerGoal": target,
            "fitScore": {
                "score": fit,
                "outOf": 10,
                "description": (
                    f"A {fit}/10 fit reflects strong transferable experience at the {level} level "
                    f"and a moderate gap in the specialist skills required for {target}."
                ),
            },
            "keyFindings": [
                f"{top_skill} transfers directly to the day-to-day work of a {target}.",
                "Technical depth in the core tools of the role is the largest gap.",
                f"Demand for {target} roles in {location} supports a 12-24 month transition.",
            ],
        },
        "skillMapping": {
            "skillsAnalysis": (
                "Your current skill set shows strong business and delivery capabilities with "
                "limited specialist depth. The mapping below places each skill on SFIA 9 and "
                "DigComp 2.2 proficiency scales."
            ),
            "sfiaSkills": [
                {"skill": top_skill, "proficiency": 4, "description": "Applied independently across multiple projects.", "category": "Delivery"},
                {"skill": "Business Analysis", "proficiency": 4, "description": "Translates business needs into clear requirements.", "category": "Business"},
                {"skill": "Data Analysis", "proficiency": 2, "description": "Basic understanding with limited practical experience.", "category": "Technical"},
            ],
            "digCompSkills": [
                {"skill": "Data Literacy", "proficiency": 3, "description": "Reads and communicates data as information.", "category": "Information"},
                {"skill": "Digital Content Creation", "proficiency": 4, "description": "Creates and edits digital content for many purposes.", "category": "Creation"},
            ],
            "otherSkills": [
                {"skill": second_skill, "proficiency": 4, "description": "Consistently effective with varied audiences.", "category": "Soft Skills"},
                {"skill": "Team Leadership", "proficiency": 4, "description": "Leads and motivates cross-functional teams.", "category": "Soft Skills"},
            ],
        },
        "skillGapAnalysis": {
            "targetRole": target,
            "currentProficiencyData": {
                "labels": ["Domain Knowledge", "Core Tools", "Programming", "Statistics", "Communication"],
                "datasets": [{"label": "Current Level", "data": [4, 2, 2, 2, 4]}],
            },
            "gapAnalysisData": {
                "labels": ["Domain Knowledge", "Core Tools", "Programming", "Statistics", "Communication"],
                "datasets": [
                    {"label": "Current Level", "data": [4, 2, 2, 2, 4]},
                    {"label": "Required Level", "data": [4, 5, 5, 4, 4]},
                ],
            },
            "aiAnalysis": (
                f"Your background as {current} provides valuable context but shows gaps in the "
                f"core tooling, programming and quantitative skills expected of a {target}."
            ),
            "keyGaps": [
                {"skill": "Core Tools", "currentLevel": 2, "requiredLevel": 5, "gap": 3, "priority": "High", "improvementSuggestion": "Work through a structured course, then apply it in a portfolio project."},
                {"skill": "Programming", "currentLevel": 2, "requiredLevel": 5, "gap": 3, "priority": "High", "improvementSuggestion": "Practise daily with small scripts and build one end-to-end project."},
                {"skill": "Statistics", "currentLevel": 2, "requiredLevel": 4, "gap": 2, "priority": "Medium", "improvementSuggestion": "Study applied statistics with real datasets from your domain."},
            ],
            "keyStrengths": [
                {"skill": top_skill, "currentLevel": 4, "requiredLevel": 3, "advantage": 1, "leverageSuggestion": f"Position {top_skill} as a differentiator in applications."},
                {"skill": second_skill, "currentLevel": 4, "requiredLevel": 3, "advantage": 1, "leverageSuggestion": "Lead stakeholder-facing work early to build credibility."},
            ],
        },
        "careerPathwayOptions": {
            "pathwayDescription": f"There are academic and vocational routes from {current} to {target}.",
            "currentRole": current,
            "targetRole": target,
            "timeframe": "18-24 months",
            "pathwaySteps": [
                {"step": "Build Technical Foundation", "timeframe": "0-6 months", "description": "Core tools and programming through online courses and small projects."},
                {"step": "Develop Advanced Skills", "timeframe": "6-12 months", "description": "Specialist techniques through coursework and increasingly complex projects."},
                {"step": "Applied Experience", "timeframe": "12-18 months", "description": "Capstone projects, open source, or a transitional role."},
                {"step": "Full Transition", "timeframe": "18-24 months", "description": f"Apply for {target} positions that value your combined background."},
            ],
            "universityPathway": [
                {"degree": f"Graduate Certificate related to {target}", "institutions": ["Georgia Tech (Online)", "University of Michigan"], "duration": "6-12 months part-time", "outcomes": ["Focused technical foundation", "Recognised credential"]},
            ],
            "vocationalPathway": [
                {"certification": "Professional Certificate", "providers": ["Coursera", "edX"], "duration": "3-6 months self-paced", "outcomes": ["Industry-recognised credential", "Flexible schedule"]},
            ],
            "aiInsights": f"Hybrid roles that combine {current} experience with {target} skills make good stepping stones.",
        },
        "developmentPlan": {
            "overview": f"A structured plan to build the skills needed for {target} while leveraging your {current} experience.",
            "technicalSkills": [
                {"skill": "Programming", "currentLevel": 2, "targetLevel": 5, "timeframe": "6 months", "resources": ["Online programming specialization", "Daily coding practice"]},
                {"skill": "Core Tools", "currentLevel": 2, "targetLevel": 4, "timeframe": "4 months", "resources": ["Vendor documentation and tutorials", "Guided projects"]},
            ],
            "softSkills": [
                {"skill": "Data Storytelling", "currentLevel": 3, "targetLevel": 5, "timeframe": "4 months", "resources": ["Storytelling with Data (book)", "Present project results monthly"]},
            ],
            "skillsToAcquire": [
                {"skill": "Cloud Platforms", "reason": f"Most {target} work runs on cloud infrastructure.", "timeframe": "4 months", "resources": ["Cloud fundamentals certification"]},
            ],
        },
        "educationalPrograms": {
            "introduction": f"Programs selected for a transition into {target}.",
            "recommendedPrograms": [
                {"name": f"{target} Professional Certificate", "provider": "Coursera", "duration": "6 months part-time", "format": "Online self-paced", "skillsCovered": ["Programming", "Core Tools", "Statistics"], "description": "Flexible program with hands-on projects."},
                {"name": "Intensive Bootcamp", "provider": "General Assembly", "duration": "12 weeks full-time", "format": "Remote", "skillsCovered": ["Programming", "Portfolio Projects"], "description": "Accelerated, practice-first curriculum."},
            ],
            "projectIdeas": [
                {"title": "Domain Case Study", "description": f"Apply {target} techniques to a problem from your {current} work.", "skillsDeveloped": ["Core Tools", "Communication"], "difficulty": "Intermediate", "timeEstimate": "4-6 weeks"},
            ],
        },
        "learningRoadmap": {
            "overview": "A phased roadmap from foundations to specialization.",
            "phases": [
                {"phase": "Foundation", "timeframe": "Months 1-3", "focus": "Programming and core concepts", "milestones": ["Finish an introductory course", "Ship a small script"], "resources": [{"type": "course", "name": "Introductory specialization", "link": ""}]},
                {"phase": "Intermediate", "timeframe": "Months 4-8", "focus": "Core tools and applied projects", "milestones": ["Publish first portfolio project"], "resources": [{"type": "book", "name": "Hands-on practitioner guide", "link": ""}]},
                {"phase": "Specialization", "timeframe": "Months 9-18", "focus": "Advanced techniques and job search", "milestones": ["Complete capstone", "Apply to roles"], "resources": [{"type": "practice", "name": "Community competitions", "link": ""}]},
            ],
            "skillsProgression": [
                {"skill": "Programming", "startLevel": 2, "targetLevel": 5, "milestones": ["Scripts", "Projects", "Production code"]},
                {"skill": "Statistics", "startLevel": 2, "targetLevel": 4, "milestones": ["Descriptive", "Inferential"]},
            ],
        },
        "similarRoles": {
            "introduction": "Roles that may offer a smoother transition or alternative direction.",
            "roles": [
                {"role": f"{target} (Associate)", "similarityScore": 85, "keySkillOverlap": [top_skill, "Business Analysis"], "additionalSkillsNeeded": ["Programming"], "summary": "Entry point with mentorship.", "averageSalary": "$80,000 - $110,000"},
                {"role": "Business Intelligence Analyst", "similarityScore": 70, "keySkillOverlap": ["Business Analysis", second_skill], "additionalSkillsNeeded": ["SQL", "Dashboards"], "summary": "Turns data into business insight.", "averageSalary": "$75,000 - $115,000"},
            ],
        },
        "quickTips": {
            "introduction": "Small actions with outsized impact.",
            "quickWins": [
                {"tip": "Rewrite your profile headline around the target role", "timeframe": "1 day", "impact": "Medium"},
                {"tip": "Join one practitioner community and post weekly", "timeframe": "1 week", "impact": "High"},
            ],
            "industryInsights": [f"Employers hiring {target} increasingly value domain experience."],
        },
        "growthTrajectory": {
            "introduction": f"Expected progression after moving into {target}.",
            "shortTerm": {"role": f"Junior {target}", "timeline": "0-1 years", "responsibilities": ["Deliver scoped analyses"], "skillsRequired": ["Programming"], "salary": {"min": 75000, "max": 95000, "currency": "USD"}},
            "mediumTerm": {"role": target, "timeline": "1-3 years", "responsibilities": ["Own projects end to end"], "skillsRequired": ["Core Tools", "Statistics"], "salary": {"min": 95000, "max": 125000, "currency": "USD"}},
            "longTerm": {"role": f"Senior {target}", "timeline": "3-5 years", "responsibilities": ["Lead initiatives", "Mentor others"], "skillsRequired": ["Leadership"], "salary": {"min": 125000, "max": 160000, "currency": "USD"}},
            "potentialSalaryProgression": [
                {"stage": "Entry", "timeframe": "Year 1", "salary": "$75,000 - $95,000"},
                {"stage": "Mid", "timeframe": "Year 3", "salary": "$95,000 - $125,000"},
                {"stage": "Senior", "timeframe": "Year 5", "salary": "$125,000 - $160,000"},
            ],
        },
        "learningPathRoadmap": {
            "overview": f"Your journey from {current} to {target}.",
            "careerTrajectory": [
                {"stage": "Foundation", "timeframe": "Months 1-6", "role": current, "skills": ["Programming", "Core Tools"], "milestones": ["First project shipped"]},
                {"stage": "Transition", "timeframe": "Months 7-18", "role": f"Junior {target}", "skills": ["Statistics", "Storytelling"], "milestones": ["Portfolio complete", "First offer"]},
                {"stage": "Growth", "timeframe": "Months 19-36", "role": target, "skills": ["Specialization"], "milestones": ["Lead a project"]},
            ],
        },
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }
