import json
from typing import Any, Dict, List, Optional

from careersync.schemas.analysis import JobRequirement


ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert resume analyzer. Provide objective, actionable feedback in valid JSON format only. "
    "No additional text outside the JSON structure."
)

COVER_LETTER_SYSTEM_PROMPT = (
    "You are an expert career writer. Create compelling, professional cover letters that are personalized "
    "and show genuine interest. Keep the tone professional but engaging."
)


def build_analysis_prompt(job: JobRequirement, resume_text: str) -> str:
    """Render the resume-vs-job analysis request.

    Pure function: identical inputs always render byte-identical text.
    """
    skills = ", ".join(str(skill) for skill in job.skills)
    return (
        "Analyze this resume against the job requirements and provide a detailed assessment:\n"
        "\n"
        f"JOB TITLE: {job.title}\n"
        f"JOB REQUIREMENTS: {job.requirements}\n"
        f"REQUIRED SKILLS: {skills}\n"
        f"JOB DESCRIPTION: {job.description}\n"
        "\n"
        "RESUME CONTENT:\n"
        f"{resume_text}\n"
        "\n"
        "Respond with a JSON object with exactly these keys:\n"
        '1. "score" (integer 0-100): Overall match percentage\n'
        '2. "matchingSkills" (array of strings): Skills found in resume that match job requirements\n'
        '3. "missingSkills" (array of strings): Important skills missing from resume\n'
        '4. "strengths" (array of strings): Key strengths of the candidate\n'
        '5. "suggestions" (array of strings): Specific improvement recommendations\n'
        "\n"
        "Return only the JSON object, with no text before or after it."
    )


def build_cover_letter_prompt(
    job: JobRequirement,
    company_name: Optional[str],
    applicant_name: Optional[str],
    applicant_skills: List[str],
    user_experience: Optional[str] = None,
    custom_prompt: Optional[str] = None,
) -> str:
    return (
        "Generate a professional cover letter for:\n"
        f"Position: {job.title}\n"
        f"Company: {company_name or 'the company'}\n"
        f"Job Description: {job.description}\n"
        f"Requirements: {job.requirements}\n"
        f"Applicant Name: {applicant_name or 'Applicant'}\n"
        f"Applicant Skills: {', '.join(applicant_skills) or 'Various professional skills'}\n"
        f"Additional Experience: {user_experience or 'Relevant industry experience'}\n"
        f"Custom Requirements: {custom_prompt or 'Standard professional cover letter'}\n"
        "\n"
        "Create a compelling, personalized cover letter that highlights relevant experience, shows enthusiasm, "
        "and addresses specific job requirements. Keep it professional and concise."
    )


def build_chat_system_prompt(user_name: Optional[str], context: Dict[str, Any]) -> str:
    return (
        "You are a helpful AI career assistant for CareerSync Pro. "
        f"The user's name is {user_name or 'there'}. "
        "Help them with job searching, career advice, resume analysis, and interview preparation. "
        "Be concise, helpful, and professional. "
        f"Context: {json.dumps(context, sort_keys=True, default=str)}"
    )
