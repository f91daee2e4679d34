"""Prompt builders for every AI-backed resume operation."""

from __future__ import annotations

import json
from typing import Sequence

from resume_coach.schemas.chat import ChatTurn, QuickAction
from resume_coach.schemas.resumes import CreateResumeRequest, Feedback
from resume_coach.schemas.tailor import JobInfo

COACH_SYSTEM_PROMPT = (
    "You are an expert resume coach. Help users improve their resumes through conversation. "
    "Be helpful, specific, and encouraging."
)

WELCOME_MESSAGE = (
    "Hi! I'm your resume coach. I can help you refine and improve your resume. "
    "Ask me anything or use the quick actions below to get started!"
)

QUICK_ACTIONS: tuple[QuickAction, ...] = (
    QuickAction(
        label="Make more concise",
        prompt=(
            "Please make my resume more concise. Remove redundant phrases and tighten the "
            "language while keeping all key information."
        ),
    ),
    QuickAction(
        label="Add metrics",
        prompt=(
            "Help me add quantifiable metrics and numbers to my achievements. "
            "Suggest specific metrics I could add."
        ),
    ),
    QuickAction(
        label="Add action verbs",
        prompt="Improve my resume by using stronger action verbs. Replace weak verbs with powerful ones.",
    ),
    QuickAction(
        label="Improve keywords",
        prompt=(
            "Analyze my resume and suggest ATS-friendly keywords I should add based on "
            "common industry terms."
        ),
    ),
    QuickAction(
        label="Fix formatting",
        prompt="Review my resume's structure and suggest formatting improvements for better readability.",
    ),
    QuickAction(
        label="General tips",
        prompt="What are the top 3 things I should improve in my resume?",
    ),
)

FEEDBACK_FORMAT = """
interface Feedback {
  overallScore: number; //max 100
  ATS: {
    score: number; //rate based on ATS suitability
    tips: {
      type: "good" | "improve";
      tip: string; //give 3-4 tips
    }[];
  };
  toneAndStyle: {
    score: number; //max 100
    tips: {
      type: "good" | "improve";
      tip: string; //make it a short "title" for the actual explanation
      explanation: string; //explain in detail here
    }[]; //give 3-4 tips
  };
  content: {
    score: number; //max 100
    tips: {
      type: "good" | "improve";
      tip: string;
      explanation: string;
    }[]; //give 3-4 tips
  };
  structure: {
    score: number; //max 100
    tips: {
      type: "good" | "improve";
      tip: string;
      explanation: string;
    }[]; //give 3-4 tips
  };
  skills: {
    score: number; //max 100
    tips: {
      type: "good" | "improve";
      tip: string;
      explanation: string;
    }[]; //give 3-4 tips
  };
}"""


def analyze_job_prompt(job: JobInfo) -> str:
    return f"""You are a job requirements analyst. Analyze the following job posting and extract:
1. Key technical skills required
2. Soft skills required
3. Experience level needed
4. Important keywords for ATS
5. Company culture indicators

Company: {job.company_name}
Job Title: {job.job_title}
Job Description:
{job.job_description}

Return a JSON object with these fields:
{{
    "technicalSkills": string[],
    "softSkills": string[],
    "experienceLevel": string,
    "keywords": string[],
    "cultureFit": string[]
}}

Return ONLY the JSON, no other text."""


def tailor_section_prompt(section: str, content: str, requirements: str) -> str:
    return f"""You are an expert resume writer. Tailor the following resume section to better match the job requirements.

Section: {section}
Original Content:
{content}

Job Requirements:
{requirements}

Rules:
1. DO NOT invent or fabricate information
2. Reword to incorporate relevant keywords naturally
3. Highlight relevant experience that matches requirements
4. Use strong action verbs
5. Keep it concise and professional

Return ONLY the tailored content, no explanations."""


def measure_fit_prompt(resume_text: str, job: JobInfo) -> str:
    return f"""You are an ATS and job fit expert. Analyze how well this resume matches the job posting.

Resume:
{resume_text}

Job:
Company: {job.company_name}
Title: {job.job_title}
Description: {job.job_description}

Provide a detailed analysis in this JSON format:
{{
    "overall": number (0-100),
    "keywordMatch": number (0-100),
    "skillsMatch": number (0-100),
    "experienceMatch": number (0-100),
    "gaps": string[] (what's missing),
    "suggestions": string[] (how to improve)
}}

Return ONLY the JSON, no other text."""


def chat_enhance_prompt(resume_text: str, history: Sequence[ChatTurn], message: str) -> str:
    previous = "\n".join(f"{turn.role}: {turn.content}" for turn in history)
    return f"""You are an expert resume coach helping a job seeker improve their resume.

Current Resume:
{resume_text}

Previous Conversation:
{previous}

User's Request: {message}

IMPORTANT: After making the requested changes, you MUST respond in this exact format:

EXPLANATION:
[Briefly explain what changes you made and why they help]

UPDATED_RESUME:
[The complete updated resume with all the changes applied]

Make sure to include the full resume content after UPDATED_RESUME:, not just the changed sections."""


def feedback_prompt(job_title: str = "", job_description: str = "") -> str:
    return f"""You are an expert in ATS (Applicant Tracking System) and resume analysis.
Please analyze and rate this resume and suggest how to improve it.
The rating can be low if the resume is bad.
Be thorough and detailed. Don't be afraid to point out any mistakes or areas for improvement.
If there is a lot to improve, don't hesitate to give low scores. This is to help the user to improve their resume.
If available, use the job description for the job user is applying to to give more detailed feedback.
If provided, take the job description into consideration.
The job title is: {job_title}
The job description is: {job_description}
Provide the feedback using the following format:
{FEEDBACK_FORMAT}
Return the analysis as an JSON object, without any other text and without the backticks.
Do not include any other text or comments."""


def enhancement_prompt(
    resume_text: str,
    *,
    feedback: Feedback | None = None,
    job_title: str = "",
    job_description: str = "",
) -> str:
    feedback_json = (
        json.dumps(feedback.model_dump(by_alias=True), indent=2) if feedback is not None else "{}"
    )
    return f"""# Resume Enhancement Task

You are an expert resume writer and career coach who helps job seekers create compelling, ATS-friendly resumes that get interviews.
Your goal is to transform the given resume into a more professional, ATS-optimized, and better-structured version,
but you must never invent or fabricate any information not present in the original content.

## IMPORTANT RULES

1. DO NOT make up details. Never add new companies, job titles, projects, technologies, or achievements that are not explicitly mentioned in the original resume.
2. Enhance only structure and clarity. You may reword, reorder, and tighten language, but the meaning must remain faithful to the original.
3. If data is missing, leave placeholders like [Add metric here] or [Clarify responsibility].
4. Focus on improving presentation, formatting, and ATS alignment.

## CONTEXT

Job Title: {job_title}
Job Description: {job_description}

Original Resume Content:
{resume_text}

Original AI Feedback:
{feedback_json}

## TASK

- Keep all factual information intact.
- Restructure and polish the resume according to best practices.
- Improve clarity, action verbs, and consistency.
- Follow the structure Header, Experience, Education, Skills.
- Return the final result as plain text (no JSON or explanations).

Return only the enhanced resume content, no commentary or extra text."""


def create_resume_prompt(request: CreateResumeRequest) -> str:
    personal = request.personal_info.model_dump(exclude_none=True)
    experience = [entry.model_dump() for entry in request.experience]
    education = [entry.model_dump() for entry in request.education]
    return f"""You are an expert resume writer specializing in ATS-optimized resumes.

TARGET JOB (if provided):
- Job Title: {request.job_title or 'Not specified'}
- Job Description: {request.job_description or 'Not specified'}

USER INFORMATION:
Personal Info: {json.dumps(personal, ensure_ascii=False)}
Experience: {json.dumps(experience, ensure_ascii=False)}
Education: {json.dumps(education, ensure_ascii=False)}
Skills: {', '.join(request.skills)}

TASK:
Create a professional, ATS-optimized resume using the information provided.
- Use a clean, modern format
- Optimize for ATS scanning
- Use action verbs and quantifiable achievements
- Tailor content to the target job (if provided)
- Include a compelling professional summary
- Format: Plain text

Return ONLY the resume content in a professional format.
No explanations, no comments, just the resume."""
