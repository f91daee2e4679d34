import asyncio

from fastapi import APIRouter, File, Form, HTTPException, Request, Response, UploadFile, status

from resume_coach.api.errors import raise_http_error
from resume_coach.core.config import settings
from resume_coach.core.rate_limit import rate_limit
from resume_coach.parsing.clean import clean_resume_text
from resume_coach.parsing.parse import parse_resume_bytes, supported_extensions
from resume_coach.schemas.resumes import (
    AnalyzeRequest,
    CreateResumeRequest,
    EnhanceRequest,
    ResumeRecord,
    ResumeSummary,
    ResumeTextRequest,
)
from resume_coach.services.enhance_service import enhance_resume, generate_resume
from resume_coach.services.feedback_service import analyze_resume
from resume_coach.services.llm import ResumeAIError
from resume_coach.storage.repository import (
    ResumeNotFoundError,
    create_resume,
    delete_resume,
    get_resume,
    list_resumes,
    list_tailored_results,
)

router = APIRouter()

_READ_CHUNK_BYTES = 1024 * 64


async def _read_upload(file: UploadFile) -> bytes:
    max_bytes = settings.max_upload_mb * 1024 * 1024
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_mb} MB.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/resumes/upload", response_model=ResumeRecord, status_code=status.HTTP_201_CREATED)
@rate_limit()
async def upload_resume(
    request: Request,
    file: UploadFile = File(...),
    company_name: str = Form(default=""),
    job_title: str = Form(default=""),
    job_description: str = Form(default=""),
):
    _ = request
    filename = file.filename or "resume"
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext not in supported_extensions():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type '.{ext}'. Allowed: {', '.join(supported_extensions())}.",
        )

    content = await _read_upload(file)
    try:
        parsed = await asyncio.to_thread(parse_resume_bytes, filename, content)
    except ValueError as exc:
        raise_http_error(exc)
    if not parsed.text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No text could be extracted from the uploaded file.",
        )

    return create_resume(
        parsed.text,
        filename=filename,
        company_name=company_name.strip(),
        job_title=job_title.strip(),
        job_description=job_description.strip(),
        parsing_warnings=parsed.parsing_warnings,
    )


@router.post("/resumes", response_model=ResumeRecord, status_code=status.HTTP_201_CREATED)
@rate_limit()
async def create_resume_from_text(request: Request, payload: ResumeTextRequest):
    _ = request
    text = clean_resume_text(payload.resume_text)
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Resume text is empty.")
    return create_resume(
        text,
        filename="resume.txt",
        company_name=payload.company_name.strip(),
        job_title=payload.job_title.strip(),
        job_description=payload.job_description.strip(),
    )


@router.post("/resumes/generate", response_model=ResumeRecord, status_code=status.HTTP_201_CREATED)
@rate_limit("10/minute")
async def generate_resume_from_form(request: Request, payload: CreateResumeRequest):
    _ = request
    try:
        return await asyncio.to_thread(generate_resume, payload)
    except (ResumeAIError, ValueError) as exc:
        raise_http_error(exc)


@router.get("/resumes", response_model=list[ResumeSummary])
async def list_stored_resumes():
    return list_resumes()


@router.get("/resumes/{resume_id}", response_model=ResumeRecord)
async def get_stored_resume(resume_id: str):
    try:
        return get_resume(resume_id)
    except ResumeNotFoundError as exc:
        raise_http_error(exc)


@router.delete("/resumes/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stored_resume(resume_id: str):
    try:
        delete_resume(resume_id)
    except ResumeNotFoundError as exc:
        raise_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/resumes/{resume_id}/tailored")
async def list_resume_tailorings(resume_id: str):
    try:
        get_resume(resume_id)
    except ResumeNotFoundError as exc:
        raise_http_error(exc)
    return {"resume_id": resume_id, "results": list_tailored_results(resume_id)}


@router.post("/resumes/{resume_id}/analyze", response_model=ResumeRecord)
@rate_limit("20/minute")
async def analyze_stored_resume(request: Request, resume_id: str, payload: AnalyzeRequest):
    _ = request
    try:
        return await asyncio.to_thread(
            analyze_resume,
            resume_id,
            job_title=payload.job_title,
            job_description=payload.job_description,
            model=payload.model,
        )
    except (ResumeNotFoundError, ResumeAIError, ValueError) as exc:
        raise_http_error(exc)


@router.post("/resumes/{resume_id}/enhance", response_model=ResumeRecord, status_code=status.HTTP_201_CREATED)
@rate_limit("10/minute")
async def enhance_stored_resume(request: Request, resume_id: str, payload: EnhanceRequest | None = None):
    _ = request
    try:
        return await asyncio.to_thread(enhance_resume, resume_id, model=payload.model if payload else None)
    except (ResumeNotFoundError, ResumeAIError, ValueError) as exc:
        raise_http_error(exc)
