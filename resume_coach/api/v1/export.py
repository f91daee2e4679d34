import asyncio

from fastapi import APIRouter, Request, Response

from resume_coach.api.errors import raise_http_error
from resume_coach.core.rate_limit import rate_limit
from resume_coach.export import ExportFormat, build_layout_plan, export_resume
from resume_coach.schemas.export import ExportRequest, LayoutPlanResponse
from resume_coach.storage.repository import ResumeNotFoundError, get_resume

router = APIRouter()


def _resume_text(payload: ExportRequest) -> str:
    if (payload.resume_text or "").strip():
        return payload.resume_text or ""
    try:
        return get_resume(payload.resume_id or "").resume_text
    except ResumeNotFoundError as exc:
        raise_http_error(exc)


async def _export(payload: ExportRequest, export_format: ExportFormat) -> Response:
    text = _resume_text(payload)
    try:
        document = await asyncio.to_thread(export_resume, text, export_format)
    except ValueError as exc:
        raise_http_error(exc)
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


@router.post("/export/pdf", summary="Render a resume as a PDF attachment.")
@rate_limit()
async def export_pdf(request: Request, payload: ExportRequest):
    _ = request
    return await _export(payload, ExportFormat.PDF)


@router.post("/export/docx", summary="Render a resume as a DOCX attachment.")
@rate_limit()
async def export_docx(request: Request, payload: ExportRequest):
    _ = request
    return await _export(payload, ExportFormat.DOCX)


@router.post("/export/layout", response_model=LayoutPlanResponse, summary="Preview how each resume line is classified.")
async def export_layout(payload: ExportRequest):
    return LayoutPlanResponse.from_plan(build_layout_plan(_resume_text(payload)))
