import logging
from dataclasses import asdict
from fastapi import APIRouter

from vidhisahayak.core.response_utils import create_success_response, create_error_response, ResponseTimer
from vidhisahayak.schemas import (
    DocumentDetailsResponse, DocumentRenderRequest, RenderedDocumentResponse, StandardResponse
)
from vidhisahayak.services.catalog import document_details, get_category
from vidhisahayak.services.document_service import render_document, template_fields

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{slug}", response_model=StandardResponse)
async def get_document_details(slug: str):
    """Where to get, verify and submit a category's documents, plus its template fields."""
    with ResponseTimer() as timer:
        category = get_category(slug)
        if category is None:
            return create_error_response(
                message="Document category not found",
                status_code=404,
                execution_time=timer.get_execution_time()
            )

        details = DocumentDetailsResponse(
            slug=category.slug,
            name=category.name,
            create_hint=category.create_hint,
            fields=[f.to_response() for f in template_fields(slug)],
            **asdict(document_details(slug)),
        )
        return create_success_response(
            data=details,
            status_code=200,
            execution_time=timer.get_execution_time()
        )


@router.post("/{slug}/render", response_model=StandardResponse)
async def render_document_template(slug: str, request: DocumentRenderRequest):
    """Fill a category's template and return its lines."""
    with ResponseTimer() as timer:
        if get_category(slug) is None:
            return create_error_response(
                message="Document category not found",
                status_code=404,
                execution_time=timer.get_execution_time()
            )

        try:
            document = render_document(slug, request.common, request.fields)
            return create_success_response(
                data=RenderedDocumentResponse(
                    slug=document.slug,
                    title=document.title,
                    lines=document.lines,
                    text=document.text,
                ),
                status_code=200,
                execution_time=timer.get_execution_time()
            )

        except Exception as e:
            logger.error(f"Error rendering {slug} template: {e}")
            return create_error_response(
                message="Failed to render document",
                status_code=500,
                execution_time=timer.get_execution_time()
            )
