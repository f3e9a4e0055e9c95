import logging
from dataclasses import asdict
from fastapi import APIRouter

from vidhisahayak.core.response_utils import create_success_response, create_error_response, ResponseTimer
from vidhisahayak.schemas import (
    CategoryResponse, CategoryDetailResponse, CategoryMatchRequest, CategoryMatchResponse,
    GuidanceResponse, StandardResponse
)
from vidhisahayak.services.catalog import Category, get_category, get_guidance, list_categories
from vidhisahayak.services.category_matcher import get_category_matcher

logger = logging.getLogger(__name__)
router = APIRouter()


def _category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        slug=category.slug,
        name=category.name,
        image=category.image,
        create_hint=category.create_hint,
    )


@router.get("", response_model=StandardResponse)
async def list_all_categories():
    """List the legal document categories."""
    with ResponseTimer() as timer:
        return create_success_response(
            data=[_category_response(c) for c in list_categories()],
            status_code=200,
            execution_time=timer.get_execution_time()
        )


@router.post("/match", response_model=StandardResponse)
async def match_category(request: CategoryMatchRequest):
    """Find the category a free-text query is about. Data is null when nothing matches."""
    with ResponseTimer() as timer:
        match = get_category_matcher().match(request.query)
        data = CategoryMatchResponse(**asdict(match)) if match else None
        return create_success_response(
            data=data,
            status_code=200,
            execution_time=timer.get_execution_time()
        )


@router.get("/{slug}", response_model=StandardResponse)
async def get_category_detail(slug: str):
    """Get a category with its guidance checklist."""
    with ResponseTimer() as timer:
        category = get_category(slug)
        if category is None:
            return create_error_response(
                message="Category not found",
                status_code=404,
                execution_time=timer.get_execution_time()
            )

        guidance = get_guidance(slug)
        detail = CategoryDetailResponse(
            **_category_response(category).model_dump(),
            guidance=GuidanceResponse(**asdict(guidance)) if guidance else None,
        )
        return create_success_response(
            data=detail,
            status_code=200,
            execution_time=timer.get_execution_time()
        )
