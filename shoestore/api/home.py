"""Landing page endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from shoestore.api.products import get_catalog_service, product_to_schema, summary_to_schema
from shoestore.api.schemas import HomeResponse
from shoestore.catalog.service import CatalogService

router = APIRouter(tags=["Home"])


@router.get(
    "/",
    response_model=HomeResponse,
    summary="Landing page",
    description="Featured products, latest products, and categories with product counts.",
)
async def home(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> HomeResponse:
    """Get landing page content.

    Returns:
        Up to eight featured and eight latest active products, and every
        category with its active product count.
    """
    page = await service.get_home()

    return HomeResponse(
        featured_products=[product_to_schema(p) for p in page.featured_products],
        latest_products=[product_to_schema(p) for p in page.latest_products],
        categories=[summary_to_schema(s) for s in page.categories],
    )
