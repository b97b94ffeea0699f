"""Category catalog API. Reads are open to any authenticated user; mutations are role-gated."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from compliancedocs.api.dependencies import (
    get_category_reader,
    get_category_service,
    require_permission,
)
from compliancedocs.application.dtos.category import SubcategoryData
from compliancedocs.application.dtos.user import AuthenticatedIdentity
from compliancedocs.application.use_cases.categories import CategoryService
from compliancedocs.core.limiter import limit_writes
from compliancedocs.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    SubcategoryIn,
    SubcategoryUpdate,
)

router = APIRouter()

CategoryReader = Annotated[CategoryService, Depends(get_category_reader)]
CategoryWriter = Annotated[CategoryService, Depends(get_category_service)]


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    categories: CategoryReader,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("category", "read"))],
):
    return [CategoryResponse.model_validate(c) for c in await categories.list_categories()]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: str,
    categories: CategoryReader,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("category", "read"))],
):
    return CategoryResponse.model_validate(await categories.get_category(category_id))


@router.post("", response_model=CategoryResponse, status_code=201)
@limit_writes
async def create_category(
    request: Request,
    body: CategoryCreate,
    categories: CategoryWriter,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("category", "create"))],
):
    created = await categories.create_category(
        body.name,
        body.description,
        [SubcategoryData(name=s.name, description=s.description) for s in body.subcategories],
    )
    return CategoryResponse.model_validate(created)


@router.put("/{category_id}", response_model=CategoryResponse)
@limit_writes
async def update_category(
    request: Request,
    category_id: str,
    body: CategoryUpdate,
    categories: CategoryWriter,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("category", "update"))],
):
    updated = await categories.update_category(category_id, body.name, body.description)
    return CategoryResponse.model_validate(updated)


@router.delete("/{category_id}", status_code=204)
@limit_writes
async def delete_category(
    request: Request,
    category_id: str,
    categories: CategoryWriter,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("category", "delete"))],
) -> Response:
    await categories.delete_category(category_id)
    return Response(status_code=204)


@router.post("/{category_id}/subcategories", response_model=CategoryResponse, status_code=201)
@limit_writes
async def add_subcategory(
    request: Request,
    category_id: str,
    body: SubcategoryIn,
    categories: CategoryWriter,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("subcategory", "create"))],
):
    updated = await categories.add_subcategory(category_id, body.name, body.description)
    return CategoryResponse.model_validate(updated)


@router.put("/{category_id}/subcategories/{name}", response_model=CategoryResponse)
@limit_writes
async def update_subcategory(
    request: Request,
    category_id: str,
    name: str,
    body: SubcategoryUpdate,
    categories: CategoryWriter,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("subcategory", "update"))],
):
    """Rename and/or redescribe a subcategory; a rename is applied to its documents too."""
    updated = await categories.update_subcategory(
        category_id, name, body.new_name, body.description
    )
    return CategoryResponse.model_validate(updated)


@router.delete("/{category_id}/subcategories/{name}", response_model=CategoryResponse)
@limit_writes
async def remove_subcategory(
    request: Request,
    category_id: str,
    name: str,
    categories: CategoryWriter,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("subcategory", "delete"))],
):
    return CategoryResponse.model_validate(
        await categories.remove_subcategory(category_id, name)
    )
