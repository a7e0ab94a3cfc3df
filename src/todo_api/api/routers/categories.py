"""Routes handling category management. Writes are reserved for administrators."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from ...deps import AdminPrincipalDependency, CurrentPrincipalDependency, DatabaseSessionDependency
from ...schemas import CategoryCreate, CategoryRead, CategoryUpdate
from ...services import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])

CategoryId = Annotated[int, Path(ge=1, description="Category identifier")]


@router.get("", response_model=list[CategoryRead], summary="List categories, newest first")
async def list_categories(
    session: DatabaseSessionDependency,
    _principal: CurrentPrincipalDependency,
) -> list[CategoryRead]:
    categories = await CategoryService(session).list_categories()
    return [CategoryRead.model_validate(category) for category in categories]


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(
    payload: CategoryCreate,
    session: DatabaseSessionDependency,
    _admin: AdminPrincipalDependency,
) -> CategoryRead:
    category = await CategoryService(session).create_category(name=payload.name)
    return CategoryRead.model_validate(category)


@router.get("/{category_id}", response_model=CategoryRead, summary="Retrieve a category by id")
async def get_category(
    category_id: CategoryId,
    session: DatabaseSessionDependency,
    _principal: CurrentPrincipalDependency,
) -> CategoryRead:
    category = await CategoryService(session).get_category(category_id)
    return CategoryRead.model_validate(category)


@router.put("/{category_id}", response_model=CategoryRead, summary="Rename a category")
async def update_category(
    category_id: CategoryId,
    payload: CategoryUpdate,
    session: DatabaseSessionDependency,
    _admin: AdminPrincipalDependency,
) -> CategoryRead:
    category = await CategoryService(session).update_category(category_id, name=payload.name)
    return CategoryRead.model_validate(category)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a category and detach its todos",
)
async def delete_category(
    category_id: CategoryId,
    session: DatabaseSessionDependency,
    _admin: AdminPrincipalDependency,
) -> Response:
    await CategoryService(session).delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
