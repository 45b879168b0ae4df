"""
Catalog Controllers

Categories and tags get full CRUD; the ingredient catalog is read-only
because ingredients are only ever created through recipe writes.
"""

from fastapi import APIRouter, Depends

from recipe_api.controllers.dependencies import (
    RowId,
    get_category_service,
    get_ingredient_catalog,
    get_tag_service,
)
from recipe_api.models import (
    CategoryInput,
    CategoryResponse,
    ErrorResponse,
    IngredientResponse,
    MessageResponse,
    TagInput,
    TagResponse,
)
from recipe_api.services import CategoryService, IngredientCatalog, TagService

categories_router = APIRouter(prefix="/categories", tags=["categories"])
tags_router = APIRouter(prefix="/tags", tags=["tags"])
ingredients_router = APIRouter(prefix="/ingredients", tags=["ingredients"])

_not_found = {404: {"model": ErrorResponse}}
_conflict = {409: {"model": ErrorResponse}}


# ============================================
# Categories
# ============================================

@categories_router.get("", response_model=list[CategoryResponse])
def list_categories(service: CategoryService = Depends(get_category_service)):
    return service.list_all()


@categories_router.post("", response_model=CategoryResponse, status_code=201, responses=_conflict)
def create_category(data: CategoryInput, service: CategoryService = Depends(get_category_service)):
    return service.create(data.name)


@categories_router.get("/{category_id}", response_model=CategoryResponse, responses=_not_found)
def get_category(category_id: RowId, service: CategoryService = Depends(get_category_service)):
    return service.get(category_id)


@categories_router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={**_not_found, **_conflict},
)
def update_category(
    category_id: RowId,
    data: CategoryInput,
    service: CategoryService = Depends(get_category_service),
):
    return service.update(category_id, data.name)


@categories_router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    responses={**_not_found, **_conflict},
)
def delete_category(category_id: RowId, service: CategoryService = Depends(get_category_service)):
    """Delete a category. Fails with 409 while recipes still use it."""
    service.delete(category_id)
    return MessageResponse(message="Category deleted successfully")


# ============================================
# Tags
# ============================================

@tags_router.get("", response_model=list[TagResponse])
def list_tags(service: TagService = Depends(get_tag_service)):
    return service.list_all()


@tags_router.post("", response_model=TagResponse, status_code=201, responses=_conflict)
def create_tag(data: TagInput, service: TagService = Depends(get_tag_service)):
    return service.create(data.name)


@tags_router.get("/{tag_id}", response_model=TagResponse, responses=_not_found)
def get_tag(tag_id: RowId, service: TagService = Depends(get_tag_service)):
    return service.get(tag_id)


@tags_router.put("/{tag_id}", response_model=TagResponse, responses={**_not_found, **_conflict})
def update_tag(tag_id: RowId, data: TagInput, service: TagService = Depends(get_tag_service)):
    return service.update(tag_id, data.name)


@tags_router.delete("/{tag_id}", response_model=MessageResponse, responses=_not_found)
def delete_tag(tag_id: RowId, service: TagService = Depends(get_tag_service)):
    service.delete(tag_id)
    return MessageResponse(message="Tag deleted successfully")


# ============================================
# Ingredients
# ============================================

@ingredients_router.get("", response_model=list[IngredientResponse])
def list_ingredients(catalog: IngredientCatalog = Depends(get_ingredient_catalog)):
    """List every known ingredient, alphabetically."""
    return catalog.list_all()


@ingredients_router.get("/{ingredient_id}", response_model=IngredientResponse, responses=_not_found)
def get_ingredient(ingredient_id: RowId, catalog: IngredientCatalog = Depends(get_ingredient_catalog)):
    return catalog.get(ingredient_id)
