"""
Pydantic Schemas (Data Transfer Objects)

These schemas define the structure of data flowing in and out of the API.
They serve multiple purposes:
- Request validation: the single validation policy for every write entry point
- Response serialization: Control what data is exposed to clients
- Documentation: Generate OpenAPI docs automatically

Naming Convention:
- *Input: Data received from clients (create/update operations)
- *Response: Data returned to clients

Field names are snake_case in Python and camelCase on the wire. Input
accepts either spelling so older clients sending category_id keep working.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Largest value a BIGINT / SQLite INTEGER key can hold
MAX_ROW_ID = 2**63 - 1


class ApiModel(BaseModel):
    """Base for all schemas: camelCase aliases, trimmed strings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        from_attributes=True,
    )


# ============================================
# Ingredient Schemas
# ============================================

class IngredientLineInput(ApiModel):
    """One ingredient line of a recipe being created or updated."""
    name: str = Field(..., min_length=1, max_length=100, description="Ingredient name (case-sensitive)")
    quantity: float = Field(..., gt=0, allow_inf_nan=False, description="Amount needed, must be positive")
    unit: str = Field(..., min_length=1, max_length=50, description="Unit of measure (e.g. 'cup', 'tsp')")


class IngredientLineResponse(ApiModel):
    """Ingredient line as embedded in a recipe."""
    name: str
    quantity: float
    unit: str


class IngredientResponse(ApiModel):
    """Ingredient catalog entry."""
    ingredient_id: int
    name: str


# ============================================
# Recipe Schemas
# ============================================

class RecipeInput(ApiModel):
    """
    Request body for creating or updating a recipe.

    An update replaces the whole ingredient list with the one given here.
    """
    title: str = Field(..., min_length=1, max_length=200, description="Recipe title")
    instructions: str = Field(..., min_length=1, description="Preparation instructions")
    image_url: Optional[str] = Field(None, max_length=500, description="URL of an already uploaded image")
    category_id: int = Field(..., ge=1, le=MAX_ROW_ID, description="ID of an existing category")
    ingredients: list[IngredientLineInput] = Field(..., description="Ingredient lines")


class RecipeResponse(ApiModel):
    """Complete recipe with its ingredient lines."""
    recipe_id: int
    title: str
    instructions: str
    image_url: Optional[str]
    category_id: int
    created_at: datetime
    updated_at: datetime
    ingredients: list[IngredientLineResponse]


class RecipeCreated(ApiModel):
    recipe_id: int


# ============================================
# Category & Tag Schemas
# ============================================

class CategoryInput(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(ApiModel):
    category_id: int
    name: str


class TagInput(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)


class TagResponse(ApiModel):
    tag_id: int
    name: str


# ============================================
# Generic Responses
# ============================================

class MessageResponse(ApiModel):
    message: str


class ErrorResponse(ApiModel):
    error: str
