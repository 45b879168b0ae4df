"""
SQLAlchemy ORM Entity Models

These models represent the database tables and define the relationships
between entities.

Database Design Rationale:
- Ingredient names are stored once and shared by every recipe
- Cascade deletes keep the join table free of orphaned lines
- quantity > 0 is enforced by a CHECK constraint as well as by the schemas

Table Relationships:
    Category (1) ──> (*) Recipe (1) ──> (*) RecipeIngredient ──> (1) Ingredient

    Tag is standalone.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from recipe_api.database import Base


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (what DateTime columns store)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Category(Base):
    """Grouping for recipes, e.g. "Dessert" or "Breakfast"."""
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)

    # passive_deletes="all" leaves the FK to refuse deleting a category in use
    recipes = relationship("Recipe", back_populates="category", passive_deletes="all")


class Recipe(Base):
    """
    Recipe metadata and the central entity in the domain model.

    Ingredient lines are owned by the recipe; they are rewritten as a whole
    by the recipe writer and removed together with the recipe.
    """
    __tablename__ = "recipes"

    recipe_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    instructions = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    category_id = Column(
        Integer,
        ForeignKey("categories.category_id"),
        nullable=False
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    category = relationship("Category", back_populates="recipes")
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class Ingredient(Base):
    """
    Normalized ingredient names.

    The unique constraint on name is what makes concurrent ingredient
    creation safe; see IngredientResolver.
    """
    __tablename__ = "ingredients"

    ingredient_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)


class RecipeIngredient(Base):
    """
    Junction table linking recipes to ingredients with quantities.

    Each row is one ingredient line: which ingredient, how much of it,
    and in what unit.
    """
    __tablename__ = "recipe_ingredients"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_recipe_ingredients_quantity_positive"),
    )

    recipe_ingredient_id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer,
        ForeignKey("recipes.recipe_id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    ingredient_id = Column(
        Integer,
        ForeignKey("ingredients.ingredient_id"),
        nullable=False
    )
    quantity = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)

    recipe = relationship("Recipe", back_populates="ingredients")
    ingredient = relationship("Ingredient")


class Tag(Base):
    """Free-form label, managed independently of recipes."""
    __tablename__ = "tags"

    tag_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
