"""
Request body schemas for the planner API (pydantic).

Values are kept as strings/numbers exactly as submitted; the domain layer owns
the actual validation rules so the API reports the same field + code failures
as the console.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Union

Number = Union[float, str]


class _Stripped(BaseModel):
    @field_validator('*', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class WeekInput(_Stripped):
    """Schema for adding a week."""
    anchor_date: str = Field(..., description="Week anchor date (Sunday), YYYY-MM-DD")


class MealInput(_Stripped):
    """Schema for adding a meal to a day."""
    name: str


class IngredientInput(_Stripped):
    """Schema for adding an ingredient to a meal."""
    name: str
    quantity: Number
    carbs_per_100g: Optional[Number] = None
    fat_per_100g: Optional[Number] = None
    protein_per_100g: Optional[Number] = None


class QuantityUpdateInput(_Stripped):
    """Schema for changing an ingredient quantity."""
    quantity: Number
