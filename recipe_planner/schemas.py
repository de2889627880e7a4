"""Request bodies.

Fields are optional so handlers can answer a missing value with a specific
400 message instead of a generic parsing error.
"""

from datetime import date

from pydantic import AliasChoices, BaseModel, Field


class SignupRequest(BaseModel):
    firstName: str | None = None
    lastName: str | None = None
    username: str | None = None
    password: str | None = None
    email: str | None = None


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class ProfileUpdateRequest(BaseModel):
    firstName: str | None = None
    lastName: str | None = None
    email: str | None = None
    location: str | None = None


class FavoriteRecipeRequest(BaseModel):
    recipeId: int | None = None


class CartItemRequest(BaseModel):
    """A cart item; ``itemName`` and ``name`` are accepted interchangeably."""

    id: int | str | None = None
    name: str | None = Field(default=None, validation_alias=AliasChoices("itemName", "name"))
    quantity: int = Field(default=1, ge=1)
    origin: str | None = None


class ItemIdRequest(BaseModel):
    itemId: int | str | None = None


class PantryItem(BaseModel):
    id: int | str
    name: str
    quantity: int = Field(default=1, ge=1)
    origin: str | None = None
    image: str | None = None
    expirationDate: date | None = None


class PantryAddRequest(BaseModel):
    item: PantryItem | None = None


class ExpirationUpdateRequest(BaseModel):
    itemId: int | str | None = None
    expirationDate: date | None = None


class PriceCheckRequest(BaseModel):
    zipcode: str | None = None


class BanWordRequest(BaseModel):
    word: str | None = None


class AdminRecipeRequest(BaseModel):
    title: str | None = None
    instructions: str | None = None
    ingredients: list[str] | None = None
    summary: str | None = None
    readyInMinutes: int | None = None


class RecipeCuisinesRequest(BaseModel):
    recipeId: int | None = None
    cuisines: list[str] | None = None


class RecipeDietsRequest(BaseModel):
    recipeId: int | None = None
    diets: list[str] | None = None


class RenameUserRequest(BaseModel):
    userId: int | None = None
    username: str | None = None


class UserIdRequest(BaseModel):
    userId: int | None = None
