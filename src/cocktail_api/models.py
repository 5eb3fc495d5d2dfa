"""Data models for cocktail API payloads"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# locale code -> text, e.g. {"en": "Mojito", "tr": "Mojito"}
LocalizedText = Dict[str, str]


class IngredientAlternative(BaseModel):
    """Substitute for a required ingredient"""
    model_config = ConfigDict(extra="allow")

    name: Union[LocalizedText, str, None] = None
    amount: Union[LocalizedText, str, None] = None


class IngredientRequirement(BaseModel):
    """Ingredient line nested inside a cocktail"""
    model_config = ConfigDict(extra="allow")

    requirement_id: Optional[int] = None
    name: Union[LocalizedText, str] = Field(default_factory=dict)
    amount: Union[LocalizedText, str, None] = None
    has_alternative: bool = False
    alternatives: List[IngredientAlternative] = Field(default_factory=list)
    color_code: Optional[str] = None


class Cocktail(BaseModel):
    """Cocktail record as returned by the API"""
    model_config = ConfigDict(extra="allow")

    cocktail_id: int
    name: Union[LocalizedText, str] = Field(default_factory=dict)
    image_url: Optional[str] = None
    is_alcoholic: bool = True
    difficulty_level: Optional[str] = None
    ingredients: List[IngredientRequirement] = Field(default_factory=list)
    instructions: Union[LocalizedText, str, None] = None
    history_notes: Union[LocalizedText, str, None] = None


class RecipeMatch(Cocktail):
    """Cocktail returned by recipe matching, with the number of missing ingredients"""
    missing_count: int = Field(default=0, ge=0)


class Ingredient(BaseModel):
    """Pantry ingredient from the catalog"""
    model_config = ConfigDict(extra="allow")

    ingredient_id: int
    name: Union[LocalizedText, str] = Field(default_factory=dict)
    category_name: Union[LocalizedText, str, None] = None


class GuideOption(BaseModel):
    """Option offered by one step of the guide wizard"""
    model_config = ConfigDict(extra="allow")

    key: Optional[str] = None
    ingredient_id: Optional[int] = None
    name: Union[LocalizedText, str] = Field(default_factory=dict)


class FavoriteEntry(Cocktail):
    """Cocktail saved to a user's favorites"""
    favorited_at: Optional[str] = None


class UserRecord(BaseModel):
    """User account record"""
    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    firebase_uid: Optional[str] = None
    email: Optional[str] = None
    avatar_id: Optional[Union[int, str]] = None
    is_pro: bool = False


class PayloadValidationResult(BaseModel):
    """Result of checking a response payload against its model"""
    is_valid: bool
    reason: str
    invalid_items: List[int] = Field(default_factory=list)


# --- Request bodies ---

class FindRecipesRequest(BaseModel):
    """Body for POST /barmen/find-recipes"""
    model_config = ConfigDict(populate_by_name=True)

    inventory_ids: List[int] = Field(default_factory=list, alias="inventoryIds")
    mode: str = "flexible"


class MenuHintsRequest(BaseModel):
    """Body for POST /barmen/hints"""
    model_config = ConfigDict(populate_by_name=True)

    base_spirit_ids: List[int] = Field(default_factory=list, alias="baseSpiritIds")


class GuideStep2Request(BaseModel):
    """Body for POST /barmen/guide/step-2"""
    family: str
    lang: Optional[str] = None


class GuideStep3Request(BaseModel):
    """Body for POST /barmen/guide/step-3"""
    model_config = ConfigDict(populate_by_name=True)

    family: str
    step2_ids: List[int] = Field(default_factory=list, alias="step2Ids")
    lang: Optional[str] = None


class GuideResultsRequest(BaseModel):
    """Body for POST /barmen/guide/results"""
    model_config = ConfigDict(populate_by_name=True)

    family: str
    selected_ids: List[int] = Field(default_factory=list, alias="selectedIds")


class RoulettePoolRequest(BaseModel):
    """Body for POST /roulette/get-pool"""
    mode: str
    filter: Optional[Union[int, str]] = None


class AddFavoriteRequest(BaseModel):
    """Body for POST /favorites"""
    model_config = ConfigDict(populate_by_name=True)

    user_id: Union[int, str] = Field(..., alias="userId")
    cocktail_id: int = Field(..., alias="cocktailId")


class LoginRequest(BaseModel):
    """Body for POST /users/loginOrRegister"""
    firebase_uid: str
    email: Optional[str] = None


class AvatarRequest(BaseModel):
    """Body for PUT /users/me/avatar"""
    avatar_id: Union[int, str]
