"""
Pydantic schemas for request validation.

Form inputs on the React screens arrive as strings; pydantic's lax mode turns
"12.50" into a Decimal and "3" into an int before the services see them.
"""

from decimal import Decimal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from lightfoot_shared.constants import (
    DEFAULT_USER_ROLE,
    MAX_RATING,
    NO_RATING,
    UNASSIGNED_EMPLOYEE_ROLE,
    ItemType,
)


class CartItem(BaseModel):
    """One menu item as the front-ends send it (extra display fields are ignored)."""

    model_config = ConfigDict(extra="ignore")

    menu_item_id: int
    name: str | None = None
    item_type: str | None = None


Cart = dict[str, list[CartItem]]


class GroupedComponent(BaseModel):
    """
    One logical unit of a kiosk order as prepared by the kitchen.

    MEAL units carry the meal item plus chosen sides and entrees, LACARTE
    units carry a size item and the item it sizes, anything else carries a
    single item.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: str
    group_num: int = Field(..., alias="groupNum", ge=0)
    meal: CartItem | None = None
    sides: list[CartItem] = Field(
        default_factory=list, validation_alias=AliasChoices("sides", "side")
    )
    entrees: list[CartItem] = Field(default_factory=list)
    size: CartItem | None = None
    item: CartItem | None = None

    @field_validator("type")
    def normalize_type(cls, v):
        return v.strip().upper()

    @model_validator(mode="after")
    def check_components(self):
        if self.type == ItemType.MEAL.value:
            if self.meal is None:
                raise ValueError("MEAL group requires a meal item")
        elif self.type == ItemType.LACARTE.value:
            if self.size is None or self.item is None:
                raise ValueError("LACARTE group requires a size and an item")
        elif self.item is None:
            raise ValueError(f"{self.type} group requires an item")
        return self

    def components(self) -> list[CartItem]:
        """Physical components in the order the kitchen board lists them."""
        if self.type == ItemType.MEAL.value:
            return [self.meal, *self.sides, *self.entrees]
        if self.type == ItemType.LACARTE.value:
            return [self.size, self.item]
        return [self.item]


class KioskOrderRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    order: Cart
    grouped_order: list[GroupedComponent] = Field(default_factory=list, alias="groupedOrder")
    total: Decimal = Field(..., ge=0)
    rating: int = Field(default=NO_RATING, ge=NO_RATING, le=MAX_RATING)


class PosOrderRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    order: Cart
    total: Decimal = Field(..., ge=0)
    employee_id: int = Field(..., ge=0)


class InventoryDeductionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    order: Cart


class EmailRequest(BaseModel):
    email: str = Field(..., min_length=3)

    @field_validator("email")
    def normalize_email(cls, v):
        return v.strip()


class AddPointsRequest(EmailRequest):
    points: int = Field(..., gt=0)


class RedeemPointsRequest(EmailRequest):
    model_config = ConfigDict(populate_by_name=True)

    remaining_points: int = Field(..., alias="remainingPoints", ge=0)


class ProvisionEmployeeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    role: int = UNASSIGNED_EMPLOYEE_ROLE
    name: str = Field(..., min_length=1)


class AddEmployeeRequest(BaseModel):
    first_name: str
    last_name: str
    position: str
    pin_id: str | int


class UpdatePositionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    position: str = Field(..., alias="selectedPosition", min_length=1)


class UpdateRoleRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    role: int = Field(..., alias="selectedRole")


class UpdateNameRequest(BaseModel):
    id: int
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)


class UpdateActiveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    is_active: bool = Field(..., alias="activeBool")


class UserRoleRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    role: int = DEFAULT_USER_ROLE
    name: str | None = None


class SeasonalItemRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    type: str
    price: Decimal = Field(..., ge=0)
    calories: Decimal = Field(default=Decimal("0"), ge=0)
    protein: Decimal = Field(default=Decimal("0"), ge=0)
    carbohydrate: Decimal = Field(default=Decimal("0"), ge=0)
    saturated_fat: Decimal = Field(default=Decimal("0"), ge=0)
    spicy: bool = False
    premium: bool = False
    allergens: str = ""
    ingredient_quantities: dict[str, str | float] | None = Field(
        default=None, alias="ingredientQuantities"
    )
    ingredient_units: dict[str, str] | None = Field(default=None, alias="ingredientUnits")

    @field_validator("name")
    def require_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()


class IngredientRequest(BaseModel):
    """New inventory row, with the field names the seasonal screen posts."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="ingname", min_length=1)
    stock: Decimal = Field(..., ge=0)
    unit: str | None = Field(default=None, alias="ingunit")
    min: Decimal = Field(..., ge=0)
    max: Decimal = Field(..., ge=0)
    restock: Decimal = Field(..., ge=0)
    current_price: Decimal = Field(..., alias="currprice", ge=0)
