"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from shopcart.errors import (
    ERROR_INVALID_PRODUCT_ID,
    ERROR_INVALID_PRODUCT_NAME,
    ERROR_INVALID_UNIT_PRICE,
)
from shopcart.money import multiply, to_decimal, to_float

ProductId = Union[int, str]

# Keys used by catalog front-ends that predate the cart's own naming
_FIELD_ALIASES = {"id": "product_id", "price": "unit_price"}


class CartProduct(BaseModel):
    """Product tuple handed to the cart by catalog collaborators."""
    product_id: ProductId
    name: str
    unit_price: Decimal
    image: Optional[str] = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def apply_aliases(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        normalized = dict(data)
        for alias, name in _FIELD_ALIASES.items():
            if alias in normalized and name not in normalized:
                normalized[name] = normalized.pop(alias)
        return normalized

    @field_validator("product_id", mode="before")
    @classmethod
    def check_product_id(cls, v):
        # bool is an int subclass but never a valid id
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            raise ValueError(ERROR_INVALID_PRODUCT_ID)
        if isinstance(v, str) and not v.strip():
            raise ValueError(ERROR_INVALID_PRODUCT_ID)
        return v

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        if not isinstance(v, str):
            raise ValueError(ERROR_INVALID_PRODUCT_NAME)
        return v

    @field_validator("unit_price", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float, str, Decimal)):
            raise ValueError(ERROR_INVALID_UNIT_PRICE)
        if isinstance(v, str):
            try:
                return Decimal(v.strip())
            except InvalidOperation:
                raise ValueError(ERROR_INVALID_UNIT_PRICE)
        return to_decimal(v)


@dataclass(frozen=True)
class CartLine:
    """Single product line in the cart.

    Name and price are a snapshot taken when the product was first added.
    """
    product_id: ProductId
    name: str
    unit_price: Decimal
    quantity: int = 1
    image: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price))

    @classmethod
    def from_product(cls, product: CartProduct) -> "CartLine":
        """Start a new line with quantity 1."""
        return cls(
            product_id=product.product_id,
            name=product.name,
            unit_price=product.unit_price,
            quantity=1,
            image=product.image,
        )

    def with_quantity(self, quantity: int) -> "CartLine":
        return replace(self, quantity=quantity)

    @property
    def line_total(self) -> Decimal:
        """Price for all units of this line."""
        return multiply(self.unit_price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "product_id": self.product_id,
            "name": self.name,
            "unit_price": str(self.unit_price),
            "quantity": self.quantity,
            "image": self.image,
            "line_total": str(self.line_total),
        }


@dataclass(frozen=True)
class CartState:
    """Immutable view of the cart contents."""
    lines: Tuple[CartLine, ...] = ()
    total_count: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "total_count", sum(line.quantity for line in self.lines))

    @property
    def total_price(self) -> Decimal:
        """Sum of unit_price * quantity over all lines."""
        return sum((line.line_total for line in self.lines), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "lines": [line.to_dict() for line in self.lines],
            "total_count": self.total_count,
            "total_price": to_float(self.total_price),
        }
