from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Union

Number = Union[int, float]

def _text(data: Mapping[str, Any], field: str) -> str:
    value = data.get(field)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"Product {field} must be a string, got {value!r}")
    return value

@dataclass(frozen=True)
class Product:
    """An item offered for the cart, without a quantity."""
    id: str
    title: str = ""
    image_url: str = ""
    price: Number = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Product":
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected a mapping, got {type(data).__name__}")
        if not isinstance(data.get("id"), str) or not data["id"]:
            raise ValueError("Product requires a non-empty string 'id'")
        price = data.get("price", 0)
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ValueError(f"Product price must be a number, got {price!r}")
        return cls(
            id=data["id"],
            title=_text(data, "title"),
            image_url=_text(data, "image_url"),
            price=price,
        )

@dataclass(frozen=True)
class LineItem:
    """One distinct product held in the cart. ``quantity`` is always >= 1."""
    id: str
    title: str
    image_url: str
    price: Number
    quantity: int

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError(f"LineItem quantity must be a positive integer, got {self.quantity!r}")

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "LineItem":
        return cls(
            id=product.id,
            title=product.title,
            image_url=product.image_url,
            price=product.price,
            quantity=quantity,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineItem":
        product = Product.from_dict(data)
        if "quantity" not in data:
            raise ValueError(f"LineItem {product.id!r} has no quantity")
        return cls.from_product(product, data["quantity"])

    def with_quantity(self, quantity: int) -> "LineItem":
        return replace(self, quantity=quantity)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
