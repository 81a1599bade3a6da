"""Product data shapes shared by the catalog client, services and routes."""

from pydantic import BaseModel, ConfigDict


class ProductSummary(BaseModel):
    """The slice of a product needed to compare prices. Immutable."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    price: float


class Product(BaseModel):
    """A full catalog record, as returned by the listing endpoint.

    Missing text fields come through as empty strings rather than failing the
    whole listing.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str = ""
    price: float
    description: str = ""
    category: str = ""
    image: str = ""
