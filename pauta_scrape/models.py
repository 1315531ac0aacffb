"""Data models for categories and products."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

__all__ = [
    "Category",
    "ProductSummary",
    "ProductRecord",
    "ProductDetails",
    "EnrichmentSuccess",
    "EnrichmentFailure",
    "EnrichmentResult",
    "CatalogSnapshot",
]


@dataclass(frozen=True)
class Category:
    """A category link discovered in the site menu."""

    name: str
    url: str


@dataclass
class ProductSummary:
    """One product card from a category listing page."""

    name: str
    detail_url: str
    price_text: str = ""
    image_url: str = ""
    short_description: str = ""


@dataclass
class ProductDetails:
    """Long-form data pulled from a product detail page."""

    long_description: str = ""
    specifications: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "ProductDetails":
        return cls()


@dataclass
class ProductRecord:
    """A listing card merged with its detail page data.

    Serialised with the field names the storefront reads
    (nome, preco, imagem, url, descricao, descricaoLonga, fichaTecnica).
    """

    name: str
    detail_url: str
    price_text: str = ""
    image_url: str = ""
    short_description: str = ""
    long_description: str = ""
    specifications: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_summary(
        cls, summary: ProductSummary, details: ProductDetails
    ) -> "ProductRecord":
        return cls(
            name=summary.name,
            detail_url=summary.detail_url,
            price_text=summary.price_text,
            image_url=summary.image_url,
            short_description=summary.short_description,
            long_description=details.long_description,
            specifications=dict(details.specifications),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nome": self.name,
            "preco": self.price_text,
            "imagem": self.image_url,
            "url": self.detail_url,
            "descricao": self.short_description,
            "descricaoLonga": self.long_description,
            "fichaTecnica": dict(self.specifications),
        }


@dataclass
class EnrichmentSuccess:
    details: ProductDetails

    @property
    def ok(self) -> bool:
        return True


@dataclass
class EnrichmentFailure:
    """Detail page could not be fetched or parsed.

    ``details`` is always the empty value so callers can merge it as-is.
    """

    url: str
    reason: str

    @property
    def ok(self) -> bool:
        return False

    @property
    def details(self) -> ProductDetails:
        return ProductDetails.empty()


EnrichmentResult = Union[EnrichmentSuccess, EnrichmentFailure]

# Category display name -> products, in discovery order
CatalogSnapshot = Dict[str, List[ProductRecord]]
