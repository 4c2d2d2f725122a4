"""SQLAlchemy models for the product catalog.

Defines Category and Product tables for persistent storage.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shoestore.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """Product category (e.g. "Running Shoes").

    Attributes:
        id: Category identifier.
        name: Display name.
        slug: URL key, unique.
        description: Short description shown on the landing page.
        image: Optional image reference.
        products: Products in this category, deleted with it.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Relationships
    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="category",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, slug={self.slug})>"


class Product(Base):
    """Footwear product in the catalog.

    Attributes:
        id: Product identifier.
        name: Product name.
        slug: URL key, unique.
        description: Long description.
        price: List price with two fractional digits.
        sale_price: Optional discounted price.
        brand: Brand name.
        color: Color name.
        sizes: Size labels in display order. Labels are free text
            ("9", "9.5", "UK 9") and are never normalized.
        images: Image URLs, the first one is the thumbnail.
        category_id: Owning category.
        is_featured: Editorial flag for the landing page.
        is_active: Visibility gate for every customer-facing query.
        stock_quantity: Units on hand. Zero keeps the product visible.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, index=True)
    sale_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    brand: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    color: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    sizes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="products")

    __table_args__ = (
        Index("ix_products_is_active_created_at", "is_active", "created_at"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug}, name={self.name[:30]})>"
