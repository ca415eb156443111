"""Catalog models: apparel product types, their sizes, and products."""
from sqlalchemy import Column, Integer, String, Numeric, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from data.database.connection import Base
from famous_since.utils.slugify import slugify


class ProductType(Base):
    """Category of apparel (T-Shirt, Hoodie, ...)."""

    __tablename__ = "product_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    active = Column(Boolean, default=True, nullable=False, index=True)
    base_price = Column(Numeric(10, 2), nullable=False, default=0)
    is_default = Column(Boolean, default=False, nullable=False)
    is_branded_item = Column(Boolean, default=False, nullable=False, index=True)
    stripe_account_id = Column(String(255), nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    sizes = relationship("ProductSize", back_populates="product_type", cascade="all, delete-orphan")
    products = relationship("Product", back_populates="product_type")

    @property
    def slug(self):
        """URL slug used by the branded shop pages."""
        return slugify(self.name)

    def __repr__(self):
        return f"<ProductType(id={self.id}, name='{self.name}', branded={self.is_branded_item})>"


class ProductSize(Base):
    """Size variant offered for a product type."""

    __tablename__ = "product_sizes"

    id = Column(Integer, primary_key=True, index=True)
    product_type_id = Column(Integer, ForeignKey("product_types.id"), nullable=False, index=True)
    size = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    product_type = relationship("ProductType", back_populates="sizes")

    def __repr__(self):
        return f"<ProductSize(id={self.id}, product_type_id={self.product_type_id}, size='{self.size}')>"


class Product(Base):
    """Sellable item belonging to a product type."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String(500), nullable=True)
    product_type_id = Column(Integer, ForeignKey("product_types.id"), nullable=False, index=True)
    # Connected account that receives payment for this product
    stripe_account_id = Column(String(255), nullable=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    product_type = relationship("ProductType", back_populates="products")

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
