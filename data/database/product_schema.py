"""Catalog schemas for API validation."""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from decimal import Decimal
from datetime import datetime


class ProductSizeResponse(BaseModel):
    """Schema for a size variant."""
    id: int
    product_type_id: int
    size: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductSizeCreate(BaseModel):
    """Schema for adding a size to a product type."""
    size: str = Field(..., min_length=1, max_length=20, description="Size label, e.g. S, M, XL")

    @field_validator('size')
    @classmethod
    def normalize_size(cls, v):
        if not v.strip():
            raise ValueError("Size cannot be empty")
        return v.strip().upper()


class ProductTypeBase(BaseModel):
    """Base product type schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255, description="Product type name")
    active: bool = Field(True, description="Whether the type is shown in the shop")
    base_price: Decimal = Field(Decimal("0"), ge=0, description="Default price for products of this type")
    is_default: bool = Field(False, description="Whether this is the default type for new designs")
    is_branded_item: bool = Field(False, description="Whether this type is listed under branded items")


class ProductTypeCreate(ProductTypeBase):
    """Schema for creating a product type, optionally with its sizes."""
    sizes: List[str] = Field(default_factory=list, description="Size labels to create with the type")


class ProductTypeUpdate(BaseModel):
    """Schema for updating a product type (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    active: Optional[bool] = None
    base_price: Optional[Decimal] = Field(None, ge=0)
    is_default: Optional[bool] = None
    is_branded_item: Optional[bool] = None


class ProductTypeResponse(ProductTypeBase):
    """Schema for product type response."""
    id: int
    stripe_account_id: Optional[str] = None
    slug: str = Field(..., description="URL slug derived from the type name")
    sizes: List[ProductSizeResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductBase(BaseModel):
    """Base product schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    description: str = Field(..., min_length=1, description="Design description printed on the garment")
    price: Decimal = Field(..., gt=0, description="Product price")
    image_url: Optional[str] = Field(None, max_length=500, description="Product image URL")
    product_type_id: int = Field(..., description="Product type this item belongs to")


class ProductCreate(ProductBase):
    """Schema for creating a new product."""
    pass


class ProductUpdate(BaseModel):
    """Schema for updating a product (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, gt=0)
    image_url: Optional[str] = Field(None, max_length=500)
    product_type_id: Optional[int] = None


class ProductResponse(ProductBase):
    """Schema for product response."""
    id: int
    stripe_account_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
