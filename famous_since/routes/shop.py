"""Shop routes for browsing the catalog."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session
from data.database.connection import get_db
from data.database.catalog_models import Product, ProductType
from data.database.product_schema import ProductResponse, ProductTypeResponse
from famous_since.utils.slugify import slugify

router = APIRouter(prefix="/api/shop", tags=["shop"])


class BrandedProductTypeResponse(BaseModel):
    """A branded product type with everything its shop page needs."""
    product_type: ProductTypeResponse
    products: List[ProductResponse]


@router.get("/product-types", response_model=List[ProductTypeResponse], summary="List active product types")
def get_product_types(
    branded: Optional[bool] = Query(None, description="Only branded (or only unbranded) types"),
    db: Session = Depends(get_db)
):
    query = db.query(ProductType).filter(ProductType.active == True)
    if branded is not None:
        query = query.filter(ProductType.is_branded_item == branded)
    return query.order_by(ProductType.name).all()


@router.get("/products", response_model=List[ProductResponse], summary="List products")
def get_products(
    product_type_id: Optional[int] = Query(None, description="Filter by product type"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db)
):
    """Products, newest first."""
    query = db.query(Product)
    if product_type_id is not None:
        query = query.filter(Product.product_type_id == product_type_id)
    return query.order_by(Product.created_at.desc(), Product.id.desc()).offset(skip).limit(limit).all()


@router.get("/products/{product_id}", response_model=ProductResponse, summary="Get product by ID")
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {product_id} not found"
        )
    return product


def find_branded_type(db: Session, slug: str) -> Optional[ProductType]:
    """Active branded product type whose name slugifies to `slug`."""
    wanted = slugify(slug)
    if not wanted:
        return None

    branded_types = db.query(ProductType).filter(
        ProductType.is_branded_item == True,
        ProductType.active == True
    ).all()

    for product_type in branded_types:
        if product_type.slug == wanted:
            return product_type
    return None


@router.get("/branded/{product_type_slug}", response_model=BrandedProductTypeResponse, summary="Get a branded product page")
def get_branded_product_type(product_type_slug: str, db: Session = Depends(get_db)):
    """Resolve a branded product type by slug and return it with its products."""
    product_type = find_branded_type(db, product_type_slug)
    if not product_type:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product type not found for: {product_type_slug}"
        )

    products = db.query(Product).filter(
        Product.product_type_id == product_type.id
    ).order_by(Product.created_at.desc(), Product.id.desc()).all()

    return BrandedProductTypeResponse(
        product_type=ProductTypeResponse.model_validate(product_type),
        products=[ProductResponse.model_validate(product) for product in products]
    )
