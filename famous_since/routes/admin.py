"""Admin routes for catalog management."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from data.database.connection import get_db
from data.database.catalog_models import Product, ProductSize, ProductType
from data.database.product_schema import (
    ProductCreate,
    ProductResponse,
    ProductSizeCreate,
    ProductSizeResponse,
    ProductTypeCreate,
    ProductTypeResponse,
    ProductTypeUpdate,
    ProductUpdate
)
from famous_since.auth.session import require_admin

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _get_product_type_or_404(db: Session, product_type_id: int) -> ProductType:
    product_type = db.query(ProductType).filter(ProductType.id == product_type_id).first()
    if not product_type:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product type with ID {product_type_id} not found"
        )
    return product_type


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {product_id} not found"
        )
    return product


def _unset_other_defaults(db: Session, keep_id: Optional[int] = None):
    """Only one product type can be the default."""
    query = db.query(ProductType).filter(ProductType.is_default == True)
    if keep_id is not None:
        query = query.filter(ProductType.id != keep_id)
    for product_type in query.all():
        product_type.is_default = False


@router.post(
    "/product-types",
    response_model=ProductTypeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product type"
)
def create_product_type(product_type: ProductTypeCreate, db: Session = Depends(get_db)):
    """Create a product type together with its initial sizes."""
    existing = db.query(ProductType).filter(ProductType.name == product_type.name).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Product type '{product_type.name}' already exists"
        )

    data = product_type.model_dump(exclude={"sizes"})
    db_product_type = ProductType(**data)
    for size in dict.fromkeys(s.strip().upper() for s in product_type.sizes if s.strip()):
        db_product_type.sizes.append(ProductSize(size=size))

    if db_product_type.is_default:
        _unset_other_defaults(db)

    db.add(db_product_type)
    db.commit()
    db.refresh(db_product_type)

    return db_product_type


@router.get("/product-types", response_model=List[ProductTypeResponse], summary="List all product types")
def list_product_types(db: Session = Depends(get_db)):
    """All product types, including inactive ones."""
    return db.query(ProductType).order_by(ProductType.name).all()


@router.patch(
    "/product-types/{product_type_id}",
    response_model=ProductTypeResponse,
    summary="Update a product type"
)
def update_product_type(
    product_type_id: int,
    product_type_update: ProductTypeUpdate,
    db: Session = Depends(get_db)
):
    db_product_type = _get_product_type_or_404(db, product_type_id)

    update_data = product_type_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_product_type, field, value)

    if update_data.get("is_default"):
        _unset_other_defaults(db, keep_id=db_product_type.id)

    db.commit()
    db.refresh(db_product_type)

    return db_product_type


@router.post(
    "/product-types/{product_type_id}/sizes",
    response_model=ProductSizeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a size to a product type"
)
def add_product_size(
    product_type_id: int,
    size: ProductSizeCreate,
    db: Session = Depends(get_db)
):
    _get_product_type_or_404(db, product_type_id)

    existing = db.query(ProductSize).filter(
        ProductSize.product_type_id == product_type_id,
        ProductSize.size == size.size
    ).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Size '{size.size}' already exists for this product type"
        )

    db_size = ProductSize(product_type_id=product_type_id, size=size.size)
    db.add(db_size)
    db.commit()
    db.refresh(db_size)

    return db_size


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product"
)
def create_product(product: ProductCreate, db: Session = Depends(get_db)):
    """Create a new product. Descriptions are unique across the catalog."""
    _get_product_type_or_404(db, product.product_type_id)

    description = product.description.strip()
    existing_product = db.query(Product).filter(Product.description == description).first()
    if existing_product:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A product with this description already exists. Please use a unique description."
        )

    db_product = Product(**product.model_dump(exclude={"description"}), description=description)
    db.add(db_product)
    db.commit()
    db.refresh(db_product)

    return db_product


@router.get("/products", response_model=List[ProductResponse], summary="Get all products")
def get_products(
    skip: int = 0,
    limit: int = 100,
    product_type_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    query = db.query(Product)
    if product_type_id is not None:
        query = query.filter(Product.product_type_id == product_type_id)

    return query.order_by(Product.id).offset(skip).limit(limit).all()


@router.patch("/products/{product_id}", response_model=ProductResponse, summary="Update a product")
def update_product(
    product_id: int,
    product_update: ProductUpdate,
    db: Session = Depends(get_db)
):
    """Update only the provided fields of a product."""
    db_product = _get_product_or_404(db, product_id)

    update_data = product_update.model_dump(exclude_unset=True)
    if update_data.get("product_type_id") is not None:
        _get_product_type_or_404(db, update_data["product_type_id"])

    if update_data.get("description"):
        description = update_data["description"].strip()
        if description != db_product.description:
            conflict = db.query(Product).filter(Product.description == description).first()
            if conflict:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="A product with this description already exists. Please use a unique description."
                )
        update_data["description"] = description

    for field, value in update_data.items():
        setattr(db_product, field, value)

    db.commit()
    db.refresh(db_product)

    return db_product
