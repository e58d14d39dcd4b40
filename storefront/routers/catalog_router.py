import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..database import get_db
from ..dependencies import PRICE_UPDATE_REQUIRED, price_update_body, product_id_filter
from ..errors import storage_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Catalog"])


@router.get("/products", response_model=List[schemas.ProductOut])
def list_products(
    product_id: Optional[int] = Depends(product_id_filter),
    productname: Optional[str] = Query(None, description="Only products with this exact name"),
    category: Optional[str] = Query(None, description="Only products of this category"),
    db: Session = Depends(get_db),
):
    """List products. When several filters are given only the first one (id, productname, category) applies."""
    try:
        return crud.get_products(db, product_id=product_id, product_name=productname, category=category)
    except Exception as e:
        raise storage_error(e, "Listing products")


@router.post("/products")
def add_products(
    products: List[schemas.ProductIn],
    db: Session = Depends(get_db),
):
    try:
        crud.create_products(db, [p.model_dump() for p in products])
    except Exception as e:
        raise storage_error(e, "Adding products")
    return {"message": "Products added!"}


@router.post("/products/priceupdate")
def update_price(
    body: schemas.PriceUpdate = Depends(price_update_body),
    db: Session = Depends(get_db),
):
    """Update the price of one product. Product id and price are both required.

    Accepts a JSON or form body. A zero id or price counts as missing.
    """
    if not body.id or not body.price:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=PRICE_UPDATE_REQUIRED,
        )

    try:
        crud.update_product_price(db, product_id=body.id, price=body.price)
    except Exception as e:
        raise storage_error(e, "Updating price")

    logger.info("Price of product %s set to %s", body.id, body.price)
    return {"message": f"Price updated successfully for product id {body.id}"}


@router.get("/categories", response_model=List[schemas.CategoryOut])
def list_categories(
    categoryname: Optional[str] = Query(None, description="Category name to look up"),
    db: Session = Depends(get_db),
):
    try:
        categories = crud.get_categories(db, category_name=categoryname)
    except Exception as e:
        raise storage_error(e, "Listing categories")
    return [
        schemas.CategoryOut(category_name=c.category_name, description=c.category_description)
        for c in categories
    ]


@router.post("/categories")
def add_categories(
    categories: List[schemas.CategoryIn],
    db: Session = Depends(get_db),
):
    try:
        crud.create_categories(db, [c.model_dump() for c in categories])
    except Exception as e:
        raise storage_error(e, "Adding categories")
    return {"message": "Categories added!"}
