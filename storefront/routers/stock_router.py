from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..database import get_db
from ..dependencies import product_id_filter
from ..errors import storage_error

router = APIRouter(tags=["Stock"])


@router.get(
    "/stockbalance",
    response_model=Union[schemas.GrandTotalOut, List[schemas.StockBalanceOut]],
)
def stock_balance(
    product_id: Optional[int] = Depends(product_id_filter),
    total: Optional[str] = Query(None, description="'true' returns the grand total only"),
    db: Session = Depends(get_db),
):
    """Value of the stock (amount * price), per product or as one grand total.

    /stockbalance?total=true returns {"grand_total": ...}; the id filter is
    ignored in that case.
    """
    try:
        if total is not None and total.lower() == "true":
            return schemas.GrandTotalOut(grand_total=crud.get_grand_total(db))

        rows = crud.get_stock_balance(db, product_id=product_id)
    except Exception as e:
        raise storage_error(e, "Computing stock balance")

    return [schemas.StockBalanceOut.model_validate(row) for row in rows]


@router.get("/lowstockproducts", response_model=List[schemas.LowStockOut])
def low_stock_products(db: Session = Depends(get_db)):
    """Products that do not have enough stock to fulfil every order placed for them."""
    try:
        rows = crud.get_low_stock_products(db)
    except Exception as e:
        raise storage_error(e, "Computing low stock report")

    return [schemas.LowStockOut.model_validate(row) for row in rows]
