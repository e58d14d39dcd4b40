from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from .. import schemas, crud
from ..database import get_db
from ..errors import storage_error
from ..auth import get_current_username

router = APIRouter(tags=["Orders"])


@router.post("/order", response_model=schemas.OrderPlaced)
def place_order(
    order: schemas.OrderCreate,
    db: Session = Depends(get_db),
):
    """Place an order for a customer.

    Notes:
    - The header and every line are written in one transaction; any failing
      insert rolls back the whole order.
    - Quantities are not checked against stock and nothing is reserved. An
      order may drive a product below zero; /lowstockproducts reports it.
    - The customer id is not checked here; an unknown id fails on the
      foreign key and comes back as a 500.
    """

    lines = [{"product_id": p.id, "quantity": p.quantity} for p in order.products]

    try:
        order_id = crud.place_order(db=db, customer_id=order.customer_id, lines=lines)
    except Exception as e:
        raise storage_error(e, "Placing order")

    return schemas.OrderPlaced(order_id=order_id)


@router.get("/orders", response_model=List[schemas.CustomerOrderOut])
def get_my_orders(
    username: str = Depends(get_current_username),
    db: Session = Depends(get_db),
):
    """Orders of the token's owner with their product lines, oldest first."""

    try:
        orders = crud.get_orders_for_username(db=db, username=username)
    except Exception as e:
        raise storage_error(e, "Reading orders")

    return orders
