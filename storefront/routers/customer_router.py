import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status, Form
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..auth import verify_password, create_access_token, get_current_username
from ..config import Settings, get_settings
from ..database import get_db
from ..errors import storage_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Customers"])


@router.post("/register")
def register(
    fname: str = Form(..., description="**First name**"),
    lname: str = Form(..., description="**Last name**"),
    username: str = Form(..., description="**Unique username**"),
    pw: str = Form(..., description="**Password**"),
    db: Session = Depends(get_db),
):
    # A taken username fails on the unique constraint and is reported as a storage error
    try:
        crud.create_customer(db, first_name=fname, last_name=lname, username=username, password=pw)
    except Exception as e:
        raise storage_error(e, "Registering customer")

    logger.info("Customer %s registered", username)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/login", response_model=schemas.Token)
def login(
    username: str = Form(..., description="**Username you chose during registration**"),
    pw: str = Form(..., description="**Password**"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        customer = crud.get_customer_by_username(db, username=username)
    except Exception as e:
        raise storage_error(e, "Looking up customer")

    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not verify_password(pw, customer.pw):
        logger.info("Wrong password for %s", username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not authorized")

    return schemas.Token(jwt_token=create_access_token(customer.username, settings))


@router.get("/customer", response_model=Optional[schemas.CustomerOut])
def read_customer(
    username: str = Depends(get_current_username),
    db: Session = Depends(get_db),
):
    """Profile of the token's owner, or null if that username no longer exists."""
    try:
        customer = crud.get_customer_by_username(db, username=username)
    except Exception as e:
        raise storage_error(e, "Reading customer profile")

    if customer is None:
        return None
    return schemas.CustomerOut(
        fname=customer.first_name,
        lname=customer.last_name,
        username=customer.username,
    )
