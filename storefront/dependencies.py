"""
Request parsing shared by the routers
"""
from typing import Optional

from fastapi import HTTPException, Query, Request, status
from pydantic import ValidationError

from . import schemas

PRICE_UPDATE_REQUIRED = "Price and id are both required for request"

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def product_id_filter(
    product_id: Optional[str] = Query(None, alias="id", description="Only the product with this id"),
) -> Optional[int]:
    """An empty ?id= means no filter."""
    if product_id is None or not product_id.strip():
        return None
    try:
        return int(product_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="id must be an integer",
        )


async def price_update_body(request: Request) -> schemas.PriceUpdate:
    """Read {id, price} from a JSON or form body.

    A missing body, a body that is not an object and empty values all count
    as missing fields, so the route answers 400 instead of a validation error.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        data = dict(await request.form())
    elif await request.body():
        try:
            data = await request.json()
        except ValueError:
            data = {}
    else:
        data = {}

    if not isinstance(data, dict):
        data = {}
    data = {key: value for key, value in data.items() if value not in (None, "")}

    try:
        return schemas.PriceUpdate.model_validate(data)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="id must be an integer and price a non-negative number",
        )
