import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from .models import Category, Customer, Order, OrderLine, Product

logger = logging.getLogger(__name__)


# -----------------------------
# Catalog
# -----------------------------

def get_products(
    db: Session,
    product_id: Optional[int] = None,
    product_name: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Product]:
    """Return products matching the first given filter (id, then name, then category)."""
    query = db.query(Product)
    if product_id is not None:
        query = query.filter(Product.id == product_id)
    elif product_name:
        query = query.filter(Product.product_name == product_name)
    elif category:
        query = query.filter(Product.category == category)
    return query.order_by(Product.id).all()


def get_categories(db: Session, category_name: Optional[str] = None) -> List[Category]:
    # Without a name nothing matches, same as "WHERE category_name = NULL"
    if not category_name:
        return []
    return db.query(Category).filter(Category.category_name == category_name).all()


def create_categories(db: Session, categories: List[Dict[str, Any]]) -> int:
    try:
        for item in categories:
            db.add(
                Category(
                    category_name=item["category_name"],
                    category_description=item.get("description"),
                )
            )
            db.flush()
        db.commit()
    except Exception:
        db.rollback()
        raise
    return len(categories)


def create_products(db: Session, products: List[Dict[str, Any]]) -> int:
    try:
        for item in products:
            db.add(
                Product(
                    product_name=item["product_name"],
                    price=item["price"],
                    image_url=item.get("image_url"),
                    category=item.get("category"),
                    amount=item.get("amount", 0),
                )
            )
            db.flush()
        db.commit()
    except Exception:
        db.rollback()
        raise
    return len(products)


def update_product_price(db: Session, product_id: int, price: Decimal) -> int:
    """Set a product's price. Returns the number of rows touched (0 for an unknown id)."""
    try:
        updated = (
            db.query(Product)
            .filter(Product.id == product_id)
            .update({Product.price: price}, synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    return int(updated or 0)


# -----------------------------
# Customers
# -----------------------------

def get_customer_by_username(db: Session, username: str) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.username == username).first()


def create_customer(db: Session, first_name: str, last_name: str, username: str, password: str) -> Customer:
    from .auth import get_password_hash

    db_customer = Customer(
        first_name=first_name,
        last_name=last_name,
        username=username,
        pw=get_password_hash(password),
    )
    db.add(db_customer)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_customer)
    return db_customer


# -----------------------------
# Order ledger
# -----------------------------

def place_order(db: Session, customer_id: int, lines: List[Dict[str, Any]]) -> int:
    """Record an order header and its lines in one transaction.

    lines: [{"product_id": int, "quantity": int}, ...], inserted in the given
    order. Stock is not checked or reserved here; overdrafts show up in
    get_low_stock_products. Product rows are not locked either, so two
    concurrent orders can both take the last units of a product.
    """
    try:
        db_order = Order(customer_id=customer_id)
        db.add(db_order)
        db.flush()  # Get order ID without committing
        order_id = db_order.id

        for line in lines:
            db.add(
                OrderLine(
                    order_id=order_id,
                    product_id=line["product_id"],
                    quantity=line["quantity"],
                )
            )
            db.flush()

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Order %s placed for customer %s with %d line(s)", order_id, customer_id, len(lines))
    return order_id


def get_orders_for_username(db: Session, username: str) -> List[Dict[str, Any]]:
    orders = (
        db.query(Order)
        .join(Customer, Customer.id == Order.customer_id)
        .filter(Customer.username == username)
        .options(selectinload(Order.lines).selectinload(OrderLine.product))
        .order_by(Order.id)
        .all()
    )

    result = []
    for order in orders:
        products = [
            {
                "id": line.product.id,
                "product_name": line.product.product_name,
                "price": line.product.price,
                "image_url": line.product.image_url,
                "category": line.product.category,
                "quantity": line.quantity,
            }
            for line in order.lines
            if line.product is not None
        ]
        result.append(
            {
                "order_date": order.order_date,
                "order_id": order.id,
                "products": products,
            }
        )
    return result


# -----------------------------
# Stock reporting
# -----------------------------

def get_stock_balance(db: Session, product_id: Optional[int] = None):
    query = db.query(
        Product.id,
        Product.product_name,
        Product.amount,
        Product.price,
        (Product.amount * Product.price).label("stock_balance"),
    )
    if product_id is not None:
        query = query.filter(Product.id == product_id)
    return query.order_by(Product.id).all()


def get_grand_total(db: Session) -> Decimal:
    total = db.query(func.sum(Product.amount * Product.price)).scalar()
    return Decimal(str(total)) if total is not None else Decimal("0")


def get_low_stock_products(db: Session):
    """Products whose on-hand amount is below the quantity ordered across all orders."""
    total_ordered = func.coalesce(func.sum(OrderLine.quantity), 0)
    return (
        db.query(
            Product.id,
            Product.product_name,
            Product.price,
            Product.amount,
            total_ordered.label("total_ordered"),
        )
        .outerjoin(OrderLine, OrderLine.product_id == Product.id)
        .outerjoin(Order, Order.id == OrderLine.order_id)
        .group_by(Product.id, Product.product_name, Product.price, Product.amount)
        .having(Product.amount - total_ordered < 0)
        .order_by(Product.id)
        .all()
    )
