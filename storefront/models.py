from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Category(Base):
    __tablename__ = "product_category"

    category_name = Column(String(50), primary_key=True)
    category_description = Column(Text)


class Product(Base):
    __tablename__ = "product"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint("amount >= 0", name="ck_product_amount_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    product_name = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String(500))
    category = Column(String(50), ForeignKey("product_category.category_name"), index=True)
    amount = Column(Integer, nullable=False, default=0)


class Customer(Base):
    __tablename__ = "customer"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(50))
    last_name = Column(String(50))
    username = Column(String(50), nullable=False, unique=True, index=True)
    pw = Column(String(255), nullable=False)

    orders = relationship("Order", back_populates="customer")


class Order(Base):
    """An order header. Created once at placement time and never updated."""

    __tablename__ = "customer_order"

    id = Column(Integer, primary_key=True, index=True)
    order_date = Column(DateTime, nullable=False, server_default=func.now())
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)

    customer = relationship("Customer", back_populates="orders")
    lines = relationship("OrderLine", back_populates="order", order_by="OrderLine.id")


class OrderLine(Base):
    """One product line of an order.

    There is no uniqueness on (order_id, product_id): the same product may
    appear on several lines of one order and the quantities add up.
    """

    __tablename__ = "order_line"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("customer_order.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="lines")
    product = relationship("Product")
