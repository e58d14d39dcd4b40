from decimal import Decimal

from storefront import crud
from storefront.models import Product


def test_stock_balance_is_amount_times_price(catalog, db):
    rows = crud.get_stock_balance(db)

    balances = {row.id: Decimal(row.stock_balance) for row in rows}
    assert balances == {
        1: Decimal("125"),
        2: Decimal("80"),
        3: Decimal("0"),
        4: Decimal("16"),
        5: Decimal("7.5"),
    }


def test_stock_balance_for_single_product(catalog, db):
    rows = crud.get_stock_balance(db, product_id=2)

    assert len(rows) == 1
    assert rows[0].product_name == "Saw"
    assert rows[0].amount == 4


def test_stock_balance_for_unknown_product_is_empty(catalog, db):
    assert crud.get_stock_balance(db, product_id=999) == []


def test_grand_total_sums_every_product(catalog, db):
    assert crud.get_grand_total(db) == Decimal("228.5")


def test_grand_total_follows_price_changes(catalog, db):
    crud.update_product_price(db, product_id=1, price=Decimal("10.00"))

    assert crud.get_grand_total(db) == Decimal("203.5")


def test_grand_total_of_empty_catalog_is_zero(db):
    assert crud.get_grand_total(db) == Decimal("0")


def test_products_without_orders_are_never_low(catalog, db):
    # Brush has amount 0 but nobody ordered it
    assert crud.get_low_stock_products(db) == []


def test_low_stock_flags_only_deficits(catalog, db):
    crud.place_order(db, customer_id=1, lines=[{"product_id": 5, "quantity": 3}])
    crud.place_order(db, customer_id=1, lines=[{"product_id": 2, "quantity": 4}])
    crud.place_order(db, customer_id=1, lines=[{"product_id": 4, "quantity": 1}, {"product_id": 4, "quantity": 2}])

    rows = crud.get_low_stock_products(db)

    # Saw: 4 - 4 = 0 is not a deficit; Primer: 2 - (1 + 2) < 0 is
    assert [(r.id, r.amount, r.total_ordered) for r in rows] == [(4, 2, 3), (5, 1, 3)]
    assert rows[1].product_name == "Chisel"
    assert Decimal(rows[1].price) == Decimal("7.50")


def test_low_stock_sums_orders_of_all_customers(catalog, db, seed):
    from storefront.models import Customer

    seed(Customer(id=2, first_name="Eero", last_name="Laine", username="eero", pw="x"))
    crud.place_order(db, customer_id=1, lines=[{"product_id": 2, "quantity": 3}])
    crud.place_order(db, customer_id=2, lines=[{"product_id": 2, "quantity": 2}])

    rows = crud.get_low_stock_products(db)

    assert [(r.id, r.total_ordered) for r in rows] == [(2, 5)]


def test_low_stock_reflects_restocking(catalog, db):
    crud.place_order(db, customer_id=1, lines=[{"product_id": 5, "quantity": 3}])
    db.query(Product).filter(Product.id == 5).update({Product.amount: 3})
    db.commit()

    assert crud.get_low_stock_products(db) == []
