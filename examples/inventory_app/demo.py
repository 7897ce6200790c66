"""
Inventory example: CRUD statements over SQLite with integer and UUID keys.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from crudforge.adapters import ConnectionConfig, SQLiteAdapter
from crudforge.persistence import Session
from crudforge.utils import get_logger

from .models import Category, Product, StockMovement

logger = get_logger("examples.inventory")

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS "products" (
        "id" INTEGER PRIMARY KEY AUTOINCREMENT,
        "sku" TEXT NOT NULL UNIQUE,
        "product_name" TEXT,
        "category" TEXT,
        "price" TEXT,
        "stock" INTEGER NOT NULL DEFAULT 0,
        "attributes" TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS "stock_movements" (
        "id" TEXT PRIMARY KEY,
        "product_id" INTEGER NOT NULL REFERENCES "products" ("id"),
        "quantity" INTEGER,
        "reason" TEXT
    )
    """,
)

CATALOGUE = [
    ("TL-001", "Claw hammer", Category.TOOLS, "14.50", 12, {"weight_g": 450}),
    ("TL-002", "Tape measure", Category.TOOLS, "7.25", 0, {"length_m": 5}),
    ("GD-001", "Pruning shears", Category.GARDEN, "19.99", 4, {"blade": "bypass"}),
    ("GD-002", "Watering can", Category.GARDEN, "11.00", 0, {"litres": 9}),
    ("KT-001", "Chef knife", Category.KITCHEN, "42.00", 7, {"blade_cm": 20}),
]


def bootstrap_session(dsn: str = "sqlite:///:memory:") -> Session:
    session = Session(SQLiteAdapter(), connection_config=ConnectionConfig.from_dsn(dsn))
    with session.transaction():
        for statement in SCHEMA:
            session.execute(statement)
    return session


def seed_sample_data(session: Session) -> Dict[str, List[Dict[str, Any]]]:
    products: List[Product] = []
    movements: List[StockMovement] = []
    with session.transaction():
        for sku, name, category, price, stock, attributes in CATALOGUE:
            product = Product(
                sku=sku,
                name=name,
                category=category,
                price=Decimal(price),
                stock=stock,
                attributes=attributes,
            )
            session.insert(product)
            products.append(product)
            if stock:
                movement = StockMovement(product_id=product.id, quantity=stock, reason="initial")
                session.insert(movement)
                movements.append(movement)
    logger.info("Seeded %d products and %d stock movements", len(products), len(movements))
    return {
        "products": [p.to_dict() for p in products],
        "movements": [m.to_dict() for m in movements],
    }


def restock_report(session: Session, rows_per_page: int = 2) -> List[Dict[str, Any]]:
    """
    Out-of-stock products, read one page at a time ordered by SKU.
    """
    total = session.record_count(Product, {"stock": 0})
    report: List[Dict[str, Any]] = []
    page = 1
    while len(report) < total:
        rows = list(
            session.get_list_paged(Product, page, rows_per_page, "WHERE stock = 0", "sku")
        )
        if not rows:
            break
        for product in rows:
            product.display_label = f"{product.sku} {product.name}"
            report.append(
                {
                    "label": product.display_label,
                    "category": product.category.value,
                    "price": product.price,
                }
            )
        page += 1
    return report


def run_demo(dsn: str = "sqlite:///:memory:") -> Dict[str, Any]:
    session = bootstrap_session(dsn)
    try:
        seed_sample_data(session)
        report = restock_report(session)
        discontinued = session.delete_list(
            Product,
            "WHERE stock = 0 AND category = :category",
            {"category": Category.GARDEN.value},
        )
        return {
            "restock": report,
            "discontinued": discontinued,
            "remaining": session.record_count(Product),
            "tools": [p.name for p in session.get_list(Product, {"category": Category.TOOLS})],
        }
    finally:
        session.close()


if __name__ == "__main__":
    summary = run_demo("sqlite:///inventory_demo.db")
    for entry in summary["restock"]:
        print(f"restock {entry['label']} ({entry['category']}) @ {entry['price']}")
    print(f"discontinued {summary['discontinued']}, {summary['remaining']} products left")
