"""
Data models for the crudforge inventory example.
"""

from __future__ import annotations

import enum

from crudforge.core import (
    DecimalField,
    EnumField,
    IntegerField,
    JSONField,
    Model,
    StringField,
    UUIDField,
)


class Category(enum.Enum):
    TOOLS = "tools"
    GARDEN = "garden"
    KITCHEN = "kitchen"


class Product(Model):
    id = IntegerField(primary_key=True)
    sku = StringField(required=True, max_length=32)
    name = StringField(db_column="product_name", max_length=120)
    category = EnumField(Category)
    price = DecimalField()
    stock = IntegerField(default=0)
    attributes = JSONField(editable=True)
    # Filled in by the demo, never stored.
    display_label = StringField(not_mapped=True)

    class Meta:
        table = "products"


class StockMovement(Model):
    id = UUIDField(primary_key=True)
    product_id = IntegerField(required=True)
    quantity = IntegerField()
    reason = StringField(max_length=40)

    class Meta:
        table = "stock_movements"
