"""Inventory valuation snapshot at recorded unit cost.

Values supplies (Insumos), office equipment at simple book value (no
depreciation) and sellable product stock. Tools (Herramientas) are tracked
but not valued.
"""
from collections.abc import Iterable
from decimal import Decimal

from finengine.models.finance_schemas import (
    InventoryCategory,
    InventoryItem,
    InventoryValuation,
    Product,
)


def _category_value(items: Iterable[InventoryItem], category: InventoryCategory) -> Decimal:
    return sum(
        (i.quantity * (i.unit_cost or Decimal("0")) for i in items if i.category == category),
        Decimal("0"),
    )


def valuate_inventory(items: Iterable[InventoryItem], products: Iterable[Product]) -> InventoryValuation:
    items = list(items)
    insumos_value = _category_value(items, InventoryCategory.SUPPLIES)
    office_equipment_value = _category_value(items, InventoryCategory.OFFICE_EQUIPMENT)
    products_value = sum((p.stock * (p.cost or Decimal("0")) for p in products), Decimal("0"))
    return InventoryValuation(
        insumos_value=insumos_value,
        products_value=products_value,
        office_equipment_value=office_equipment_value,
        total=insumos_value + products_value + office_equipment_value,
    )
