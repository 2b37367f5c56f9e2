"""Tests for AspectBeanPostProcessor."""

from __future__ import annotations

from flyaop.aop.decorators import aspect, before
from flyaop.aop.post_processor import AspectBeanPostProcessor


class Inventory:
    def count(self) -> int:
        return 3


@aspect
class InventoryAspect:
    def __init__(self) -> None:
        self.seen: list[str] = []

    @before(f"{__name__}.Inventory.*")
    def on_before(self, jp):
        self.seen.append(jp.method_name)


class TestAspectBeanPostProcessor:
    def test_collects_aspects_and_weaves_by_qualified_type_name(self) -> None:
        pp = AspectBeanPostProcessor()
        inventory_aspect = pp.before_init(InventoryAspect(), "inventoryAspect")
        inventory = pp.before_init(Inventory(), "inventory")
        pp.after_init(inventory_aspect, "inventoryAspect")
        pp.after_init(inventory, "inventory")

        assert inventory.count() == 3
        assert inventory_aspect.seen == ["count"]

    def test_aspects_are_not_woven(self) -> None:
        pp = AspectBeanPostProcessor()
        inventory_aspect = InventoryAspect()
        pp.before_init(inventory_aspect, "inventoryAspect")
        pp.after_init(inventory_aspect, "inventoryAspect")
        assert "on_before" not in vars(inventory_aspect)

    def test_no_aspects_leaves_beans_alone(self) -> None:
        pp = AspectBeanPostProcessor()
        inventory = pp.after_init(Inventory(), "inventory")
        assert "count" not in vars(inventory)

    def test_freeze(self) -> None:
        pp = AspectBeanPostProcessor()
        pp.freeze()
        assert pp.registry.frozen
