"""Unit tests for material cost aggregation and vendor resolution."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from domain.catalog.entities import UNASSIGNED_VENDOR, resolve_vendor_name
from domain.project.costing import (
    budget_remaining,
    cost_by_status,
    cost_lines,
    total_cost,
)
from domain.project.entities import Material
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import MaterialStatus


class TestTotalCost:
    """Sum of price x quantity over every material."""

    def test_sum_of_line_costs(self, make_material):
        materials = [make_material(price="100", quantity=2), make_material(price="50", quantity=1)]

        assert total_cost(materials) == Decimal("250")
        assert total_cost(materials[:1]) == Decimal("200")

    def test_empty_is_zero(self):
        assert total_cost([]) == Decimal("0")

    def test_counts_every_status(self, make_material):
        materials = [
            make_material(price="10", status=status)
            for status in MaterialStatus
        ]
        assert total_cost(materials) == Decimal("40")

    def test_decimal_precision(self, make_material):
        materials = [make_material(price="0.10", quantity=3)]
        assert total_cost(materials) == Decimal("0.30")

    def test_cost_by_status_has_every_stage(self, make_material):
        totals = cost_by_status([make_material(price="25", quantity=2, status="ORDERED")])

        assert list(totals) == list(MaterialStatus)
        assert totals[MaterialStatus.ORDERED] == Decimal("50")
        assert totals[MaterialStatus.SELECTED] == Decimal("0")

    def test_budget_remaining(self, make_material):
        materials = [make_material(price="400")]

        assert budget_remaining(Decimal("1000"), materials) == Decimal("600")
        assert budget_remaining(None, materials) is None


class TestVendorResolution:
    """Lookups never raise."""

    def test_known_vendor(self, vendor):
        assert resolve_vendor_name(vendor.id, {vendor.id: vendor}) == "Premium Suppliers"

    def test_iterable_of_vendors(self, vendor):
        assert resolve_vendor_name(vendor.id, [vendor]) == "Premium Suppliers"

    def test_missing_reference(self, vendor):
        assert resolve_vendor_name(None, {vendor.id: vendor}) == UNASSIGNED_VENDOR

    def test_dangling_reference(self, vendor):
        assert resolve_vendor_name(uuid4(), {vendor.id: vendor}) == UNASSIGNED_VENDOR

    def test_cost_lines(self, make_material, vendor):
        supplied = make_material("Pendant", price="80", quantity=2, vendor_id=vendor.id)
        unassigned = make_material("Rug", price="120")

        lines = cost_lines([supplied, unassigned], {vendor.id: vendor})

        assert [line.vendor_name for line in lines] == ["Premium Suppliers", UNASSIGNED_VENDOR]
        assert lines[0].line_cost == Decimal("160")
        assert lines[0].material_id == supplied.id


class TestMaterialValidation:
    """Bad price and quantity are rejected before anything is stored."""

    @pytest.mark.parametrize("price", ["-1", "abc", "NaN"])
    def test_bad_price(self, price):
        with pytest.raises(ValidationException) as exc_info:
            Material(name="Tile", brand="Acme", price=price)
        assert exc_info.value.field == "price"

    @pytest.mark.parametrize("quantity", [0, -2, 1.5, "two", True])
    def test_bad_quantity(self, quantity):
        with pytest.raises(ValidationException) as exc_info:
            Material(name="Tile", brand="Acme", quantity=quantity)
        assert exc_info.value.field == "quantity"

    def test_name_and_brand_required(self):
        with pytest.raises(ValidationException) as exc_info:
            Material(name=" ", brand="Acme")
        assert exc_info.value.field == "name"

        with pytest.raises(ValidationException) as exc_info:
            Material(name="Tile", brand="")
        assert exc_info.value.field == "brand"

    def test_unknown_category(self):
        with pytest.raises(ValidationException) as exc_info:
            Material(name="Tile", brand="Acme", category="CARPET")
        assert exc_info.value.field == "category"

    def test_price_string_coerced(self):
        assert Material(name="Tile", brand="Acme", price="12.50").price == Decimal("12.50")
