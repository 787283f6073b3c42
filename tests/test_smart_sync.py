"""Tests for Smart Sync filter derivation."""

import pytest

from schemas import Category, FilterSet
from smart_sync import clear_filters, derive_filters, merge_filters, sync_filters


@pytest.fixture
def board(make_part):
    return make_part(
        Category.MOTHERBOARD,
        socket="AM5",
        ramType="DDR5",
        formFactor="ATX",
        storage=["M.2 NVMe", "SATA"],
    )


class TestDeriveFilters:
    def test_motherboard_only(self, board):
        filters = derive_filters({Category.MOTHERBOARD: board})
        assert filters.socket == "AM5"
        assert filters.ram_type == "DDR5"
        assert filters.form_factor == "ATX"
        assert filters.storage_interface == "M.2 NVMe"
        assert filters.cooler_socket is None
        assert filters.min_psu_watt is None

    def test_cpu_socket_wins_over_motherboard(self, board, make_part):
        cpu = make_part(Category.CPU, socket="LGA1700")
        filters = derive_filters({Category.CPU: cpu, Category.MOTHERBOARD: board})
        assert filters.socket == "LGA1700"
        assert filters.cooler_socket == "LGA1700"

    def test_chosen_storage_interface_wins(self, board, make_part):
        storage = make_part(Category.STORAGE, interface="SATA")
        filters = derive_filters({Category.STORAGE: storage, Category.MOTHERBOARD: board})
        assert filters.storage_interface == "SATA"

    def test_any_psu_sets_minimum_wattage(self, make_part):
        parts = {
            Category.CPU: make_part(Category.CPU, tdp=148),
            Category.GPU: make_part(Category.GPU, tdp=220),
            Category.PSU: make_part(Category.PSU, wattage=300),
        }
        assert derive_filters(parts).min_psu_watt == 468

    def test_fractional_tdp_keeps_precision(self, make_part):
        parts = {
            Category.CPU: make_part(Category.CPU, tdp=65.7),
            Category.GPU: make_part(Category.GPU, tdp=100.6),
            Category.PSU: make_part(Category.PSU, wattage=266),
        }
        assert derive_filters(parts).min_psu_watt == pytest.approx(266.3)

    def test_unimplied_fields_persist(self, make_part):
        previous = FilterSet(ram_type="DDR4", form_factor="ITX", min_psu_watt=500)
        filters = derive_filters({Category.CPU: make_part(Category.CPU, socket="AM5")}, previous)
        assert filters.ram_type == "DDR4"
        assert filters.form_factor == "ITX"
        assert filters.min_psu_watt == 500
        assert filters.socket == "AM5"

    def test_missing_attributes_skip_fields(self, make_part):
        previous = FilterSet(socket="AM4")
        filters = derive_filters(
            {Category.CPU: make_part(Category.CPU), Category.MOTHERBOARD: make_part(Category.MOTHERBOARD, storage=[])},
            previous,
        )
        assert filters == previous

    def test_idempotent(self, board, make_part):
        parts = {
            Category.MOTHERBOARD: board,
            Category.CPU: make_part(Category.CPU, socket="AM5", tdp=65),
            Category.PSU: make_part(Category.PSU, wattage=650),
        }
        once = derive_filters(parts, FilterSet())
        twice = derive_filters(parts, once)
        assert once == twice

    def test_does_not_mutate_previous(self, board):
        previous = FilterSet()
        derive_filters({Category.MOTHERBOARD: board}, previous)
        assert previous == FilterSet()


class TestSyncAndClear:
    def test_sync_disabled_keeps_previous(self, board):
        previous = FilterSet(socket="LGA1700")
        assert sync_filters({Category.MOTHERBOARD: board}, previous, enabled=False) == previous

    def test_sync_enabled_derives(self, board):
        assert sync_filters({Category.MOTHERBOARD: board}, FilterSet(), enabled=True).socket == "AM5"

    def test_merge_ignores_none(self):
        merged = merge_filters(FilterSet(socket="AM5"), {"socket": None, "ram_type": "DDR5"})
        assert merged.socket == "AM5"
        assert merged.ram_type == "DDR5"

    def test_clear_single_field_by_alias_or_name(self):
        filters = FilterSet(socket="AM5", ram_type="DDR5", min_psu_watt=400)
        assert clear_filters(filters, "ramType").ram_type is None
        assert clear_filters(filters, "min_psu_watt").min_psu_watt is None
        assert clear_filters(filters, "socket").ram_type == "DDR5"

    def test_clear_all(self):
        assert clear_filters(FilterSet(socket="AM5", cooler_socket="AM5")) == FilterSet()

    def test_clear_unknown_field(self):
        with pytest.raises(ValueError):
            clear_filters(FilterSet(), "chipset")
