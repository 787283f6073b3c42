"""Tests for candidate filtering, sorting and search."""

from filters import (
    SortMode,
    apply_filters,
    candidates_by_category,
    filter_options,
    is_low_stock,
    search_parts,
    sort_parts,
)
from schemas import Category, FilterSet
from smart_sync import derive_filters


def _ids(parts):
    return [part.id for part in parts]


class TestApplyFilters:
    def test_ram_follows_motherboard_ram_type(self, make_part):
        board = make_part(Category.MOTHERBOARD, ramType="DDR5")
        filters = derive_filters({Category.MOTHERBOARD: board})
        ddr5 = make_part(Category.RAM, type="DDR5")
        ddr4 = make_part(Category.RAM, type="DDR4")
        unknown = make_part(Category.RAM)
        kept = apply_filters(Category.RAM, [ddr5, ddr4, unknown], filters)
        assert _ids(kept) == [ddr5.id]

    def test_socket_restricts_cpu_and_motherboard_only(self, make_part):
        filters = FilterSet(socket="AM5")
        am5 = make_part(Category.CPU, socket="AM5")
        intel = make_part(Category.CPU, socket="LGA1700")
        assert _ids(apply_filters(Category.CPU, [am5, intel], filters)) == [am5.id]

        board = make_part(Category.MOTHERBOARD)
        assert apply_filters(Category.MOTHERBOARD, [board], filters) == []

        gpu = make_part(Category.GPU)
        assert apply_filters(Category.GPU, [gpu], filters) == [gpu]

    def test_form_factor(self, make_part):
        filters = FilterSet(form_factor="mATX")
        atx_board = make_part(Category.MOTHERBOARD, formFactor="ATX")
        matx_board = make_part(Category.MOTHERBOARD, formFactor="mATX")
        tower = make_part(Category.CASE, formFactorSupport=["ATX", "mATX", "ITX"])
        itx_case = make_part(Category.CASE, formFactorSupport=["ITX"])
        assert _ids(apply_filters(Category.MOTHERBOARD, [atx_board, matx_board], filters)) == [matx_board.id]
        assert _ids(apply_filters(Category.CASE, [tower, itx_case], filters)) == [tower.id]

    def test_storage_interface(self, make_part):
        filters = FilterSet(storage_interface="SATA")
        sata = make_part(Category.STORAGE, interface="SATA")
        nvme = make_part(Category.STORAGE, interface="M.2 NVMe")
        sata_ssd = make_part(Category.SSD, interface="SATA")
        nvme_ssd = make_part(Category.SSD, interface="M.2 NVMe")
        board = make_part(Category.MOTHERBOARD, storage=["M.2 NVMe", "SATA"])
        nvme_board = make_part(Category.MOTHERBOARD, storage=["M.2 NVMe"])
        assert _ids(apply_filters(Category.STORAGE, [sata, nvme], filters)) == [sata.id]
        assert _ids(apply_filters(Category.SSD, [sata_ssd, nvme_ssd], filters)) == [sata_ssd.id]
        assert _ids(apply_filters(Category.MOTHERBOARD, [board, nvme_board], filters)) == [board.id]

    def test_min_psu_watt(self, make_part):
        filters = FilterSet(min_psu_watt=468)
        big = make_part(Category.PSU, wattage=750)
        exact = make_part(Category.PSU, wattage=468)
        small = make_part(Category.PSU, wattage=300)
        unknown = make_part(Category.PSU)
        kept = apply_filters(Category.PSU, [big, exact, small, unknown], filters)
        assert _ids(kept) == [big.id, exact.id]

    def test_cooler_socket(self, make_part):
        filters = FilterSet(cooler_socket="AM5")
        both = make_part(Category.COOLER, socketSupport=["AM5", "LGA1700"])
        intel = make_part(Category.COOLER, socketSupport=["LGA1700"])
        assert _ids(apply_filters(Category.COOLER, [both, intel], filters)) == [both.id]

    def test_empty_filters_pass_everything(self, catalog):
        cpus = [p for p in catalog if p.category == Category.CPU]
        assert apply_filters(Category.CPU, cpus, FilterSet()) == cpus

    def test_blank_values_are_unconstrained(self, catalog):
        cpus = [p for p in catalog if p.category == Category.CPU]
        boards = [p for p in catalog if p.category == Category.MOTHERBOARD]
        blank = FilterSet(socket="", ram_type="", form_factor="")
        assert apply_filters(Category.CPU, cpus, blank) == cpus
        assert apply_filters(Category.MOTHERBOARD, boards, blank) == boards

    def test_combined_constraints(self, make_part):
        filters = FilterSet(socket="AM5", ram_type="DDR5", form_factor="ATX", storage_interface="SATA")
        good = make_part(Category.MOTHERBOARD, socket="AM5", ramType="DDR5", formFactor="ATX", storage=["SATA"])
        wrong_ram = make_part(Category.MOTHERBOARD, socket="AM5", ramType="DDR4", formFactor="ATX", storage=["SATA"])
        assert _ids(apply_filters(Category.MOTHERBOARD, [good, wrong_ram], filters)) == [good.id]


class TestCandidates:
    def test_out_of_stock_hidden(self, make_part):
        sold_out = make_part(Category.GPU, stock=0)
        available = make_part(Category.GPU, stock=2)
        lists = candidates_by_category([sold_out, available], FilterSet())
        assert _ids(lists[Category.GPU]) == [available.id]
        assert lists[Category.CPU] == []
        assert set(lists) == {
            Category.CPU, Category.MOTHERBOARD, Category.GPU, Category.RAM,
            Category.STORAGE, Category.PSU, Category.CASE, Category.COOLER,
        }

    def test_demo_catalog_narrowed_by_filters(self, catalog):
        lists = candidates_by_category(catalog, FilterSet(socket="AM5", min_psu_watt=600))
        assert _ids(lists[Category.CPU]) == ["cpu-r5-7600"]
        assert _ids(lists[Category.MOTHERBOARD]) == ["mb-tuf-b650"]
        assert _ids(lists[Category.PSU]) == ["psu-rm750"]
        assert len(lists[Category.GPU]) == 2

    def test_low_stock(self, make_part):
        assert is_low_stock(make_part(Category.CASE, stock=3), 3)
        assert not is_low_stock(make_part(Category.CASE, stock=4), 3)
        assert not is_low_stock(make_part(Category.CASE, stock=0), 3)


class TestSortAndSearch:
    def test_sort_modes(self, make_part):
        a = make_part(Category.RAM, price=300, stock=1, name="beta")
        b = make_part(Category.RAM, price=100, stock=9, name="Alpha")
        c = make_part(Category.RAM, price=200, stock=5, name="gamma")
        parts = [a, b, c]
        assert _ids(sort_parts(parts, SortMode.PRICE_ASC)) == [b.id, c.id, a.id]
        assert _ids(sort_parts(parts, SortMode.PRICE_DESC)) == [a.id, c.id, b.id]
        assert _ids(sort_parts(parts, SortMode.NAME_ASC)) == [b.id, a.id, c.id]
        assert _ids(sort_parts(parts, SortMode.STOCK_DESC)) == [b.id, c.id, a.id]
        assert _ids(sort_parts(parts)) == [a.id, b.id, c.id]

    def test_search_matches_name_category_and_attributes(self, catalog):
        assert _ids(search_parts(catalog, "ryzen")) == ["cpu-r5-7600"]
        assert {p.category for p in search_parts(catalog, "cooler")} >= {Category.COOLER}
        assert "ram-fury-16-ddr5" in _ids(search_parts(catalog, "ddr5"))
        assert search_parts(catalog, "   ") == catalog

    def test_filter_options(self, catalog):
        options = filter_options(catalog)
        assert options["socket"] == ["AM5", "LGA1700"]
        assert options["ramType"] == ["DDR5"]
        assert options["formFactor"] == ["ATX", "mATX"]
        assert options["storageInterface"] == ["M.2 NVMe", "SATA"]
