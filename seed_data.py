"""Demo inventory used by /api/seed and the test-suite."""
from typing import Any, Dict, List

from schemas import Part

SEED_PARTS: List[Dict[str, Any]] = [
    {"id": "cpu-r5-7600", "name": "AMD Ryzen 5 7600", "category": "CPU", "price": 7490, "stock": 8, "cost": 6100, "attributes": {"socket": "AM5", "tdp": 65}},
    {"id": "cpu-i5-13400f", "name": "Intel Core i5-13400F", "category": "CPU", "price": 6990, "stock": 12, "cost": 5900, "attributes": {"socket": "LGA1700", "tdp": 148}},

    {"id": "mb-tuf-b650", "name": "ASUS TUF B650-PLUS", "category": "Motherboard", "price": 7290, "stock": 6, "cost": 6100, "attributes": {"socket": "AM5", "ramType": "DDR5", "formFactor": "ATX", "pcieSlots": 2, "storage": ["M.2 NVMe", "SATA"]}},
    {"id": "mb-pro-b760m", "name": "MSI PRO B760M-A", "category": "Motherboard", "price": 4990, "stock": 9, "cost": 4100, "attributes": {"socket": "LGA1700", "ramType": "DDR5", "formFactor": "mATX", "pcieSlots": 2, "storage": ["M.2 NVMe", "SATA"]}},

    {"id": "gpu-rtx-4070s", "name": "NVIDIA RTX 4070 SUPER", "category": "GPU", "price": 19990, "stock": 4, "cost": 17500, "attributes": {"tdp": 220, "interface": "PCIe"}},
    {"id": "gpu-gtx-1660s", "name": "MSI GTX 1660 SUPER", "category": "GPU", "price": 6990, "stock": 5, "cost": 6100, "attributes": {"tdp": 125, "interface": "PCIe"}},

    {"id": "ram-fury-16-ddr5", "name": "Kingston Fury 16GB (2x8) 6000 DDR5", "category": "RAM", "price": 2190, "stock": 15, "cost": 1850, "attributes": {"type": "DDR5", "sizeGB": 16}},
    {"id": "ram-vengeance-32-ddr4", "name": "Corsair Vengeance 32GB (2x16) 3200 DDR4", "category": "RAM", "price": 2690, "stock": 10, "cost": 2300, "attributes": {"type": "DDR4", "sizeGB": 32}},

    {"id": "sto-sn770-1tb", "name": "WD Black SN770 1TB NVMe", "category": "Storage", "price": 2990, "stock": 18, "cost": 2500, "attributes": {"interface": "M.2 NVMe"}},
    {"id": "sto-barracuda-2tb", "name": "Seagate Barracuda 2TB SATA", "category": "Storage", "price": 1690, "stock": 8, "cost": 1400, "attributes": {"interface": "SATA"}},

    {"id": "psu-rm750", "name": "Corsair RM750", "category": "PSU", "price": 3290, "stock": 7, "cost": 2800, "attributes": {"wattage": 750}},
    {"id": "psu-neoeco-550", "name": "Antec NeoECO 550", "category": "PSU", "price": 1890, "stock": 11, "cost": 1600, "attributes": {"wattage": 550}},

    {"id": "case-h5-flow", "name": "NZXT H5 Flow", "category": "Case", "price": 3590, "stock": 3, "cost": 3000, "attributes": {"formFactorSupport": ["ATX", "mATX", "ITX"]}},
    {"id": "case-nr200", "name": "Cooler Master NR200", "category": "Case", "price": 3290, "stock": 5, "cost": 2800, "attributes": {"formFactorSupport": ["ITX"]}},

    {"id": "cool-ak400", "name": "DeepCool AK400", "category": "Cooler", "price": 1190, "stock": 9, "cost": 990, "attributes": {"socketSupport": ["AM5", "LGA1700"]}},
    {"id": "cool-kraken-240", "name": "NZXT Kraken 240", "category": "Cooler", "price": 4490, "stock": 4, "cost": 3990, "attributes": {"socketSupport": ["AM5", "LGA1700"]}},

    # Add-ons
    {"id": "mon-aoc-24g2", "name": "AOC 24G2 24\" 144Hz IPS", "category": "Monitor", "price": 4490, "stock": 10, "cost": 3800, "attributes": {"size": 24, "refresh": 144}},
    {"id": "mon-lg-27gp850", "name": "LG 27GP850 27\" 165Hz", "category": "Monitor", "price": 10990, "stock": 5, "cost": 9800, "attributes": {"size": 27, "refresh": 165}},
    {"id": "sw-win11-pro", "name": "Windows 11 Pro (OEM)", "category": "Software", "price": 4590, "stock": 20, "cost": 3500, "attributes": {"license": "OEM"}},
    {"id": "sw-office-365", "name": "Microsoft Office 365 Family (1y)", "category": "Software", "price": 2190, "stock": 30, "cost": 1700, "attributes": {"license": "Subscription"}},
    {"id": "ssd-nv2-1tb", "name": "Kingston NV2 1TB NVMe", "category": "SSD", "price": 2390, "stock": 16, "cost": 2000, "attributes": {"interface": "M.2 NVMe"}},
    {"id": "ssd-mx500-1tb", "name": "Crucial MX500 1TB SATA", "category": "SSD", "price": 2590, "stock": 12, "cost": 2200, "attributes": {"interface": "SATA"}},
    {"id": "ssd-990evo-2tb", "name": "Samsung 990 EVO 2TB NVMe", "category": "SSD", "price": 6290, "stock": 6, "cost": 5600, "attributes": {"interface": "M.2 NVMe"}},
]


def demo_catalog() -> List[Part]:
    return [Part.model_validate(doc) for doc in SEED_PARTS]
