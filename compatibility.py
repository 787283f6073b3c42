"""Compatibility engine.

Each rule compares a pair of chosen base parts and yields one note. Rules are
independent: all of them are evaluated on every call and a rule whose parts
are not both chosen produces nothing.
"""
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple

import structlog

from attributes import attr_list, attr_number, attr_str
from schemas import (
    Category,
    CompatibilityNote,
    CompatibilityReport,
    NoteLevel,
    Part,
)

logger = structlog.get_logger(__name__)

# Fixed allowance for board, drives and fans on top of CPU + GPU
WATTAGE_HEADROOM_W = 100

Parts = Mapping[Category, Part]


def estimate_wattage(parts: Parts) -> float:
    total = float(WATTAGE_HEADROOM_W)
    for category in (Category.CPU, Category.GPU):
        tdp = attr_number(parts.get(category), "tdp")
        if tdp:
            total += tdp
    return total


@dataclass(frozen=True)
class CompatibilityRule:
    name: str
    requires: Tuple[Category, ...]
    failure_level: NoteLevel
    passes: Callable[[Parts], bool]
    ok_message: Callable[[Parts], str]
    failure_message: Callable[[Parts], str]
    # Extra guard on top of `requires`; the rule is skipped when it is False
    applies: Optional[Callable[[Parts], bool]] = None

    def evaluate(self, parts: Parts) -> Optional[CompatibilityNote]:
        if any(parts.get(category) is None for category in self.requires):
            return None
        if self.applies is not None and not self.applies(parts):
            return None
        if self.passes(parts):
            return CompatibilityNote(rule=self.name, level=NoteLevel.OK, message=self.ok_message(parts))
        return CompatibilityNote(
            rule=self.name, level=self.failure_level, message=self.failure_message(parts)
        )


def _show(value) -> str:
    return value if value else "unknown"


def _show_list(values) -> str:
    return ", ".join(values) if values else "-"


def _cpu_socket(p: Parts) -> Optional[str]:
    return attr_str(p[Category.CPU], "socket")


def _mb(p: Parts, key: str) -> Optional[str]:
    return attr_str(p[Category.MOTHERBOARD], key)


RULES: Tuple[CompatibilityRule, ...] = (
    CompatibilityRule(
        name="socket",
        requires=(Category.CPU, Category.MOTHERBOARD),
        failure_level=NoteLevel.ERROR,
        passes=lambda p: _cpu_socket(p) == _mb(p, "socket"),
        ok_message=lambda p: f"CPU and motherboard sockets match ({_show(_cpu_socket(p))})",
        failure_message=lambda p: (
            f"CPU socket ({_show(_cpu_socket(p))}) does not match "
            f"motherboard socket ({_show(_mb(p, 'socket'))})"
        ),
    ),
    CompatibilityRule(
        name="ram_type",
        requires=(Category.RAM, Category.MOTHERBOARD),
        failure_level=NoteLevel.ERROR,
        passes=lambda p: attr_str(p[Category.RAM], "type") == _mb(p, "ramType"),
        ok_message=lambda p: f"RAM type matches motherboard ({_show(_mb(p, 'ramType'))})",
        failure_message=lambda p: (
            f"RAM ({_show(attr_str(p[Category.RAM], 'type'))}) does not match "
            f"motherboard ({_show(_mb(p, 'ramType'))})"
        ),
    ),
    CompatibilityRule(
        name="pcie",
        requires=(Category.GPU, Category.MOTHERBOARD),
        failure_level=NoteLevel.ERROR,
        passes=lambda p: (attr_number(p[Category.MOTHERBOARD], "pcieSlots") or 0) > 0,
        ok_message=lambda p: "Motherboard has a PCIe slot for the graphics card",
        failure_message=lambda p: "Motherboard has no PCIe slot for the graphics card",
    ),
    CompatibilityRule(
        name="case_form_factor",
        requires=(Category.CASE, Category.MOTHERBOARD),
        failure_level=NoteLevel.ERROR,
        passes=lambda p: _mb(p, "formFactor") in (attr_list(p[Category.CASE], "formFactorSupport") or []),
        ok_message=lambda p: f"Case supports the motherboard form factor ({_mb(p, 'formFactor')})",
        failure_message=lambda p: (
            f"Case supports {_show_list(attr_list(p[Category.CASE], 'formFactorSupport'))}, "
            f"not the motherboard form factor ({_show(_mb(p, 'formFactor'))})"
        ),
    ),
    CompatibilityRule(
        name="cooler_socket",
        requires=(Category.COOLER, Category.CPU),
        failure_level=NoteLevel.ERROR,
        passes=lambda p: _cpu_socket(p) in (attr_list(p[Category.COOLER], "socketSupport") or []),
        ok_message=lambda p: f"Cooler supports the CPU socket ({_cpu_socket(p)})",
        failure_message=lambda p: f"Cooler does not support the CPU socket ({_show(_cpu_socket(p))})",
    ),
    CompatibilityRule(
        name="storage_interface",
        requires=(Category.STORAGE, Category.MOTHERBOARD),
        failure_level=NoteLevel.ERROR,
        applies=lambda p: (
            attr_str(p[Category.STORAGE], "interface") is not None
            and attr_list(p[Category.MOTHERBOARD], "storage") is not None
        ),
        passes=lambda p: attr_str(p[Category.STORAGE], "interface") in attr_list(p[Category.MOTHERBOARD], "storage"),
        ok_message=lambda p: f"Motherboard has a {attr_str(p[Category.STORAGE], 'interface')} port for the storage",
        failure_message=lambda p: (
            f"Storage ({attr_str(p[Category.STORAGE], 'interface')}) does not match motherboard ports "
            f"({_show_list(attr_list(p[Category.MOTHERBOARD], 'storage'))})"
        ),
    ),
    CompatibilityRule(
        name="psu_wattage",
        requires=(Category.PSU,),
        failure_level=NoteLevel.WARN,
        passes=lambda p: (attr_number(p[Category.PSU], "wattage") or 0) >= estimate_wattage(p),
        ok_message=lambda p: f"PSU is sufficient (needs ~{estimate_wattage(p):g}W)",
        failure_message=lambda p: (
            f"PSU {(attr_number(p[Category.PSU], 'wattage') or 0):g}W may be insufficient, "
            f"needs at least ~{estimate_wattage(p):g}W"
        ),
    ),
)


def overall_level(notes) -> Optional[NoteLevel]:
    if not notes:
        return None
    return max((note.level for note in notes), key=lambda level: level.rank)


def check_compatibility(parts: Parts) -> CompatibilityReport:
    """Run every rule against the chosen base parts.

    Returns a report whose level is the most severe note, or None when no
    rule had both of its parts to compare.
    """
    notes = []
    for rule in RULES:
        note = rule.evaluate(parts)
        if note is not None:
            notes.append(note)

    report = CompatibilityReport(
        notes=notes,
        level=overall_level(notes),
        estimated_wattage=estimate_wattage(parts),
    )
    logger.debug(
        "compatibility_checked",
        rules_fired=len(notes),
        level=report.level.value if report.level else None,
    )
    return report
