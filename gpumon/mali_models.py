"""Model names and engine counts of Mali GPUs driven by panfrost and panthor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

_U32_MASK = 0xFFFFFFFF

EngineCounter = Callable[[int, int, int], int]


def _num_engines_g52(core_count: int, core_features: int, thread_features: int) -> int:
    return core_features & 0xF


@dataclass(frozen=True)
class _PanfrostModel:
    name: str
    id: int
    nengines: Optional[EngineCounter] = None


_PANFROST_MODELS: Tuple[_PanfrostModel, ...] = (
    _PanfrostModel("t600", 0x600),
    _PanfrostModel("t620", 0x620),
    _PanfrostModel("t720", 0x720),
    _PanfrostModel("t760", 0x750),
    _PanfrostModel("t820", 0x820),
    _PanfrostModel("t830", 0x830),
    _PanfrostModel("t860", 0x860),
    _PanfrostModel("t880", 0x880),
    _PanfrostModel("g71", 0x6000),
    _PanfrostModel("g72", 0x6001),
    _PanfrostModel("g51", 0x7000),
    _PanfrostModel("g76", 0x7001),
    _PanfrostModel("g52", 0x7002, _num_engines_g52),
    _PanfrostModel("g31", 0x7003),
    _PanfrostModel("g57", 0x9001),
    _PanfrostModel("g57", 0x9003),
)


@dataclass(frozen=True)
class _PanthorModel:
    name: str
    arch_major: int
    product_major: int


_PANTHOR_MODELS: Tuple[_PanthorModel, ...] = (
    _PanthorModel("g610", 10, 7),
    _PanthorModel("g310", 10, 4),
)


def _panfrost_model_matches(gpu_id: int, model_id: int) -> bool:
    match = gpu_id & _U32_MASK
    if match & 0xF000:
        match &= 0xF00F
    return match == model_id


def _find_panfrost_model(gpu_id: int) -> Optional[_PanfrostModel]:
    return next((model for model in _PANFROST_MODELS if _panfrost_model_matches(gpu_id, model.id)), None)


def panfrost_parse_marketing_name(gpu_id: int) -> Optional[str]:
    """Marketing name of a panfrost GPU product id, or ``None`` if unknown."""
    model = _find_panfrost_model(gpu_id)
    return model.name if model else None


def get_number_engines(gpu_id: int, core_count: int, core_features: int, thread_features: int) -> int:
    """Number of execution engines of a panfrost GPU; 0 when not known."""
    model = _find_panfrost_model(gpu_id)
    if model is None or model.nengines is None:
        return 0
    return model.nengines(core_count, core_features & _U32_MASK, thread_features & _U32_MASK)


def util_last_bit(u: int) -> int:
    """Position of the highest set bit of a 32-bit value, counting from 1; 0 for 0."""
    return (u & _U32_MASK).bit_length()


def panthor_device_name(gpu_id: int) -> Optional[str]:
    """Model name of a panthor GPU id, or ``None`` if unknown."""
    arch_major = (gpu_id >> 28) & 0xF
    product_major = (gpu_id >> 16) & 0xF
    for model in _PANTHOR_MODELS:
        if model.arch_major == arch_major and model.product_major == product_major:
            return model.name
    return None