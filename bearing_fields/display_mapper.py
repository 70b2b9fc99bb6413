"""
Отображение значений поля в цвет и радиальное смещение вершин.

    n = (v - min)/(max - min)            — нормированная интенсивность
    hue = 0.7·(1 - n), s = 1, l = 0.5   — синий при n = 0, красный при n = 1
    d = n · k(field_type)                — смещение вдоль внешней нормали

Смещение всегда прикладывается к исходным (недеформированным) координатам
и не накапливается между кадрами.
"""

from dataclasses import dataclass
from typing import List
import numpy as np

from .config import (
    BearingGeometry,
    DISPLACEMENT_FACTORS,
    FIELD_DECIMALS,
    LEGEND_STEPS,
    FieldType,
    check_field_type,
)
from .aggregator import LegendRange


HUE_SPAN = 0.7


@dataclass
class DisplayMapping:
    """Отображение поля одного подшипника."""
    normalized: np.ndarray      # интенсивность, shape (N,)
    colors: np.ndarray          # RGB в [0, 1], shape (N, 3)
    displacement: np.ndarray    # модуль радиального смещения, shape (N,)
    field_type: str


@dataclass
class LegendStep:
    """Одно деление шкалы легенды."""
    value: float
    label: str
    rgb: tuple

    @property
    def css(self) -> str:
        r, g, b = (int(round(c * 255)) for c in self.rgb)
        return f"rgb({r}, {g}, {b})"


def normalize(values, legend: LegendRange) -> np.ndarray:
    """
    Нормировать значения по диапазону легенды.

    Без обрезки: значения вне диапазона дают n < 0 или n > 1.
    При вырожденном диапазоне возвращаются нули.
    """
    values = np.asarray(values, dtype=np.float64)
    if legend.max > legend.min:
        return (values - legend.min) / (legend.max - legend.min)
    return np.zeros_like(values)


def _hue_to_channel(p, q, t):
    """Компонента RGB по оттенку t (стандартная формула HSL)."""
    t = np.where(t < 0, t + 1, t)
    t = np.where(t > 1, t - 1, t)
    return np.where(
        t < 1 / 6, p + (q - p) * 6 * t,
        np.where(t < 1 / 2, q,
                 np.where(t < 2 / 3, p + (q - p) * 6 * (2 / 3 - t), p)),
    )


def hsl_to_rgb(h, s, l) -> np.ndarray:
    """
    HSL → RGB.

    Args:
        h: оттенок (берётся по модулю 1)
        s: насыщенность [0, 1]
        l: светлота [0, 1]

    Returns:
        RGB в [0, 1], shape (..., 3)
    """
    h, s, l = np.broadcast_arrays(
        np.mod(np.asarray(h, dtype=np.float64), 1.0),
        np.clip(np.asarray(s, dtype=np.float64), 0.0, 1.0),
        np.clip(np.asarray(l, dtype=np.float64), 0.0, 1.0),
    )

    q = np.where(l <= 0.5, l * (1 + s), l + s - l * s)
    p = 2 * l - q

    r = _hue_to_channel(p, q, h + 1 / 3)
    g = _hue_to_channel(p, q, h)
    b = _hue_to_channel(p, q, h - 1 / 3)

    rgb = np.stack([r, g, b], axis=-1)
    # Серый при нулевой насыщенности
    grey = np.stack([l, l, l], axis=-1)
    return np.where((s == 0)[..., None], grey, rgb)


def intensity_to_rgb(normalized) -> np.ndarray:
    """Цвет интенсивности: hue = 0.7·(1 - n), полная насыщенность, l = 0.5."""
    normalized = np.asarray(normalized, dtype=np.float64)
    return hsl_to_rgb(HUE_SPAN * (1.0 - normalized), 1.0, 0.5)


def map_values(values, legend: LegendRange, field_type: FieldType) -> DisplayMapping:
    """
    Отобразить значения поля в цвет и смещение.

    Args:
        values: значения поля по вершинам
        legend: диапазон легенды текущего кадра
        field_type: отображаемый тип поля

    Returns:
        DisplayMapping
    """
    check_field_type(field_type)
    n = normalize(values, legend)
    return DisplayMapping(
        normalized=n,
        colors=intensity_to_rgb(n),
        displacement=n * DISPLACEMENT_FACTORS[field_type],
        field_type=field_type,
    )


def displacement_vectors(geometry: BearingGeometry, magnitude) -> np.ndarray:
    """Векторы смещения вдоль внешней нормали исходных вершин, shape (N, 3)."""
    magnitude = np.asarray(magnitude, dtype=np.float64)
    return geometry.outward_normals * magnitude[:, None]


def deformed_positions(geometry: BearingGeometry, mapping: DisplayMapping) -> np.ndarray:
    """Исходные координаты + смещение текущего кадра (новый массив)."""
    return geometry.positions + displacement_vectors(geometry, mapping.displacement)


def legend_steps(
    legend: LegendRange,
    field_type: FieldType,
    n_steps: int = LEGEND_STEPS,
) -> List[LegendStep]:
    """
    Деления шкалы легенды от max к min.

    Цвет деления совпадает с цветом вершины с тем же значением.
    """
    check_field_type(field_type)
    if n_steps < 2:
        raise ValueError(f"n_steps must be >= 2, got {n_steps}")

    fractions = 1.0 - np.arange(n_steps) / (n_steps - 1)
    values = legend.min + legend.span * fractions
    colors = intensity_to_rgb(fractions)
    decimals = FIELD_DECIMALS[field_type]

    return [
        LegendStep(
            value=float(v),
            label=f"{v:.{decimals}f}",
            rgb=tuple(float(c) for c in rgb),
        )
        for v, rgb in zip(values, colors)
    ]
