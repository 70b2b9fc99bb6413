"""
Расчёт полей давления, толщины плёнки и температуры по вершинам подшипника.

Модель (замкнутые формулы, не решение уравнения Рейнольдса):
    sf = clamp(n/4000, 0, 1)^1.5                       — фактор скорости
    P₀ = P(θ) · max(0, 1 - (2y/L)²)                    — базовое давление
    s_i = 1 + sin(8t + 0.5i) · 0.08 · (1 + sf)          — мерцание

    p = P₀ · (2 + 15·sf) · s_i
    h = 5 + (1 - P₀)·50 + 60·sf·s_i
    T = 40 + 40·P₀ + 75·sf·s_i

Все три поля считаются вместе за один проход; выбор отображаемого поля
делается только при отображении.
"""

from dataclasses import dataclass
from typing import Optional
import numpy as np
from numba import njit

from .config import (
    BearingGeometry,
    BearingLoadConfig,
    DESIGN_RPM,
    FieldType,
    check_field_type,
)
from .pressure_profile import PressureProfile, make_pressure_profile


@dataclass
class BearingStats:
    """Экстремумы полей одного подшипника на одном кадре."""
    max_pressure: float
    min_thickness: float
    max_temperature: float

    def get(self, field_type: FieldType) -> float:
        """Экстремум, соответствующий типу поля."""
        check_field_type(field_type)
        if field_type == 'pressure':
            return self.max_pressure
        if field_type == 'thickness':
            return self.min_thickness
        return self.max_temperature


@dataclass
class BearingFields:
    """Результат расчёта полей одного подшипника."""
    base_pressure: np.ndarray   # нормированное давление P₀ ∈ [0, 1]
    pressure: np.ndarray        # давление, МПа
    thickness: np.ndarray       # толщина плёнки, мкм
    temperature: np.ndarray     # температура, °C
    stats: BearingStats
    speed_factor: float
    elapsed_time: float

    def get(self, field_type: FieldType) -> np.ndarray:
        """Массив значений для выбранного типа поля."""
        check_field_type(field_type)
        return getattr(self, field_type)

    @property
    def n_vertices(self) -> int:
        return len(self.pressure)


# ============================================================================
# Numba-оптимизированные функции
# ============================================================================

@njit(cache=True)
def shimmer(elapsed_time: float, index: int, speed_factor: float) -> float:
    """Детерминированное мерцание вершины index в момент elapsed_time."""
    return 1.0 + np.sin(elapsed_time * 8.0 + index * 0.5) * 0.08 * (1.0 + speed_factor)


@njit(cache=True)
def film_fields(base_pressure, speed_factor, shimmer_value):
    """
    Поля по нормированному давлению.

    Returns:
        (pressure, thickness, temperature)
    """
    pressure = base_pressure * (2.0 + speed_factor * 15.0) * shimmer_value
    thickness = (5.0 + (1.0 - base_pressure) * 50.0) + speed_factor * 60.0 * shimmer_value
    temperature = 40.0 + base_pressure * 40.0 + speed_factor * 75.0 * shimmer_value
    return pressure, thickness, temperature


@njit(cache=True)
def _evaluate_fields_numba(
    base_pressure: np.ndarray,
    speed_factor: float,
    elapsed_time: float,
    load_factor: float,
) -> tuple:
    """Поля и экстремумы за один проход по вершинам."""
    n = base_pressure.size
    pressure = np.empty(n)
    thickness = np.empty(n)
    temperature = np.empty(n)

    max_pressure = 0.0
    min_thickness = np.inf
    max_temperature = 0.0

    for i in range(n):
        s = shimmer(elapsed_time, i, speed_factor)
        p, h, t = film_fields(base_pressure[i], speed_factor, s)
        p *= load_factor

        pressure[i] = p
        thickness[i] = h
        temperature[i] = t

        if p > max_pressure:
            max_pressure = p
        if h < min_thickness:
            min_thickness = h
        if t > max_temperature:
            max_temperature = t

    return pressure, thickness, temperature, max_pressure, min_thickness, max_temperature


def speed_factor(rpm: float, design_rpm: float = DESIGN_RPM) -> float:
    """
    Нелинейный фактор скорости: clamp(rpm/design_rpm, 0, 1)^1.5.

    Эффекты приглушены на малых оборотах и насыщаются у верхней границы.
    """
    ratio = min(max(rpm / design_rpm, 0.0), 1.0)
    return ratio ** 1.5


# ============================================================================
# Основной класс
# ============================================================================

class FieldEvaluator:
    """
    Расчёт полей для одного подшипника.

    Геометрия, нагрузка и профиль давления фиксируются при создании;
    базовое давление P₀ зависит только от них и кэшируется. На каждом
    кадре пересчитываются только скоростные и временные множители.
    Другая нагрузка задаётся новым FieldEvaluator.
    """

    def __init__(
        self,
        geometry: BearingGeometry,
        load: BearingLoadConfig,
        profile: Optional[PressureProfile] = None,
    ):
        self.geometry = geometry
        self._load = load
        self.profile = profile or make_pressure_profile(load)

        base = self.profile(geometry.theta) * geometry.axial_falloff()
        self._base_pressure = np.ascontiguousarray(base, dtype=np.float64)
        self._base_pressure.flags.writeable = False

    @property
    def load(self) -> BearingLoadConfig:
        return self._load

    @property
    def base_pressure(self) -> np.ndarray:
        """Нормированное давление P₀ по вершинам (только чтение)."""
        return self._base_pressure

    def evaluate(self, rpm: float, elapsed_time: float) -> BearingFields:
        """
        Рассчитать поля на один кадр.

        Args:
            rpm: скорость вращения, об/мин
            elapsed_time: время моделирования, с

        Returns:
            BearingFields
        """
        sf = speed_factor(rpm)
        (pressure, thickness, temperature,
         max_p, min_h, max_t) = _evaluate_fields_numba(
            self._base_pressure, sf, float(elapsed_time), float(self._load.load_factor)
        )

        return BearingFields(
            base_pressure=self._base_pressure,
            pressure=pressure,
            thickness=thickness,
            temperature=temperature,
            stats=BearingStats(
                max_pressure=float(max_p),
                min_thickness=float(min_h),
                max_temperature=float(max_t),
            ),
            speed_factor=sf,
            elapsed_time=float(elapsed_time),
        )


def evaluate_bearing(
    geometry: BearingGeometry,
    load: BearingLoadConfig,
    rpm: float,
    elapsed_time: float,
    profile: Optional[PressureProfile] = None,
) -> BearingFields:
    """
    Рассчитать поля давления, толщины и температуры.

    Args:
        geometry: недеформированная геометрия подшипника
        load: конфигурация нагрузки
        rpm: скорость вращения, об/мин
        elapsed_time: время моделирования, с
        profile: профиль давления (по умолчанию — по конфигурации)

    Returns:
        BearingFields
    """
    evaluator = FieldEvaluator(geometry, load, profile)
    return evaluator.evaluate(rpm, elapsed_time)
