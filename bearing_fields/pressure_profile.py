"""
Окружные профили нормированного давления P(θ) ∈ [0, 1].

Все профили реализуют протокол PressureProfile:
    profile(theta) -> массив той же формы

Сплошной подшипник (приближение Half-Sommerfeld):
    P(θ) = max(0, -cos(θ - θ_load))

Сегментный подшипник (n сегментов по α каждый):
    gap = (2π - n·α)/n,  S = α + gap
    k = floor(θ/S),  δ = θ - k·S
    P(θ) = 0,                                  δ >= α (зазор)
    P(θ) = sin(π·δ/α) · max(0, -cos(θ_k - θ_load)),  иначе
    где θ_k = k·S + α/2 — центр k-го сегмента
"""

import logging
from typing import Protocol, runtime_checkable
import numpy as np
from numba import njit

from .config import BearingLoadConfig


logger = logging.getLogger(__name__)

TWO_PI = 2 * np.pi


# ============================================================================
# Numba-функции
# ============================================================================

@njit(cache=True)
def _full_circle_value(theta: float, load_angle: float) -> float:
    """Half-Sommerfeld: давление только в сходящейся половине зазора."""
    value = -np.cos(theta - load_angle)
    if value < 0.0:
        return 0.0
    return value


@njit(cache=True)
def _tilting_pad_value(
    theta: float,
    load_angle: float,
    pad_count: int,
    pad_angle: float,
) -> float:
    """Давление в точке θ для сегментного подшипника (pad_angle в рад)."""
    theta = theta - TWO_PI * np.floor(theta / TWO_PI)

    gap = (TWO_PI - pad_count * pad_angle) / pad_count
    segment = pad_angle + gap

    k = np.floor(theta / segment)
    offset = theta - k * segment

    # Граница α принадлежит зазору
    if offset >= pad_angle:
        return 0.0

    profile = np.sin(np.pi * offset / pad_angle)
    center = k * segment + 0.5 * pad_angle
    pad_load = -np.cos(center - load_angle)
    if pad_load < 0.0:
        pad_load = 0.0

    return profile * pad_load


@njit(cache=True)
def _tilting_pad_array(
    theta: np.ndarray,
    load_angle: float,
    pad_count: int,
    pad_angle: float,
) -> np.ndarray:
    """Профиль сегментного подшипника на одномерном массиве углов."""
    out = np.empty(theta.size)
    for i in range(theta.size):
        out[i] = _tilting_pad_value(theta[i], load_angle, pad_count, pad_angle)
    return out


# ============================================================================
# Профили
# ============================================================================

@runtime_checkable
class PressureProfile(Protocol):
    """
    Протокол окружного профиля давления.

    theta — окружная координата, рад (любой диапазон).
    Результат — нормированное давление в [0, 1].
    """

    def __call__(self, theta: np.ndarray) -> np.ndarray:
        ...


class FullCircleProfile:
    """
    Сплошной подшипник.

    P(θ) = max(0, -cos(θ - θ_load)), максимум 1 при θ = θ_load + π.
    """

    def __init__(self, load_angle: float = 0.0):
        self.load_angle = float(load_angle)

    def __call__(self, theta: np.ndarray) -> np.ndarray:
        theta = np.asarray(theta, dtype=np.float64)
        return np.maximum(0.0, -np.cos(theta - self.load_angle))

    def __repr__(self) -> str:
        return f"FullCircleProfile(load_angle={self.load_angle:.4f})"


class TiltingPadProfile:
    """
    Подшипник из pad_count сегментов, разделённых равными зазорами.

    Внутри сегмента — синусоидальный профиль (ноль на кромках, максимум
    в центре), умноженный на нагруженность сегмента по его центру.
    В зазорах давление равно нулю.
    """

    def __init__(self, load_angle: float, pad_count: int, pad_angle: float):
        """
        Args:
            load_angle: направление нагрузки, рад
            pad_count: число сегментов (> 0)
            pad_angle: угловой размер сегмента, град
        """
        self._config = BearingLoadConfig(
            load_angle=load_angle, pad_count=pad_count, pad_angle=pad_angle
        )
        if not self._config.has_pads:
            raise ValueError(
                f"Impossible pad layout: {pad_count} pads × {pad_angle}°"
            )

    @property
    def load_angle(self) -> float:
        return self._config.load_angle

    @property
    def pad_count(self) -> int:
        return self._config.pad_count

    @property
    def pad_angle(self) -> float:
        """Угловой размер сегмента, рад."""
        return self._config.pad_angle_rad

    @property
    def gap_angle(self) -> float:
        """Зазор между сегментами, рад."""
        return self._config.gap_angle

    @property
    def segment_angle(self) -> float:
        """Период раскладки, рад."""
        return self._config.segment_angle

    def pad_centers(self) -> np.ndarray:
        """Центры сегментов, рад."""
        return self._config.pad_centers()

    def __call__(self, theta: np.ndarray) -> np.ndarray:
        theta = np.ascontiguousarray(theta, dtype=np.float64)
        if theta.ndim == 0:
            return np.float64(_tilting_pad_value(
                float(theta), self.load_angle, self.pad_count, self.pad_angle
            ))
        values = _tilting_pad_array(
            theta.ravel(), self.load_angle, self.pad_count, self.pad_angle
        )
        return values.reshape(theta.shape)

    def __repr__(self) -> str:
        return (f"TiltingPadProfile(load_angle={self.load_angle:.4f}, "
                f"pad_count={self.pad_count}, "
                f"pad_angle={np.degrees(self.pad_angle):.1f}°)")


def make_pressure_profile(config: BearingLoadConfig) -> PressureProfile:
    """
    Выбрать профиль по конфигурации нагрузки.

    Если раскладка сегментов невозможна (занятый угол >= 360° и т.п.),
    используется профиль сплошного подшипника.

    Args:
        config: конфигурация нагрузки

    Returns:
        FullCircleProfile или TiltingPadProfile
    """
    if config.has_pads:
        return TiltingPadProfile(config.load_angle, config.pad_count, config.pad_angle)

    if config.pad_count > 0:
        logger.debug(
            "Pad layout %d × %.1f° is not realizable, using full-circle profile",
            config.pad_count, config.pad_angle,
        )
    return FullCircleProfile(config.load_angle)


def pressure_magnitude(theta: float, config: BearingLoadConfig) -> float:
    """
    Нормированное давление в одной точке окружности.

    Args:
        theta: окружная координата, рад
        config: конфигурация нагрузки

    Returns:
        P ∈ [0, 1]
    """
    if config.has_pads:
        return float(_tilting_pad_value(
            float(theta), config.load_angle, config.pad_count, config.pad_angle_rad
        ))
    return float(_full_circle_value(float(theta), config.load_angle))
