"""
Сведение экстремумов всех подшипников в диапазон легенды и история.

Диапазон легенды для выбранного поля:
    pressure:    [0, max p_max]
    thickness:   [min h_min, max(50 + 40·n/4000, 55)]
    temperature: [40, max T_max]
    если max <= min, то max = min + 1

История: для каждого подшипника и каждого типа поля — ограниченный
буфер (t, значение) на 200 точек, старые точки вытесняются.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Sequence
import numpy as np
import pandas as pd

from .config import (
    DESIGN_RPM,
    FIELD_TYPES,
    HISTORY_CAPACITY,
    FieldType,
    check_field_type,
)
from .field_evaluator import BearingStats


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LegendRange:
    """Диапазон нормировки [min, max] для отображаемого поля."""
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


def thickness_ceiling(rpm: float) -> float:
    """Верх шкалы толщины по скорости: не схлопывается на малых оборотах."""
    return max(50.0 + (rpm / DESIGN_RPM) * 40.0, 55.0)


def compute_legend_range(
    stats: Sequence[BearingStats],
    field_type: FieldType,
    rpm: float,
) -> LegendRange:
    """
    Диапазон легенды по экстремумам всех подшипников.

    Args:
        stats: экстремумы каждого подшипника на текущем кадре
        field_type: отображаемый тип поля
        rpm: скорость вращения, об/мин

    Returns:
        LegendRange с max > min
    """
    check_field_type(field_type)

    if field_type == 'pressure':
        lo = 0.0
        hi = max((s.max_pressure for s in stats), default=0.0)
    elif field_type == 'thickness':
        lo = min((s.min_thickness for s in stats), default=0.0)
        hi = thickness_ceiling(rpm)
    else:
        lo = 40.0
        hi = max((s.max_temperature for s in stats), default=0.0)

    if hi <= lo:
        hi = lo + 1.0

    return LegendRange(min=float(lo), max=float(hi))


class HistoryBuffer:
    """Ограниченная последовательность точек (t, значение), FIFO."""

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._samples = deque(maxlen=capacity)

    def append(self, time: float, value: float) -> None:
        self._samples.append((float(time), float(value)))

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self):
        return iter(self._samples)

    @property
    def times(self) -> np.ndarray:
        """Моменты времени, с."""
        return np.array([t for t, _ in self._samples])

    @property
    def values(self) -> np.ndarray:
        return np.array([v for _, v in self._samples])

    @property
    def latest(self):
        """Последняя точка (t, значение) или None."""
        return self._samples[-1] if self._samples else None

    def to_dataframe(self) -> pd.DataFrame:
        """История в виде DataFrame с колонками time, value."""
        return pd.DataFrame(list(self._samples), columns=['time', 'value'])


class FieldAggregator:
    """
    Диапазон легенды на каждом кадре + история экстремумов.

    История пересоздаётся, когда меняется число подшипников.
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        self.capacity = capacity
        self.histories: List[Dict[str, HistoryBuffer]] = []

    @property
    def n_bearings(self) -> int:
        return len(self.histories)

    def reset(self, n_bearings: int) -> None:
        """Создать пустую историю для n_bearings подшипников."""
        logger.info("Resetting field history for %d bearing(s)", n_bearings)
        self.histories = [
            {ft: HistoryBuffer(self.capacity) for ft in FIELD_TYPES}
            for _ in range(n_bearings)
        ]

    def history(self, bearing_index: int, field_type: FieldType) -> HistoryBuffer:
        """Буфер истории подшипника для типа поля."""
        check_field_type(field_type)
        return self.histories[bearing_index][field_type]

    def record(self, stats: Sequence[BearingStats], elapsed_time: float) -> None:
        """Добавить по точке на подшипник и тип поля (собственный экстремум)."""
        if len(stats) != self.n_bearings:
            self.reset(len(stats))

        for buffers, s in zip(self.histories, stats):
            for ft in FIELD_TYPES:
                buffers[ft].append(elapsed_time, s.get(ft))

    def aggregate(
        self,
        stats: Sequence[BearingStats],
        field_type: FieldType,
        rpm: float,
        elapsed_time: float,
        record: bool = True,
    ) -> LegendRange:
        """
        Свести экстремумы кадра.

        Args:
            stats: экстремумы каждого подшипника
            field_type: отображаемый тип поля
            rpm: скорость вращения, об/мин
            elapsed_time: время кадра, с
            record: дописать точки в историю

        Returns:
            LegendRange
        """
        legend = compute_legend_range(stats, field_type, rpm)
        if record:
            self.record(stats, elapsed_time)
        return legend

    def to_dataframe(self, field_type: FieldType) -> pd.DataFrame:
        """
        История всех подшипников для типа поля в длинном формате.

        Колонки: bearing, time, value.
        """
        frames = []
        for i in range(self.n_bearings):
            df = self.history(i, field_type).to_dataframe()
            df.insert(0, 'bearing', i)
            frames.append(df)
        if not frames:
            return pd.DataFrame(columns=['bearing', 'time', 'value'])
        return pd.concat(frames, ignore_index=True)
