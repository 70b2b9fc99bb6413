"""
Покадровый расчёт полей для всех подшипников ротора.

Порядок внутри кадра:
    1. расчёт полей всех подшипников
    2. диапазон легенды + запись истории
    3. цвет и смещение вершин для выбранного поля

Расчёт синхронный; пауза означает, что step() просто не вызывается.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from .config import (
    BearingGeometry,
    BearingLoadConfig,
    DESIGN_RPM,
    HISTORY_CAPACITY,
    FieldType,
    check_field_type,
)
from .field_evaluator import BearingFields, BearingStats, FieldEvaluator
from .aggregator import FieldAggregator, LegendRange
from .display_mapper import DisplayMapping, LegendStep, legend_steps, map_values


logger = logging.getLogger(__name__)

SLIDER_MAX = 100


@dataclass
class Bearing:
    """Подшипник сборки: геометрия + нагрузка."""
    name: str
    geometry: BearingGeometry
    load: BearingLoadConfig = field(default_factory=BearingLoadConfig)


@dataclass
class FrameResult:
    """Результат одного кадра."""
    elapsed_time: float
    rpm: float
    field_type: str
    legend_range: LegendRange
    fields: List[BearingFields]
    mappings: List[DisplayMapping]

    @property
    def stats(self) -> List[BearingStats]:
        return [f.stats for f in self.fields]

    def legend_steps(self) -> List[LegendStep]:
        """Шкала легенды для отображаемого поля."""
        return legend_steps(self.legend_range, self.field_type)


class RotorBearingSimulation:
    """
    Моделирование полей подшипников ротора.

    Пример:
        sim = RotorBearingSimulation([
            Bearing("B1", BearingGeometry.cylinder(0.5, 1.0)),
            Bearing("B2", BearingGeometry.cylinder(0.5, 1.0),
                    BearingLoadConfig(pad_count=4, pad_angle=60)),
        ], rpm=3000)
        frame = sim.step(elapsed_time=0.5)
    """

    def __init__(
        self,
        bearings: Sequence[Bearing],
        rpm: float = 100.0,
        field_type: FieldType = 'pressure',
        history_capacity: int = HISTORY_CAPACITY,
    ):
        self.aggregator = FieldAggregator(history_capacity)
        self.rpm = rpm
        self.field_type = field_type
        self.bearings = bearings

    @property
    def bearings(self) -> List[Bearing]:
        return self._bearings

    @bearings.setter
    def bearings(self, value: Sequence[Bearing]) -> None:
        self._bearings = list(value)
        self._evaluators = [FieldEvaluator(b.geometry, b.load) for b in self._bearings]
        # История относится к составу сборки
        if len(self._bearings) != self.aggregator.n_bearings:
            self.aggregator.reset(len(self._bearings))
        logger.debug("Assembly set to %d bearing(s)", len(self._bearings))

    def add_bearing(self, bearing: Bearing) -> None:
        self.bearings = self._bearings + [bearing]

    @property
    def rpm(self) -> float:
        """Скорость вращения, об/мин."""
        return self._rpm

    @rpm.setter
    def rpm(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"rpm must be non-negative, got {value}")
        self._rpm = float(value)

    def set_speed_from_slider(self, value: float) -> None:
        """Ползунок 0-100 → 0-4000 об/мин."""
        value = min(max(value, 0), SLIDER_MAX)
        self.rpm = value * DESIGN_RPM / SLIDER_MAX

    @property
    def field_type(self) -> str:
        """Отображаемый тип поля."""
        return self._field_type

    @field_type.setter
    def field_type(self, value: FieldType) -> None:
        self._field_type = check_field_type(value)

    def step(self, elapsed_time: float, record_history: bool = True) -> FrameResult:
        """
        Рассчитать один кадр.

        Args:
            elapsed_time: время моделирования, с
            record_history: дописать экстремумы кадра в историю

        Returns:
            FrameResult
        """
        fields = [ev.evaluate(self._rpm, elapsed_time) for ev in self._evaluators]

        legend = self.aggregator.aggregate(
            [f.stats for f in fields],
            self._field_type,
            self._rpm,
            elapsed_time,
            record=record_history,
        )

        mappings = [map_values(f.get(self._field_type), legend, self._field_type)
                    for f in fields]

        return FrameResult(
            elapsed_time=float(elapsed_time),
            rpm=self._rpm,
            field_type=self._field_type,
            legend_range=legend,
            fields=fields,
            mappings=mappings,
        )

    def run(self, times: Iterable[float]) -> Iterator[FrameResult]:
        """Последовательно рассчитать кадры для моментов времени times."""
        for t in times:
            yield self.step(t)

    def history_frame(self, field_type: Optional[FieldType] = None):
        """История экстремумов в виде DataFrame (bearing, time, value)."""
        return self.aggregator.to_dataframe(field_type or self._field_type)
