"""
bearing_fields - Покадровый расчёт полей на поверхности подшипников ротора.

Поля давления, толщины плёнки и температуры по вершинам подшипника,
диапазон легенды и история экстремумов, отображение в цвет и смещение.
"""

from .config import (
    BearingGeometry,
    BearingLoadConfig,
    FieldType,
    FIELD_TYPES,
    FIELD_UNITS,
    DISPLACEMENT_FACTORS,
    DESIGN_RPM,
    HISTORY_CAPACITY,
)
from .pressure_profile import (
    PressureProfile,
    FullCircleProfile,
    TiltingPadProfile,
    make_pressure_profile,
    pressure_magnitude,
)
from .field_evaluator import (
    BearingStats,
    BearingFields,
    FieldEvaluator,
    evaluate_bearing,
    speed_factor,
    shimmer,
    film_fields,
)
from .aggregator import (
    LegendRange,
    HistoryBuffer,
    FieldAggregator,
    compute_legend_range,
    thickness_ceiling,
)
from .display_mapper import (
    DisplayMapping,
    LegendStep,
    normalize,
    hsl_to_rgb,
    intensity_to_rgb,
    map_values,
    displacement_vectors,
    deformed_positions,
    legend_steps,
)
from .simulation import (
    Bearing,
    FrameResult,
    RotorBearingSimulation,
)

__version__ = "0.1.0"

__all__ = [
    # Конфигурация
    "BearingGeometry",
    "BearingLoadConfig",
    "FieldType",
    "FIELD_TYPES",
    "FIELD_UNITS",
    "DISPLACEMENT_FACTORS",
    "DESIGN_RPM",
    "HISTORY_CAPACITY",
    # Профиль давления
    "PressureProfile",
    "FullCircleProfile",
    "TiltingPadProfile",
    "make_pressure_profile",
    "pressure_magnitude",
    # Расчёт полей
    "BearingStats",
    "BearingFields",
    "FieldEvaluator",
    "evaluate_bearing",
    "speed_factor",
    "shimmer",
    "film_fields",
    # Легенда и история
    "LegendRange",
    "HistoryBuffer",
    "FieldAggregator",
    "compute_legend_range",
    "thickness_ceiling",
    # Отображение
    "DisplayMapping",
    "LegendStep",
    "normalize",
    "hsl_to_rgb",
    "intensity_to_rgb",
    "map_values",
    "displacement_vectors",
    "deformed_positions",
    "legend_steps",
    # Моделирование
    "Bearing",
    "FrameResult",
    "RotorBearingSimulation",
]
