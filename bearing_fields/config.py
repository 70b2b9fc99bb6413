"""
Геометрия и конфигурация нагрузки подшипника.

Система координат подшипника (локальная):
    - ось подшипника — y
    - θ = atan2(z, x) — окружная координата
    - axial = y ∈ [-width/2, width/2] — осевая координата

Геометрия фиксируется один раз по недеформированной сетке и далее
только читается: смещения на каждом кадре считаются от неё.
"""

from dataclasses import dataclass, field
from typing import Literal
import numpy as np


FieldType = Literal['pressure', 'thickness', 'temperature']
FIELD_TYPES: tuple = ('pressure', 'thickness', 'temperature')

DESIGN_RPM = 4000.0         # верх расчётного диапазона скорости, об/мин
HISTORY_CAPACITY = 200      # точек в истории на подшипник и тип поля
LEGEND_STEPS = 12           # делений шкалы легенды

# Подписи, точность и визуальное усиление для каждого типа поля
FIELD_UNITS = {
    'pressure': 'Pressure (MPa)',
    'thickness': 'Thickness (μm)',
    'temperature': 'Temperature (°C)',
}
FIELD_DECIMALS = {
    'pressure': 2,
    'thickness': 1,
    'temperature': 1,
}
DISPLACEMENT_FACTORS = {
    'pressure': 0.5,
    'thickness': 0.15,
    'temperature': 0.25,
}


def check_field_type(field_type: str) -> str:
    """Проверить тип поля, вернуть его без изменений."""
    if field_type not in FIELD_TYPES:
        raise ValueError(
            f"field_type must be one of {FIELD_TYPES}, got {field_type!r}"
        )
    return field_type


@dataclass(frozen=True)
class BearingLoadConfig:
    """
    Нагрузка и раскладка сегментов подшипника.

    Неизменяемая: новая нагрузка задаётся новым объектом
    (dataclasses.replace), который передаётся через Bearing.

    Параметры:
        load_angle: направление нагрузки, рад
        pad_count: число сегментов (0 — сплошной подшипник)
        pad_angle: угловой размер сегмента, град
        load_factor: множитель давления для данного подшипника

    Невозможная раскладка (pad_angle <= 0, pad_angle >= 360 или
    pad_count·pad_angle >= 360) не считается ошибкой: has_pads = False,
    и используется профиль сплошного подшипника.
    """

    load_angle: float = 0.0
    pad_count: int = 0
    pad_angle: float = 0.0
    load_factor: float = 1.0

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Проверка параметров."""
        if self.pad_count != int(self.pad_count):
            raise ValueError(f"pad_count must be an integer, got {self.pad_count}")
        if self.pad_count < 0:
            raise ValueError(f"pad_count must be >= 0, got {self.pad_count}")
        object.__setattr__(self, 'pad_count', int(self.pad_count))

    @property
    def pad_angle_rad(self) -> float:
        """Угловой размер сегмента, рад."""
        return np.radians(self.pad_angle)

    @property
    def occupied_angle(self) -> float:
        """Суммарный угол, занятый сегментами, рад."""
        return self.pad_count * self.pad_angle_rad

    @property
    def has_pads(self) -> bool:
        """Раскладка сегментов геометрически возможна?"""
        if self.pad_count == 0:
            return False
        if self.pad_angle <= 0 or self.pad_angle >= 360:
            return False
        return self.occupied_angle < 2 * np.pi

    @property
    def gap_angle(self) -> float:
        """Зазор между соседними сегментами, рад (0 для сплошного)."""
        if not self.has_pads:
            return 0.0
        return (2 * np.pi - self.occupied_angle) / self.pad_count

    @property
    def segment_angle(self) -> float:
        """Период раскладки: сегмент + зазор, рад."""
        if not self.has_pads:
            return 2 * np.pi
        return self.pad_angle_rad + self.gap_angle

    def pad_centers(self) -> np.ndarray:
        """Угловые центры сегментов, рад, shape (pad_count,)."""
        if not self.has_pads:
            return np.zeros(0)
        k = np.arange(self.pad_count)
        return k * self.segment_angle + 0.5 * self.pad_angle_rad

    def info(self) -> str:
        """Строка с информацией о конфигурации."""
        if self.has_pads:
            layout = (f"{self.pad_count} сегм. × {self.pad_angle:.1f}°, "
                      f"зазор {np.degrees(self.gap_angle):.1f}°")
        else:
            layout = "сплошной"
        return f"""Нагрузка подшипника:
  Направление нагрузки = {np.degrees(self.load_angle):.1f}°
  Раскладка: {layout}
  Множитель давления = {self.load_factor}"""


@dataclass(frozen=True, eq=False)
class BearingGeometry:
    """
    Недеформированная внутренняя поверхность подшипника.

    Параметры:
        radius: радиус поверхности
        width: осевая ширина
        positions: координаты вершин в локальной системе, shape (N, 3)

    Производные массивы theta, axial и outward_normals вычисляются один
    раз при создании. Все массивы только для чтения.
    """

    radius: float
    width: float
    positions: np.ndarray
    theta: np.ndarray = field(init=False, repr=False)
    axial: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")

        positions = np.array(self.positions, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(
                f"positions must have shape (N, 3), got {positions.shape}"
            )
        if len(positions) == 0:
            raise ValueError("geometry must contain at least one vertex")

        theta = np.ascontiguousarray(np.arctan2(positions[:, 2], positions[:, 0]))
        axial = np.ascontiguousarray(positions[:, 1])

        for arr in (positions, theta, axial):
            arr.flags.writeable = False

        # frozen dataclass: присваивание в обход __setattr__
        object.__setattr__(self, 'positions', positions)
        object.__setattr__(self, 'theta', theta)
        object.__setattr__(self, 'axial', axial)

    @classmethod
    def from_positions(cls, positions, radius: float, width: float):
        """Создать геометрию по снятым с сетки координатам вершин."""
        return cls(radius=radius, width=width, positions=positions)

    @classmethod
    def cylinder(
        cls,
        radius: float,
        width: float,
        radial_segments: int = 64,
        axial_segments: int = 32,
    ):
        """
        Открытый цилиндр с осью y.

        Порядок вершин: ряды от y = +width/2 до y = -width/2, в каждом ряду
        radial_segments + 1 вершина (шов дублируется):
            x = r·sin(2πu), z = r·cos(2πu), u ∈ [0, 1]

        Args:
            radius: радиус
            width: осевая ширина
            radial_segments: число делений по окружности
            axial_segments: число делений по оси

        Returns:
            BearingGeometry с (radial_segments+1)·(axial_segments+1) вершинами
        """
        u = np.linspace(0.0, 1.0, radial_segments + 1)
        v = np.linspace(0.0, 1.0, axial_segments + 1)
        U, V = np.meshgrid(u, v, indexing='xy')

        angle = 2 * np.pi * U
        x = radius * np.sin(angle)
        y = 0.5 * width - V * width
        z = radius * np.cos(angle)

        positions = np.column_stack([x.ravel(), y.ravel(), z.ravel()])
        return cls(radius=radius, width=width, positions=positions)

    @property
    def n_vertices(self) -> int:
        """Число вершин."""
        return len(self.positions)

    @property
    def outward_normals(self) -> np.ndarray:
        """
        Единичные радиальные нормали (x, 0, z)/|(x, 0, z)|, shape (N, 3).

        Для вершин на оси нормаль нулевая.
        """
        radial = self.positions.copy()
        radial[:, 1] = 0.0
        norm = np.linalg.norm(radial, axis=1, keepdims=True)
        return np.divide(radial, norm, out=np.zeros_like(radial), where=norm > 0)

    def axial_falloff(self) -> np.ndarray:
        """
        Осевое затухание давления: max(0, 1 - (2·axial/width)²).

        1 в середине ширины, 0 на торцах.
        """
        return np.maximum(0.0, 1.0 - (2.0 * self.axial / self.width) ** 2)

    def info(self) -> str:
        """Строка с информацией о геометрии."""
        return f"""Геометрия подшипника:
  Радиус = {self.radius}, ширина = {self.width}
  Вершин: {self.n_vertices}"""
