"""
Визуализация кадра и истории полей подшипников.
"""

from typing import Optional, Sequence
from pathlib import Path
import numpy as np

from .config import FIELD_UNITS, FieldType
from .aggregator import FieldAggregator
from .simulation import FrameResult


def plot_bearing_field(
    frame: FrameResult,
    index: int,
    geometry,
    ax=None,
    title: Optional[str] = None,
):
    """
    Развёртка поверхности подшипника с цветами текущего кадра.

    Args:
        frame: результат кадра
        index: номер подшипника
        geometry: геометрия этого подшипника
        ax: оси matplotlib (если None, создаются новые)
        title: заголовок графика

    Returns:
        ax: оси matplotlib
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 4))

    theta_deg = np.degrees(np.mod(geometry.theta, 2 * np.pi))
    mapping = frame.mappings[index]

    ax.scatter(theta_deg, geometry.axial, c=np.clip(mapping.colors, 0, 1),
               s=6, marker='s', linewidths=0)
    ax.set_xlabel("θ, град")
    ax.set_ylabel("y")
    ax.set_xlim(0, 360)
    ax.set_title(title or f"Подшипник {index + 1}: {FIELD_UNITS[frame.field_type]}")

    return ax


def plot_legend(frame: FrameResult, ax=None):
    """Шкала легенды текущего кадра (сверху — максимум)."""
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(2, 6))

    steps = frame.legend_steps()
    for i, step in enumerate(steps):
        ax.add_patch(plt.Rectangle((0, len(steps) - 1 - i), 1, 1, color=step.rgb))
        ax.text(1.2, len(steps) - 0.5 - i, step.label, va='center', fontsize=9)

    ax.set_xlim(0, 3)
    ax.set_ylim(0, len(steps))
    ax.axis('off')
    ax.set_title(FIELD_UNITS[frame.field_type], fontsize=10)

    return ax


def plot_history(
    aggregator: FieldAggregator,
    field_type: FieldType,
    ax=None,
    names: Optional[Sequence[str]] = None,
):
    """
    История экстремумов по всем подшипникам.

    Args:
        aggregator: агрегатор с накопленной историей
        field_type: тип поля
        ax: оси matplotlib
        names: подписи подшипников
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 4))

    for i in range(aggregator.n_bearings):
        buf = aggregator.history(i, field_type)
        label = names[i] if names is not None else f"Подшипник {i + 1}"
        ax.plot(buf.times, buf.values, linewidth=1.5, label=label)

    ax.set_xlabel("t, с")
    ax.set_ylabel(FIELD_UNITS[field_type])
    ax.grid(True, alpha=0.3)
    if aggregator.n_bearings:
        ax.legend()

    return ax


def plot_frame_summary(
    frame: FrameResult,
    geometries: Sequence,
    aggregator: FieldAggregator,
    save_path: Optional[str] = None,
    names: Optional[Sequence[str]] = None,
):
    """
    Сводная диаграмма: развёртки подшипников, история и легенда.

    Args:
        frame: результат последнего кадра
        geometries: геометрии подшипников в порядке кадра
        aggregator: агрегатор с историей
        save_path: путь для сохранения (опционально)
        names: подписи подшипников
    """
    import matplotlib.pyplot as plt

    n = len(frame.fields)
    fig = plt.figure(figsize=(14, 3.5 * (n + 1)))
    grid = fig.add_gridspec(n + 1, 5)

    for i, geometry in enumerate(geometries):
        ax = fig.add_subplot(grid[i, :4])
        title = f"{names[i]}: {FIELD_UNITS[frame.field_type]}" if names else None
        plot_bearing_field(frame, i, geometry, ax=ax, title=title)

    plot_history(aggregator, frame.field_type, ax=fig.add_subplot(grid[n, :4]), names=names)
    plot_legend(frame, ax=fig.add_subplot(grid[:, 4]))

    fig.suptitle(f"n = {frame.rpm:.0f} об/мин, t = {frame.elapsed_time:.2f} с")
    plt.tight_layout()

    if save_path:
        # Создаём директорию если не существует
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Сохранено: {save_path}")

    return fig
