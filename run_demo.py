#!/usr/bin/env python3
"""
Демонстрация покадрового расчёта полей подшипников ротора.

Сборка: два подшипника на общем валу
    B1 — сплошной, нагрузка вниз
    B2 — сегментный (по умолчанию 4 × 60°), нагрузка вниз

Использование:
    python run_demo.py                          # 3000 об/мин, давление
    python run_demo.py --rpm 4000 --field temperature
    python run_demo.py --pads 2 --pad-angle 90 --frames 300

Результаты сохраняются в results/demo/
"""

import sys
import time
import logging
import argparse
from pathlib import Path

# Добавляем путь к пакету
sys.path.insert(0, str(Path(__file__).parent))

import numpy as np

from bearing_fields import (
    Bearing,
    BearingGeometry,
    BearingLoadConfig,
    FIELD_TYPES,
    RotorBearingSimulation,
)
from bearing_fields.visualization import plot_frame_summary


# Директория для результатов
RESULTS_DIR = Path(__file__).parent / "results" / "demo"


def print_header(text: str):
    """Печать заголовка."""
    print(f"\n{'='*70}")
    print(text)
    print("=" * 70)


def build_assembly(pads: int, pad_angle: float) -> list:
    """Два подшипника радиуса 0.5 и ширины 1.0 (как в исходной сцене)."""
    load_down = -np.pi / 2
    return [
        Bearing("B1", BearingGeometry.cylinder(0.5, 1.0),
                BearingLoadConfig(load_angle=load_down)),
        Bearing("B2", BearingGeometry.cylinder(0.5, 1.0),
                BearingLoadConfig(load_angle=load_down, pad_count=pads,
                                  pad_angle=pad_angle, load_factor=1.05)),
    ]


def main():
    parser = argparse.ArgumentParser(description="Bearing field simulation demo")
    parser.add_argument("--rpm", type=float, default=3000.0)
    parser.add_argument("--field", choices=FIELD_TYPES, default="pressure")
    parser.add_argument("--frames", type=int, default=240)
    parser.add_argument("--fps", type=float, default=60.0)
    parser.add_argument("--pads", type=int, default=4)
    parser.add_argument("--pad-angle", type=float, default=60.0)
    parser.add_argument("--no-plot", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    print_header("РАСЧЁТ ПОЛЕЙ ПОДШИПНИКОВ РОТОРА")

    bearings = build_assembly(args.pads, args.pad_angle)
    for b in bearings:
        print(f"\n[{b.name}]")
        print(b.geometry.info())
        print(b.load.info())

    sim = RotorBearingSimulation(bearings, rpm=args.rpm, field_type=args.field)

    # =========================================================================
    # Покадровый расчёт
    # =========================================================================
    print_header(f"1. {args.frames} КАДРОВ, n = {args.rpm:.0f} об/мин")

    times = np.arange(args.frames) / args.fps
    t_start = time.perf_counter()
    frame = None
    for frame in sim.run(times):
        pass
    t_elapsed = time.perf_counter() - t_start

    n_vertices = sum(b.geometry.n_vertices for b in bearings)
    print(f"  Вершин на кадр: {n_vertices}")
    print(f"  Время: {t_elapsed:.3f} с ({t_elapsed / max(args.frames, 1) * 1e3:.2f} мс/кадр)")

    if frame is None:
        print("  [!] Кадры не рассчитаны")
        return

    print(f"\nЭКСТРЕМУМЫ ПОСЛЕДНЕГО КАДРА (t = {frame.elapsed_time:.3f} с):")
    for b, s in zip(bearings, frame.stats):
        print(f"  {b.name}: p_max = {s.max_pressure:.2f} МПа, "
              f"h_min = {s.min_thickness:.1f} мкм, "
              f"T_max = {s.max_temperature:.1f} °C")

    lr = frame.legend_range
    print(f"\nЛЕГЕНДА ({frame.field_type}): [{lr.min:.2f}, {lr.max:.2f}]")
    for step in frame.legend_steps():
        print(f"  {step.label:>8s}  {step.css}")

    # =========================================================================
    # История
    # =========================================================================
    print_header("2. ИСТОРИЯ ЭКСТРЕМУМОВ")

    df = sim.history_frame()
    print(df.groupby("bearing")["value"].describe().to_string())

    if not args.no_plot:
        RESULTS_DIR.mkdir(parents=True, exist_ok=True)
        plot_frame_summary(
            frame,
            [b.geometry for b in bearings],
            sim.aggregator,
            save_path=str(RESULTS_DIR / f"summary_{frame.field_type}.png"),
            names=[b.name for b in bearings],
        )


if __name__ == "__main__":
    main()
