"""
Тесты отображения значений в цвет и смещение.

Критерии проверки:
1. n(min) = 0, n(max) = 1 точно, без обрезки вне диапазона
2. Синий при n = 0, красный при n = 1; совпадение с colorsys
3. Смещение вдоль внешней нормали исходной вершины, без накопления
4. Шкала легенды согласована с цветами вершин
"""

import colorsys

import numpy as np
import pytest

from bearing_fields import (
    BearingGeometry,
    DISPLACEMENT_FACTORS,
    LegendRange,
    deformed_positions,
    displacement_vectors,
    hsl_to_rgb,
    intensity_to_rgb,
    legend_steps,
    map_values,
    normalize,
)


@pytest.fixture
def legend():
    return LegendRange(min=40.0, max=112.5)


class TestNormalize:

    def test_endpoints_exact(self, legend):
        n = normalize([legend.min, legend.max], legend)
        assert n[0] == 0.0
        assert n[1] == 1.0

    def test_not_clamped(self, legend):
        n = normalize([legend.max + legend.span, legend.min - legend.span], legend)
        assert np.isclose(n[0], 2.0)
        assert np.isclose(n[1], -1.0)

    def test_degenerate_range(self):
        n = normalize([1.0, 2.0, 3.0], LegendRange(1.0, 1.0))
        assert np.all(n == 0.0)


class TestColors:

    def test_blue_at_zero(self):
        r, g, b = intensity_to_rgb(0.0)
        assert b > r and b > g

    def test_red_at_one(self):
        r, g, b = intensity_to_rgb(1.0)
        assert np.allclose([r, g, b], [1.0, 0.0, 0.0])

    def test_matches_colorsys(self):
        hues = np.linspace(0, 1, 37)
        for s, l in [(1.0, 0.5), (0.6, 0.3), (0.4, 0.8), (0.0, 0.7)]:
            rgb = hsl_to_rgb(hues, s, l)
            expected = np.array([colorsys.hls_to_rgb(h, l, s) for h in hues])
            assert np.allclose(rgb, expected)

    def test_shape(self):
        assert intensity_to_rgb(np.zeros(10)).shape == (10, 3)


class TestMapValues:

    @pytest.mark.parametrize("field_type", ["pressure", "thickness", "temperature"])
    def test_displacement_factor(self, legend, field_type):
        mapping = map_values([legend.min, legend.max], legend, field_type)
        assert mapping.displacement[0] == 0.0
        assert np.isclose(mapping.displacement[1], DISPLACEMENT_FACTORS[field_type])

    def test_factors(self):
        assert DISPLACEMENT_FACTORS == {
            'pressure': 0.5, 'thickness': 0.15, 'temperature': 0.25,
        }

    def test_unknown_field(self, legend):
        with pytest.raises(ValueError):
            map_values([1.0], legend, 'viscosity')


class TestDisplacement:

    @pytest.fixture
    def geometry(self):
        return BearingGeometry.cylinder(radius=0.5, width=1.0,
                                        radial_segments=16, axial_segments=4)

    def test_radial_direction(self, geometry):
        magnitude = np.full(geometry.n_vertices, 0.2)
        vectors = displacement_vectors(geometry, magnitude)

        assert np.allclose(vectors[:, 1], 0.0)
        assert np.allclose(np.linalg.norm(vectors, axis=1), 0.2)
        # Наружу: радиус растёт
        moved = geometry.positions + vectors
        assert np.allclose(np.hypot(moved[:, 0], moved[:, 2]), 0.7)

    def test_no_compounding(self, geometry, legend):
        values = np.linspace(legend.min, legend.max, geometry.n_vertices)
        mapping = map_values(values, legend, 'pressure')
        before = geometry.positions.copy()

        first = deformed_positions(geometry, mapping)
        second = deformed_positions(geometry, mapping)

        assert np.array_equal(first, second)
        assert np.array_equal(geometry.positions, before)

    def test_axis_vertex_has_zero_normal(self):
        geometry = BearingGeometry.from_positions([[0.0, 0.1, 0.0]], radius=0.5, width=1.0)
        assert np.allclose(geometry.outward_normals, 0.0)


class TestLegendSteps:

    def test_steps(self, legend):
        steps = legend_steps(legend, 'temperature')
        assert len(steps) == 12
        assert steps[0].value == legend.max
        assert np.isclose(steps[-1].value, legend.min)
        assert steps[0].label == "112.5"

    def test_colors_match_vertices(self, legend):
        steps = legend_steps(legend, 'pressure')
        mapping = map_values([s.value for s in steps], legend, 'pressure')
        assert np.allclose([s.rgb for s in steps], mapping.colors)
        # Сверху — красный
        assert steps[0].css == "rgb(255, 0, 0)"

    def test_pressure_label_precision(self):
        steps = legend_steps(LegendRange(0.0, 3.14159), 'pressure')
        assert steps[0].label == "3.14"
