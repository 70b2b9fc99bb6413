"""
Тесты профилей давления.

Критерии проверки:
1. P ∈ [0, 1], максимум сплошного профиля при θ = θ_load + π
2. Сегмент: ноль на кромках, максимум в центре, ноль в зазорах
3. Невозможная раскладка → профиль сплошного подшипника
4. Детерминированность
"""

import numpy as np
import pytest

from bearing_fields import (
    BearingLoadConfig,
    FullCircleProfile,
    TiltingPadProfile,
    make_pressure_profile,
    pressure_magnitude,
)


@pytest.fixture
def theta_grid():
    return np.linspace(-2 * np.pi, 4 * np.pi, 2001)


class TestFullCircle:
    """Сплошной подшипник."""

    def test_range(self, theta_grid):
        """P ∈ [0, 1] на всей окружности."""
        P = FullCircleProfile(0.3)(theta_grid)
        assert np.all(P >= 0)
        assert np.all(P <= 1)

    @pytest.mark.parametrize("load_angle", [0.0, np.pi / 3, -np.pi / 2, 2.5])
    def test_max_opposite_load(self, load_angle):
        """Максимум P = 1 при θ = θ_load + π."""
        config = BearingLoadConfig(load_angle=load_angle)
        assert np.isclose(pressure_magnitude(load_angle + np.pi, config), 1.0)

        theta = np.linspace(0, 2 * np.pi, 721)
        P = FullCircleProfile(load_angle)(theta)
        assert np.max(P) <= pressure_magnitude(load_angle + np.pi, config) + 1e-12

    def test_zero_in_diverging_half(self):
        """Под нагрузкой (θ = θ_load) давление равно нулю."""
        config = BearingLoadConfig(load_angle=0.0)
        assert pressure_magnitude(0.0, config) == 0.0
        assert pressure_magnitude(np.pi / 4, config) == 0.0

    def test_scalar_matches_profile(self, theta_grid):
        config = BearingLoadConfig(load_angle=1.0)
        profile = make_pressure_profile(config)
        P = profile(theta_grid)
        for theta, value in zip(theta_grid[::100], P[::100]):
            assert np.isclose(pressure_magnitude(theta, config), value)


class TestTiltingPad:
    """Сегментный подшипник."""

    @pytest.fixture
    def single_pad(self):
        """Один сегмент 180° (θ ∈ [0, π)), нагрузка с противоположной стороны."""
        return BearingLoadConfig(load_angle=1.5 * np.pi, pad_count=1, pad_angle=180)

    def test_single_pad_edges_and_center(self, single_pad):
        """Ноль на кромках, максимум в центре сегмента (θ = 90°)."""
        center = pressure_magnitude(np.pi / 2, single_pad)
        assert np.isclose(center, 1.0)
        assert np.isclose(pressure_magnitude(0.0, single_pad), 0.0)
        assert np.isclose(pressure_magnitude(np.pi - 1e-9, single_pad), 0.0, atol=1e-8)

        theta = np.linspace(0, np.pi, 181)
        P = make_pressure_profile(single_pad)(theta)
        assert np.argmax(P) == 90

    def test_single_pad_unloaded(self):
        """Нагрузка под 90° к центру сегмента: сегмент не нагружен."""
        config = BearingLoadConfig(load_angle=0.0, pad_count=1, pad_angle=180)
        assert pressure_magnitude(np.pi / 2, config) == 0.0

    def test_zero_in_gaps(self):
        """В зазорах давление точно равно нулю."""
        config = BearingLoadConfig(load_angle=0.3, pad_count=4, pad_angle=60)
        profile = make_pressure_profile(config)
        seg = config.segment_angle
        pad = config.pad_angle_rad

        for k in range(4):
            gap = np.linspace(k * seg + pad + 1e-9, (k + 1) * seg - 1e-9, 50)
            assert np.all(profile(gap) == 0.0)

    def test_boundary_belongs_to_gap(self):
        """θ = α (конец первого сегмента) — уже зазор."""
        config = BearingLoadConfig(load_angle=np.pi, pad_count=2, pad_angle=90)
        assert pressure_magnitude(np.radians(90), config) == 0.0

    def test_continuous_within_pad(self):
        """Профиль непрерывен внутри сегмента."""
        config = BearingLoadConfig(load_angle=np.pi, pad_count=3, pad_angle=80)
        pad = config.pad_angle_rad
        theta = np.linspace(0, pad, 2000, endpoint=False)
        P = make_pressure_profile(config)(theta)
        assert np.max(np.abs(np.diff(P))) < 1e-2

    def test_range(self, theta_grid):
        config = BearingLoadConfig(load_angle=2.0, pad_count=5, pad_angle=50)
        P = make_pressure_profile(config)(theta_grid)
        assert np.all(P >= 0)
        assert np.all(P <= 1)

    def test_pad_geometry(self):
        config = BearingLoadConfig(pad_count=2, pad_angle=90)
        profile = TiltingPadProfile(0.0, 2, 90)
        assert np.isclose(config.gap_angle, np.pi / 2)
        assert np.isclose(config.segment_angle, np.pi)
        assert np.allclose(profile.pad_centers(), [np.pi / 4, 5 * np.pi / 4])

    def test_periodic(self):
        config = BearingLoadConfig(load_angle=0.7, pad_count=4, pad_angle=70)
        for theta in np.linspace(0.1, 6.0, 13):
            assert np.isclose(
                pressure_magnitude(theta, config),
                pressure_magnitude(theta + 2 * np.pi, config),
                atol=1e-9,
            )


class TestFallback:
    """Невозможные раскладки сегментов."""

    @pytest.mark.parametrize("pad_count, pad_angle", [
        (4, 90),     # 360° — зазоров нет
        (3, 150),    # 450°
        (2, 0),
        (1, 360),
        (2, -30),
    ])
    def test_falls_back_to_full_circle(self, pad_count, pad_angle):
        config = BearingLoadConfig(load_angle=0.4, pad_count=pad_count, pad_angle=pad_angle)
        assert not config.has_pads
        assert isinstance(make_pressure_profile(config), FullCircleProfile)

        theta = np.linspace(0, 2 * np.pi, 50)
        expected = np.maximum(0, -np.cos(theta - 0.4))
        actual = [pressure_magnitude(t, config) for t in theta]
        assert np.allclose(actual, expected)

    def test_valid_layout_uses_pads(self):
        config = BearingLoadConfig(pad_count=4, pad_angle=60)
        assert isinstance(make_pressure_profile(config), TiltingPadProfile)

    def test_tilting_profile_rejects_impossible_layout(self):
        with pytest.raises(ValueError):
            TiltingPadProfile(0.0, 4, 100)

    def test_negative_pad_count_rejected(self):
        with pytest.raises(ValueError):
            BearingLoadConfig(pad_count=-1, pad_angle=30)

    def test_fractional_pad_count_rejected(self):
        with pytest.raises(ValueError):
            BearingLoadConfig(pad_count=2.5, pad_angle=30)

    def test_integral_pad_count_normalized(self):
        config = BearingLoadConfig(pad_count=np.float64(3.0), pad_angle=30)
        assert config.pad_count == 3
        assert isinstance(config.pad_count, int)


class TestDeterminism:

    def test_repeatable(self, theta_grid):
        config = BearingLoadConfig(load_angle=1.1, pad_count=6, pad_angle=40)
        a = make_pressure_profile(config)(theta_grid)
        b = make_pressure_profile(config)(theta_grid)
        assert np.array_equal(a, b)
