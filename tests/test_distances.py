"""Tests for quadrature, distances and the dipole anisotropy model."""

from concurrent.futures import ThreadPoolExecutor

import pytest
import numpy as np
from numpy.testing import assert_allclose
from scipy.integrate import quad

from hzcosmo.anisotropy import AnisotropyModel, angular_separation, make_anisotropy
from hzcosmo.distances import DistanceCalculator
from hzcosmo.hubble import CosmologyModel
from hzcosmo.quadrature import QuadratureEngine
from hzcosmo.utils.config import AnisotropyParameters, CosmologyParameters, NumericalConfig
from hzcosmo.utils.constants import ANISOTROPY_APEX, KM_UNITS
from hzcosmo.utils.errors import InvalidOptionError


C_KM_S = KM_UNITS.c_km_s


@pytest.fixture
def flat_model():
    params = CosmologyParameters(H0=70.0, Omega_m=0.3, Omega_L=0.7, w0=-1.0, wa=0.0)
    return CosmologyModel.analytic(params)


@pytest.fixture
def calc(flat_model):
    return DistanceCalculator(flat_model)


class TestQuadratureEngine:
    """Tests for the fixed-resolution midpoint rule."""

    def test_bin_policy(self, flat_model):
        engine = QuadratureEngine(flat_model)
        assert engine.n_bins(0.001) == 10
        assert engine.n_bins(0.5) == 500
        assert engine.n_bins(2.0) == 2000

    def test_custom_resolution(self):
        params = CosmologyParameters()
        numerics = NumericalConfig(bins_per_unit=100.0, min_bins=20)
        engine = QuadratureEngine(CosmologyModel.analytic(params, numerics=numerics))
        assert engine.n_bins(0.1) == 20
        assert engine.n_bins(1.0) == 100

    def test_midpoints(self, flat_model):
        x, step = QuadratureEngine(flat_model).midpoints(0.0, 1.0)
        assert len(x) == 1000
        assert_allclose(step, 1e-3)
        assert_allclose(x[0], 0.5e-3)
        assert_allclose(x[-1], 1.0 - 0.5e-3)

    def test_integrate_polynomial(self, flat_model):
        engine = QuadratureEngine(flat_model)
        assert_allclose(engine.integrate(lambda x: x**2, 0.0, 2.0), 8.0 / 3.0, rtol=1e-6)

    def test_hubble_integral_matches_quad(self, flat_model):
        engine = QuadratureEngine(flat_model)
        expected, _ = quad(lambda z: 1.0 / flat_model.E(z), 0.0, 1.5)
        assert_allclose(engine.hubble_integral(0.0, 1.5), expected, rtol=1e-6)

    def test_invalid_volume_option(self, calc):
        with pytest.raises(InvalidOptionError):
            calc.volume_integral(0.5, opt=2)


class TestComovingDistance:
    """Tests for curvature-corrected comoving distance."""

    def test_zero_at_z_zero(self, calc):
        assert_allclose(calc.comoving_distance(0.0, 0.0), 0.0, atol=1e-12)

    def test_flat_closure_is_identity(self, calc):
        S = calc.quadrature.hubble_integral(0.0, 1.0)
        assert calc.comoving_distance(0.0, 1.0) == pytest.approx(S * C_KM_S / 70.0, rel=1e-14)

    def test_increases_with_z(self, calc):
        d_prev = 0.0
        for z in [0.01, 0.1, 0.5, 1.0, 2.0, 3.0]:
            d = calc.comoving_distance(0.0, z)
            assert d > d_prev
            d_prev = d

    def test_reasonable_magnitude(self, calc):
        """Comoving distance at z=1 should be ~3300 Mpc for H0=70, Om=0.3."""
        assert 3200 < calc.comoving_distance(0.0, 1.0) < 3400

    def test_additive_in_flat_universe(self, calc):
        total = calc.comoving_distance(0.0, 1.0)
        parts = calc.comoving_distance(0.0, 0.4) + calc.comoving_distance(0.4, 1.0)
        assert_allclose(parts, total, rtol=1e-6)

    def test_open_universe_uses_sinh(self):
        params = CosmologyParameters(H0=70.0, Omega_m=0.3, Omega_L=0.5)
        calc = DistanceCalculator(CosmologyModel.analytic(params))
        S = calc.quadrature.hubble_integral(0.0, 1.0)
        k = np.sqrt(0.2)
        assert_allclose(calc.comoving_distance(0.0, 1.0), np.sinh(k * S) / k * C_KM_S / 70.0, rtol=1e-12)
        assert calc.comoving_distance(0.0, 1.0) > S * C_KM_S / 70.0

    def test_closed_universe_uses_sin(self):
        params = CosmologyParameters(H0=70.0, Omega_m=0.4, Omega_L=0.7)
        calc = DistanceCalculator(CosmologyModel.analytic(params))
        S = calc.quadrature.hubble_integral(0.0, 1.0)
        k = np.sqrt(0.1)
        assert_allclose(calc.comoving_distance(0.0, 1.0), np.sin(k * S) / k * C_KM_S / 70.0, rtol=1e-12)
        assert calc.comoving_distance(0.0, 1.0) < S * C_KM_S / 70.0

    @pytest.mark.parametrize("Omega_L", [0.7, 0.5, 0.8])
    def test_scale_factor_variant_agrees(self, Omega_L):
        params = CosmologyParameters(H0=70.0, Omega_m=0.3, Omega_L=Omega_L)
        calc = DistanceCalculator(CosmologyModel.analytic(params))
        for z in [0.1, 1.0, 2.0]:
            d_z = calc.comoving_distance(0.0, z)
            d_a = calc.comoving_distance_a(1.0 / (1.0 + z), 1.0)
            assert_allclose(d_a, d_z, rtol=1e-3)


class TestDistanceModulus:
    """Tests for luminosity distance and distance modulus."""

    def test_luminosity_distance_uses_helio_redshift(self, calc):
        r = calc.comoving_distance(0.0, 0.5)
        assert_allclose(calc.luminosity_distance(0.5, 0.51), 1.51 * r)
        assert_allclose(calc.luminosity_distance(0.5), 1.5 * r)

    def test_modulus_definition(self, calc):
        d_L = calc.luminosity_distance(0.3)
        assert_allclose(calc.distance_modulus(0.3), 5.0 * np.log10(d_L * 1e5), rtol=1e-12)

    def test_typical_values(self, calc):
        assert 38.0 < calc.distance_modulus(0.1) < 38.7
        assert 43.8 < calc.distance_modulus(1.0) < 44.4

    def test_increases_with_z(self, calc):
        mu = [calc.distance_modulus(z) for z in [0.01, 0.1, 0.5, 1.0, 2.0]]
        assert all(a < b for a, b in zip(mu, mu[1:]))

    def test_tabulated_model_agrees(self, tmp_path):
        params = CosmologyParameters(H0=70.0, Omega_m=0.3, Omega_L=0.7)
        tabulated = CosmologyModel.debug_selftest(params, tmp_path / "hz_out.txt")
        mu_tab = DistanceCalculator(tabulated).distance_modulus(1.0)
        mu_ana = DistanceCalculator(CosmologyModel.analytic(params)).distance_modulus(1.0)
        assert abs(mu_tab - mu_ana) < 1e-3


class TestVolume:
    """Tests for dV/dz and its integrals."""

    def test_dV_dz_definition(self, calc, flat_model):
        r = calc.comoving_distance(0.0, 0.7)
        assert_allclose(calc.dV_dz(0.7), C_KM_S * r**2 / flat_model.H(0.7), rtol=1e-12)

    def test_volume_grows_with_zmax(self, calc):
        assert calc.volume_integral(0.2) < calc.volume_integral(0.4)

    def test_mean_redshift_below_zmax(self, calc):
        zmax = 0.5
        mean_z = calc.mean_redshift(zmax)
        assert 0.0 < mean_z < zmax

    def test_low_z_volume_is_euclidean(self, calc):
        """At low z, V ~ (c/H0)^3 z^3 / 3."""
        zmax = 0.01
        expected = (C_KM_S / 70.0) ** 3 * zmax**3 / 3.0
        assert_allclose(calc.volume_integral(zmax), expected, rtol=0.03)


class TestSFRIntegral:
    """Tests for the integrated star-formation history."""

    def test_positive(self, calc):
        assert calc.sfr_integral(0.0) > 0

    def test_decreases_with_z(self, calc):
        """Less stellar mass has formed by earlier epochs."""
        values = [calc.sfr_integral(z) for z in [0.0, 0.5, 1.0, 3.0]]
        assert all(a > b for a, b in zip(values, values[1:]))


class TestAnisotropy:
    """Tests for the tilted-universe distance modulus."""

    def test_separation_of_apex_is_zero(self):
        assert_allclose(angular_separation(ANISOTROPY_APEX.l_apex, ANISOTROPY_APEX.b_apex), 0.0, atol=1e-6)

    def test_separation_of_antipode(self):
        sep = angular_separation(ANISOTROPY_APEX.l_apex + 180.0, -ANISOTROPY_APEX.b_apex)
        assert_allclose(sep, 180.0, atol=1e-6)

    def test_separation_matches_dot_product(self):
        l, b = 30.0, -20.0
        l0, b0 = np.radians(ANISOTROPY_APEX.l_apex), np.radians(ANISOTROPY_APEX.b_apex)
        cos_sep = (np.sin(np.radians(b)) * np.sin(b0)
                   + np.cos(np.radians(b)) * np.cos(b0) * np.cos(np.radians(l) - l0))
        assert_allclose(angular_separation(l, b), np.degrees(np.arccos(cos_sep)), atol=1e-8)

    def test_separation_follows_position(self):
        params = AnisotropyParameters(enabled=True, qd=0.5, GLON=ANISOTROPY_APEX.l_apex, GLAT=ANISOTROPY_APEX.b_apex)
        near = AnisotropyModel(params)
        far = AnisotropyModel(params.with_position(0.0, -ANISOTROPY_APEX.b_apex))
        assert near.separation() < 1e-6
        assert far.separation() > 90.0

    def test_q_without_dipole(self):
        model = AnisotropyModel(AnisotropyParameters(enabled=True, qm=-0.4, qd=0.0, GLON=10.0, GLAT=5.0))
        assert model.q(0.05) == pytest.approx(-0.4)

    def test_q_dipole_decays(self):
        params = AnisotropyParameters(
            enabled=True, qm=-0.5, qd=1.0, S=0.1,
            GLON=ANISOTROPY_APEX.l_apex, GLAT=ANISOTROPY_APEX.b_apex,
        )
        model = AnisotropyModel(params)
        assert_allclose(model.q(0.0), 0.5, rtol=1e-10)
        assert_allclose(model.q(0.1), -0.5 + np.exp(-1.0), rtol=1e-10)

    def test_disabled_gives_no_model(self):
        assert make_anisotropy(None) is None
        assert make_anisotropy(AnisotropyParameters(enabled=False, qd=1.0)) is None

    def test_taylor_expansion_formula(self, flat_model):
        params = AnisotropyParameters(enabled=True, qm=-0.55, qd=0.0, J0=1.0)
        calc = DistanceCalculator(flat_model, params)
        z, q, j = 0.05, -0.55, 1.0
        d_L = (C_KM_S * z / 70.0) * (1 + 0.5 * (1 - q) * z - (1 - q - 3 * q**2 + j) * z**2 / 6)
        assert_allclose(calc.distance_modulus(z), 5.0 * np.log10(d_L * 1e5), rtol=1e-12)

    def test_lcdm_deceleration_matches_isotropic(self, calc, flat_model):
        """q0 = Om/2 - OL, j0 = 1 reproduces the flat ΛCDM modulus at low z."""
        params = AnisotropyParameters(enabled=True, qm=0.15 - 0.7, qd=0.0, J0=1.0)
        tilted = DistanceCalculator(flat_model, params)
        assert abs(tilted.distance_modulus(0.05) - calc.distance_modulus(0.05)) < 0.01

    def test_dipole_direction(self, flat_model):
        """Toward the apex q is larger, so sources appear closer."""
        base = AnisotropyParameters(enabled=True, qm=-0.55, qd=0.5, S=0.1)
        toward = DistanceCalculator(flat_model, base.with_position(ANISOTROPY_APEX.l_apex, ANISOTROPY_APEX.b_apex))
        away = DistanceCalculator(flat_model, base.with_position(ANISOTROPY_APEX.l_apex + 180.0, -ANISOTROPY_APEX.b_apex))
        assert toward.distance_modulus(0.05) < away.distance_modulus(0.05)

    def test_uses_helio_redshift(self, flat_model):
        params = AnisotropyParameters(enabled=True, qm=-0.55)
        calc = DistanceCalculator(flat_model, params)
        assert calc.distance_modulus(0.05, 0.06) == calc.distance_modulus(0.2, 0.06)


class TestConcurrentReads:
    """A built model can be shared between threads."""

    def test_thread_pool_matches_serial(self, calc):
        z_values = [0.05, 0.2, 0.5, 1.0, 1.5, 2.0]
        serial = [calc.distance_modulus(z) for z in z_values]
        with ThreadPoolExecutor(max_workers=4) as pool:
            threaded = list(pool.map(calc.distance_modulus, z_values))
        assert threaded == serial
