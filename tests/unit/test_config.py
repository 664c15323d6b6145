"""
COSMICCLOCK Unit Tests - Configuration

Tests pydantic section models, YAML loading and environment overrides.

Run:
    pytest tests/unit/test_config.py -v
"""

import pytest
from pydantic import ValidationError

from cosmicclock.bodies import OrbitalBody, RotatingBody
from cosmicclock.config import (
    CosmicClockConfig,
    EphemerisConfig,
    LongitudeConfig,
    TimeConfig,
    _apply_env_overrides,
    get_config_paths,
    load_config,
)
from cosmicclock.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host COSMICCLOCK_* variables out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("COSMICCLOCK_"):
            monkeypatch.delenv(key)


@pytest.fixture
def write_config(tmp_path):
    def _write(text: str):
        path = tmp_path / "cosmicclock.yaml"
        path.write_text(text, encoding="utf-8")
        return path
    return _write


# =============================================================================
# Section Models
# =============================================================================

class TestDefaults:
    """Built-in defaults."""

    def test_longitude_defaults(self):
        config = CosmicClockConfig()
        assert config.longitudes.earth == 77.1025
        assert config.longitudes.mars == 137.4
        assert config.longitudes.venus == 0.0
        assert config.longitudes.moons == {}

    def test_time_and_ephemeris_defaults(self):
        config = CosmicClockConfig()
        assert config.time.tai_minus_utc_seconds == 37.0
        assert config.ephemeris.data_source == "model"
        assert config.ephemeris.provider == "http"
        assert config.ephemeris.timeout == 5.0
        assert config.ephemeris.kernel == "de440s.bsp"
        assert config.ephemeris.orbital_bodies == list(OrbitalBody)
        assert config.logging.level == "INFO"

    def test_url_join(self):
        eph = EphemerisConfig(base_url="http://spice.local:8000/", endpoint="api/spice/state")
        assert eph.url == "http://spice.local:8000/api/spice/state"


class TestLongitudeConfig:
    """Per-body longitudes."""

    def test_moons_normalized(self):
        config = LongitudeConfig(moons={"io": 90.0, "TITAN": -45})
        assert config.moons == {"Io": 90.0, "Titan": -45.0}
        assert config.for_body(RotatingBody.IO) == 90.0
        assert config.for_body(RotatingBody.EUROPA) == 0.0

    def test_planet_longitudes(self):
        config = LongitudeConfig(venus=12.5, jupiter=-100.0)
        assert config.for_body(RotatingBody.VENUS) == 12.5
        assert config.for_body(RotatingBody.JUPITER) == -100.0

    def test_any_finite_longitude_accepted(self):
        assert LongitudeConfig(earth=725.0).earth == 725.0

    def test_unknown_moon_rejected(self):
        with pytest.raises(ValidationError):
            LongitudeConfig(moons={"Charon": 10.0})

    def test_planet_in_moons_rejected(self):
        with pytest.raises(ValidationError):
            LongitudeConfig(moons={"Jupiter": 10.0})

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError):
            LongitudeConfig(mars=float("nan"))
        with pytest.raises(ValidationError):
            LongitudeConfig(moons={"Io": float("inf")})


class TestEphemerisConfig:
    """Ephemeris section validation."""

    def test_bodies_from_comma_string(self):
        eph = EphemerisConfig(bodies="earth, Mars,JUPITER")
        assert eph.bodies == ["Earth", "Mars", "Jupiter"]
        assert eph.orbital_bodies == [OrbitalBody.EARTH, OrbitalBody.MARS, OrbitalBody.JUPITER]

    def test_bodies_deduplicated(self):
        assert EphemerisConfig(bodies=["Mars", "mars", "Earth"]).bodies == ["Mars", "Earth"]

    def test_unknown_body_rejected(self):
        with pytest.raises(ValidationError):
            EphemerisConfig(bodies=["Earth", "Pluto"])

    def test_empty_bodies_rejected(self):
        with pytest.raises(ValidationError):
            EphemerisConfig(bodies=[])

    def test_timeout_bounds(self):
        with pytest.raises(ValidationError):
            EphemerisConfig(timeout=0.0)
        with pytest.raises(ValidationError):
            EphemerisConfig(timeout=600.0)

    def test_data_source_literal(self):
        with pytest.raises(ValidationError):
            EphemerisConfig(data_source="horizons")

    def test_logging_section(self):
        config = CosmicClockConfig(logging={"level": "debug", "packages": {"ephemeris": "WARNING"}})
        assert config.logging.level == "DEBUG"
        assert config.logging.correlation is True
        assert config.logging.packages == {"ephemeris": "WARNING"}
        with pytest.raises(ValidationError):
            CosmicClockConfig(logging={"packages": {"ephemeris": "LOUD"}})

    def test_leap_seconds_bounds(self):
        assert TimeConfig(tai_minus_utc_seconds=38).tai_minus_utc_seconds == 38.0
        with pytest.raises(ValidationError):
            TimeConfig(tai_minus_utc_seconds=-1)


# =============================================================================
# Loading
# =============================================================================

class TestLoadConfig:
    """YAML loading and error reporting."""

    def test_load_explicit_file(self, write_config):
        path = write_config(
            "longitudes:\n"
            "  earth: -122.4\n"
            "  moons:\n"
            "    Europa: 45\n"
            "time:\n"
            "  tai_minus_utc_seconds: 38\n"
            "ephemeris:\n"
            "  data_source: external\n"
            "  bodies: [Earth, Mars]\n"
            "display:\n"
            "  compact: true\n"
        )
        config = load_config(path)
        assert config.longitudes.earth == -122.4
        assert config.longitudes.for_body(RotatingBody.EUROPA) == 45.0
        assert config.time.tai_minus_utc_seconds == 38.0
        assert config.ephemeris.data_source == "external"
        assert config.ephemeris.bodies == ["Earth", "Mars"]

    def test_empty_file_gives_defaults(self, write_config):
        config = load_config(write_config(""))
        assert config == CosmicClockConfig()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, write_config):
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(write_config("longitudes: [unclosed\n"))

    def test_non_mapping_root(self, write_config):
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(write_config("- earth\n- mars\n"))

    def test_validation_failure(self, write_config):
        with pytest.raises(ConfigurationError, match="validation failed"):
            load_config(write_config("longitudes:\n  mars: .nan\n"))

    def test_config_paths_order(self):
        paths = get_config_paths()
        assert paths[0].name == "cosmicclock.yaml"
        assert str(paths[-1]) == "/etc/cosmicclock/config.yaml"


class TestEnvOverrides:
    """COSMICCLOCK_<SECTION>_<KEY> overrides."""

    def test_overrides_applied(self, monkeypatch):
        monkeypatch.setenv("COSMICCLOCK_EPHEMERIS_DATA_SOURCE", "external")
        monkeypatch.setenv("COSMICCLOCK_TIME_TAI_MINUS_UTC_SECONDS", "38")
        monkeypatch.setenv("COSMICCLOCK_LONGITUDES_MARS", "-5.5")

        result = _apply_env_overrides({"longitudes": {"earth": 10.0}})

        assert result["ephemeris"]["data_source"] == "external"
        assert result["time"]["tai_minus_utc_seconds"] == 38.0
        assert result["longitudes"] == {"earth": 10.0, "mars": -5.5}

    def test_env_beats_file(self, monkeypatch, write_config):
        path = write_config("ephemeris:\n  base_url: http://file:8000\n  timeout: 2\n")
        monkeypatch.setenv("COSMICCLOCK_EPHEMERIS_BASE_URL", "http://env:9000")
        monkeypatch.setenv("COSMICCLOCK_EPHEMERIS_BODIES", "Venus,Earth")

        config = load_config(path)

        assert config.ephemeris.base_url == "http://env:9000"
        assert config.ephemeris.timeout == 2.0
        assert config.ephemeris.bodies == ["Venus", "Earth"]

    def test_short_keys_ignored(self, monkeypatch):
        monkeypatch.setenv("COSMICCLOCK_DEBUG", "true")
        assert _apply_env_overrides({}) == {}


class TestExampleConfig:
    """The shipped example file stays loadable."""

    def test_example_loads(self):
        from pathlib import Path

        example = Path(__file__).resolve().parents[2] / "cosmicclock.example.yaml"
        config = load_config(example)
        assert config.longitudes.moons == {"Io": 0.0, "Titan": 0.0}
        assert config.ephemeris.orbital_bodies == list(OrbitalBody)
        assert config.logging.file is None
