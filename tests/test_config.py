"""Tests for configuration loading and validation."""

import pytest

from detailing.config import AppConfig, _validate_config


def _config_with_scheduling(**overrides) -> AppConfig:
    from detailing.config import BusinessConfig, SchedulingConfig

    values = {
        "default_duration_minutes": 120,
        "buffer_minutes": 30,
        "max_appointments_per_slot": 1,
        "slot_granularity_minutes": 30,
        "booking_horizon_days": 14,
    }
    values.update(overrides)
    scheduling = SchedulingConfig.__new__(SchedulingConfig)
    for name, value in values.items():
        object.__setattr__(scheduling, name, value)

    config = AppConfig.__new__(AppConfig)
    object.__setattr__(config, "business", BusinessConfig())
    object.__setattr__(config, "scheduling", scheduling)
    object.__setattr__(config, "log_level", "INFO")
    return config


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = AppConfig()
        _validate_config(config)  # should not raise

    def test_invalid_default_duration(self):
        with pytest.raises(ValueError, match="DEFAULT_DURATION_MINUTES"):
            _validate_config(_config_with_scheduling(default_duration_minutes=0))

    def test_negative_buffer(self):
        with pytest.raises(ValueError, match="BUFFER_MINUTES"):
            _validate_config(_config_with_scheduling(buffer_minutes=-1))

    def test_zero_buffer_allowed(self):
        _validate_config(_config_with_scheduling(buffer_minutes=0))

    def test_invalid_capacity(self):
        with pytest.raises(ValueError, match="MAX_APPOINTMENTS_PER_SLOT"):
            _validate_config(_config_with_scheduling(max_appointments_per_slot=0))

    def test_invalid_granularity(self):
        with pytest.raises(ValueError, match="SLOT_GRANULARITY_MINUTES"):
            _validate_config(_config_with_scheduling(slot_granularity_minutes=0))

    def test_invalid_horizon(self):
        with pytest.raises(ValueError, match="BOOKING_HORIZON_DAYS"):
            _validate_config(_config_with_scheduling(booking_horizon_days=0))

    def test_empty_currency(self):
        from detailing.config import BusinessConfig

        config = _config_with_scheduling()
        business = BusinessConfig.__new__(BusinessConfig)
        object.__setattr__(business, "name", "Test")
        object.__setattr__(business, "currency", " ")
        object.__setattr__(config, "business", business)
        with pytest.raises(ValueError, match="CURRENCY"):
            _validate_config(config)

    def test_safe_int_parsing(self):
        from detailing.config import _safe_int

        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_int_bad_value(self, monkeypatch):
        from detailing.config import _safe_int

        monkeypatch.setenv("BAD_INT_VAR_12345", "thirty")
        with pytest.raises(ValueError, match="BAD_INT_VAR_12345"):
            _safe_int("BAD_INT_VAR_12345", "30")
