"""
Unit tests for ExecutionMode resolution.
"""

import pytest

from mcp_cloud.services.kubernetes import ExecutionMode


@pytest.mark.unit
class TestExecutionMode:

    @pytest.mark.parametrize("value, expected", [
        ("production", ExecutionMode.PRODUCTION),
        ("PRODUCTION", ExecutionMode.PRODUCTION),
        (" development ", ExecutionMode.DEVELOPMENT),
        ("Development", ExecutionMode.DEVELOPMENT),
    ])
    def test_from_string(self, value, expected):
        assert ExecutionMode.from_string(value) is expected

    @pytest.mark.parametrize("value", ["staging", "test", "prod", "", None])
    def test_non_production_values_fall_back_to_development(self, value):
        assert ExecutionMode.from_string(value) is ExecutionMode.DEVELOPMENT

    def test_unknown_value_is_logged(self, caplog):
        ExecutionMode.from_string("staging")

        assert "Unknown environment 'staging'" in caplog.text

    def test_known_values_are_not_logged(self, caplog):
        ExecutionMode.from_string("development")
        ExecutionMode.from_string("production")

        assert "Unknown environment" not in caplog.text

    def test_flags(self):
        assert ExecutionMode.PRODUCTION.is_production
        assert not ExecutionMode.PRODUCTION.is_development
        assert ExecutionMode.DEVELOPMENT.is_development
        assert str(ExecutionMode.DEVELOPMENT) == "development"
