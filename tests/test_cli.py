"""
Tests for the CLI interface.
"""
import os
import sys
import tempfile
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from log_pricing.cli.main import app, format_currency, EXIT_CODE_PASS, EXIT_CODE_FAIL
from log_pricing.core.calculator import CostBreakdown

runner = CliRunner()


def _int_digit_limit() -> int:
    get_limit = getattr(sys, "get_int_max_str_digits", None)
    return get_limit() if get_limit else 0


requires_digit_limit = pytest.mark.skipif(
    _int_digit_limit() == 0, reason="interpreter has no int string conversion limit"
)


@pytest.fixture(autouse=True)
def no_env_config(monkeypatch):
    """Keep a developer's LOG_PRICING_CONFIG out of the tests."""
    monkeypatch.delenv("LOG_PRICING_CONFIG", raising=False)


@pytest.fixture
def pricing_file():
    """Write a small pricing config and yield its path."""
    temp_dir = tempfile.mkdtemp()
    path = os.path.join(temp_dir, "pricing.yaml")
    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump({
            "user_price": 5,
            "tiers": [
                {"lower": 0, "upper": 100, "rate": 0},
                {"lower": 100, "upper": None, "rate": 1.0},
            ],
        }, f)
    yield path
    import shutil
    shutil.rmtree(temp_dir, ignore_errors=True)


class TestFormatting:
    """Test currency formatting."""

    def test_two_decimals_with_separators(self):
        assert format_currency(1234567.891) == "$1,234,567.89"

    def test_zero(self):
        assert format_currency(0) == "$0.00"


class TestCalculateCommand:
    """Test the calculate command."""

    def test_basic_calculation(self):
        """Test log, user and total lines are printed."""
        result = runner.invoke(app, ["calculate", "--logs", "2000000", "--users", "5"])

        assert result.exit_code == EXIT_CODE_PASS
        # 1,990,000 * 0.0003224 = 641.576
        assert "Log Cost: $641.58" in result.output
        assert "User Cost: $100.00" in result.output
        assert "Total Monthly Cost: $741.58" in result.output

    def test_empty_inputs_are_zero(self):
        result = runner.invoke(app, ["calculate"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Total Monthly Cost: $0.00" in result.output

    def test_invalid_logs_rejected(self):
        """Test invalid input blocks the calculation."""
        result = runner.invoke(app, ["calculate", "--logs", "1.5", "--users", "2"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Please enter a valid non-negative integer" in result.output
        assert "Total Monthly Cost" not in result.output

    def test_both_fields_reported(self):
        result = runner.invoke(app, ["calculate", "--logs", "abc", "--users", "-2"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "logs:" in result.output
        assert "users:" in result.output

    def test_calculator_not_called_on_invalid_input(self):
        with patch('log_pricing.cli.main.calculate_costs') as mock_calculate:
            result = runner.invoke(app, ["calculate", "--users", "1,000"])

        assert result.exit_code == EXIT_CODE_FAIL
        mock_calculate.assert_not_called()

    def test_uses_calculator_result(self):
        with patch('log_pricing.cli.main.calculate_costs') as mock_calculate:
            mock_calculate.return_value = CostBreakdown(
                log_cost=1000.0, user_cost=20.0, total_cost=1020.0
            )
            result = runner.invoke(app, ["calculate", "--logs", "1", "--users", "1"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Total Monthly Cost: $1,020.00" in result.output

    def test_breakdown_table(self):
        result = runner.invoke(app, ["calculate", "--logs", "2500000", "--breakdown"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Log Cost by Tier" in result.output
        assert "500,000" in result.output

    def test_custom_config(self, pricing_file):
        result = runner.invoke(
            app, ["calculate", "--logs", "150", "--users", "2", "--config", pricing_file]
        )

        assert result.exit_code == EXIT_CODE_PASS
        assert "Log Cost: $50.00" in result.output
        assert "User Cost: $10.00" in result.output

    def test_config_from_environment(self, pricing_file, monkeypatch):
        monkeypatch.setenv("LOG_PRICING_CONFIG", pricing_file)
        result = runner.invoke(app, ["calculate", "--logs", "150"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Log Cost: $50.00" in result.output

    def test_count_beyond_float_range(self):
        """Test a huge but valid count shows an infinite cost instead of crashing."""
        result = runner.invoke(app, ["calculate", "--logs", "1" + "0" * 400, "--users", "1"])

        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert result.exit_code == EXIT_CODE_PASS
        assert "Log Cost: $inf" in result.output
        assert "User Cost: $20.00" in result.output
        assert "Total Monthly Cost: $inf" in result.output

    @requires_digit_limit
    def test_too_many_digits_rejected(self):
        """Test over-long digit strings get the standard validation message."""
        logs = "9" * (_int_digit_limit() + 1)
        result = runner.invoke(app, ["calculate", "--logs", logs])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Please enter a valid non-negative integer" in result.output
        assert "Exceeds the limit" not in result.output

    def test_missing_config_fails(self):
        result = runner.invoke(app, ["calculate", "--logs", "1", "--config", "missing.yaml"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Error:" in result.output


class TestInteractiveCommand:
    """Test the interactive prompt flow."""

    def test_prompts_and_calculates(self):
        result = runner.invoke(app, ["interactive"], input="10001\n3\n")

        assert result.exit_code == EXIT_CODE_PASS
        assert "Log Cost: $0.00" in result.output
        assert "User Cost: $60.00" in result.output
        assert "Total Monthly Cost: $60.00" in result.output

    def test_reprompts_on_invalid_input(self):
        result = runner.invoke(app, ["interactive"], input="-5\n20000\n\n")

        assert result.exit_code == EXIT_CODE_PASS
        assert "Please enter a valid non-negative integer" in result.output
        # 10,000 * 0.0003224 = 3.224
        assert "Log Cost: $3.22" in result.output
        assert "User Cost: $0.00" in result.output

    @requires_digit_limit
    def test_reprompts_on_too_many_digits(self):
        """Test an over-long digit string is re-asked, not a crash."""
        logs = "9" * (_int_digit_limit() + 1)
        result = runner.invoke(app, ["interactive"], input=f"{logs}\n10001\n\n")

        assert result.exit_code == EXIT_CODE_PASS
        assert not isinstance(result.exception, ValueError)
        assert "Please enter a valid non-negative integer" in result.output
        assert "User Cost: $0.00" in result.output


class TestTiersCommand:
    """Test the tiers listing."""

    def test_lists_default_tiers(self):
        result = runner.invoke(app, ["tiers"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "100,000,000" in result.output
        assert "0.0003224" in result.output
        assert "Price per user: $20.00" in result.output

    def test_lists_custom_tiers(self, pricing_file):
        result = runner.invoke(app, ["tiers", "--config", pricing_file])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Price per user: $5.00" in result.output


class TestMain:
    """Test the bare command."""

    def test_no_command_prints_hint(self):
        result = runner.invoke(app, [])

        assert result.exit_code == EXIT_CODE_PASS
        assert "--help" in result.output
