"""Tests for the au-pay-calc CLI."""

import json

import pytest
from click.testing import CliRunner

from aupay.cli.__main__ import cli
from aupay.sdk import ConfigError, PAY_CALCULATOR_TOOL_ID, UsageStore, load_settings


PAYSLIP_ARGS = [
    "payslip",
    "--salary", "90000",
    "--pay-date", "2025-09-12",
    "--period-end", "2025-09-07",
    "--start-date", "2020-01-01",
    "--private-health",
]


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


@pytest.fixture
def runner():
    return CliRunner()


class TestPayslipCommand:

    def test_json_output(self, runner):
        result = runner.invoke(cli, PAYSLIP_ARGS + ["--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["tax_year"] == "2025-26"
        assert data["gross_pay"] == pytest.approx(90000 / 26.09)
        assert data["tax"] == pytest.approx(17788 / 26.09)
        assert data["medicare_levy_surcharge"] == 0
        assert data["ytd_start_date"] == "2025-07-01"
        assert set(data["ytd"]) == {
            "gross", "tax", "medicare_levy", "medicare_levy_surcharge",
            "total_medicare_charges", "net", "superannuation",
        }

    def test_table_output(self, runner):
        result = runner.invoke(cli, PAYSLIP_ARGS)

        assert result.exit_code == 0, result.output
        assert "NET INCOME" in result.output
        assert "$3,449.60" in result.output
        assert "Employment Summary" in result.output

    def test_options(self, runner):
        result = runner.invoke(cli, PAYSLIP_ARGS + [
            "--frequency", "monthly", "--fte", "0.5", "--hours", "40",
            "--tax-year", "2024-25", "--json",
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["gross_pay"] == pytest.approx(3750.0)
        assert data["weekly_hours"] == pytest.approx(20.0)
        assert data["super_rate"] == 0.115

    def test_records_usage(self, runner):
        runner.invoke(cli, PAYSLIP_ARGS + ["--json"])
        runner.invoke(cli, PAYSLIP_ARGS + ["--json"])
        assert UsageStore().get_usage(PAY_CALCULATOR_TOOL_ID) == 2

    def test_no_track(self, runner):
        runner.invoke(cli, PAYSLIP_ARGS + ["--json", "--no-track"])
        assert UsageStore().get_usage(PAY_CALCULATOR_TOOL_ID) == 0

    def test_missing_fields(self, runner):
        result = runner.invoke(cli, ["payslip", "--salary", "90000"])

        assert result.exit_code == 2
        assert "--pay-date" in result.output
        assert "--start-date" in result.output
        assert UsageStore().get_usage(PAY_CALCULATOR_TOOL_ID) == 0

    def test_unknown_tax_year(self, runner):
        result = runner.invoke(cli, PAYSLIP_ARGS + ["--tax-year", "2019-20"])

        assert result.exit_code == 2
        assert "2025-26" in result.output

    def test_invalid_fte(self, runner):
        result = runner.invoke(cli, PAYSLIP_ARGS + ["--fte", "1.5"])

        assert result.exit_code == 1
        assert "Could not calculate payslip" in result.output

    def test_whitespace_salary_reported_missing(self, runner):
        args = [a if a != "90000" else "   " for a in PAYSLIP_ARGS]
        result = runner.invoke(cli, args)

        assert result.exit_code == 2
        assert "--salary" in result.output

    def test_private_health_setting_string_false(self, runner, isolated_config):
        (isolated_config["config_dir"] / "settings.json").write_text(
            json.dumps({"private_health_insurance": "false"})
        )
        args = [a for a in PAYSLIP_ARGS if a != "--private-health"]
        args[args.index("90000")] = "120000"

        result = runner.invoke(cli, args + ["--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["medicare_levy_surcharge"] > 0

    def test_settings_defaults_applied(self, runner):
        runner.invoke(cli, ["settings", "set", "default_tax_year", "2024-25"])
        runner.invoke(cli, ["settings", "set", "default_pay_frequency", "weekly"])

        result = runner.invoke(cli, PAYSLIP_ARGS + ["--json"])
        data = json.loads(result.output)
        assert data["tax_year"] == "2024-25"
        assert data["periods_per_year"] == 52.18


class TestTaxYearsCommand:

    def test_lists_years(self, runner):
        result = runner.invoke(cli, ["tax-years"])

        assert result.exit_code == 0, result.output
        assert "2024-25" in result.output
        assert "2025-26" in result.output

    def test_json(self, runner):
        result = runner.invoke(cli, ["tax-years", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["2025-26"]["super_guarantee_rate"] == 0.12
        assert len(data["2024-25"]["tax_brackets"]) == 5

    def test_json_is_strict(self, runner):
        result = runner.invoke(cli, ["tax-years", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output, parse_constant=_reject_constant)
        assert data["2025-26"]["tax_brackets"][-1]["max"] is None
        assert data["2025-26"]["medicare_levy_surcharge"][-1]["max"] is None


class TestUsageCommand:

    def test_no_usage(self, runner):
        result = runner.invoke(cli, ["usage"])
        assert result.exit_code == 0
        assert "No usage recorded yet." in result.output

    def test_counts(self, runner):
        store = UsageStore()
        store.increment_usage(PAY_CALCULATOR_TOOL_ID)
        store.increment_usage(PAY_CALCULATOR_TOOL_ID)

        result = runner.invoke(cli, ["usage", "--json"])
        assert json.loads(result.output) == {PAY_CALCULATOR_TOOL_ID: 2}


class TestSettingsCommands:

    def test_show_empty(self, runner):
        result = runner.invoke(cli, ["settings", "show"])
        assert result.exit_code == 0
        assert "No settings configured" in result.output

    def test_set_and_unset(self, runner):
        result = runner.invoke(cli, ["settings", "set", "full_time_hours", "37.5"])
        assert result.exit_code == 0, result.output
        assert load_settings() == {"full_time_hours": 37.5}

        result = runner.invoke(cli, ["settings", "unset", "full_time_hours"])
        assert result.exit_code == 0
        assert "Cleared full_time_hours" in result.output
        assert load_settings() == {}

    def test_set_bool(self, runner):
        runner.invoke(cli, ["settings", "set", "private_health_insurance", "yes"])
        assert load_settings()["private_health_insurance"] is True

    def test_rejects_unknown_key(self, runner):
        result = runner.invoke(cli, ["settings", "set", "colour", "blue"])
        assert result.exit_code == 2

    def test_rejects_bad_tax_year(self, runner):
        result = runner.invoke(cli, ["settings", "set", "default_tax_year", "1999-00"])
        assert result.exit_code == 2
        assert load_settings() == {}

    def test_rejects_bad_hours(self, runner):
        result = runner.invoke(cli, ["settings", "set", "full_time_hours", "-1"])
        assert result.exit_code == 2

    def test_corrupt_settings_reported(self, runner, isolated_config):
        (isolated_config["config_dir"] / "settings.json").write_text("{oops")
        result = runner.invoke(cli, ["settings", "show"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestCorruptSettings:
    """A broken settings.json is reported, not raised as a traceback."""

    @pytest.fixture(autouse=True)
    def corrupt_settings(self, isolated_config):
        (isolated_config["config_dir"] / "settings.json").write_text("{oops")

    @pytest.mark.parametrize("args", [
        ["tax-years"],
        ["tax-years", "--json"],
        ["usage"],
        PAYSLIP_ARGS + ["-y", "2025-26", "-f", "fortnightly", "--hours", "38", "--fte", "1.0"],
    ])
    def test_reported_as_error(self, runner, args):
        result = runner.invoke(cli, args)

        assert result.exit_code == 1
        assert not isinstance(result.exception, ConfigError)
        assert "Invalid JSON" in result.output
