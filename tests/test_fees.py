import pytest

from weekly_costs.fees import FeeConfigError, FeeSchedule, load_fee_schedule


def test_defaults():
    fees = load_fee_schedule(env={})
    assert fees == FeeSchedule()
    assert (fees.add_fee, fees.trade_fee) == (3, 10)
    assert fees.boundary_weekday_index == 1


def test_yaml_then_env(tmp_path):
    path = tmp_path / "fees.yaml"
    path.write_text(
        "add_fee: 5\nloss_fee: 20\nboundary_weekday: Wednesday\nnotes: pay by Friday\n",
        encoding="utf-8",
    )
    fees = load_fee_schedule(str(path), env={"LOSS_FEE": "25", "WEEKS": "17"})
    assert fees.add_fee == 5
    assert fees.trade_fee == 10
    assert fees.loss_fee == 25
    assert fees.weeks == 17
    assert fees.boundary_weekday == "wednesday"


def test_fees_file_from_env(tmp_path):
    path = tmp_path / "league.yaml"
    path.write_text("trade_fee: 15\n", encoding="utf-8")
    assert load_fee_schedule(env={"FEES_FILE": str(path)}).trade_fee == 15


def test_blank_env_values_ignored():
    assert load_fee_schedule(env={"ADD_FEE": ""}).add_fee == 3


@pytest.mark.parametrize(
    "env",
    [
        {"ADD_FEE": "three"},
        {"TRADE_FEE": "-1"},
        {"WEEKS": "0"},
        {"BOUNDARY_WEEKDAY": "someday"},
        {"TIMEZONE": "Mars/Olympus_Mons"},
    ],
)
def test_bad_values_rejected(env):
    with pytest.raises(FeeConfigError):
        load_fee_schedule(env=env)


def test_bad_yaml_rejected(tmp_path):
    path = tmp_path / "fees.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(FeeConfigError):
        load_fee_schedule(str(path), env={})
    with pytest.raises(FeeConfigError):
        load_fee_schedule(str(tmp_path / "missing.yaml"), env={})
