"""
Tests for the draft network command line script.
"""
import argparse
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import run_draft_network  # noqa: E402
from draftnet.exceptions import AcquisitionError, EmptyGraphError  # noqa: E402


def _args(**overrides):
    defaults = dict(
        seasons=None,
        draft_years=None,
        separate_classes=False,
        match_on=None,
        edge_mode=None,
        extra_attributes=False,
        cache_dir=None,
        visuals_dir=None,
        seed=None,
        conf_source=None,
        env=None,
    )
    defaults.update(overrides)
    return argparse.Namespace(**defaults)


@pytest.fixture
def base_params():
    return {
        "seasons": {"start": 2018, "end": 2024},
        "draft_years": [2018],
        "season_type": "Regular Season",
        "match_on": "player_id",
        "edge_mode": "weighted",
        "extra_attributes": False,
        "cache_dir": None,
        "visuals_dir": "visuals",
        "layout_seed": 42,
    }


@patch("run_draft_network.load_parameters")
def test_build_params_applies_overrides(mock_load, base_params, tmp_path):
    mock_load.return_value = base_params

    params = run_draft_network.build_params(_args(
        seasons=[2019, 2021],
        draft_years=[2018, 2019],
        match_on="player_name",
        extra_attributes=True,
        cache_dir=tmp_path / "cache",
        seed=7,
        env="local",
    ))

    mock_load.assert_called_once_with(conf_source=None, env="local")
    assert params["seasons"] == {"start": 2019, "end": 2021}
    assert params["draft_years"] == [2018, 2019]
    assert params["match_on"] == "player_name"
    assert params["extra_attributes"] is True
    assert params["cache_dir"] == str(tmp_path / "cache")
    assert params["layout_seed"] == 7
    # Untouched options keep their configured values
    assert params["edge_mode"] == "weighted"
    assert params["visuals_dir"] == "visuals"


@patch("run_draft_network.load_parameters")
def test_build_params_without_overrides(mock_load, base_params):
    mock_load.return_value = dict(base_params)

    assert run_draft_network.build_params(_args()) == base_params


@patch("run_draft_network.run_pipeline")
@patch("run_draft_network.fetch_game_logs")
@patch("run_draft_network.load_parameters")
def test_separate_classes_skip_empty_class(mock_load, mock_fetch, mock_run, base_params, scenario_logs, caplog):
    """An empty class is logged and the next class still runs on the same logs."""
    mock_load.return_value = base_params
    mock_fetch.return_value = scenario_logs
    mock_run.side_effect = [
        EmptyGraphError("No team-season has two or more draft-class players"),
        {"graph": None, "figure": Path("visuals/2019_draft_network.png")},
    ]

    exit_code = run_draft_network.run(_args(draft_years=[2018, 2019], separate_classes=True))

    assert exit_code == 0
    mock_fetch.assert_called_once_with(list(range(2018, 2025)), season_type="Regular Season", cache_dir=None)
    assert [c.args[0]["draft_years"] for c in mock_run.call_args_list] == [[2018], [2019]]
    assert all(c.kwargs["game_logs"] is scenario_logs for c in mock_run.call_args_list)
    assert any(
        r.levelname == "WARNING" and "Draft class 2018" in r.getMessage() for r in caplog.records
    )


@patch("run_draft_network.run_pipeline")
@patch("run_draft_network.fetch_game_logs")
@patch("run_draft_network.load_parameters")
def test_separate_classes_single_configured_year(mock_load, mock_fetch, mock_run, base_params, scenario_logs):
    base_params["draft_years"] = 2018
    mock_load.return_value = base_params
    mock_fetch.return_value = scenario_logs
    mock_run.return_value = {"graph": None, "figure": Path("visuals/2018_draft_network.png")}

    exit_code = run_draft_network.run(_args(separate_classes=True))

    assert exit_code == 0
    mock_run.assert_called_once()
    assert mock_run.call_args.args[0]["draft_years"] == [2018]


@patch("run_draft_network.run_pipeline")
@patch("run_draft_network.fetch_game_logs")
@patch("run_draft_network.load_parameters")
def test_separate_classes_acquisition_failure(mock_load, mock_fetch, mock_run, base_params):
    mock_load.return_value = base_params
    mock_fetch.side_effect = AcquisitionError("Failed to fetch game logs 2017-18")

    assert run_draft_network.run(_args(separate_classes=True)) == 1
    mock_run.assert_not_called()


@patch("run_draft_network.run_pipeline")
@patch("run_draft_network.load_parameters")
def test_single_run_reports_failure(mock_load, mock_run, base_params):
    mock_load.return_value = base_params
    mock_run.side_effect = EmptyGraphError("no edges")

    assert run_draft_network.run(_args()) == 1
