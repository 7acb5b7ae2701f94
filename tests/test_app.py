import io
import logging

import pytest

from diffbot.app import configure_logging, main, run_simulation
from diffbot.tasks import LOG_HEADER


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging(False)
    yield
    configure_logging(False)


def test_configure_logging_toggles_debug():
    log = configure_logging(True)
    assert log.isEnabledFor(logging.DEBUG)
    assert len([h for h in log.handlers if h.get_name() == "diffbot-stderr"]) == 1
    configure_logging(True)
    assert len([h for h in log.handlers if h.get_name() == "diffbot-stderr"]) == 1
    log = configure_logging(False)
    assert not log.isEnabledFor(logging.DEBUG)
    assert not [h for h in log.handlers if h.get_name() == "diffbot-stderr"]


def test_run_simulation_writes_log_and_stops(tmp_path):
    out = io.StringIO()
    path = tmp_path / "sub" / "out.csv"
    shared = run_simulation(path, duration=0.2, interval=0.1, out=out)
    assert shared.clock.stopped()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == LOG_HEADER
    assert len(lines) > 1
    text = out.getvalue()
    assert "Simulation completed successfully." in text
    assert "[INFO]" in text
    assert text.splitlines()[0].startswith("[0.00s]")


def test_run_simulation_rejects_bad_arguments(tmp_path):
    with pytest.raises(ValueError):
        run_simulation(tmp_path / "a.csv", duration=-1.0, interval=0.1, out=io.StringIO())
    with pytest.raises(ValueError):
        run_simulation(tmp_path / "a.csv", duration=1.0, interval=0.0, out=io.StringIO())


def test_main_runs(tmp_path, capsys):
    path = tmp_path / "run.csv"
    code = main(["--output", str(path), "--duration", "0.1", "--no-log"])
    assert code == 0
    assert path.read_text(encoding="utf-8").startswith(LOG_HEADER)
    assert "Simulation completed successfully." in capsys.readouterr().out


def test_main_bad_interval(tmp_path, capsys):
    code = main(["--output", str(tmp_path / "x.csv"), "--interval", "0", "--no-log"])
    assert code == 1
    assert "error" in capsys.readouterr().err


def test_main_rejects_non_numeric_duration():
    with pytest.raises(SystemExit):
        main(["--duration", "abc"])