import threading

import pytest

from diffbot.monitors import (
    Command,
    Linearization,
    Parameters,
    Reference,
    ReferenceModel,
    RobotState,
    SharedState,
    SimulationClock,
)


def test_robot_state_defaults_to_zero():
    assert RobotState().snapshot() == {"x1": 0.0, "x2": 0.0, "x3": 0.0, "y1": 0.0, "y2": 0.0}


@pytest.mark.parametrize(
    "monitor, names",
    [
        (Command(), {"v1", "v2"}),
        (Linearization(), {"u1", "u2"}),
        (Reference(), {"xref", "yref"}),
        (ReferenceModel(), {"y_m", "dy_m"}),
    ],
)
def test_zero_defaults(monitor, names):
    snap = monitor.snapshot()
    assert set(snap) == names
    assert all(value == 0.0 for value in snap.values())


def test_parameters_default_gains():
    assert Parameters().snapshot() == {"alpha1": 3.0, "alpha2": 3.0}


def test_update_then_snapshot():
    cmd = Command()
    cmd.update(v1=0.5, v2=-0.25)
    assert cmd.snapshot() == {"v1": 0.5, "v2": -0.25}
    assert cmd.v1 == 0.5


def test_partial_update_keeps_other_fields():
    ref = Reference(xref=1.0, yref=2.0)
    ref.update(yref=-4.0)
    assert ref.snapshot() == {"xref": 1.0, "yref": -4.0}


def test_update_unknown_field():
    model = ReferenceModel()
    with pytest.raises(TypeError):
        model.update(y=1.0)
    assert model.snapshot() == {"y_m": 0.0, "dy_m": 0.0}


def test_snapshot_is_independent_copy():
    state = RobotState()
    snap = state.snapshot()
    state.update(x1=2.0)
    assert snap["x1"] == 0.0
    assert state.snapshot()["x1"] == 2.0


def test_clock_time_and_stop():
    clock = SimulationClock()
    assert clock.now() == 0.0
    assert clock.stopped() is False
    clock.set_time(1.5)
    assert clock.now() == 1.5
    clock.request_stop()
    assert clock.stopped() is True
    assert clock.snapshot() == {"time": 1.5, "stop_requested": True}


def test_shared_state_has_separate_models():
    shared = SharedState()
    shared.model_x.update(y_m=1.0)
    assert shared.model_y.snapshot()["y_m"] == 0.0
    assert shared.model_x is not shared.model_y


def test_shared_state_instances_are_independent():
    first, second = SharedState(), SharedState()
    first.clock.request_stop()
    assert second.clock.stopped() is False
    assert second.parameters.snapshot() == {"alpha1": 3.0, "alpha2": 3.0}


def test_concurrent_updates_are_consistent():
    state = RobotState()
    stop = threading.Event()
    inconsistent = []

    def writer():
        for i in range(2000):
            state.update(x1=float(i), x2=float(i))
        stop.set()

    def reader():
        while not stop.is_set():
            snap = state.snapshot()
            if snap["x1"] != snap["x2"]:
                inconsistent.append(snap)

    threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert inconsistent == []
    assert state.snapshot()["x1"] == 1999.0