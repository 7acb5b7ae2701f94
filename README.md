# diffbot

diffbot simulates a differential-drive robot that follows a moving reference
point in real time. Several periodic tasks run in their own threads and share
state through lock-protected monitors (`diffbot.monitors`):

- a **reference generator** (every 120 ms) produces `xref(t)` and `yref(t)`,
  a circle of radius 5/π traced at 0.2π rad/s; from 10 seconds on the sign of
  `yref` is flipped;
- two **reference models** (X and Y, every 50 ms) filter the reference through
  a first-order system `dy_m = α·(ref − y_m)` with gains α1 and α2 (both 3 by
  default);
- a **controller** (every 50 ms) computes `v = dy_m + α·(y_m − y)` for each
  axis, saturated to ±1;
- a **linearization** task (every 30 ms) turns `v` into the inputs `u1`, `u2`
  for a point 0.3 ahead of the axle, saturated to ±1 and ±3;
- a **simulator** (every 30 ms) integrates the unicycle model with Euler steps
  and keeps the heading in [−π, π];
- an **interface** prints a status line once a second, a **logger** writes a
  CSV row every 50 ms, and a **timer** advances simulation time in steps and
  stops every task when the run is over.

## Installation

```
pip install .
```

## Running the simulation

```
diffbot
```

By default the command runs for 20 seconds, prints a status line each second
such as

```
[3.00s] x=(0.12, 0.45, 1.02) | y=(0.28, 0.71) | ref=(0.49, 1.51) | α=(3.00, 3.00)
```

and writes `data/saida.csv` (creating the directory if needed) with the
columns

```
t,xref,yref,x1,x2,x3,y1,y2,v1,v2,u1,u2
```

At the end it prints `[INFO] Simulation finished after ...` and
`Simulation completed successfully.`

Options:

| option | meaning | default |
| --- | --- | --- |
| `--output PATH` | CSV log file | `data/saida.csv` |
| `--duration SECONDS` | simulated time | `20` |
| `--interval SECONDS` | step of the simulation clock | `0.1` |
| `--no-log` | do not send debug messages to standard error | messages on |

Debug messages from the tasks go to standard error in the form
`[DEBUG] file:function():line: message`. The command exits with status 1 and
an `error:` message if the output file cannot be written or an option value is
invalid (negative duration, non-positive interval).

## Using the library

The control laws and kinematics are plain functions in `diffbot.dynamics`:

```python
from diffbot.dynamics import Pose, linearize, control_law, reference_signal

pose = Pose(0.0, 0.0, 0.0)
u1, u2 = linearize(pose.x3, 0.5, 0.2)
pose = pose.step(u1, u2, 0.03)
y1, y2 = pose.output()
xref, yref = reference_signal(2.5)
```

Also there: `saturate`, `wrap_angle` and `reference_model_step`.

`diffbot.tasks` holds the single steps that each task repeats
(`simulation_step`, `linearization_step`, `control_step`, `reference_step`,
`model_x_step`, `model_y_step`), the formatting of status lines and CSV rows
(`format_status`, `format_log_row`), the task loops themselves and
`run_periodic`, which calls a function on a fixed schedule until the
`SimulationClock` is stopped.

A whole run can be started from Python, with a different length, clock
interval or output file; it returns the final `SharedState`:

```python
import sys
from diffbot.app import run_simulation

shared = run_simulation("run.csv", duration=5.0, interval=0.1, out=sys.stdout)
print(shared.state.snapshot())
```

Two small numerical helpers come with the package:

- `diffbot.integral` provides `midpoint_rule(f, a, b, n)` and
  `composite_trapezoidal(f, a, b, n)`;
- `diffbot.matrix.Matrix` is a dense matrix of floats with `Matrix.zeros`,
  `Matrix.ones`, `Matrix.filled`, `Matrix.from_array`, `m[row, col]` indexing,
  `tolist()`, `shape`, and the operators `a + b`, `a - b` and `a @ b`.

## What it does not do

- It does not plot the trajectory; the CSV file is the only record of a run.
- The gains α1 and α2 cannot be changed while the command runs; the status
  line only shows them. From Python they can be set through
  `shared.parameters.update(alpha1=..., alpha2=...)` on a `SharedState` that
  your own tasks use.

## Tests

```
pip install .[test]
pytest
```