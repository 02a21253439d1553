# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# # 03 — Live Apparatus Animation
#
# Drives a test from a matplotlib animation.  Each frame measures the
# wall-clock time since the previous one and fires the runner's scheduler
# with it, so the shearing rate does not depend on the frame rate.  The
# apparatus schematic and the curve are redrawn from a state listener.
#
# **Modules**: `pyshearbox.time`, `pyshearbox.visualization`

# %%
import time

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from pyshearbox.apparatus import TestConfig, TestRunner
from pyshearbox.materials import SoilParameters
from pyshearbox.postprocess import SeriesRecorder
from pyshearbox.time import ManualScheduler
from pyshearbox.visualization import draw_apparatus, plot_shear_curve

# %%
soil = SoilParameters.from_category("silt", saturation="saturated")
config = TestConfig(normal_stress=200.0, speed=3.0)
scheduler = ManualScheduler()
runner = TestRunner(soil, config, recorder=SeriesRecorder(max_samples=50), scheduler=scheduler)

fig, (ax_box, ax_curve) = plt.subplots(1, 2, figsize=(14, 4.5))


def render(state):
    draw_apparatus(state, runner.soil, runner.config, ax_box)
    ax_curve.clear()
    plot_shear_curve(runner.recorder, ax=ax_curve)


runner.subscribe(render)
render(runner.current_state())

# %% [markdown]
# ## Animate
#
# The animation stops requesting frames once the scheduler has nothing
# pending, i.e. when the test completes.

# %%
last = [time.perf_counter()]


def frame(_):
    now = time.perf_counter()
    dt, last[0] = now - last[0], now
    scheduler.fire(dt)


def frames():
    while scheduler.pending:
        yield None


runner.start()
anim = FuncAnimation(fig, frame, frames=frames, interval=1000 / 60,
                     cache_frame_data=False, repeat=False)
plt.show()
