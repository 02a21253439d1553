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
# # 02 — Mohr-Coulomb Envelope from Three Tests
#
# Three clay samples are sheared at σ = 100, 200 and 300 kPa.  The
# runners share one recorder, which accumulates a failure point per
# completed test.  The envelope drawn is the configured c–φ line; the
# failure points fall on it at their peak.
#
# **Modules**: `pyshearbox.apparatus`, `pyshearbox.postprocess`

# %%
from dataclasses import replace
from pathlib import Path

import matplotlib.pyplot as plt

from pyshearbox.apparatus import TestRunner
from pyshearbox.config import load_config
from pyshearbox.postprocess import ReportAggregator, SeriesRecorder
from pyshearbox.visualization import plot_failure_envelope, plot_shear_curve

# %% [markdown]
# ## 1. Load the Base Configuration

# %%
soil, base = load_config(Path(__file__).with_name("clay.yaml"))
print(soil)

# %% [markdown]
# ## 2. Run One Test per Normal Stress

# %%
recorder = SeriesRecorder(max_samples=50)
fig, ax = plt.subplots(1, 1, figsize=(8, 4))

for sigma in (100.0, 200.0, 300.0):
    config = replace(base, normal_stress=sigma)
    runner = TestRunner(soil, config, recorder=recorder)
    runner.run_to_completion()
    plot_shear_curve(runner.recorder, ax=ax, title="Last 50 samples per test")
    runner.reset()

# %% [markdown]
# ## 3. Results Table and Envelope

# %%
report = ReportAggregator(soil, recorder.failure_points(), base)
print(f"c = {report.cohesion()} kPa, φ = {report.friction_angle()}°")
print(f"{'σ (kPa)':>8} {'τ_f (kPa)':>10} {'d_f (mm)':>9}")
for sigma, tau, d in report.results_table():
    print(f"{sigma:8.0f} {tau:10.1f} {d:9.2f}")

plot_failure_envelope(report)
plt.show()
