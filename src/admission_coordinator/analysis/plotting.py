# src/admission_coordinator/analysis/plotting.py

"""
Provides optional plotting utilities for visualizing KPI data.

This module depends on 'matplotlib' and 'seaborn', which are not part
of the core dependencies. They are installed via the '[analysis]'
extra:

    pip install admission-coordinator[analysis]

All functions take a 'Measure' object as their data source.
"""

import logging
from typing import List, Optional, Tuple

# Optional Dependency Handling
try:
    import matplotlib.axes
    import matplotlib.pyplot as plt
    import seaborn as sns
    from matplotlib.ticker import PercentFormatter
except ImportError:
    log = logging.getLogger(__name__)
    log.error("Analysis dependencies (matplotlib, seaborn) not found.")
    log.error("Please install them with: "
              "pip install admission-coordinator[analysis]")
    raise

from ..measure import Measure

log = logging.getLogger(__name__)

sns.set_theme(style="whitegrid")


def _extend_to_end(data: List[Tuple[float, int]], end_time: float
                   ) -> List[Tuple[float, int]]:
    """Copies a step log and closes it at `end_time`."""
    points = list(data)
    if points and points[-1][0] < end_time:
        points.append((end_time, points[-1][1]))
    return points


def plot_wait_time_histogram(
    measure: Measure,
    ax: Optional[matplotlib.axes.Axes] = None,
    bins: int = 50,
    kde: bool = True
) -> matplotlib.axes.Axes:
    """
    Generates a histogram (and optional KDE) of the recorded wait times,
    i.e. the time between an arrival request and its grant.

    Args:
        measure (Measure): The Measure object containing data.
        ax (Optional[matplotlib.axes.Axes]): The Axes to draw on.
            If None, a new Figure/Axes is created.
        bins (int): The number of bins for the histogram.
        kde (bool): Whether to overlay a Kernel Density Estimate plot.

    Returns:
        matplotlib.axes.Axes: The Axes object with the plot.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))

    if not measure.wait_times:
        log.warning("No wait times recorded. Plotting an empty histogram.")
        ax.set_title("Wait Time Distribution (No Data)")
        return ax

    mean_wait = sum(measure.wait_times) / len(measure.wait_times)

    # A KDE needs some spread in the data
    use_kde = kde and len(set(measure.wait_times)) > 1

    sns.histplot(
        measure.wait_times,
        bins=bins,
        kde=use_kde,
        ax=ax,
        label="Wait Time Distribution"
    )

    ax.axvline(
        mean_wait,
        color='red',
        linestyle='--',
        label=f"Mean Wait: {mean_wait:.2f}"
    )

    ax.set_title("Distribution of Wait Times")
    ax.set_xlabel("Wait Time (s)")
    ax.set_ylabel("Frequency / Density")
    ax.legend()

    log.debug(f"Plotted wait time histogram (n={len(measure.wait_times)})")

    return ax


def plot_queue_length_over_time(
    measure: Measure,
    ax: Optional[matplotlib.axes.Axes] = None
) -> matplotlib.axes.Axes:
    """
    Generates a step plot of the wait queue length over time.

    Args:
        measure (Measure): The Measure object containing data.
        ax (Optional[matplotlib.axes.Axes]): The Axes to draw on.
            If None, a new Figure/Axes is created.

    Returns:
        matplotlib.axes.Axes: The Axes object with the plot.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(12, 6))

    if len(measure.queue_length_log) < 2:
        log.warning("Not enough queue length data to plot. Plot will be empty.")
        ax.set_title("Queue Length Over Time (No Data)")
        return ax

    end_time = measure.last_update_time
    times, lengths = zip(*_extend_to_end(measure.queue_length_log, end_time))

    ax.step(times, lengths, where='post')

    kpis = measure.get_final_kpis(end_time)
    if "queue_length" in kpis:
        avg_len = kpis["queue_length"]["time_weighted_average"]
        ax.axhline(
            avg_len,
            color='red',
            linestyle='--',
            label=f"Time-Avg Length: {avg_len:.2f}"
        )
        ax.legend()

    ax.set_title("Queue Length Over Time")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Requesters in Queue")
    ax.set_ylim(bottom=0)
    ax.set_xlim(left=measure.start_time)

    log.debug("Plotted queue length over time.")

    return ax


def plot_slot_occupancy_over_time(
    measure: Measure,
    ax: Optional[matplotlib.axes.Axes] = None
) -> matplotlib.axes.Axes:
    """
    Generates a step plot showing when the slot was held.

    Args:
        measure (Measure): The Measure object containing data.
        ax (Optional[matplotlib.axes.Axes]): The Axes to draw on.
            If None, a new Figure/Axes is created.

    Returns:
        matplotlib.axes.Axes: The Axes object with the plot.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(12, 6))

    if len(measure.slot_busy_log) < 2:
        log.warning("Not enough occupancy data to plot. Plot will be empty.")
        ax.set_title("Slot Occupancy Over Time (No Data)")
        return ax

    end_time = measure.last_update_time
    times, busy = zip(*_extend_to_end(measure.slot_busy_log, end_time))

    ax.step(times, busy, where='post')

    kpis = measure.get_final_kpis(end_time)
    if "slot_utilization" in kpis:
        utilization = kpis["slot_utilization"]["time_weighted_average"]
        ax.axhline(
            utilization,
            color='red',
            linestyle='--',
            label=f"Time-Avg Utilization: {utilization:.1%}"
        )
        ax.legend()

    ax.set_title("Slot Occupancy Over Time")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Slot Utilization (%)")
    ax.set_ylim(bottom=0, top=1.1)
    ax.set_xlim(left=measure.start_time)
    ax.yaxis.set_major_formatter(PercentFormatter(1.0))

    log.debug("Plotted slot occupancy over time.")

    return ax
