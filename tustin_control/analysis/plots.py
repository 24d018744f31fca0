"""
Plotting utilities for filter and controller responses.
"""

from typing import Optional, Sequence, Tuple
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from tustin_control.analysis.response import ResponseResult
from tustin_control.analysis.transfer import FrequencyResponse


class FilterPlotter:
    """Plots for sampled responses and continuous-vs-discrete Bode comparisons."""

    def __init__(self):
        self._colors = {
            'input': '#2ecc71',
            'output': '#3498db',
            'continuous': '#7f8c8d',
            'discrete': '#e74c3c',
        }

    def plot_response(
        self,
        results: Sequence[ResponseResult],
        title: str = "Filter Response",
        figsize: Tuple[int, int] = (12, 6),
        show_input: bool = True
    ) -> Figure:
        """
        Plot one or more sampled responses on shared axes.

        Args:
            results: Responses to overlay
            title: Plot title
            figsize: Figure size
            show_input: Draw the input of the first response

        Returns:
            Matplotlib Figure
        """
        fig, ax = plt.subplots(figsize=figsize)

        if show_input and results:
            first = results[0]
            ax.step(first.timestamps, first.inputs, '--', where='post',
                    color=self._colors['input'], linewidth=2, label='Input')

        for result in results:
            ax.plot(result.timestamps, result.outputs, '-', linewidth=1.5,
                    label=result.label or 'Output')

        ax.set_xlabel('Time (s)', fontsize=12)
        ax.set_ylabel('Value', fontsize=12)
        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.legend(loc='best')
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        return fig

    def plot_bode(
        self,
        response: FrequencyResponse,
        title: Optional[str] = None,
        figsize: Tuple[int, int] = (10, 8)
    ) -> Figure:
        """
        Bode plot of the continuous form against its Tustin equivalent.

        Returns:
            Matplotlib Figure with magnitude and phase axes
        """
        fig, (ax_mag, ax_phase) = plt.subplots(2, 1, figsize=figsize, sharex=True)

        ax_mag.semilogx(response.omega, response.continuous_db,
                        color=self._colors['continuous'], linewidth=2, label='Continuous')
        ax_mag.semilogx(response.omega, response.discrete_db, '--',
                        color=self._colors['discrete'], linewidth=1.5, label='Tustin')
        ax_mag.set_ylabel('Magnitude (dB)')
        ax_mag.legend(loc='best')
        ax_mag.grid(True, which='both', alpha=0.3)

        ax_phase.semilogx(response.omega, response.continuous_phase_deg,
                          color=self._colors['continuous'], linewidth=2)
        ax_phase.semilogx(response.omega, response.discrete_phase_deg, '--',
                          color=self._colors['discrete'], linewidth=1.5)
        ax_phase.set_xlabel('Frequency (rad/s)')
        ax_phase.set_ylabel('Phase (deg)')
        ax_phase.grid(True, which='both', alpha=0.3)

        if title:
            fig.suptitle(title, fontsize=14, fontweight='bold')
        fig.tight_layout()
        return fig

    @staticmethod
    def save(fig: Figure, path: str, dpi: int = 150) -> None:
        fig.savefig(path, dpi=dpi, bbox_inches='tight')

    @staticmethod
    def show() -> None:
        plt.show()
