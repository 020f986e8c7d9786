"""
Plotly charts for compression results.
"""

from typing import List, Tuple, Optional
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from compression.metrics import QualityMetrics


def plot_quality_size_curve(curve: List[Tuple[int, float]],
                            target_kb: Optional[float] = None,
                            chosen_quality: Optional[int] = None,
                            title: str = "JPEG Quality vs. File Size") -> go.Figure:
    """
    Create interactive quality vs size chart.

    Args:
        curve: List of (quality, size_kb) tuples
        target_kb: Optional size budget drawn as a horizontal line
        chosen_quality: Optional quality to highlight
        title: Chart title

    Returns:
        Plotly figure
    """
    qualities = [q for q, _ in curve]
    sizes = [s for _, s in curve]

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=qualities,
            y=sizes,
            name="Encoded size",
            mode="lines+markers",
            marker=dict(size=8, color="#3498db"),
            line=dict(width=2, color="#3498db"),
            hovertemplate="Quality: %{x}<br>Size: %{y:.1f} KB<extra></extra>"
        )
    )

    if target_kb is not None:
        fig.add_hline(
            y=target_kb,
            line_dash="dash",
            line_color="#e74c3c",
            annotation_text=f"Target {target_kb:.0f} KB",
            annotation_position="top left"
        )

    if chosen_quality is not None and chosen_quality in qualities:
        idx = qualities.index(chosen_quality)
        fig.add_trace(
            go.Scatter(
                x=[chosen_quality],
                y=[sizes[idx]],
                name="Selected",
                mode="markers",
                marker=dict(size=16, color="#e74c3c", symbol="star"),
                hovertemplate=f"Selected<br>Quality: {chosen_quality}<br>Size: {sizes[idx]:.1f} KB<extra></extra>"
            )
        )

    fig.update_layout(
        title=dict(text=title, font=dict(size=20, color="#2c3e50")),
        xaxis_title="JPEG Quality",
        yaxis_title="File Size (KB)",
        hovermode="x unified",
        template="plotly_white",
        margin=dict(l=60, r=60, t=80, b=60),
    )
    fig.update_xaxes(gridcolor="#ecf0f1", range=[0, 101])
    fig.update_yaxes(gridcolor="#ecf0f1")

    return fig


def create_metrics_dashboard(metrics: QualityMetrics) -> go.Figure:
    """
    Create gauge dashboard for PSNR and SSIM.

    Args:
        metrics: Metrics of one compressed output

    Returns:
        Plotly figure
    """
    fig = make_subplots(
        rows=1, cols=2,
        specs=[[{"type": "indicator"}, {"type": "indicator"}]],
        subplot_titles=("PSNR (dB)", "SSIM Index")
    )

    # Identical images have infinite PSNR; pin to the gauge maximum
    psnr_display = min(metrics.psnr, 50) if metrics.psnr != float('inf') else 50

    fig.add_trace(
        go.Indicator(
            mode="gauge+number",
            value=psnr_display,
            number={"suffix": " dB", "font": {"size": 24}},
            gauge={
                "axis": {"range": [0, 50]},
                "bar": {"color": "#2ecc71"},
                "steps": [
                    {"range": [0, 25], "color": "#e74c3c"},
                    {"range": [25, 35], "color": "#f1c40f"},
                    {"range": [35, 50], "color": "#2ecc71"},
                ],
            }
        ),
        row=1, col=1
    )

    fig.add_trace(
        go.Indicator(
            mode="gauge+number",
            value=metrics.ssim,
            number={"font": {"size": 24}},
            gauge={
                "axis": {"range": [0, 1]},
                "bar": {"color": "#3498db"},
                "steps": [
                    {"range": [0, 0.8], "color": "#e74c3c"},
                    {"range": [0.8, 0.9], "color": "#f1c40f"},
                    {"range": [0.9, 1], "color": "#2ecc71"},
                ],
            }
        ),
        row=1, col=2
    )

    fig.update_layout(
        height=300,
        margin=dict(l=30, r=30, t=50, b=30),
        template="plotly_white"
    )

    return fig
