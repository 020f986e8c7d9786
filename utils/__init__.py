"""Utility modules for image loading and visualization."""

from .image_utils import (
    load_image,
    bgr_to_pil,
    get_image_info
)
from .visualization import (
    plot_quality_size_curve,
    create_metrics_dashboard
)

__all__ = [
    'load_image',
    'bgr_to_pil',
    'get_image_info',
    'plot_quality_size_curve',
    'create_metrics_dashboard'
]
