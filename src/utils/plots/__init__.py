from .path_layout import plot_path_layout
from .speed_profile import plot_speed_profile

__all__ = [
    "plot_path_layout",
    "plot_speed_profile",
]
