"""Camera module for primary ray generation.

Components:
    pinhole: Camera protocol, fixed lens camera and look-at pinhole camera

Ray generation uses normalized lens coordinates:
    x in [0, 1]: left to right across the image
    y in [0, 1]: bottom to top across the image
"""

from .pinhole import Camera, LensCamera, PinholeCamera, camera_from_dict

__all__ = [
    "Camera",
    "LensCamera",
    "PinholeCamera",
    "camera_from_dict",
]
