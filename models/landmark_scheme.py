# models/landmark_scheme.py
"""
68-point facial landmark scheme (iBUG 300-W / dlib ordering, 0-indexed)

  0-16  jaw contour (subject's right ear -> chin -> left ear)
  17-21 right eyebrow, 22-26 left eyebrow
  27-30 nose bridge, 31-35 nose bottom
  36-41 right eye, 42-47 left eye
  48-59 outer lip, 60-67 inner lip

MediaPipe Face Mesh returns a dense 468/478-point mesh; MESH_TO_68 picks the
mesh vertex closest to each 68-point landmark so the rest of the pipeline
can address points by their 68-point index.
"""

from typing import Dict, List

# Skin sample points
CHEEK_LANDMARK = 1       # upper jaw contour, right cheek
CHIN_LANDMARK = 8        # chin tip
FOREHEAD_LANDMARK = 20   # right brow, just below the forehead

REGION_LANDMARKS: Dict[str, int] = {
    "forehead": FOREHEAD_LANDMARK,
    "cheek": CHEEK_LANDMARK,
    "chin": CHIN_LANDMARK,
}

_JAW = [127, 234, 93, 132, 58, 172, 136, 150, 152, 379, 365, 397, 288, 361, 323, 454, 356]
_RIGHT_BROW = [70, 63, 105, 66, 107]
_LEFT_BROW = [336, 296, 334, 293, 300]
_NOSE_BRIDGE = [168, 6, 197, 195]
_NOSE_BOTTOM = [98, 97, 2, 326, 327]
_RIGHT_EYE = [33, 160, 158, 133, 153, 144]
_LEFT_EYE = [362, 385, 387, 263, 373, 380]
_OUTER_LIP = [61, 39, 37, 0, 267, 269, 291, 405, 314, 17, 84, 181]
_INNER_LIP = [78, 82, 13, 312, 308, 317, 14, 87]

MESH_TO_68: List[int] = (
    _JAW
    + _RIGHT_BROW
    + _LEFT_BROW
    + _NOSE_BRIDGE
    + _NOSE_BOTTOM
    + _RIGHT_EYE
    + _LEFT_EYE
    + _OUTER_LIP
    + _INNER_LIP
)

NUM_LANDMARKS = 68

assert len(MESH_TO_68) == NUM_LANDMARKS, (
    f"Landmark mapping must produce exactly 68 points, got {len(MESH_TO_68)}"
)
