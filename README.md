# gvins

Building blocks for INS-centric GNSS-visual-inertial navigation, in plain
Python on top of NumPy: WGS-84 geodesy, rotations, GPS time, a distorted
pinhole camera, a sliding-window map of key frames and landmarks, and the
geometric checks and decisions used while tracking image features.

## Modules

- `gvins.types` – the `GNSS`, `PVA`, `IMU` and `Pose` dataclasses. A `Pose`
  holds a rotation matrix `R` (identity by default) and a translation `t`.
- `gvins.angle` – `rad2deg` / `deg2rad` for scalars, lists and arrays, and the
  constants `D2R` / `R2D`.
- `gvins.rotation` – a frozen `Quaternion` (`w, x, y, z`, with `vec`,
  `conjugate`, `normalized`, `norm`, `to_array` and Hamilton product `*`),
  and conversions `matrix2quaternion`, `quaternion2matrix`, `matrix2euler`,
  `quaternion2euler`, `rotvec2quaternion`, `quaternion2vector`,
  `euler2matrix`, `euler2quaternion`. Euler angles are roll, pitch, heading
  in ZYX order, with heading returned in `[0, 2π)`. Also `skew_symmetric`,
  `quaternion_left` and `quaternion_right`.
- `gvins.earth` – the WGS-84 model: `gravity`, `meridian_prime_vertical_radius`,
  `rn`, `blh2ecef` / `ecef2blh`, the NED-to-ECEF rotation `cne` and its
  quaternion `qne`, `blh_from_qne`, `dr` / `dri`, `local2global` /
  `global2local` (for points and for `Pose` objects), and the rotation rates
  `iewe`, `iewn`, `iewn_local`, `enwn`, `enwn_local`.
- `gvins.gpstime` – `gps2unix(week, sow)` and `unix2gps(unixs)`, which returns
  `(week, sow)`; GPS is taken to be 18 seconds ahead of UTC.
- `gvins.timecost` – `TimeCost`, a stopwatch with `restart`, `finish`,
  `cost_in_second`, `cost_in_millisecond`, `format_seconds` and
  `format_milliseconds`. The clock can be passed in.
- `gvins.camera` – `Camera` with intrinsics `fx, fy, cx, cy, skew` and
  distortion `k1, k2, p1, p2, k3`; `create_camera` builds one from
  `[fx, fy, cx, cy(, skew)]`, `[k1, k2, p1, p2(, k3)]` and `[width, height]`.
  It offers `pixel2cam`, `pixel2unitcam`, `cam2pixel`, `pixel2world`,
  `world2pixel`, `distort_points`, `distort_point`, `distort_camera_point`,
  `undistort_points` (iterative), `undistort_image` (bilinear, black border),
  `reprojection_error` and `focal_length`; `world2cam` and `cam2world` are
  module functions.
- `gvins.feature` – `Feature` and `FeatureType`. A feature holds its frame
  and map point through weak references.
- `gvins.frame` – `Frame`, `KeyFrameState` and `create_frame`, which hands out
  increasing frame ids. `set_key_frame` assigns the next key-frame id once.
- `gvins.mappoint` – `MapPoint`, `MapPointType` and `create_map_point`. Depths
  outside `(1, 200)` are replaced by the default of 10; observations and the
  reference frame are held weakly.
- `gvins.localmap` – `Map`, the sliding window of key frames and landmarks:
  `insert_key_frame`, `ordered_key_frames`, `oldest_key_frame`,
  `latest_key_frame`, `remove_mappoint`, `remove_key_frame`,
  `mappoint_observed_rate` and the window checks.
- `gvins.trackgeom` – `pose2tcw`, linear `triangulate_point`, `pts_distance`,
  `is_good_depth`, `is_on_border`, `key_point_parallax`, `is_good_to_track`,
  `relative_translation` and `relative_rotation`.
- `gvins.tracking` – `TrackState`, `BlockLayout` / `block_layout` for dividing
  an image into detection blocks, `reduce_vector`, `calculate_histogram`,
  `histogram_change_rate`, `check_key_frame_state`, `combined_parallax`,
  `parallax_from_reference_key_points` and
  `parallax_from_reference_map_points`.

Because features and map points keep only weak references to frames and to
each other, the caller must hold strong references (for example in a `Map`
or in its own lists) to everything it wants to keep alive.

## What it does not do

The package gives the pieces of a visual tracker, not a running one. It has
no optical-flow tracking, no corner detection, no contrast equalisation of
images, no fundamental-matrix outlier rejection, no drawing of tracking
results, no configuration-file reading, no logging setup and no command-line
program.

## Installing

```
pip install .
```

## Example

```python
import numpy as np

from gvins import angle, earth, gpstime
from gvins.camera import create_camera
from gvins.rotation import euler2matrix, matrix2euler
from gvins.types import Pose

origin = np.array([angle.deg2rad(30.5), angle.deg2rad(114.3), 20.0])
point = earth.local2global(origin, np.array([100.0, 50.0, -3.0]))
print(earth.global2local(origin, point))  # about [100, 50, -3]
print(earth.gravity(origin))

week, sow = gpstime.unix2gps(1_700_000_000.0)
print(week, sow, gpstime.gps2unix(week, sow))

dcm = euler2matrix(np.array([0.1, -0.2, 1.0]))
print(matrix2euler(dcm))  # [0.1, -0.2, 1.0]

camera = create_camera([460.0, 460.0, 320.0, 240.0], [0.0, 0.0, 0.0, 0.0], [640, 480])
pixel = camera.world2pixel(np.array([0.5, -0.2, 4.0]), Pose())
print(pixel, camera.pixel2cam(pixel))
```

## Running the tests

```
pip install .[test]
pytest
```