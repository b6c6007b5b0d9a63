import gc

import numpy as np

from gvins.feature import Feature, FeatureType
from gvins.frame import Frame


class _Landmark:
    pass


def _frame():
    return Frame(7, 1.5, np.zeros((4, 4), dtype=np.uint8))


def test_construction_fields():
    frame = _frame()
    feat = Feature(frame, [0.5, -0.25], [10.0, 20.0], [11.0, 21.0], FeatureType.MATCHED)
    assert feat.frame() is frame
    np.testing.assert_allclose(feat.keypoint, [10.0, 20.0])
    np.testing.assert_allclose(feat.distorted_keypoint, [11.0, 21.0])
    np.testing.assert_allclose(feat.velocity_in_pixel, [0.5, -0.25, 0.0])
    assert feat.is_outlier is False
    assert feat.feature_type is FeatureType.MATCHED


def test_feature_type_values():
    assert FeatureType(-1) is FeatureType.NONE
    assert FeatureType(2) is FeatureType.DEPTH_ASSOCIATED


def test_frame_reference_is_weak():
    frame = _frame()
    feat = Feature(frame, [0, 0], [1, 1], [1, 1], FeatureType.TRIANGULATED)
    del frame
    gc.collect()
    assert feat.frame() is None


def test_map_point_link_is_weak():
    feat = Feature(_frame(), [0, 0], [1, 1], [1, 1], FeatureType.MATCHED)
    assert feat.mappoint() is None
    landmark = _Landmark()
    feat.add_map_point(landmark)
    assert feat.mappoint() is landmark
    del landmark
    gc.collect()
    assert feat.mappoint() is None


def test_set_velocity_in_pixel():
    feat = Feature(_frame(), [1.0, 2.0], [0, 0], [0, 0], FeatureType.MATCHED)
    feat.set_velocity_in_pixel((3.0, -4.0))
    np.testing.assert_allclose(feat.velocity_in_pixel, [3.0, -4.0, 0.0])


def test_outlier_flag():
    feat = Feature(_frame(), [0, 0], [0, 0], [0, 0], FeatureType.MATCHED)
    feat.is_outlier = True
    assert feat.is_outlier is True