import pytest

from gvins.feature import Feature, FeatureType
from gvins.frame import KeyFrameState, create_frame
from gvins.localmap import Map
from gvins.mappoint import MapPointType, create_map_point


def _keyframe(stamp=0.0):
    frame = create_frame(stamp, None)
    frame.set_key_frame(KeyFrameState.NORMAL)
    return frame


def _observe(mappoint, frame):
    feature = Feature(frame, [0.0, 0.0], [5.0, 5.0], [5.0, 5.0], FeatureType.TRIANGULATED)
    mappoint.add_observation(feature)
    feature.add_map_point(mappoint)
    frame.add_feature(mappoint.id, feature)
    return feature


def _mappoint(frame):
    return create_map_point(frame, [0.0, 0.0, 5.0], [5.0, 5.0], 5.0, MapPointType.TRIANGULATED)


def test_window_size_setter():
    local_map = Map(3)
    local_map.window_size = 7
    assert local_map.window_size == 7


def test_insert_orders_and_tracks_latest():
    local_map = Map(5)
    frames = [_keyframe(float(k)) for k in range(3)]
    for frame in reversed(frames):
        local_map.insert_key_frame(frame)
    ids = local_map.ordered_key_frames()
    assert ids == sorted(f.keyframe_id for f in frames)
    assert local_map.oldest_key_frame() is frames[0]
    assert local_map.latest_key_frame() is frames[0]
    assert all(local_map.is_key_frame_in_map(f) for f in frames)


def test_oldest_of_empty_map_raises():
    with pytest.raises(LookupError):
        Map(2).oldest_key_frame()


def test_window_states():
    local_map = Map(2)
    local_map.insert_key_frame(_keyframe())
    assert not local_map.is_window_normal()
    local_map.insert_key_frame(_keyframe())
    assert local_map.is_window_normal()
    assert not local_map.is_window_full()
    assert not local_map.is_maximum_keyframes()
    local_map.insert_key_frame(_keyframe())
    assert local_map.is_window_full()
    assert local_map.is_maximum_keyframes()


def test_window_full_flag_stays_after_removal():
    local_map = Map(1)
    first, second = _keyframe(), _keyframe()
    local_map.insert_key_frame(first)
    local_map.insert_key_frame(second)
    local_map.remove_key_frame(first, False)
    assert local_map.is_window_full()
    assert not local_map.is_maximum_keyframes()


def test_unupdated_mappoints_become_landmarks():
    local_map = Map(5)
    frame = _keyframe()
    mp = _mappoint(frame)
    frame.add_new_unupdated_mappoint(mp)
    local_map.insert_key_frame(frame)
    assert local_map.landmarks == {mp.id: mp}


def test_remove_mappoint():
    local_map = Map(5)
    frame = _keyframe()
    mp = _mappoint(frame)
    feature = _observe(mp, frame)
    frame.add_new_unupdated_mappoint(mp)
    local_map.insert_key_frame(frame)
    local_map.remove_mappoint(mp)
    assert mp.id not in local_map.landmarks
    assert mp.is_outlier
    assert mp.observations() == []
    assert feature.mappoint() is mp


def test_remove_key_frame_with_its_mappoints():
    local_map = Map(5)
    ref = _keyframe()
    other = _keyframe()
    own = _mappoint(ref)
    foreign = _mappoint(other)
    _observe(own, ref)
    _observe(foreign, ref)
    ref.add_new_unupdated_mappoint(own)
    other.add_new_unupdated_mappoint(foreign)
    local_map.insert_key_frame(ref)
    local_map.insert_key_frame(other)

    local_map.remove_key_frame(ref, True)

    assert not local_map.is_key_frame_in_map(ref)
    assert set(local_map.landmarks) == {foreign.id}
    assert own.is_outlier
    assert not foreign.is_outlier
    assert ref.num_features() == 0


def test_remove_key_frame_keeping_mappoints():
    local_map = Map(5)
    ref = _keyframe()
    mp = _mappoint(ref)
    _observe(mp, ref)
    ref.add_new_unupdated_mappoint(mp)
    local_map.insert_key_frame(ref)

    local_map.remove_key_frame(ref, False)

    assert local_map.keyframes == {}
    assert local_map.landmarks == {mp.id: mp}
    assert ref.num_features() == 1


def test_mappoint_observed_rate():
    local_map = Map(5)
    first, second = _keyframe(), _keyframe()
    outside = _keyframe()
    local_map.insert_key_frame(first)
    local_map.insert_key_frame(second)
    mp = _mappoint(first)
    _observe(mp, first)
    _observe(mp, outside)
    assert local_map.mappoint_observed_rate(mp) == pytest.approx(0.5)


def test_mappoint_observed_rate_empty_map():
    frame = _keyframe()
    mp = _mappoint(frame)
    with pytest.raises(ZeroDivisionError):
        Map(5).mappoint_observed_rate(mp)