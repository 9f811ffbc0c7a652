from clustfit.utils.geometry import BoundingBox, euclidean_distance
import numpy as np


def test_euclidean_distance():
    assert euclidean_distance(np.array([0, 0]), np.array([3, 4])) == 5
    assert euclidean_distance(np.array([1., 2., 3.]), np.array([1., 2., 3.])) == 0
    assert type(euclidean_distance(np.array([1]), np.array([2]))) is float


def test_bounding_box_from_samples():
    X = np.array([[1, 5], [3, -1], [2, 2]])
    box = BoundingBox.from_samples(X)
    assert not box.is_empty()
    assert box.n_dims == 2
    assert np.array_equal(box.min, [1, -1])
    assert np.array_equal(box.max, [3, 5])
    assert np.array_equal(box.extent(), [2, 6])
    assert all(box.contains(x) for x in X)
    assert not box.contains(np.array([0, 0]))


def test_bounding_box_add_and_union():
    box = BoundingBox()
    assert box.is_empty()
    assert box.n_dims == 0
    assert not box.contains(np.array([0, 0]))
    box.add(np.array([1, 1]))
    assert np.array_equal(box.min, box.max)
    box.add(np.array([-1, 3]))
    assert np.array_equal(box.min, [-1, 1])
    assert np.array_equal(box.max, [1, 3])
    other = BoundingBox(np.array([0, -2]), np.array([0.5, 0]))
    union = box.union(other)
    assert np.array_equal(union.min, [-1, -2])
    assert np.array_equal(union.max, [1, 3])
    # Original boxes are unchanged
    assert np.array_equal(box.min, [-1, 1])
    assert np.array_equal(BoundingBox().union(other).max, other.max)
    assert np.array_equal(other.union(BoundingBox()).min, other.min)


def test_bounding_box_clip():
    box = BoundingBox(np.array([0, 0]), np.array([2, 1]))
    assert np.array_equal(box.clip(np.array([1, 0.5])), [1, 0.5])
    assert np.array_equal(box.clip(np.array([-3, 0.5])), [0, 0.5])
    assert np.array_equal(box.clip(np.array([5, 7])), [2, 1])
    sample = np.array([5., -7.])
    box.clip(sample)
    assert np.array_equal(sample, [5, -7])
