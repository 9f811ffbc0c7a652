from clustfit.utils.kdtree import KDTree
from sklearn.datasets import make_blobs
import numpy as np
import pytest


def _check_subtree(node, X):
    samples = X[node.indices]
    assert node.n_points == samples.shape[0]
    assert np.allclose(node.center_of_mass, np.mean(samples, axis=0))
    assert np.array_equal(node.bounding_box.min, np.min(samples, axis=0))
    assert np.array_equal(node.bounding_box.max, np.max(samples, axis=0))
    if node.is_leaf:
        assert node.right_child is None
        return [node]
    assert node.left_child.n_points + node.right_child.n_points == node.n_points
    return _check_subtree(node.left_child, X) + _check_subtree(node.right_child, X)


def test_kdtree():
    X, _ = make_blobs(200, 3, centers=4, random_state=1)
    kd_tree = KDTree(X)
    assert kd_tree.n_points == 200
    assert kd_tree.n_dims == 3
    assert kd_tree.root.n_points == 200
    leaves = _check_subtree(kd_tree.root, X)
    # Each sample is contained in exactly one leaf
    assert np.array_equal(np.sort(np.concatenate([leaf.indices for leaf in leaves])), np.arange(200))


def test_kdtree_with_duplicates():
    X = np.array([[1, 1], [1, 1], [1, 1], [4, 2]])
    kd_tree = KDTree(X)
    leaves = _check_subtree(kd_tree.root, X)
    assert sum(leaf.n_points for leaf in leaves) == 4
    assert max(leaf.n_points for leaf in leaves) == 3
    # Single sample
    kd_tree = KDTree(np.array([[2, 3]]))
    assert kd_tree.root.is_leaf
    assert np.array_equal(kd_tree.root.center_of_mass, [2, 3])


def test_kdtree_with_invalid_input():
    with pytest.raises(ValueError):
        KDTree(np.zeros((0, 2)))
    with pytest.raises(ValueError):
        KDTree(np.array([1, 2, 3]))
