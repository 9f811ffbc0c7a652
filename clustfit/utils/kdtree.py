import numpy as np
from scipy.spatial import cKDTree
from clustfit.utils.geometry import BoundingBox


class KDTreeNode():
    """
    A read-only node of a KDTree.
    Each node covers a subset of the indexed samples. Internal nodes have exactly two children, leaf nodes have none.

    Parameters
    ----------
    indices : np.ndarray
        the ids of the samples covered by this node
    bounding_box : BoundingBox
        the bounding box of the covered samples
    center_of_mass : np.ndarray
        the mean of the covered samples
    left_child : KDTreeNode
        the left child. None if this node is a leaf (default: None)
    right_child : KDTreeNode
        the right child. None if this node is a leaf (default: None)
    """

    def __init__(self, indices: np.ndarray, bounding_box: BoundingBox, center_of_mass: np.ndarray,
                 left_child: 'KDTreeNode' = None, right_child: 'KDTreeNode' = None):
        assert (left_child is None) == (right_child is None), "A node must either have two children or none"
        assert indices.shape[0] > 0, "A node must cover at least one sample"
        self.indices = indices
        self.bounding_box = bounding_box
        self.center_of_mass = center_of_mass
        self.left_child = left_child
        self.right_child = right_child

    @property
    def is_leaf(self) -> bool:
        return self.left_child is None

    @property
    def n_points(self) -> int:
        return self.indices.shape[0]

    def __repr__(self) -> str:
        return "KDTreeNode(n_points={0}, is_leaf={1}, {2})".format(self.n_points, self.is_leaf, self.bounding_box)


def _build_node(ckdtree_node, X: np.ndarray) -> KDTreeNode:
    """
    Recursively convert a node of a scipy cKDTree into a KDTreeNode.
    The bounding boxes and centers of mass are combined bottom-up, so each sample is only touched at its leaf.

    Parameters
    ----------
    ckdtree_node : scipy.spatial.cKDTreeNode
        the node of the scipy tree
    X : np.ndarray
        the indexed data set

    Returns
    -------
    node : KDTreeNode
        The converted node including its subtree
    """
    indices = np.asarray(ckdtree_node.indices)
    if ckdtree_node.split_dim == -1:
        samples = X[indices]
        return KDTreeNode(indices, BoundingBox.from_samples(samples), np.mean(samples, axis=0))
    left_child = _build_node(ckdtree_node.lesser, X)
    right_child = _build_node(ckdtree_node.greater, X)
    bounding_box = left_child.bounding_box.union(right_child.bounding_box)
    center_of_mass = (left_child.center_of_mass * left_child.n_points + right_child.center_of_mass *
                      right_child.n_points) / (left_child.n_points + right_child.n_points)
    return KDTreeNode(indices, bounding_box, center_of_mass, left_child, right_child)


class KDTree():
    """
    A kd-tree over a fixed data set used to accelerate k-means.
    The partitioning itself is done by scipy's cKDTree using a leaf size of 1, i.e. every leaf covers a single sample
    (or multiple identical samples). On top of that, each node stores the bounding box of its samples, their center
    of mass and their number.
    The tree must not be changed after construction and can be shared by multiple clustering runs on the same data.

    Parameters
    ----------
    X : np.ndarray
        the data set to index

    Attributes
    ----------
    data : np.ndarray
        the indexed data set
    root : KDTreeNode
        the root node covering all samples
    """

    def __init__(self, X: np.ndarray):
        X = np.asarray(X, dtype=np.float64)
        if X.ndim != 2 or X.shape[0] == 0:
            raise ValueError("A KDTree can only be built on a non-empty 2d array. Your input has shape {0}".format(
                X.shape))
        self.data = X
        self.root = _build_node(cKDTree(X, leafsize=1).tree, X)

    @property
    def n_points(self) -> int:
        return self.data.shape[0]

    @property
    def n_dims(self) -> int:
        return self.data.shape[1]
