from .geometry import BoundingBox, euclidean_distance
from .kdtree import KDTree, KDTreeNode

__all__ = ['BoundingBox',
           'euclidean_distance',
           'KDTree',
           'KDTreeNode']
