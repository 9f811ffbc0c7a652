from ._cluster import Cluster, ClusterUpdate
from ._clustering import Clustering
from .kmeans import FilteringKMeans
from .xmeans import XMeans

__all__ = ['Cluster',
           'ClusterUpdate',
           'Clustering',
           'FilteringKMeans',
           'XMeans']
