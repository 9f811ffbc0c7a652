from .synthetic_data_creator import create_random_clustered_points, NORMAL_QUANTILE_95, NORMAL_QUANTILE_99, \
    NORMAL_QUANTILE_99_9

__all__ = ['create_random_clustered_points',
           'NORMAL_QUANTILE_95',
           'NORMAL_QUANTILE_99',
           'NORMAL_QUANTILE_99_9']
