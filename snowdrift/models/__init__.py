from snowdrift.models.link_model import Flavor, LinkModel


__all__ = [
    'Flavor',
    'LinkModel',
]
