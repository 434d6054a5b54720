from snowdrift.dao.base.link_base_dao import IDAllocator, LinkBaseDAO


__all__ = [
    'IDAllocator',
    'LinkBaseDAO',
]
