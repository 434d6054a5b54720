from snowdrift.dao.memory.link_memory_dao import LinkMemoryDAO, ReadWriteLock


__all__ = [
    'LinkMemoryDAO',
    'ReadWriteLock',
]
