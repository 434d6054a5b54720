from snowdrift.utils import initialize_logging


initialize_logging()
