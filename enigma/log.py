import logging

FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level=logging.WARNING):
    """Configure the root logger for command line use."""
    logging.basicConfig(level=level, format=FORMAT, datefmt=DATE_FORMAT, force=True)
