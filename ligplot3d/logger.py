import logging

from rdkit import RDLogger

logging.basicConfig(format='%(levelname)-8s [%(asctime)s] %(message)s', datefmt='%H:%M:%S')
logger = logging.getLogger("ligplot3d")
logger.setLevel(logging.INFO)


def set_log_level(level):
    """Sets the level of the package logger and of the RDKit logger

    ``level`` is a name (``"DEBUG"``, ``"info"``...) or a :mod:`logging` level.
    """
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    RDLogger.logger().setLevel(
        RDLogger.ERROR if logger.getEffectiveLevel() > logging.WARNING else RDLogger.INFO
    )
