import logging

ROOT = "storelens"


def get_logger(name: str, level: int = logging.INFO):
    """
    Logger under the ``storelens`` namespace with one stream handler.

    The handler is attached once per name; records do not propagate,
    so a CLI ``basicConfig`` does not print them twice.
    """
    if not name.startswith(ROOT):
        name = f"{ROOT}.{name}"

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    logger.propagate = False

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)

    return logger
