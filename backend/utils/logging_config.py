import logging


def setup_logging(level: str = "INFO"):
    """Configure the root logger once on startup."""
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logging.root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s - %(message)s",
    ))
    logging.root.addHandler(handler)
