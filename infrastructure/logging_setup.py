import logging

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "info") -> None:
    """
    Configura el logger raíz. Si ya tiene handlers (p. ej. los de pytest)
    solo ajusta el nivel.
    """
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level.upper())
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, datefmt=DATE_FORMAT)
    # pymongo es muy verboso en DEBUG (heartbeats, selección de servidor).
    logging.getLogger("pymongo").setLevel(logging.WARNING)
