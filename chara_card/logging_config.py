import logging
from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.WARNING) -> None:
    """Send root logging through a stderr RichHandler.

    Safe to call repeatedly: the root handlers are replaced each time.
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    logging.basicConfig(
        level=level,
        format="%(name)s | %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, rich_tracebacks=True)],
    )


__all__ = ["setup_logging"]
