import logging
from pathlib import Path
from typing import Optional

_CONSOLE = "swarm-bench-console"


def setup_logger(name: str = "", log_dir: Optional[str] = None, log_file: str = "run.log",
                 console_level: str = "INFO", file_level: str = "INFO"):
    """
    Set up a logger that writes to the console and, if log_dir is given, to a file.

    The default name "" configures the root logger so that the library
    modules (optimizer.*) propagate into the same handlers. Debug records
    (per-iteration migration passes) only reach a handler that asks for them.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)  # handlers filter

    # Avoid duplicate handlers
    if not any(h.get_name() == _CONSOLE for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.set_name(_CONSOLE)
        ch.setLevel(getattr(logging, console_level.upper(), logging.INFO))
        ch.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(ch)

    if log_dir is not None:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        path = (Path(log_dir) / log_file).resolve()
        known = {getattr(h, "baseFilename", None) for h in logger.handlers}
        if str(path) not in known:
            fh = logging.FileHandler(path, encoding="utf-8")
            fh.setLevel(getattr(logging, file_level.upper(), logging.INFO))
            fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
            logger.addHandler(fh)

    return logger
