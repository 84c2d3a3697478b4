"""
Loguru setup shared by every deskmate process.

Each long-running command (the deadline monitor, mostly) gets its own session
directory under LOGS_PATH, a DEBUG file sink, an INFO console sink and a header
recording how the session was started. Context modules wrap this in
contexts/{context}/logger.py and never configure loguru themselves.
"""

import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

from deskmate import __version__

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Warnings stand out in the monitor's console; alerts themselves are INFO
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

HEADER_RULE = "=" * 80


def session_log_dir(logs_root: Path, context_name: str, started: datetime = None) -> Path:
    """Directory for one session, e.g. outs/logs/monitor_20251113_184500."""
    started = started or datetime.now()
    return logs_root / f"{context_name}_{started.strftime('%Y%m%d_%H%M%S')}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    provenance: dict = None,
    rotation: str = None,
) -> Path:
    """
    Point loguru at `log_dir/{context_name}.log` and the console.

    Any sinks configured earlier are removed first, so calling this twice in
    one process leaves only the latest session's sinks.

    Args:
        context_name: Context identifier ("monitor", "skills", ...)
        log_dir: Session directory, created if missing
        provenance: Session settings written into the header after the
                    process details (data file, check interval, ...)
        rotation: loguru rotation for the file sink, e.g. "10 MB"

    Returns:
        Path to the log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", rotation=rotation)
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance(context_name, provenance)

    return log_file


def build_provenance(context_name: str, settings: dict = None) -> dict:
    """Header entries for a session: process details first, then `settings` in order."""
    entries = {
        "Session": context_name,
        "deskmate": __version__,
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Python": sys.version.split()[0],
    }
    for key, value in (settings or {}).items():
        entries[key] = "" if value is None else str(value)
    return entries


def log_provenance(context_name: str, settings: dict = None) -> None:
    logger.info(HEADER_RULE)
    for key, value in build_provenance(context_name, settings).items():
        logger.info(f"{key}: {value}")
    logger.info(HEADER_RULE)
