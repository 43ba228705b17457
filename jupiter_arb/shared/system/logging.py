"""
Centralized Logger with Rich Console
====================================
Static facade used by every component of the bot.

Two sinks:
    console  rich, colored, filtered by Settings.LOG_LEVEL, muted by silent mode
    file     logs/arb_<run>.log, rotating, always at DEBUG

Usage:
    from jupiter_arb.shared.system.logging import Logger

    Logger.info("[QUOTE] Forward quote received")
    Logger.success("[EXEC] Forward swap confirmed")
    Logger.debug("[RPC] Tx confirmed in 812ms")
    Logger.critical("[EXEC] Position left open")
    Logger.section("Starting arbitrage cycle")
"""

import os
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.text import Text

from config.settings import Settings

# Per-run session log file
LOG_DIR = Settings.LOG_DIR
os.makedirs(LOG_DIR, exist_ok=True)

_run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
log_file = os.path.join(LOG_DIR, f"arb_{_run_id}.log")

handler = RotatingFileHandler(log_file, maxBytes=5*1024*1024, backupCount=3, encoding='utf-8')
handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(message)s', datefmt='%Y-%m-%d %H:%M:%S'))

file_logger = logging.getLogger("JupiterArb")
file_logger.setLevel(logging.DEBUG)
file_logger.addHandler(handler)


# Console tag -> icon, e.g. "[QUOTE] ..." renders with 📈
SOURCE_ICONS = {
    "SYSTEM": "🤖",
    "WALLET": "🔑",
    "QUOTE": "📈",
    "ARB": "💰",
    "EXEC": "📝",
    "RPC": "📡",
}

_console = Console()

# Display label -> (stdlib level, rich style, file prefix)
LEVELS = {
    "DEBUG": (logging.DEBUG, "dim", ""),
    "INFO": (logging.INFO, "cyan", ""),
    "SUCCESS": (logging.INFO, "green bold", "✅ "),
    "WARNING": (logging.WARNING, "yellow", ""),
    "ERROR": (logging.ERROR, "red bold", ""),
    "CRITICAL": (logging.CRITICAL, "red bold reverse", "🛑 "),
}


class Logger:
    """Color-coded console lines plus a rotating file mirror, tagged by [SOURCE]."""

    _silent_mode = False

    @staticmethod
    def _timestamp() -> str:
        now = datetime.now()
        return f"{now.strftime('%H:%M:%S')}.{now.microsecond // 1000:03d}"

    @staticmethod
    def _parse_source(message: str) -> tuple:
        """Extract [SOURCE] tag from message if present."""
        stripped = message.strip()
        if stripped.startswith("[") and "]" in stripped:
            tag_end = stripped.index("]")
            source = stripped[1:tag_end].upper()
            if len(source) < 15:
                return source, stripped[tag_end+1:].strip()
        return "SYSTEM", message

    @staticmethod
    def _console_enabled(levelno: int) -> bool:
        if Logger._silent_mode or Settings.SILENT_MODE:
            return False
        threshold = logging.getLevelName(Settings.LOG_LEVEL.upper())
        if not isinstance(threshold, int):
            threshold = logging.INFO
        return levelno >= threshold

    @staticmethod
    def _emit(label: str, message: str) -> None:
        levelno, style, prefix = LEVELS[label]
        source, msg = Logger._parse_source(message)
        msg = f"{prefix}{msg}"

        file_logger.log(levelno, f"[{source}] {msg}")

        if not Logger._console_enabled(levelno):
            return

        icon = SOURCE_ICONS.get(source, "")
        line = Text()
        line.append(f"{Logger._timestamp()} ", style="dim")
        line.append(f"| {label[:8].ljust(8)} ", style=style)
        line.append(f"| {source[:10].ljust(10)} | ", style="dim")
        line.append(f"{icon} {msg}" if icon else msg)
        _console.print(line)

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    @staticmethod
    def debug(message: str) -> None:
        Logger._emit("DEBUG", message)

    @staticmethod
    def info(message: str) -> None:
        Logger._emit("INFO", message)

    @staticmethod
    def success(message: str) -> None:
        Logger._emit("SUCCESS", message)

    @staticmethod
    def warning(message: str) -> None:
        Logger._emit("WARNING", message)

    @staticmethod
    def error(message: str) -> None:
        Logger._emit("ERROR", message)

    @staticmethod
    def critical(message: str) -> None:
        Logger._emit("CRITICAL", message)

    @staticmethod
    def section(title: str) -> None:
        """Rule across the console; a plain marker line in the file."""
        file_logger.info(f"[SYSTEM] === {title} ===")
        if Logger._console_enabled(logging.INFO):
            _console.print()
            _console.rule(f"[bold magenta]{title}[/]", style="dim")

    @staticmethod
    def set_silent(silent: bool) -> None:
        """Enable/disable console output."""
        Logger._silent_mode = silent
