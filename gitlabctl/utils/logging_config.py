import logging
import sys
import os
from datetime import datetime
from typing import Optional

class ColoredFormatter(logging.Formatter):
    """Custom formatter to add colors to console output."""
    
    cyan = "\x1b[36m"
    yellow = "\x1b[33m"
    red = "\x1b[31m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    
    format_str = " >>> %(message)s"
    debug_format_str = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"

    FORMATS = {
        logging.DEBUG: cyan + debug_format_str + reset,
        logging.INFO: yellow + format_str + reset,
        logging.WARNING: yellow + format_str + reset,
        logging.ERROR: red + format_str + reset,
        logging.CRITICAL: bold_red + format_str + reset
    }

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record):
        if self.use_color:
            log_fmt = self.FORMATS.get(record.levelno)
        else:
            log_fmt = self.debug_format_str if record.levelno == logging.DEBUG else self.format_str
        # Handle cases where level might be outside standard range
        if not log_fmt:
            log_fmt = self.format_str
        formatter = logging.Formatter(log_fmt, datefmt="%Y-%m-%d %H:%M:%S")
        return formatter.format(record)

def _stderr_supports_color() -> bool:
    return (
        hasattr(sys.stderr, "isatty")
        and sys.stderr.isatty()
        and os.environ.get("NO_COLOR") is None
    )

def setup_logging(level=logging.INFO, log_dir: Optional[str] = None):
    """Setup centralized logging configuration."""
    root_logger = logging.getLogger()
    
    # Clear existing handlers to prevent duplicate logs
    if root_logger.handlers:
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            
    root_logger.setLevel(level)
    
    # 1. Console handler on stderr, stdout is reserved for reports
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter(use_color=_stderr_supports_color()))
    root_logger.addHandler(console_handler)
    
    # 2. Optional file handler
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            os.path.join(log_dir, f"gitlabctl_{datetime.now().strftime('%Y%m%d')}.log")
        )
        file_fmt = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        file_handler.setFormatter(file_fmt)
        root_logger.addHandler(file_handler)
    
    # Keep httpx request lines out of the report unless debugging
    for logger_name in ["httpx", "httpcore"]:
        l = logging.getLogger(logger_name)
        l.setLevel(level if level <= logging.DEBUG else max(level, logging.WARNING))
        l.propagate = True
    
    root_logger.debug("Logging initialized (Console%s).", " + File" if log_dir else "")
