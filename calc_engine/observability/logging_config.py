"""Centralized logging configuration."""
import logging


def configure_logging(level: str = "INFO"):
    """Configure root logging and keep the graph runtime's own logs quiet."""
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)8s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True
    )

    # LangGraph is the only third-party library that logs at runtime
    logging.getLogger("langgraph").setLevel(logging.WARNING)

    # Evaluation outcomes stay visible whatever the root level
    logging.getLogger("calc_engine.observability").setLevel(min(log_level, logging.INFO))
