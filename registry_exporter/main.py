"""Main entry point for the registry exporter."""
import argparse
import importlib
import logging
import signal
import sys
import threading

from registry_exporter.config import load_config
from registry_exporter.control_api import ControlAPI
from registry_exporter.prom_exporter import PrometheusExporter

REGISTRY_ACCESSORS = ("get_gauges", "get_counters", "get_histograms", "get_timers", "get_meters")


def setup_logging(log_level: str):
    """Setup logging configuration."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Reduce noise from some libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def resolve_registry(target: str):
    """
    Import the application registry named by a 'module:attribute' target.

    A callable attribute that is not itself a registry is treated as a
    factory and called without arguments.
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Registry target must look like 'module:attribute', got '{target}'")

    module = importlib.import_module(module_name)
    try:
        obj = getattr(module, attribute)
    except AttributeError:
        raise ValueError(f"Module '{module_name}' has no attribute '{attribute}'")

    if isinstance(obj, type) or (
        callable(obj) and not all(hasattr(obj, name) for name in REGISTRY_ACCESSORS)
    ):
        obj = obj()

    missing = [name for name in REGISTRY_ACCESSORS if not hasattr(obj, name)]
    if missing:
        raise ValueError(f"'{target}' is not a metrics registry, missing: {', '.join(missing)}")
    return obj


def main():
    """Main function."""
    parser = argparse.ArgumentParser(
        description="Registry Exporter - Expose an application metrics registry to Prometheus"
    )
    parser.add_argument(
        "--config",
        "-c",
        required=True,
        help="Path to configuration YAML file"
    )

    args = parser.parse_args()

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    # Setup logging
    setup_logging(config.global_.log_level)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("Registry Exporter")
    logger.info("=" * 60)
    logger.info(f"Configuration loaded from: {args.config}")
    logger.info(f"Registry target: {config.registry.target}")

    try:
        source_registry = resolve_registry(config.registry.target)
        exporter = PrometheusExporter(config.exporter, source_registry)
    except Exception as e:
        logger.error(f"Failed to initialize exporter: {e}", exc_info=True)
        sys.exit(1)

    # Setup signal handlers
    def signal_handler(signum, frame):
        logger.info(f"Received signal {signum}, shutting down...")
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    if not config.global_.control_api_enabled:
        logger.info("Control API disabled, serving scrapes only")
        threading.Event().wait()
        return

    control_api = ControlAPI(exporter)

    # Run control API (blocking)
    logger.info(f"Starting control API on port {config.global_.control_api_port}")
    try:
        control_api.run(
            host="0.0.0.0",
            port=config.global_.control_api_port
        )
    except Exception as e:
        logger.error(f"Control API error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
