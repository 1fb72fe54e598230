import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Liveness probes hit these often enough to drown out real traffic
QUIET_PATHS = ("/", "/healthz")


class HealthCheckFilter(logging.Filter):
    """Drops uvicorn access log records for the liveness endpoints."""

    def __init__(self, paths=QUIET_PATHS):
        super().__init__()
        self.paths = set(paths)

    def filter(self, record: logging.LogRecord) -> bool:
        # uvicorn.access args: (client_addr, method, full_path, http_version, status_code)
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3:
            path = str(args[2]).split("?", 1)[0]
            return path not in self.paths
        return True


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())
