import logging
import json
import os
from contextvars import ContextVar


class Counter:
    """Minimal Prometheus-style counter."""

    def __init__(self, name: str, documentation: str):
        self.name = name
        self.documentation = documentation
        self.value = 0.0

    def inc(self, amount: float = 1.0) -> None:
        self.value += amount

    def render(self) -> str:
        return (
            f"# HELP {self.name} {self.documentation}\n"
            f"# TYPE {self.name} counter\n"
            f"{self.name} {self.value}\n"
        )


# Correlation id of the request or CLI run currently being served
correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

_RESERVED_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "correlation_id",
    "message",
}


class JSONFormatter(logging.Formatter):
    """Simple JSON log formatter including correlation id."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", ""),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                data[key] = value
        return json.dumps(data, default=str)


class CorrelationIdFilter(logging.Filter):
    """Inject correlation id from context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        record.correlation_id = correlation_id_ctx.get("")
        return True


LOG_LEVEL = os.getenv("LISTTREE_LOG_LEVEL", "INFO").upper()

handler = logging.StreamHandler()
handler.setFormatter(JSONFormatter())
handler.addFilter(CorrelationIdFilter())
logging.basicConfig(level=LOG_LEVEL, handlers=[handler])

logger = logging.getLogger("listtree")

# Counters
LISTS_INSERTED_COUNTER = Counter(
    "lists_inserted_total", "Number of lists installed in a tree"
)
ELEMENTS_INSERTED_COUNTER = Counter(
    "elements_inserted_total", "Number of integers held by installed lists"
)
TRAVERSALS_COUNTER = Counter(
    "traversals_total", "Number of tree traversals started"
)
INVALID_INPUT_COUNTER = Counter(
    "invalid_input_total", "Number of rejected input lines or requests"
)

COUNTERS = [
    LISTS_INSERTED_COUNTER,
    ELEMENTS_INSERTED_COUNTER,
    TRAVERSALS_COUNTER,
    INVALID_INPUT_COUNTER,
]

THRESHOLDS = {
    "lists_inserted_total": int(os.getenv("LISTTREE_LISTS_ALERT_THRESHOLD", "0")),
    "invalid_input_total": int(os.getenv("LISTTREE_INVALID_INPUT_ALERT_THRESHOLD", "0")),
}


def _check_threshold(name: str, value: float) -> None:
    threshold = THRESHOLDS.get(name) or 0
    if threshold and value >= threshold:
        logger.warning(f"{name} threshold {threshold} reached")


def inc_list_inserted(element_count: int) -> None:
    LISTS_INSERTED_COUNTER.inc()
    ELEMENTS_INSERTED_COUNTER.inc(element_count)
    _check_threshold("lists_inserted_total", LISTS_INSERTED_COUNTER.value)


def inc_traversal() -> None:
    TRAVERSALS_COUNTER.inc()


def inc_invalid_input() -> None:
    INVALID_INPUT_COUNTER.inc()
    _check_threshold("invalid_input_total", INVALID_INPUT_COUNTER.value)


def generate_metrics() -> bytes:
    return "".join(counter.render() for counter in COUNTERS).encode()


CONTENT_TYPE_LATEST = "text/plain; version=0.0.4"


__all__ = [
    "correlation_id_ctx",
    "inc_list_inserted",
    "inc_traversal",
    "inc_invalid_input",
    "generate_metrics",
    "CONTENT_TYPE_LATEST",
    "logger",
]
