# io/kernel_logging.py
import json
import logging
import sys

from medroute.io.business_events import RouteFoundBiz, TaskAddedBiz, TaskDispatchedBiz
from medroute.io.recorder import Recorder
from medroute.sim.hooks import NoopHooks


def _default_json_logger(name="medroute", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class KernelLogging(NoopHooks):
    """
    One place to shape and emit structured logs for searches and dispatches,
    and to forward the matching business events to a Recorder.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._seq = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, **extra}
        self.log.log(getattr(logging, level), msg, extra={"extra": payload})

    def _sampled(self) -> bool:
        return self.debug and (self._seq % self.sample_every) == 0

    def _biz(self, cls, name: str, **fields):
        if self.recorder:
            self.recorder.emit(cls(run_id=self.run_id, seq=self._seq, name=name, **fields))

    # --------------------------------------------------------

    # search lifecycle

    def search_start(self, *, start: int, goal: int):
        self._seq += 1
        if self._sampled():
            self._emit("DEBUG", "search_start", start=start, goal=goal)

    def search_end(self, *, start: int, goal: int, found: bool, cost, expanded: int, ms: float):
        self._seq += 1
        self._emit(
            "INFO",
            "route_found" if found else "route_missing",
            start=start,
            goal=goal,
            cost=cost,
            expanded=expanded,
            ms=round(ms, 3),
        )
        self._biz(
            RouteFoundBiz,
            "RouteFound",
            start=start,
            goal=goal,
            found=found,
            cost=cost,
            expanded=expanded,
        )

    # dispatch lifecycle

    def task_added(self, *, task_id: int, priority: int, qsize: int):
        self._seq += 1
        if self._sampled():
            self._emit("DEBUG", "task_added", task_id=task_id, priority=priority, qsize=qsize)
        self._biz(TaskAddedBiz, "TaskAdded", task_id=task_id, priority=priority, qsize=qsize)

    def task_dispatched(self, *, task_id: int, priority: int, qsize: int):
        self._seq += 1
        self._emit("INFO", "task_dispatched", task_id=task_id, priority=priority, qsize=qsize)
        self._biz(
            TaskDispatchedBiz, "TaskDispatched", task_id=task_id, priority=priority, qsize=qsize
        )

    def error(self, *, reason: str, **extra):
        self._emit("ERROR", "kernel_error", reason=reason, **extra)
