from __future__ import annotations

import threading
import time
from collections import defaultdict
from typing import Dict


class Telemetry:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: Dict[str, float] = defaultdict(float)
        self._timers_sum: Dict[str, float] = defaultdict(float)
        self._timers_count: Dict[str, int] = defaultdict(int)
        self._started_at = time.time()

    def incr(self, name: str, value: float = 1.0) -> None:
        with self._lock:
            self._counters[name] += value

    def timing(self, name: str, seconds: float) -> None:
        value = max(0.0, float(seconds))
        with self._lock:
            self._timers_sum[name] += value
            self._timers_count[name] += 1

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timers_sum.clear()
            self._timers_count.clear()
            self._started_at = time.time()

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "uptime_s": max(0, int(time.time() - self._started_at)),
                "counters": dict(self._counters),
                "timers": {
                    name: {
                        "count": self._timers_count.get(name, 0),
                        "sum_s": round(self._timers_sum.get(name, 0.0), 6),
                        "avg_s": round(
                            (self._timers_sum.get(name, 0.0) / self._timers_count[name]) if self._timers_count.get(name, 0) else 0.0,
                            6,
                        ),
                    }
                    for name in set(self._timers_sum) | set(self._timers_count)
                },
            }

    def as_prometheus(self) -> str:
        snap = self.snapshot()
        lines: list[str] = []
        lines.append("# HELP incidentstore_uptime_seconds Process uptime in seconds")
        lines.append("# TYPE incidentstore_uptime_seconds gauge")
        lines.append(f"incidentstore_uptime_seconds {snap['uptime_s']}")
        for name, value in sorted(snap["counters"].items()):
            metric = _sanitize(name)
            lines.append(f"# TYPE {metric} counter")
            lines.append(f"{metric} {float(value)}")
        for name, stats in sorted(snap["timers"].items()):
            metric = _sanitize(name)
            lines.append(f"# TYPE {metric}_seconds summary")
            lines.append(f"{metric}_seconds_sum {float(stats['sum_s'])}")
            lines.append(f"{metric}_seconds_count {int(stats['count'])}")
        return "\n".join(lines) + "\n"


def _sanitize(name: str) -> str:
    out = []
    for ch in name:
        out.append(ch if (ch.isalnum() or ch == '_') else '_')
    metric = ''.join(out).strip('_') or 'incidentstore_metric'
    if not metric.startswith('incidentstore_'):
        metric = f"incidentstore_{metric}"
    return metric


telemetry = Telemetry()
