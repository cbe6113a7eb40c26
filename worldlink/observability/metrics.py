#!filepath: worldlink/observability/metrics.py
from dataclasses import dataclass, field
from typing import Any, Dict

from worldlink.utils.logger import logs


@dataclass
class MetricRecorder:
    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.info(f"[Metric] {name} = {value}")

    def incr(self, name: str, value: int = 1):
        # 热路径计数，不打日志
        if not self.enabled:
            return
        self.metrics[name] = self.metrics.get(name, 0) + value

    def get(self, name: str, default: Any = 0) -> Any:
        return self.metrics.get(name, default)

    def summary(self) -> Dict[str, Any]:
        return dict(self.metrics)
