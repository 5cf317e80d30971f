from dataclasses import dataclass, field

from memprobe.config.measurement_config import MeasurementConfig
from memprobe.config.target_spec import TargetSpec


@dataclass(frozen=True)
class ProbeConfig:
    target: TargetSpec
    measurement: MeasurementConfig = field(default_factory=MeasurementConfig)
