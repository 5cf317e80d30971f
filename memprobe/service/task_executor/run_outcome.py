import dataclasses
import json
from typing import Optional

from memprobe.models.memory_result import AggregateResult, ErrorReport


@dataclasses.dataclass(frozen=True)
class RunOutcome:
    """Result of a whole run: either an aggregate or an error report"""
    result: Optional[AggregateResult] = None
    error: Optional[ErrorReport] = None

    @classmethod
    def success(cls, result: AggregateResult) -> 'RunOutcome':
        return cls(result=result)

    @classmethod
    def failure(cls, error: ErrorReport) -> 'RunOutcome':
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def to_json(self) -> str:
        """The document printed on stdout"""
        if self.error is not None:
            return json.dumps(self.error.to_dict())
        return json.dumps(self.result.to_dict(), indent=2)
