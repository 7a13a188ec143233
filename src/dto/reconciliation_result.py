from dataclasses import dataclass, asdict
from typing import Any, Dict

@dataclass
class ReconciliationResult:
    checked:   int = 0
    deleted:   int = 0
    failed:    int = 0
    protected: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain dict (e.g. for logging)."""
        return asdict(self)
