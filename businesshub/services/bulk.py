"""Result accumulator for operations applied to many records at once."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class BulkResult:
    """Per-item outcome of a bulk operation"""
    success: int = 0
    failed: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def add_success(self) -> None:
        self.success += 1

    def add_failure(self, item_id: Any, error: str) -> None:
        self.failed += 1
        self.errors.append({"id": item_id, "error": error})

    @property
    def status_code(self) -> int:
        """200 when every item succeeded, 207 (Multi-Status) otherwise."""
        return 207 if self.failed else 200

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "failed": self.failed,
            "errors": self.errors,
        }
