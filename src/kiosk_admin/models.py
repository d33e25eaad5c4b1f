"""
Store models returned by the admin API.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class AdminStore:
    """Store as listed by GET /admin/stores."""

    store_id: str = ""
    name: str = ""
    active: bool = True
    tax_rate: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "store_id": self.store_id,
            "name": self.name,
            "active": self.active,
            "tax_rate": self.tax_rate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdminStore":
        tax_rate = data.get("tax_rate")
        return cls(
            store_id=str(data.get("store_id", "")),
            name=data.get("name") or "",
            active=bool(data.get("active", True)),
            tax_rate=float(tax_rate) if tax_rate is not None else None,
        )

    def matches(self, query: str) -> bool:
        q = (query or "").strip().lower()
        if not q:
            return True
        return q in self.store_id.lower() or q in self.name.lower()
