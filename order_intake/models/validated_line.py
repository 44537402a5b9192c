from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from .order_line import OrderLine

"""ValidatedLine model: an OrderLine plus its validation outcome."""

__all__ = [
    "ValidatedLine",
]


@dataclass(frozen=True)
class ValidatedLine(OrderLine):
    """OrderLine extended with validity, observations and a recommendation.

    Created by the line validator, one per line that survived the intake filter.
    """
    is_valid: bool = False
    observations: tuple[str, ...] = ()
    recommendation: str = ""

    @classmethod
    def from_line(
        cls, line: OrderLine, observations: list[str], recommendation: str
    ) -> ValidatedLine:
        return cls(
            **{f.name: getattr(line, f.name) for f in fields(OrderLine)},
            is_valid=not observations,
            observations=tuple(observations),
            recommendation=recommendation,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["observations"] = list(self.observations)
        return data
