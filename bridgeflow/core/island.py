"""
Island data structure.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .geometry import GridPoint


@dataclass
class Island:
    """Represents an island anchor on the puzzle grid"""
    id: str
    x: int
    y: int
    constraints: List[str] = field(default_factory=list)

    @property
    def position(self) -> GridPoint:
        return GridPoint(self.x, self.y)

    def attribute(self, key: str) -> Optional[str]:
        """Value of the first "key=value" constraint string, or None"""
        prefix = f"{key}="
        for rule in self.constraints:
            if rule.startswith(prefix):
                return rule[len(prefix):]
        return None

    def num_bridges(self) -> Optional[int]:
        """
        Parse a "num_bridges=N" constraint.

        Integral decimals such as "2.0" are accepted. Returns None when no
        such constraint exists or the value is not a whole number.
        """
        value = self.attribute("num_bridges")
        if value is None:
            return None
        try:
            number = float(value)
        except ValueError:
            return None
        if not number.is_integer():
            return None
        return int(number)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Island':
        try:
            return cls(
                id=str(data['id']),
                x=int(data['x']),
                y=int(data['y']),
                constraints=list(data.get('constraints') or []),
            )
        except KeyError as e:
            raise ValueError(f"Island spec missing field {e}: {data!r}")

    def __repr__(self):
        return f"Island({self.id!r}, ({self.x}, {self.y}))"
