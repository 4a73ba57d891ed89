"""
Aircraft Counter Models
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from models.notification import CounterType


def _number(value: Any) -> float:
    """Counter columns are numeric strings or numbers; anything else is 0"""
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class CounterSnapshot:
    """Current values of the five aircraft counters (read-only)"""
    hobbs: float = 0.0
    tach: float = 0.0
    airframe_total_time: float = 0.0
    engine_total_time: float = 0.0
    prop_total_time: float = 0.0
    id: Optional[str] = None
    aircraft_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CounterSnapshot':
        """Create from an aircraft_counters row"""
        return cls(
            hobbs=_number(data.get('hobbs')),
            tach=_number(data.get('tach')),
            airframe_total_time=_number(data.get('airframe_total_time')),
            engine_total_time=_number(data.get('engine_total_time')),
            prop_total_time=_number(data.get('prop_total_time')),
            id=data.get('id'),
            aircraft_id=data.get('aircraft_id')
        )

    def value_for(self, counter_type: CounterType) -> float:
        """Current value of one counter"""
        return getattr(self, counter_type.field_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'aircraft_id': self.aircraft_id,
            'hobbs': self.hobbs,
            'tach': self.tach,
            'airframe_total_time': self.airframe_total_time,
            'engine_total_time': self.engine_total_time,
            'prop_total_time': self.prop_total_time
        }
