"""The canonical table of ``suggestedMetric`` patterns.

Each ``MetricPattern`` says: a signal whose id matches ``id_pattern`` or
whose name matches ``name_pattern``, unless its name matches
``exclude_name_pattern``, should probably carry
``"suggestedMetric": suggested_metric``.

Table order is significant: the first matching pattern wins, so more
specific patterns must come before more general ones.  The table is a
tuple of frozen dataclasses and is shared by value by every consumer.

+-------------------------+----------------------------------------------+
| suggestedMetric         | Typical signal                               |
+=========================+==============================================+
| ``odometer``            | "Odometer", ``*_ODO``                        |
+-------------------------+----------------------------------------------+
| ``speed``               | "Vehicle speed", ``*_VSS``                   |
+-------------------------+----------------------------------------------+
| ``fuelTankLevel``       | "Fuel tank level", ``*_FLI``                 |
+-------------------------+----------------------------------------------+
| ``fuelRange``           | "Fuel range", "Distance to empty"            |
+-------------------------+----------------------------------------------+
| ``electricRange``       | "Electric range", "EV range"                 |
+-------------------------+----------------------------------------------+
| ``stateOfCharge``       | "HV battery state of charge", ``*_SOC``      |
+-------------------------+----------------------------------------------+
| ``starterBatteryVoltage`` | "12V battery voltage"                      |
+-------------------------+----------------------------------------------+
| ``isCharging``          | "Charging status"                            |
+-------------------------+----------------------------------------------+
| ``*TirePressure``       | "Front left tire pressure", ``*_TP_FL``      |
+-------------------------+----------------------------------------------+
| ``outsideTemperature``  | "Outside air temperature", ``*_AAT``         |
+-------------------------+----------------------------------------------+
"""
from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class MetricPattern:
    """A single ``suggestedMetric`` pattern.

    Parameters
    ----------
    suggested_metric:
        The value to suggest.
    description:
        Why the value applies; shown in the lint message.
    id_pattern:
        Regex searched in the signal id.
    name_pattern:
        Regex searched in the signal name.
    exclude_name_pattern:
        Regex that, when found in the signal name, rules the pattern out.
    """

    suggested_metric: str
    description: str
    id_pattern: re.Pattern[str] | None = None
    name_pattern: re.Pattern[str] | None = None
    exclude_name_pattern: re.Pattern[str] | None = None

    def matches(self, signal_id: str, signal_name: str) -> bool:
        """Return True if the id or the name matches and the name is not excluded."""
        id_matches = self.id_pattern is not None and self.id_pattern.search(signal_id) is not None
        name_matches = self.name_pattern is not None and self.name_pattern.search(signal_name) is not None
        if not (id_matches or name_matches):
            return False
        if self.exclude_name_pattern is not None and self.exclude_name_pattern.search(signal_name):
            return False
        return True


def _p(
    metric: str,
    description: str,
    *,
    id: str | None = None,
    name: str | None = None,
    exclude: str | None = None,
) -> MetricPattern:
    """Convenience factory for :class:`MetricPattern`.

    Id patterns are case-sensitive (signal ids are upper snake case);
    name patterns are case-insensitive.
    """
    return MetricPattern(
        suggested_metric=metric,
        description=description,
        id_pattern=re.compile(id) if id else None,
        name_pattern=re.compile(name, re.IGNORECASE) if name else None,
        exclude_name_pattern=re.compile(exclude, re.IGNORECASE) if exclude else None,
    )


_TRIP = r"\b(trip|since|reset|service|maintenance)\b"

METRIC_PATTERNS: tuple[MetricPattern, ...] = (
    _p(
        "odometer",
        "total distance travelled",
        id=r"_ODO(METER)?$",
        name=r"\bodometer\b",
        exclude=_TRIP,
    ),
    _p(
        "speed",
        "vehicle speed",
        id=r"_(VSS|VEH_?SPEED)$",
        name=r"\bvehicle speed\b",
        exclude=r"\b(limit|set|target|cruise|wheel)\b",
    ),
    _p(
        "fuelTankLevel",
        "fuel level in the tank",
        id=r"_(FLI|FUEL_?LVL)$",
        name=r"\bfuel (tank )?level\b",
        exclude=r"\b(sensor|raw|voltage)\b",
    ),
    _p(
        "fuelRange",
        "remaining range on fuel",
        name=r"\b(fuel range|range on fuel|distance to empty)\b",
        exclude=r"\b(electric|ev|battery)\b",
    ),
    _p(
        "electricRange",
        "remaining range on battery",
        id=r"_(EV|ELEC)_?RANGE$",
        name=r"\b(electric|ev|battery) range\b",
    ),
    _p(
        "stateOfCharge",
        "high-voltage battery state of charge",
        id=r"_SOC$",
        name=r"\bstate of charge\b",
        exclude=r"\b(min|max|minimum|maximum|target|limit|displayed|cell|12 ?v)\b",
    ),
    _p(
        "starterBatteryVoltage",
        "12V starter battery voltage",
        id=r"_(12V|LV)_?(BATT?|BATTERY)_?V(OLT)?$",
        name=r"\b(12 ?v|starter|auxiliary) battery voltage\b",
    ),
    _p(
        "isCharging",
        "whether the vehicle is charging",
        name=r"\bcharging (status|state)\b",
        exclude=r"\b(door|port|lid|flap|light|led)\b",
    ),
    _p(
        "frontLeftTirePressure",
        "front left tire pressure",
        id=r"_TP_?FL$",
        name=r"\bfront left tire pressure\b",
    ),
    _p(
        "frontRightTirePressure",
        "front right tire pressure",
        id=r"_TP_?FR$",
        name=r"\bfront right tire pressure\b",
    ),
    _p(
        "rearLeftTirePressure",
        "rear left tire pressure",
        id=r"_TP_?RL$",
        name=r"\brear left tire pressure\b",
    ),
    _p(
        "rearRightTirePressure",
        "rear right tire pressure",
        id=r"_TP_?RR$",
        name=r"\brear right tire pressure\b",
    ),
    _p(
        "outsideTemperature",
        "ambient air temperature outside the cabin",
        id=r"_AAT$",
        name=r"\b(outside|ambient) (air )?temperature\b",
        exclude=r"\b(sensor|raw|filtered)\b",
    ),
)
