from former.core.metrics import kg_to_lb

# str-enum UnitSystem members compare equal to their values
IMPERIAL = "imperial"

HOLDING_STEADY = "Holding steady vs last week"


def _is_imperial(unit) -> bool:
    return unit == IMPERIAL


def unit_label(unit) -> str:
    return "lb" if _is_imperial(unit) else "kg"


def kg_to_preferred(value_kg: float, unit) -> float:
    return kg_to_lb(value_kg) if _is_imperial(unit) else value_kg


def format_weight(weight_kg: float, unit) -> str:
    return f"{kg_to_preferred(weight_kg, unit):.1f} {unit_label(unit)}"


def format_weekly_change(change_kg: float, unit) -> str:
    value = kg_to_preferred(change_kg, unit)
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.1f} {unit_label(unit)}"


def weekly_change_label(change_kg: float, unit) -> str:
    """
    Display label for the weekly delta, e.g. "Down 1.8 lb vs last week".
    Changes under 0.1 of the display unit read as holding steady.
    """
    value = kg_to_preferred(change_kg, unit)
    if abs(value) < 0.1:
        return HOLDING_STEADY
    direction = "Down" if value < 0 else "Up"
    return f"{direction} {abs(value):.1f} {unit_label(unit)} vs last week"
