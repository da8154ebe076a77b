"""
Sorting utilities for meal result lists.

Ordering is done client-side on the full result set. The only comparison key is
the meal name (case-insensitive), so stability matters: meals with the same name
always keep their relative arrival order, in both directions.
"""

from typing import Iterable, List, Union

from mealfinder.models import MealRecord, SortOrder


def _name_key(meal: MealRecord) -> str:
    return (meal.name or "").lower()


def parse_sort_order(value: Union[SortOrder, str, None]) -> SortOrder:
    """
    Coerce a UI value into a SortOrder.

    Accepts SortOrder members, their string values ("name-asc", "name-desc",
    "none"), member names ("NAME_ASC") and None/"" for no ordering.

    Raises:
        ValueError: If the value names no known sort order
    """
    if isinstance(value, SortOrder):
        return value
    if value is None or value == "":
        return SortOrder.NONE
    text = str(value).strip()
    try:
        return SortOrder(text.lower())
    except ValueError:
        pass
    try:
        return SortOrder[text.upper()]
    except KeyError:
        raise ValueError(f"Unknown sort order: {value!r}") from None


def sort_meals(meals: Iterable[MealRecord], order: SortOrder) -> List[MealRecord]:
    """
    Sort meals by name with stable tie-breaking.

    Supported orders:
    - SortOrder.NAME_ASC: A to Z, case-insensitive
    - SortOrder.NAME_DESC: Z to A, case-insensitive
    - SortOrder.NONE: input order is preserved

    Args:
        meals: Records in arrival order
        order: Ordering to apply

    Returns:
        New sorted list. The input is not mutated.

    Examples:
        >>> a = MealRecord(id="1", name="banana bread")
        >>> b = MealRecord(id="2", name="Apple Pie")
        >>> [m.name for m in sort_meals([a, b], SortOrder.NAME_ASC)]
        ['Apple Pie', 'banana bread']
    """
    result = list(meals)
    if order == SortOrder.NAME_ASC:
        result.sort(key=_name_key)
    elif order == SortOrder.NAME_DESC:
        # reverse=True keeps equal names in their original relative order
        result.sort(key=_name_key, reverse=True)
    return result
