"""SQL helpers for partial updates."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from surveygenie.utils.exceptions import BadRequestError


@dataclass(frozen=True)
class PartialUpdate:
    """Column assignment clause plus the values bound to it, in order.

    ``set_cols`` references positional placeholders ``:p1`` .. ``:pN``.
    """

    set_cols: str
    values: list[Any] = field(default_factory=list)

    @property
    def next_placeholder(self) -> str:
        """Placeholder for the first parameter after the assignments (e.g. the row id)."""
        return f":p{len(self.values) + 1}"

    def params(self, *extra: Any) -> dict[str, Any]:
        """Bind mapping for the assignment values followed by ``extra``."""
        return {f"p{idx}": value for idx, value in enumerate([*self.values, *extra], start=1)}


def sql_for_partial_update(
    data: Mapping[str, Any],
    field_map: Mapping[str, str] | None = None,
) -> PartialUpdate:
    """Build the SET clause for updating only the provided fields.

    Args:
        data: Field name -> new value, in the order they should be assigned
        field_map: Optional logical field name -> column name translations;
            names missing from the map are used as-is

    Returns:
        PartialUpdate, e.g. ``{"first_name": "Aliya", "age": 32}`` gives
        ``'"first_name"=:p1, "age"=:p2'`` with values ``["Aliya", 32]``

    Raises:
        BadRequestError: If ``data`` is empty
    """
    if not data:
        raise BadRequestError("No data")

    field_map = field_map or {}
    cols = [
        f'"{field_map.get(name) or name}"=:p{idx}'
        for idx, name in enumerate(data, start=1)
    ]
    return PartialUpdate(set_cols=", ".join(cols), values=list(data.values()))


def reject_null_fields(data: Mapping[str, Any] | None, entity: str) -> None:
    """Raise BadRequestError if any field in an update is explicitly null."""
    nulls = sorted(name for name, value in (data or {}).items() if value is None)
    if nulls:
        raise BadRequestError(f"Cannot set {entity} fields to null: {', '.join(nulls)}")
