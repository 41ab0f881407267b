# app/utils/validators.py
"""
Input validation utilities for partial updates.
"""

from typing import Any, Dict, Type

from app.core.exceptions import InputValidationError
from app.db.base_class import Base


def reject_nulls_for_required_columns(
    model: Type[Base], update_data: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Validate that a partial update does not null out a NOT NULL column.

    Args:
        model: SQLAlchemy model the update is applied to
        update_data: Field values present in the request

    Returns:
        The unchanged update_data

    Raises:
        InputValidationError: If a non-nullable column is set to None
    """
    columns = model.__table__.columns
    for field, value in update_data.items():
        if value is None and field in columns and not columns[field].nullable:
            raise InputValidationError(f"{field} cannot be null", field=field)
    return update_data
