"""Utilities module."""
from surveygenie.utils.datetime_helpers import ensure_utc
from surveygenie.utils.sql import PartialUpdate, reject_null_fields, sql_for_partial_update

__all__ = ["ensure_utc", "PartialUpdate", "reject_null_fields", "sql_for_partial_update"]
