"""
SQL fragment builders for partial updates and optional filters.

Both builders only ever interpolate column names into the SQL text. Every
value is returned separately, in placeholder order, for the executor to bind.
Placeholders use the positional ``$n`` style, numbered from 1 without gaps.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from app.core.exceptions import BadRequestError


@dataclass(frozen=True)
class PartialUpdate:
    """SET clause body and the values bound to its placeholders."""
    set_cols: str
    values: List[Any]


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
    *,
    allowed_columns: Optional[Iterable[str]] = None,
) -> PartialUpdate:
    """
    Convert a sparse update mapping into a parameterized SET clause.

    Keys are domain field names. A key found in ``js_to_sql`` is written as
    the mapped column, any other key is used as the column name unchanged.
    Placeholders follow the mapping's iteration order:

        {"firstName": "Aliya", "age": 32}
        => '"first_name"=$1, "age"=$2', ["Aliya", 32]

    The caller appends its own row identifier as ``$(len(values) + 1)``.

    Args:
        data_to_update: Field name -> new value, at least one entry
        js_to_sql: Field name -> column name for fields whose names differ
        allowed_columns: Optional allowlist the resolved columns must belong to

    Returns:
        PartialUpdate with the joined fragments and positionally aligned values

    Raises:
        BadRequestError: If there is nothing to update, or a resolved column
            is not in ``allowed_columns``
    """
    keys = list(data_to_update.keys())
    if not keys:
        raise BadRequestError("No data")

    allowed = frozenset(allowed_columns) if allowed_columns is not None else None

    cols = []
    for idx, key in enumerate(keys, start=1):
        column = js_to_sql.get(key, key)
        if allowed is not None and column not in allowed:
            raise BadRequestError(f"Cannot update field: {key}")
        cols.append(f'"{column}"=${idx}')

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )


@dataclass
class _WhereClause:
    """Accumulates AND-ed predicates with contiguous placeholder numbers."""
    predicates: List[str] = field(default_factory=list)
    values: List[Any] = field(default_factory=list)

    def add(self, template: str, value: Any) -> None:
        # template holds one "{}" where the placeholder goes
        self.values.append(value)
        self.predicates.append(template.format(f"${len(self.values)}"))

    def build(self) -> Tuple[str, List[Any]]:
        if not self.predicates:
            return "", []
        return "WHERE " + " AND ".join(self.predicates), list(self.values)


def _is_literal_true(value: Any) -> bool:
    return value is True or value == "true"


def sql_for_job_filters(criteria: Mapping[str, Any]) -> Tuple[str, List[Any]]:
    """
    Build the WHERE clause for a job search.

    Filters are checked in a fixed order, which is also placeholder order:

    1. ``title``: case-insensitive substring match
    2. ``minSalary``: salary at or above the bound
    3. ``hasEquity``: only when literally true (``True`` or ``"true"``),
       restricts to jobs with non-zero equity

    Absent or falsy filters contribute nothing. With no filters the clause is
    empty and the caller must not emit WHERE.

    Returns:
        (where_sql, values)
    """
    where = _WhereClause()

    title = criteria.get("title")
    if title:
        where.add("title ILIKE {}", f"%{title}%")

    min_salary = criteria.get("minSalary")
    if min_salary:
        where.add("salary >= {}", min_salary)

    if _is_literal_true(criteria.get("hasEquity")):
        where.add("equity > {}", 0)

    return where.build()


def sql_for_company_filters(criteria: Mapping[str, Any]) -> Tuple[str, List[Any]]:
    """
    Build the WHERE clause for a company search.

    Check order: ``name`` (substring), ``minEmployees`` (strictly more),
    ``maxEmployees`` (strictly fewer). Validating that min <= max is left
    to the caller.

    Returns:
        (where_sql, values)
    """
    where = _WhereClause()

    name = criteria.get("name")
    if name:
        where.add("name ILIKE {}", f"%{name}%")

    min_employees = criteria.get("minEmployees")
    if min_employees:
        where.add("num_employees > {}", min_employees)

    max_employees = criteria.get("maxEmployees")
    if max_employees:
        where.add("num_employees < {}", max_employees)

    return where.build()
