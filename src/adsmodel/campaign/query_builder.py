"""Query text for selecting campaigns.

Builds ``SELECT ... FROM campaign WHERE ...`` statements and parses
WHERE-style expressions, rejecting predicates on fields that are not
usable as filters (``start_date``, ``end_date``).
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from adsmodel.wire.message import WireSpec

from .models import Campaign

logger = logging.getLogger(__name__)

RESOURCE = "campaign"

_UNESCAPE_RE = re.compile(r"\\(.)")


class QueryError(ValueError):
    """Raised when a query references unknown or non-filterable fields."""


@dataclass
class Condition:
    """A single ``field operator value`` predicate."""

    field: str
    operator: str
    value: Any

    def render(self) -> str:
        if isinstance(self.value, bool):
            literal = "TRUE" if self.value else "FALSE"
        elif isinstance(self.value, int):
            literal = str(self.value)
        else:
            escaped = str(self.value).replace("\\", "\\\\").replace("'", "\\'")
            literal = f"'{escaped}'"
        return f"{RESOURCE}.{self.field} {self.operator} {literal}"


class CampaignQueryBuilder:
    """Parse and build campaign queries."""

    _CONDITION_RE = re.compile(
        r"^([\w.]+)\s*(!=|=|<=|>=|<|>|\s+LIKE\s+)\s*(.+?)\s*$", re.IGNORECASE
    )

    def resolve(self, field: str) -> WireSpec:
        """Look up a possibly dotted field path, with or without ``campaign.``.

        Raises:
            QueryError: If no such field exists.
        """
        path = field[len(RESOURCE) + 1:] if field.startswith(f"{RESOURCE}.") else field
        cls: Optional[type] = Campaign
        spec: Optional[WireSpec] = None
        for part in path.split("."):
            if cls is None or part not in cls.__wire_fields__:
                raise QueryError(f"Unknown campaign field: {field}")
            spec = cls.__wire_fields__[part]
            cls = spec.message if spec.kind == "message" else None
        return spec

    def _strip(self, field: str) -> str:
        if field.startswith(f"{RESOURCE}."):
            return field[len(RESOURCE) + 1:]
        return field

    def parse(self, expression: str) -> List[Condition]:
        """Parse a WHERE-style expression into conditions.

        Supported syntax:
            status = 'ENABLED' AND name LIKE 'Summer%'
            id = 42 AND network_settings.target_google_search = true

        Raises:
            QueryError: On unparseable conditions, unknown fields or fields
                that must not be used as filters.
        """
        conditions: List[Condition] = []
        if not expression or not expression.strip():
            return conditions

        # Split on AND (case-insensitive)
        parts = re.split(r"\s+AND\s+", expression.strip(), flags=re.IGNORECASE)
        for part in parts:
            part = part.strip()
            if not part:
                continue
            conditions.append(self._parse_condition(part))
        return conditions

    def _parse_condition(self, condition: str) -> Condition:
        match = self._CONDITION_RE.match(condition)
        if match is None:
            raise QueryError(f"Unparseable condition: {condition}")

        field = self._strip(match.group(1))
        operator = match.group(2).strip().upper()
        raw = match.group(3)

        spec = self.resolve(field)
        if not spec.filterable:
            raise QueryError(f"{field} cannot be used in a WHERE clause")

        # Type coercion
        if raw.startswith("'") and raw.endswith("'") and len(raw) >= 2:
            value: Any = _UNESCAPE_RE.sub(r"\1", raw[1:-1])
        elif raw.lower() == "true":
            value = True
        elif raw.lower() == "false":
            value = False
        elif raw.lstrip("-").isdigit():
            value = int(raw)
        else:
            value = raw
        return Condition(field=field, operator=operator, value=value)

    def build(self, fields: Sequence[str], where: str = "") -> str:
        """Render a full query selecting ``fields`` filtered by ``where``."""
        if not fields:
            raise QueryError("At least one field must be selected")
        selected = []
        for field in fields:
            self.resolve(field)
            selected.append(f"{RESOURCE}.{self._strip(field)}")

        query = f"SELECT {', '.join(selected)} FROM {RESOURCE}"
        conditions = self.parse(where)
        if conditions:
            query += " WHERE " + " AND ".join(c.render() for c in conditions)
        logger.debug(f"Built query: {query}")
        return query
