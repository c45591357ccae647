# src/forecast_guidance/domain/entities/guidance_context.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Guidance context entity.

Purpose:
    One immutable value type for the three independent guidance contexts
    (depletion, summary, shipment). Every state transition returns a new
    context, so contexts never share mutable state.

Layer:
    domain/entities

Notes:
    - The built-in TRENDS definition lives in depletion and summary, is
      restored when a loaded definition set lacks it, and cannot be deleted
      or selected as a row.
    - Only full-year definitions can be rows.
    - Id counters never move backwards and never go below the context floor.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from forecast_guidance.domain.entities.guidance_definition import (
    GuidanceDefinition,
    build_trends_definition,
)
from forecast_guidance.domain.enums.guidance import GuidanceContextId
from forecast_guidance.domain.exceptions.guidance import (
    GuidanceDefinitionNotDeletable,
    GuidanceDefinitionNotFound,
    InvalidGuidanceSelection,
)


@dataclass(frozen=True, slots=True)
class ContextPolicy:
    """Per-context constants: built-in trends id and the id counter floor."""

    trends_id: int | None
    min_next_id: int


CONTEXT_POLICIES: dict[GuidanceContextId, ContextPolicy] = {
    GuidanceContextId.DEPLETION: ContextPolicy(trends_id=1, min_next_id=2),
    GuidanceContextId.SUMMARY: ContextPolicy(trends_id=1001, min_next_id=1002),
    GuidanceContextId.SHIPMENT: ContextPolicy(trends_id=None, min_next_id=2000),
}


def functional_key(definition: GuidanceDefinition) -> str:
    """Key used to hide functionally identical selections."""
    calc_type = getattr(definition.calculation, "type", None)
    type_name = getattr(calc_type, "value", None) or getattr(
        definition.calculation, "type_name", ""
    )
    return f"{definition.label}|{definition.sublabel or ''}|{definition.period.value}|{type_name}"


def _dedupe_functional(definitions: Iterable[GuidanceDefinition]) -> list[GuidanceDefinition]:
    seen: set[str] = set()
    result: list[GuidanceDefinition] = []
    for definition in definitions:
        key = functional_key(definition)
        if key in seen:
            continue
        seen.add(key)
        result.append(definition)
    return result


@dataclass(frozen=True, slots=True)
class EvaluationPlan:
    """Definitions to evaluate and which of them need a monthly breakdown."""

    definitions: tuple[GuidanceDefinition, ...]
    monthly_ids: frozenset[int]

    @property
    def monthly(self) -> dict[int, bool]:
        return {definition.id: definition.id in self.monthly_ids for definition in self.definitions}


@dataclass(frozen=True, slots=True)
class GuidanceContext:
    """Definitions plus column/row selection for one context.

    Attributes:
        context_id: Which context this is.
        definitions: Definitions in insertion order.
        columns: Selected column definition ids.
        rows: Selected row definition ids.
        next_id: Id assigned to the next added definition.
    """

    context_id: GuidanceContextId
    definitions: tuple[GuidanceDefinition, ...] = ()
    columns: tuple[int, ...] = ()
    rows: tuple[int, ...] = ()
    next_id: int = 0

    @property
    def policy(self) -> ContextPolicy:
        return CONTEXT_POLICIES[self.context_id]

    @classmethod
    def initial(cls, context_id: GuidanceContextId) -> GuidanceContext:
        """Return the starting state of a context."""
        policy = CONTEXT_POLICIES[context_id]
        definitions: tuple[GuidanceDefinition, ...] = ()
        if policy.trends_id is not None:
            definitions = (build_trends_definition(policy.trends_id),)
        return cls(context_id=context_id, definitions=definitions, next_id=policy.min_next_id)

    def find(self, definition_id: int) -> GuidanceDefinition | None:
        for definition in self.definitions:
            if definition.id == definition_id:
                return definition
        return None

    def get(self, definition_id: int) -> GuidanceDefinition:
        """Return a definition by id.

        Raises:
            GuidanceDefinitionNotFound: If the id is unknown in this context.
        """
        definition = self.find(definition_id)
        if definition is None:
            raise GuidanceDefinitionNotFound(
                f"Guidance definition {definition_id} not found.",
                details={"context": self.context_id.value, "id": definition_id},
            )
        return definition

    def _bumped_next_id(self, definitions: Sequence[GuidanceDefinition]) -> int:
        highest = max((definition.id for definition in definitions), default=0)
        return max(self.next_id, self.policy.min_next_id, highest + 1)

    def add(self, definition: GuidanceDefinition) -> GuidanceContext:
        """Add ``definition`` under the next free id."""
        assigned = replace(definition, id=self.next_id)
        definitions = (*self.definitions, assigned)
        return replace(self, definitions=definitions, next_id=self._bumped_next_id(definitions))

    def upsert(self, definition: GuidanceDefinition) -> GuidanceContext:
        """Insert or replace the definition with ``definition.id``.

        Raises:
            GuidanceDefinitionNotDeletable: When replacing the trends
                definition with a different kind of definition.
        """
        current = self.find(definition.id)
        if current is not None and current.is_trends and not definition.is_trends:
            raise GuidanceDefinitionNotDeletable(
                "The trends guidance cannot be replaced.",
                details={"context": self.context_id.value, "id": definition.id},
            )
        if current is None:
            definitions = (*self.definitions, definition)
        else:
            definitions = tuple(
                definition if existing.id == definition.id else existing
                for existing in self.definitions
            )
        context = replace(self, definitions=definitions, next_id=self._bumped_next_id(definitions))
        # A replaced definition may no longer qualify as a row.
        return replace(
            context, rows=tuple(row for row in context.rows if context._can_be_row(row))
        )

    def remove(self, definition_id: int) -> GuidanceContext:
        """Remove a definition and drop it from both selections.

        Raises:
            GuidanceDefinitionNotFound: If the id is unknown.
            GuidanceDefinitionNotDeletable: For the built-in trends definition.
        """
        definition = self.get(definition_id)
        if not definition.is_deletable:
            raise GuidanceDefinitionNotDeletable(
                "The trends guidance cannot be deleted.",
                details={"context": self.context_id.value, "id": definition_id},
            )
        return replace(
            self,
            definitions=tuple(d for d in self.definitions if d.id != definition_id),
            columns=tuple(c for c in self.columns if c != definition_id),
            rows=tuple(r for r in self.rows if r != definition_id),
        )

    def load(self, definitions: Iterable[GuidanceDefinition]) -> GuidanceContext:
        """Replace all definitions, restoring the trends definition if missing.

        Selections that reference definitions no longer present are pruned.
        """
        loaded = list(definitions)
        trends_id = self.policy.trends_id
        if trends_id is not None and not any(d.is_trends for d in loaded):
            loaded.insert(0, build_trends_definition(trends_id))
        context = replace(
            self,
            definitions=tuple(loaded),
            next_id=max(self.policy.min_next_id, max((d.id for d in loaded), default=0) + 1),
        )
        known = {d.id for d in context.definitions}
        return replace(
            context,
            columns=tuple(c for c in context.columns if c in known),
            rows=tuple(r for r in context.rows if context._can_be_row(r)),
        )

    def _can_be_row(self, definition_id: int) -> bool:
        definition = self.find(definition_id)
        return definition is not None and definition.can_be_row

    def select(self, columns: Sequence[int], rows: Sequence[int]) -> GuidanceContext:
        """Replace the column and row selection.

        Raises:
            InvalidGuidanceSelection: If an id is unknown, or a row id refers
                to the trends definition or a non full-year definition.
        """
        unknown = sorted({i for i in (*columns, *rows) if self.find(i) is None})
        if unknown:
            raise InvalidGuidanceSelection(
                "Selection references unknown guidance definitions.",
                details={"context": self.context_id.value, "unknown_ids": unknown},
            )
        invalid_rows = [row for row in rows if not self._can_be_row(row)]
        if invalid_rows:
            raise InvalidGuidanceSelection(
                "Only full-year, non-trend guidance can be selected as rows.",
                details={"context": self.context_id.value, "invalid_row_ids": invalid_rows},
            )
        return replace(
            self,
            columns=tuple(dict.fromkeys(columns)),
            rows=tuple(dict.fromkeys(rows)),
        )

    def available_definitions(self) -> list[GuidanceDefinition]:
        """Definitions offered in this context."""
        return [d for d in self.definitions if d.available_in(self.context_id)]

    def column_definitions(self) -> list[GuidanceDefinition]:
        """Selected columns, functionally de-duplicated."""
        return _dedupe_functional(
            d for d in (self.find(i) for i in self.columns) if d is not None
        )

    def row_definitions(self) -> list[GuidanceDefinition]:
        """Selected rows, functionally de-duplicated."""
        return _dedupe_functional(
            d
            for d in (self.find(i) for i in self.rows)
            if d is not None and d.can_be_row
        )

    def evaluation_plan(self) -> EvaluationPlan:
        """Merge columns and rows by id; only rows get monthly values."""
        merged: dict[int, GuidanceDefinition] = {}
        for definition in (*self.column_definitions(), *self.row_definitions()):
            if definition.available_in(self.context_id):
                merged.setdefault(definition.id, definition)
        return EvaluationPlan(
            definitions=tuple(merged.values()),
            monthly_ids=frozenset(d.id for d in self.row_definitions()),
        )


__all__ = [
    "CONTEXT_POLICIES",
    "ContextPolicy",
    "EvaluationPlan",
    "GuidanceContext",
    "functional_key",
]
