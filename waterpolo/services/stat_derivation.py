"""Regras de derivação dos campos calculados

A edição acontece em duas fases: `apply_edit` grava o valor bruto e `recompute`
recalcula apenas as regras alimentadas pela categoria do campo alterado.
Nenhuma função aqui altera o registro recebido.
"""
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Mapping, Optional, Tuple

from waterpolo.services.stat_fields import (
    CONCEDE_FIELDS,
    DERIVED_FIELDS,
    GOAL_FIELDS,
    MISS_FIELDS,
    SAVE_FIELDS,
    StatCategory,
    category_of,
    ensure_editable,
    safe_number,
)

StatRecord = Dict[str, int]


def efficiency(goals: int, shots: int) -> int:
    """Percentual inteiro arredondado para cima no meio (0 quando não há arremessos)"""
    if shots <= 0:
        return 0
    return (200 * goals + shots) // (2 * shots)


def _sum(record: Mapping[str, int], fields: Tuple[str, ...]) -> int:
    return sum(safe_number(record.get(name)) for name in fields)


def _shooting(record: Mapping[str, int]) -> Dict[str, int]:
    goals = _sum(record, GOAL_FIELDS)
    shots = goals + _sum(record, MISS_FIELDS)
    pct = efficiency(goals, shots)
    return {
        "goles_totales": goals,
        "tiros_totales": shots,
        "tiros_eficiencia": pct,
        "goles_eficiencia": pct,
    }


def _saves(record: Mapping[str, int]) -> Dict[str, int]:
    return {"portero_paradas_totales": _sum(record, SAVE_FIELDS)}


def _conceded(record: Mapping[str, int]) -> Dict[str, int]:
    return {"portero_goles_totales": _sum(record, CONCEDE_FIELDS)}


@dataclass(frozen=True)
class DerivationRule:
    """Regra: categorias de origem -> campos calculados"""
    name: str
    sources: FrozenSet[StatCategory]
    compute: Callable[[Mapping[str, int]], Dict[str, int]]


RULES: Tuple[DerivationRule, ...] = (
    DerivationRule("shooting", frozenset({StatCategory.GOAL, StatCategory.MISS}), _shooting),
    DerivationRule("saves", frozenset({StatCategory.SAVE}), _saves),
    DerivationRule("conceded", frozenset({StatCategory.CONCEDE}), _conceded),
)


def rules_for(field: str) -> Tuple[DerivationRule, ...]:
    """Regras afetadas pela alteração de um campo"""
    category = category_of(field)
    return tuple(rule for rule in RULES if category in rule.sources)


def apply_edit(record: Mapping[str, int], field: str, value) -> StatRecord:
    """Fase bruta: grava o valor (coagido) sem recalcular nada"""
    ensure_editable(field)
    updated = dict(record)
    updated[field] = safe_number(value)
    return updated


def recompute(record: Mapping[str, int], changed: Optional[str] = None) -> StatRecord:
    """Fase derivada: recalcula as regras do campo alterado, ou todas quando `changed` é None"""
    rules = RULES if changed is None else rules_for(changed)
    updated = dict(record)
    for rule in rules:
        updated.update(rule.compute(updated))
    return updated


def derive(record: Mapping[str, int]) -> StatRecord:
    """Recalcula todos os campos derivados"""
    return recompute(record)


def is_consistent(record: Mapping[str, int]) -> bool:
    """Verifica se os campos derivados batem com as fontes"""
    derived = derive(record)
    return all(safe_number(record.get(name)) == derived[name] for name in DERIVED_FIELDS)
