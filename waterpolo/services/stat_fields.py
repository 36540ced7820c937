"""Catálogo de campos de estatística de um partido

Cada contador de `match_stats` pertence a exatamente uma categoria. As regras de
derivação e o placar são calculados a partir desta tabela, nunca por prefixo do
nome do campo.
"""
import math
from enum import Enum
from typing import Any, Dict, Tuple

from waterpolo.core.exceptions import DerivedFieldError, UnknownStatFieldError


class StatCategory(str, Enum):
    """Categoria de um contador"""
    GOAL = "goal"
    MISS = "miss"
    SAVE = "save"
    CONCEDE = "concede"
    KEEPER_GOAL = "keeper_goal"
    DERIVED = "derived"
    OTHER = "other"


G = StatCategory.GOAL
M = StatCategory.MISS
S = StatCategory.SAVE
C = StatCategory.CONCEDE
K = StatCategory.KEEPER_GOAL
D = StatCategory.DERIVED
O = StatCategory.OTHER

# Ordem = ordem das colunas em match_stats
FIELD_CATEGORIES: Dict[str, StatCategory] = {
    # Gols
    "goles_totales": D,
    "goles_boya_jugada": G,
    "goles_hombre_mas": G,
    "goles_lanzamiento": G,
    "goles_dir_mas_5m": G,
    "goles_contraataque": G,
    "goles_penalti_anotado": G,
    "goles_penalti_juego": G,
    "goles_boya_cada": O,
    "goles_penalti_fallo": O,
    "goles_corner": O,
    "goles_fuera": O,
    "goles_parados": O,
    "goles_bloqueado": O,
    "goles_eficiencia": D,
    # Arremessos
    "tiros_totales": D,
    "tiros_hombre_mas": M,
    "tiros_penalti_fallado": M,
    "tiros_corner": M,
    "tiros_fuera": M,
    "tiros_parados": M,
    "tiros_bloqueado": M,
    "tiros_contraataque": M,
    "tiros_boya_cada": O,
    "tiros_lanzamiento": O,
    "tiros_dir_mas_5m": O,
    "tiros_penalti_juego": O,
    "tiros_eficiencia": D,
    # Faltas
    "faltas_exp_20_1c1": O,
    "faltas_exp_20_boya": O,
    "faltas_penalti": O,
    "faltas_contrafaltas": O,
    "faltas_exp_3_int": O,
    "faltas_exp_3_bruta": O,
    "faltas_exp_simple": O,
    # Ações
    "acciones_bloqueo": O,
    "acciones_asistencias": O,
    "acciones_recuperacion": O,
    "acciones_rebote": O,
    "acciones_exp_provocada": O,
    "acciones_penalti_provocado": O,
    "acciones_recibir_gol": O,
    "acciones_perdida_poco": O,
    # Goleiro: gols sofridos
    "portero_goles_totales": D,
    "portero_goles_boya_parada": C,
    "portero_goles_hombre_menos": C,
    "portero_goles_dir_mas_5m": C,
    "portero_goles_contraataque": C,
    "portero_goles_penalti": C,
    "portero_goles_lanzamiento": C,
    "portero_gol_palo": C,
    "portero_goles_boya": C,
    "portero_goles_penalti_encajado": O,
    # Goleiro: defesas
    "portero_paradas_totales": D,
    "portero_tiros_parada_recup": S,
    "portero_paradas_fuera": S,
    "portero_paradas_penalti_parado": S,
    "portero_paradas_hombre_menos": S,
    "portero_paradas_parada_recup": O,
    "portero_paradas_pedida": O,
    "portero_tiros_parado": O,
    "portero_lanz_palo": O,
    "portero_inferioridad_fuera": O,
    "portero_inferioridad_bloqueo": O,
    # Goleiro: ataque e ações
    "portero_gol": K,
    "portero_gol_superioridad": O,
    "portero_fallo_superioridad": O,
    "portero_acciones_asistencias": O,
    "portero_acciones_recuperacion": O,
    "portero_acciones_perdida_pos": O,
    "portero_acciones_exp_provocada": O,
    "portero_acciones_rebote": O,
    "portero_acciones_gol_recibido": O,
    "portero_faltas_exp_3_int": O,
    "portero_exp_provocada": O,
    "portero_penalti_provocado": O,
    "portero_recibir_gol": O,
}

del G, M, S, C, K, D, O

STAT_FIELDS: Tuple[str, ...] = tuple(FIELD_CATEGORIES)


def fields_in(category: StatCategory) -> Tuple[str, ...]:
    """Campos de uma categoria, na ordem do catálogo"""
    return tuple(name for name, cat in FIELD_CATEGORIES.items() if cat is category)


GOAL_FIELDS = fields_in(StatCategory.GOAL)
MISS_FIELDS = fields_in(StatCategory.MISS)
SAVE_FIELDS = fields_in(StatCategory.SAVE)
CONCEDE_FIELDS = fields_in(StatCategory.CONCEDE)
DERIVED_FIELDS = fields_in(StatCategory.DERIVED)

# portero_goles_boya é o nome antigo da categoria boya; entra no total do
# goleiro mas não no placar do rival
LEGACY_CONCEDE_FIELDS: Tuple[str, ...] = ("portero_goles_boya",)
RIVAL_SCORE_FIELDS: Tuple[str, ...] = tuple(
    name for name in CONCEDE_FIELDS if name not in LEGACY_CONCEDE_FIELDS
)
KEEPER_GOAL_FIELD = "portero_gol"
PENALTY_SAVE_FIELD = "portero_paradas_penalti_parado"


def is_counter(field: str) -> bool:
    """Verifica se o nome é um contador conhecido"""
    return field in FIELD_CATEGORIES


def category_of(field: str) -> StatCategory:
    """Retorna a categoria de um campo"""
    try:
        return FIELD_CATEGORIES[field]
    except KeyError:
        raise UnknownStatFieldError(f"Campo de estatística desconhecido: {field}", field=field)


def ensure_editable(field: str) -> StatCategory:
    """Garante que o campo existe e pode ser escrito pelo usuário"""
    category = category_of(field)
    if category is StatCategory.DERIVED:
        raise DerivedFieldError(f"O campo {field} é calculado automaticamente", field=field)
    return category


def safe_number(value: Any) -> int:
    """Converte qualquer entrada em contador não negativo (None, NaN e lixo viram 0)"""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        value = int(value)
    elif not isinstance(value, int):
        try:
            value = int(float(str(value).strip()))
        except (TypeError, ValueError, OverflowError):
            return 0
    return value if value > 0 else 0


def empty_stats() -> Dict[str, int]:
    """Template com todos os contadores zerados"""
    return {name: 0 for name in STAT_FIELDS}
