"""Exceções do motor de registro de partidos"""
from typing import Optional


class MatchEngineError(ValueError):
    """Erro base do motor de registro de partidos"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class UnknownStatFieldError(MatchEngineError):
    """Campo de estatística inexistente"""


class DerivedFieldError(MatchEngineError):
    """Tentativa de escrever um campo derivado"""


class UnknownPlayerError(MatchEngineError):
    """Jogador não pertence ao elenco do clube"""

    status_code = 404


class PlayerNotActiveError(MatchEngineError):
    """Jogador não está convocado para o partido"""

    status_code = 409


class PlayerAlreadyActiveError(MatchEngineError):
    """Jogador já está convocado"""

    status_code = 409


class RosterFullError(MatchEngineError):
    """Limite de jogadores de campo atingido"""

    status_code = 409


class PlayerHasStatsError(MatchEngineError):
    """Jogador já tem estatísticas registradas"""

    status_code = 409


class RoleMismatchError(MatchEngineError):
    """Substituição entre goleiro e jogador de campo"""

    status_code = 409


class QuarterClosedError(MatchEngineError):
    """Parcial fechado não aceita edição"""

    status_code = 409


class QuarterNotActiveError(MatchEngineError):
    """Só o parcial ativo aceita correção manual"""

    status_code = 409


class QuarterScoreMismatchError(MatchEngineError):
    """Correção do último parcial aberto não fecha com o placar"""

    status_code = 409


class PenaltyError(MatchEngineError):
    """Operação inválida na disputa de pênaltis"""


class MatchValidationError(MatchEngineError):
    """Partido não pode ser salvo no estado atual"""

    status_code = 422


class MatchNotFoundError(MatchEngineError):
    """Partido não encontrado"""

    status_code = 404


class SessionNotFoundError(MatchEngineError):
    """Sessão de edição inexistente ou expirada"""

    status_code = 404


class MatchSaveError(Exception):
    """Falha genérica ao persistir o partido"""

    def __init__(self, message: str = "Erro ao salvar o partido"):
        super().__init__(message)
        self.message = message
