"""Modelo MatchStats"""
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from waterpolo.models.base import BaseModel


class MatchStats(BaseModel):
    """Contadores de um jogador em um partido (derivados gravados já calculados)"""
    __tablename__ = "match_stats"

    match_id = Column(Integer, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False, index=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False, index=True)

    # Gols
    goles_totales = Column(Integer, default=0)
    goles_boya_jugada = Column(Integer, default=0)
    goles_hombre_mas = Column(Integer, default=0)
    goles_lanzamiento = Column(Integer, default=0)
    goles_dir_mas_5m = Column(Integer, default=0)
    goles_contraataque = Column(Integer, default=0)
    goles_penalti_anotado = Column(Integer, default=0)
    goles_penalti_juego = Column(Integer, default=0)
    goles_boya_cada = Column(Integer, default=0)
    goles_penalti_fallo = Column(Integer, default=0)
    goles_corner = Column(Integer, default=0)
    goles_fuera = Column(Integer, default=0)
    goles_parados = Column(Integer, default=0)
    goles_bloqueado = Column(Integer, default=0)
    goles_eficiencia = Column(Integer, default=0)

    # Arremessos
    tiros_totales = Column(Integer, default=0)
    tiros_hombre_mas = Column(Integer, default=0)
    tiros_penalti_fallado = Column(Integer, default=0)
    tiros_corner = Column(Integer, default=0)
    tiros_fuera = Column(Integer, default=0)
    tiros_parados = Column(Integer, default=0)
    tiros_bloqueado = Column(Integer, default=0)
    tiros_contraataque = Column(Integer, default=0)
    tiros_boya_cada = Column(Integer, default=0)
    tiros_lanzamiento = Column(Integer, default=0)
    tiros_dir_mas_5m = Column(Integer, default=0)
    tiros_penalti_juego = Column(Integer, default=0)
    tiros_eficiencia = Column(Integer, default=0)

    # Faltas
    faltas_exp_20_1c1 = Column(Integer, default=0)
    faltas_exp_20_boya = Column(Integer, default=0)
    faltas_penalti = Column(Integer, default=0)
    faltas_contrafaltas = Column(Integer, default=0)
    faltas_exp_3_int = Column(Integer, default=0)
    faltas_exp_3_bruta = Column(Integer, default=0)
    faltas_exp_simple = Column(Integer, default=0)

    # Ações
    acciones_bloqueo = Column(Integer, default=0)
    acciones_asistencias = Column(Integer, default=0)
    acciones_recuperacion = Column(Integer, default=0)
    acciones_rebote = Column(Integer, default=0)
    acciones_exp_provocada = Column(Integer, default=0)
    acciones_penalti_provocado = Column(Integer, default=0)
    acciones_recibir_gol = Column(Integer, default=0)
    acciones_perdida_poco = Column(Integer, default=0)

    # Goleiro: gols sofridos
    portero_goles_totales = Column(Integer, default=0)
    portero_goles_boya_parada = Column(Integer, default=0)
    portero_goles_hombre_menos = Column(Integer, default=0)
    portero_goles_dir_mas_5m = Column(Integer, default=0)
    portero_goles_contraataque = Column(Integer, default=0)
    portero_goles_penalti = Column(Integer, default=0)
    portero_goles_lanzamiento = Column(Integer, default=0)
    portero_gol_palo = Column(Integer, default=0)
    portero_goles_boya = Column(Integer, default=0)
    portero_goles_penalti_encajado = Column(Integer, default=0)

    # Goleiro: defesas
    portero_paradas_totales = Column(Integer, default=0)
    portero_tiros_parada_recup = Column(Integer, default=0)
    portero_paradas_fuera = Column(Integer, default=0)
    portero_paradas_penalti_parado = Column(Integer, default=0)
    portero_paradas_hombre_menos = Column(Integer, default=0)
    portero_paradas_parada_recup = Column(Integer, default=0)
    portero_paradas_pedida = Column(Integer, default=0)
    portero_tiros_parado = Column(Integer, default=0)
    portero_lanz_palo = Column(Integer, default=0)
    portero_inferioridad_fuera = Column(Integer, default=0)
    portero_inferioridad_bloqueo = Column(Integer, default=0)

    # Goleiro: ataque e ações
    portero_gol = Column(Integer, default=0)
    portero_gol_superioridad = Column(Integer, default=0)
    portero_fallo_superioridad = Column(Integer, default=0)
    portero_acciones_asistencias = Column(Integer, default=0)
    portero_acciones_recuperacion = Column(Integer, default=0)
    portero_acciones_perdida_pos = Column(Integer, default=0)
    portero_acciones_exp_provocada = Column(Integer, default=0)
    portero_acciones_rebote = Column(Integer, default=0)
    portero_acciones_gol_recibido = Column(Integer, default=0)
    portero_faltas_exp_3_int = Column(Integer, default=0)
    portero_exp_provocada = Column(Integer, default=0)
    portero_penalti_provocado = Column(Integer, default=0)
    portero_recibir_gol = Column(Integer, default=0)

    # Relationships
    match = relationship("Match", backref="stats")
    player = relationship("Player", backref="match_stats")

    __table_args__ = (
        UniqueConstraint('match_id', 'player_id', name='uq_match_stats_player'),
    )

    def __repr__(self):
        return (
            f"<MatchStats(match_id={self.match_id}, player_id={self.player_id}, "
            f"goals={self.goles_totales})>"
        )
