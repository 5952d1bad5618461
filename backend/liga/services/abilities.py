"""Token ability names checked by the team, player and enrollment services."""

from __future__ import annotations

CREAR_EQUIPO = "crear_equipo"


def editar_equipo(equipo_id: int) -> str:
    return f"editar_equipo_{equipo_id}"


def borrar_equipo(equipo_id: int) -> str:
    return f"borrar_equipo_{equipo_id}"


def crear_jugador_equipo(equipo_nombre: str) -> str:
    # Keyed by team name, unlike the other player abilities
    return f"crear_jugador_equipo_{equipo_nombre}"


def actualizar_jugador_equipo(equipo_id: int) -> str:
    return f"actualizar_jugador_equipo_{equipo_id}"


def borrar_jugador_equipo(equipo_id: int) -> str:
    return f"borrar_jugador_equipo_{equipo_id}"
