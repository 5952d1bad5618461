"""Collection of API route modules (equipos, jugadores, catalog, inscripciones)."""

__all__ = [
    "equipos",
    "jugadores",
    "centros",
    "ciclos",
    "estudios",
    "inscripciones",
]
