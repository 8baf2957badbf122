"""
Cálculos de calendario para la semana de visitas
"""
from datetime import date, timedelta
from typing import Dict, Iterable, List, Tuple

DAYS_PER_VISIT = 7

# Lunes a domingo
WEEK_LABELS = ("L", "M", "X", "J", "V", "S", "D")

# Orden de avance de un día de visita
STATE_PROGRESS = {"NO_REALIZADA": 0, "EN_PROGRESO": 1, "FINALIZADA": 2}

MONTHS_ES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre"
)


def consecutive_days(start: date, count: int = DAYS_PER_VISIT) -> List[date]:
    """Días consecutivos a partir de start, incluido"""
    return [start + timedelta(days=offset) for offset in range(count)]


def monday_of(anchor: date) -> date:
    """
    Lunes de la semana ISO que contiene anchor
    Un domingo pertenece a la semana que empezó seis días antes
    """
    return anchor - timedelta(days=anchor.weekday())


def summarize_week(anchor: date, rows: Iterable[Tuple[date, str]]) -> List[Dict]:
    """
    Resumen L..D de la semana de anchor

    Args:
        anchor: Cualquier fecha de la semana a resumir
        rows: Pares (día, estado) de los días de visita encontrados

    Returns:
        list: Siete entradas {day, date, state} en orden lunes a domingo.
        Un día sin filas queda NO_REALIZADA, un día con varias filas
        toma el estado menos avanzado.
    """
    by_day: Dict[date, str] = {}
    for day, state in rows:
        current = by_day.get(day)
        if current is None or STATE_PROGRESS[state] < STATE_PROGRESS[current]:
            by_day[day] = state

    week = consecutive_days(monday_of(anchor))
    return [
        {"day": label, "date": day, "state": by_day.get(day, "NO_REALIZADA")}
        for label, day in zip(WEEK_LABELS, week)
    ]


def format_long_date_es(value: date) -> str:
    """Fecha como '08 enero 2024'"""
    return f"{value.day:02d} {MONTHS_ES[value.month - 1]} {value.year}"
