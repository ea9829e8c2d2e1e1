from datetime import datetime, date, time, timedelta
from zoneinfo import ZoneInfo

from partnerhub.config.settings import APP_TIMEZONE
#


def now_trimmed() -> datetime:
    """Retorna datetime atual no fuso da aplicação, sem microsegundos e sem tzinfo (padrão das colunas)."""
    return datetime.now(ZoneInfo(APP_TIMEZONE)).replace(microsecond=0, tzinfo=None)


def today_local() -> date:
    return now_trimmed().date()


def day_bounds(target_date: date) -> tuple[datetime, datetime]:
    start = datetime.combine(target_date, time.min)
    return start, start + timedelta(days=1)


def percent_change(current: float, previous: float) -> float:
    """Variação percentual com 1 casa; sem base anterior retorna 0."""
    if not previous:
        return 0.0
    return round((current - previous) / previous * 100, 1)


def to_local_naive(value: datetime) -> datetime:
    """Converte datetime com offset para o fuso da aplicação e remove tzinfo; naive passa direto."""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(APP_TIMEZONE)).replace(tzinfo=None)
