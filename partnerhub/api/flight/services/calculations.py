"""
Cálculos de negócio do portal de companhias aéreas.

Funções puras (sem banco): preço dinâmico, ocupação, reembolso e analytics.
Datas são naive no fuso da aplicação, como nas colunas.
"""
import math
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

MIN_PRICE_RATIO = 0.2

# (horas antes da partida, % de reembolso), do maior para o menor
DEFAULT_REFUND_POLICIES = [
    (168, 100),
    (48, 75),
    (24, 50),
    (0, 0),
]

CONFIRMED_STATUSES = ("confirmed", "checked_in", "boarded", "completed")
INVALID_STATUSES = ("cancelled", "no_show")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def js_weekday(d: date) -> int:
    """Dia da semana com 0 = domingo."""
    return (d.weekday() + 1) % 7


def _as_date(value) -> Optional[date]:
    if value is None or (isinstance(value, date) and not isinstance(value, datetime)):
        return value
    if isinstance(value, datetime):
        return value.date()
    return date.fromisoformat(str(value)[:10])


# ---------------- Preço dinâmico ----------------
def is_rule_applicable(rule: dict, context: dict) -> bool:
    """
    Uma regra vale quando todas as condições presentes são atendidas.

    context: days_before_departure, seats_available, day_of_week, date
    """
    conditions = rule.get("conditions") or {}
    ctx_date = _as_date(context["date"])

    start = _as_date(conditions.get("start_date"))
    if start and ctx_date < start:
        return False
    end = _as_date(conditions.get("end_date"))
    if end and ctx_date > end:
        return False

    dbd = context["days_before_departure"]
    if conditions.get("days_before_departure_min") is not None and dbd < conditions["days_before_departure_min"]:
        return False
    if conditions.get("days_before_departure_max") is not None and dbd > conditions["days_before_departure_max"]:
        return False

    days_of_week = conditions.get("days_of_week")
    if days_of_week and context["day_of_week"] not in days_of_week:
        return False

    seats = context["seats_available"]
    if conditions.get("min_seats_available") is not None and seats < conditions["min_seats_available"]:
        return False
    if conditions.get("max_seats_available") is not None and seats > conditions["max_seats_available"]:
        return False

    return True


def calculate_dynamic_price(base_price: float, rules: Iterable[dict], context: dict) -> float:
    """
    Aplica as regras ativas por prioridade decrescente.

    percentage: preço × (1 + v/100); fixed_amount: preço + v.
    Resultado arredondado e nunca abaixo de 20% do preço base.
    """
    base_price = float(base_price)
    price = base_price

    active = [r for r in rules if r.get("is_active", True)]
    for rule in sorted(active, key=lambda r: r.get("priority") or 0, reverse=True):
        if not is_rule_applicable(rule, context):
            continue
        value = float(rule.get("adjustment_value") or 0)
        if rule.get("adjustment_type") == "percentage":
            price = price * (1 + value / 100)
        elif rule.get("adjustment_type") == "fixed_amount":
            price = price + value

    return max(float(round_half_up(price)), base_price * MIN_PRICE_RATIO)


# ---------------- Ocupação ----------------
def calculate_load_factor(seats_booked: int, total_seats: int) -> float:
    if not total_seats:
        return 0.0
    return round_half_up(seats_booked / total_seats * 10000) / 100


def calculate_yield_per_seat(revenue: float, seats_booked: int) -> int:
    if not seats_booked:
        return 0
    return round_half_up(float(revenue) / seats_booked)


def calculate_rask(revenue: float, available_seats: int, distance_km: float) -> float:
    """Receita por assento-km disponível."""
    available_seat_km = available_seats * float(distance_km or 0)
    if not available_seat_km:
        return 0.0
    return float(revenue) / available_seat_km


# ---------------- Reembolso ----------------
def calculate_refund_amount(
    total_amount: float,
    departure_at: datetime,
    cancelled_at: Optional[datetime] = None,
    policies: Optional[list] = None,
) -> dict:
    cancelled_at = cancelled_at or datetime.now()
    hours_before = (departure_at - cancelled_at).total_seconds() / 3600

    percentage = 0
    for min_hours, pct in sorted(policies or DEFAULT_REFUND_POLICIES, key=lambda p: p[0], reverse=True):
        if hours_before >= min_hours:
            percentage = pct
            break

    return {
        "refund_amount": round_half_up(float(total_amount) * percentage / 100),
        "refund_percentage": percentage,
        "hours_before": round(hours_before, 1),
    }


# ---------------- Analytics ----------------
def calculate_flight_analytics(bookings: list[dict]) -> dict:
    """
    bookings: dicts com total_price, passenger_count, created_at, departure_at, status
    """
    valid = [b for b in bookings if b["status"] not in INVALID_STATUSES]
    confirmed = [b for b in bookings if b["status"] in CONFIRMED_STATUSES]
    cancelled = [b for b in bookings if b["status"] == "cancelled"]
    pending = [b for b in bookings if b["status"] == "pending"]

    total_bookings = len(bookings)
    total_revenue = sum(float(b["total_price"] or 0) for b in bookings)
    total_passengers = sum(b.get("passenger_count") or 1 for b in bookings)

    confirmed_revenue = sum(float(b["total_price"] or 0) for b in confirmed)
    cancelled_revenue = sum(float(b["total_price"] or 0) for b in cancelled)

    lead_times = [
        (b["departure_at"] - b["created_at"]).total_seconds() / 86400
        for b in valid
        if b.get("departure_at") and b.get("created_at")
    ]
    lead_times = [d for d in lead_times if d >= 0]

    def _rate(n: int) -> float:
        return round_half_up(n / total_bookings * 10000) / 100 if total_bookings else 0.0

    return {
        "total": {
            "bookings": total_bookings,
            "revenue": total_revenue,
            "passengers": total_passengers,
        },
        "status": {
            "confirmed": len(confirmed),
            "cancelled": len(cancelled),
            "pending": len(pending),
        },
        "revenue": {
            "confirmed": confirmed_revenue,
            "cancelled": cancelled_revenue,
            "net": confirmed_revenue,
        },
        "averages": {
            "booking_value": round_half_up(total_revenue / len(valid)) if valid else 0,
            "passengers_per_booking": round(total_passengers / len(valid), 2) if valid else 0,
            "lead_time_days": round_half_up(sum(lead_times) / len(lead_times)) if lead_times else 0,
        },
        "rates": {
            "cancellation_rate": _rate(len(cancelled)),
            "confirmation_rate": _rate(len(confirmed)),
        },
    }


def calculate_growth(current: float, previous: float) -> dict:
    absolute = current - previous
    if previous:
        percentage = round_half_up(absolute / previous * 10000) / 100
    else:
        percentage = 100.0 if current > 0 else 0.0

    trend = "stable"
    if absolute > 0:
        trend = "up"
    elif absolute < 0:
        trend = "down"
    return {"absolute": absolute, "percentage": percentage, "trend": trend}


# ---------------- Períodos ----------------
PERIODS = ("today", "yesterday", "last_7_days", "last_30_days", "this_month", "last_month")
DEFAULT_PERIOD = "last_30_days"


def resolve_period(period: Optional[str]) -> str:
    """Nome de período suportado; vazio ou desconhecido vira last_30_days."""
    return period if period in PERIODS else DEFAULT_PERIOD


def _start_of(d: date) -> datetime:
    return datetime.combine(d, time.min)


def _end_of(d: date) -> datetime:
    return datetime.combine(d, time.max)


def get_date_range(period: str, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Intervalo [início, fim] do período; desconhecido cai em last_30_days."""
    now = now or datetime.now()
    today = now.date()
    if period == "today":
        return _start_of(today), _end_of(today)
    if period == "yesterday":
        y = today - timedelta(days=1)
        return _start_of(y), _end_of(y)
    if period == "last_7_days":
        return _start_of(today - timedelta(days=7)), now
    if period == "this_month":
        return _start_of(today.replace(day=1)), now
    if period == "last_month":
        last_day_prev = today.replace(day=1) - timedelta(days=1)
        return _start_of(last_day_prev.replace(day=1)), _end_of(last_day_prev)
    return _start_of(today - timedelta(days=30)), now


def previous_range(start: datetime, end: datetime) -> tuple[datetime, datetime]:
    """Período anterior de mesma duração, imediatamente antes de `start`."""
    return start - (end - start), start
