"""Rate stat formulas and their display formatting."""

from __future__ import annotations


def batting_average(h: float, ab: float) -> float:
    return h / ab if ab > 0 else 0.0


def on_base_pct(h: float, bb: float, ab: float) -> float:
    opportunities = ab + bb
    return (h + bb) / opportunities if opportunities > 0 else 0.0


def slugging(tb: float, ab: float) -> float:
    return tb / ab if ab > 0 else 0.0


def on_base_plus_slugging(h: float, bb: float, tb: float, ab: float) -> float:
    if ab <= 0:
        return 0.0
    return on_base_pct(h, bb, ab) + slugging(tb, ab)


def earned_run_average(r: float, ip: float) -> float:
    return r * 9 / ip if ip > 0 else 0.0


def whip(h: float, bb: float, ip: float) -> float:
    return (h + bb) / ip if ip > 0 else 0.0


def batting_average_against(h: float, bf: float) -> float:
    return h / bf if bf > 0 else 0.0


def per_game(total: float, games: float) -> float:
    return total / games if games > 0 else 0.0


def win_pct(wins: float, losses: float) -> float:
    games = wins + losses
    return wins / games if games > 0 else 0.0


def format_rate(value: float) -> str:
    """Three-decimal rate in baseball style: ``.412`` below one, ``1.023`` above."""

    text = f"{value:.3f}"
    if text.startswith("0."):
        return text[1:]
    return text


def format_decimal(value: float, places: int = 2) -> str:
    return f"{value:.{places}f}"


def format_count(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return format_decimal(value, 2)
