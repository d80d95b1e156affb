"""
Weather adapter: Open-Meteo geocoding + current conditions (free, no API key).
https://open-meteo.com/en/docs
"""

import re

import httpx

from app.core.config import DEFAULT_WEATHER_CITY, OPEN_METEO_FORECAST, OPEN_METEO_GEOCODE
from app.core.errors import SourceUnavailableError
from app.schemas.search import SearchResult
from app.sources.base import ensure_ok, source_adapter

SOURCE = "weather"

# Text preceding 天气/weather, e.g. "北京今天天气怎么样" -> "北京"
_CITY_BEFORE_KEYWORD = re.compile(
    r"([一-龥A-Za-z][一-龥A-Za-z ]*?)\s*(?:今天|明天|今日|现在|目前|的)*\s*(?:天气|weather)",
    re.IGNORECASE,
)
# "weather in London", "weather for New York"
_CITY_AFTER_KEYWORD = re.compile(r"weather\s+(?:in|at|for)\s+([A-Za-z][A-Za-z .-]*)", re.IGNORECASE)
_LEADING_NOISE = re.compile(
    r"^(?:请问|帮我|查一下|查查|看看|告诉我|今天|明天|今日|现在|目前|what's\b|what is\b|how is\b|the\b|\s)+",
    re.IGNORECASE,
)

# WMO weather codes (abbreviated) for Open-Meteo
_WMO_CODES = {
    0: "晴",
    1: "大致晴朗",
    2: "局部多云",
    3: "阴",
    45: "雾",
    48: "冻雾",
    51: "小毛毛雨",
    53: "毛毛雨",
    55: "大毛毛雨",
    61: "小雨",
    63: "中雨",
    65: "大雨",
    71: "小雪",
    73: "中雪",
    75: "大雪",
    80: "小阵雨",
    81: "阵雨",
    82: "强阵雨",
    95: "雷暴",
    96: "雷暴伴小冰雹",
    99: "雷暴伴大冰雹",
}


def extract_city(query: str) -> str:
    """City named in the query, or DEFAULT_WEATHER_CITY when none is found."""
    text = (query or "").strip()
    match = _CITY_AFTER_KEYWORD.search(text) or _CITY_BEFORE_KEYWORD.search(text)
    if match:
        city = _LEADING_NOISE.sub("", match.group(1)).strip(" .-")
        if city:
            return city
    return DEFAULT_WEATHER_CITY


@source_adapter(SOURCE)
async def fetch(client: httpx.AsyncClient, query: str) -> SearchResult | None:
    city = extract_city(query)
    geo = await client.get(OPEN_METEO_GEOCODE, params={"name": city, "count": 1, "language": "zh"})
    ensure_ok(geo, "geocode")
    results = geo.json().get("results") or []
    if not results:
        raise SourceUnavailableError(f"no location found for {city!r}")
    loc = results[0]
    lat = loc.get("latitude")
    lon = loc.get("longitude")
    if lat is None or lon is None:
        raise SourceUnavailableError(f"no coordinates for {city!r}")
    forecast = await client.get(
        OPEN_METEO_FORECAST,
        params={
            "latitude": lat,
            "longitude": lon,
            "current": "temperature_2m,relative_humidity_2m,weather_code,wind_speed_10m",
            "timezone": "auto",
        },
    )
    ensure_ok(forecast, "forecast")
    cur = forecast.json().get("current") or {}
    if not cur:
        raise SourceUnavailableError("forecast has no current conditions")
    code = cur.get("weather_code")
    if code is None:
        condition = "未知"
    else:
        condition = _WMO_CODES.get(code, f"天气代码 {code}")
    name = loc.get("name", city)
    lines = [f"{name}当前天气：{condition}"]
    if cur.get("temperature_2m") is not None:
        lines.append(f"温度：{cur['temperature_2m']}°C")
    if cur.get("relative_humidity_2m") is not None:
        lines.append(f"湿度：{cur['relative_humidity_2m']}%")
    if cur.get("wind_speed_10m") is not None:
        lines.append(f"风速：{cur['wind_speed_10m']} km/h")
    return SearchResult(source=SOURCE, content="\n".join(lines), confidence=0.9)
