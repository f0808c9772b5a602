"""Weather data from OpenWeatherMap and its estimated effect on demand.

Upstream responses are cached under the global namespace. Without an API
key, or when the upstream call fails, a deterministic fallback derived from
the location and date is served instead and is not cached.
"""

from __future__ import annotations

import logging
import math
import random
from collections import Counter, defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Any

import httpx

from intellecty.core.config import Settings
from intellecty.infrastructure.cache import CacheStrategies, external_api_key
from intellecty.infrastructure.cache.keys import canonical_digest
from intellecty.schemas.external import (
    CurrentWeather,
    DailyWeather,
    GeoPoint,
    TemperatureRange,
    WeatherData,
    WeatherImpact,
)

logger = logging.getLogger(__name__)

# OpenWeatherMap forecast entries are 3 hours apart.
SAMPLES_PER_DAY = 8
FALLBACK_CONDITIONS = ("Clear", "Cloudy", "Rain", "Sunny")

# (optimal temperature C, sensitivity)
TEMPERATURE_PROFILES = {
    "clothing": (20, 0.8),
    "beverages": (25, 0.9),
    "food": (15, 0.6),
    "electronics": (22, 0.3),
    "automotive": (18, 0.4),
}
DEFAULT_TEMPERATURE_PROFILE = (20, 0.5)

# (rain boost, sensitivity)
PRECIPITATION_PROFILES = {
    "umbrellas": (1.5, 0.9),
    "clothing": (0.8, 0.6),
    "food": (0.9, 0.4),
    "electronics": (0.7, 0.3),
    "automotive": (1.2, 0.7),
}
DEFAULT_PRECIPITATION_PROFILE = (1.0, 0.5)

IMPACT_WEIGHTS = {"temperature": 0.4, "precipitation": 0.3, "seasonality": 0.3}


class WeatherUpstreamError(Exception):
    """OpenWeatherMap returned something we cannot use."""


def process_forecast(entries: list[dict[str, Any]], days: int) -> list[DailyWeather]:
    """Collapse 3-hourly forecast entries into per-day summaries.

    Days keep first-seen order. Temperatures are rounded min/max, humidity
    the rounded mean, precipitation the summed 3h rain to one decimal and
    the condition the most frequent one.
    """
    grouped: dict[str, list[dict[str, Any]]] = defaultdict(list)
    for entry in entries:
        day = datetime.fromtimestamp(entry["dt"], tz=timezone.utc).date().isoformat()
        grouped[day].append(entry)

    daily = []
    for day, items in list(grouped.items())[:days]:
        temps = [i["main"]["temp"] for i in items]
        humidities = [i["main"]["humidity"] for i in items]
        rain = sum(i.get("rain", {}).get("3h", 0) for i in items)
        conditions = Counter(i["weather"][0]["main"] for i in items)
        daily.append(
            DailyWeather(
                date=day,
                temperature=TemperatureRange(min=round(min(temps)), max=round(max(temps))),
                humidity=round(sum(humidities) / len(humidities)),
                precipitation=round(rain, 1),
                condition=conditions.most_common(1)[0][0],
            )
        )
    return daily


def fallback_weather(lat: float, lon: float, days: int, today: date | None = None) -> WeatherData:
    """Deterministic stand-in weather for a location and day."""
    today = today or datetime.now(timezone.utc).date()
    base_temp = 20 + math.sin(today.toordinal()) * 10
    rng = random.Random(f"{lat:.4f}|{lon:.4f}|{today.isoformat()}")
    now = datetime.now(timezone.utc).isoformat()
    return WeatherData(
        current=CurrentWeather(
            temperature=round(base_temp),
            humidity=65,
            precipitation=0,
            wind_speed=12,
            condition="Clear",
            date=now,
            location=f"Location {lat:.2f}, {lon:.2f}",
        ),
        forecast=[
            DailyWeather(
                date=(today + timedelta(days=i)).isoformat(),
                temperature=TemperatureRange(
                    min=round(base_temp - 5 + rng.random() * 3),
                    max=round(base_temp + 5 + rng.random() * 3),
                ),
                humidity=round(60 + rng.random() * 20, 1),
                precipitation=round(rng.random() * 10, 1),
                condition=rng.choice(FALLBACK_CONDITIONS),
            )
            for i in range(days)
        ],
        location=GeoPoint(lat=lat, lon=lon),
        fetched_at=now,
        source="fallback",
    )


def temperature_impact(temperature: float, category: str) -> float:
    optimal, sensitivity = TEMPERATURE_PROFILES.get(category, DEFAULT_TEMPERATURE_PROFILE)
    return max(0.0, 1 - abs(temperature - optimal) / 20) * sensitivity


def precipitation_impact(precipitation: float, category: str) -> float:
    rain_boost, sensitivity = PRECIPITATION_PROFILES.get(category, DEFAULT_PRECIPITATION_PROFILE)
    factor = min(2.0, 1 + precipitation / 10)
    return (factor * rain_boost - 1) * sensitivity


def seasonality_impact(day: date, seasonality: float) -> float:
    """Peaks mid-year, bottoms out around new year, scaled to [0, seasonality]."""
    day_of_year = day.timetuple().tm_yday
    factor = math.sin(day_of_year / 365 * 2 * math.pi - math.pi / 2)
    return (factor + 1) / 2 * seasonality


def data_confidence(data: WeatherData, now: datetime | None = None) -> float:
    now = now or datetime.now(timezone.utc)
    age_hours = max(0.0, (now - datetime.fromisoformat(data.fetched_at)).total_seconds() / 3600)
    confidence = 0.8 - min(0.3, age_hours / 24 * 0.1)
    if len(data.forecast) < 3:
        confidence -= 0.2
    return max(0.1, confidence)


def analyze_impact(data: WeatherData, category: str, seasonality: float = 0.3) -> WeatherImpact:
    """Weighted weather impact on demand for a product category."""
    category = category.lower()
    current = data.current
    temperature = temperature_impact(current.temperature, category)
    precipitation = precipitation_impact(current.precipitation, category)
    season = seasonality_impact(datetime.fromisoformat(current.date).date(), seasonality)
    return WeatherImpact(
        temperature_impact=temperature,
        precipitation_impact=precipitation,
        seasonality_impact=season,
        overall_impact=(
            temperature * IMPACT_WEIGHTS["temperature"]
            + precipitation * IMPACT_WEIGHTS["precipitation"]
            + season * IMPACT_WEIGHTS["seasonality"]
        ),
        confidence=data_confidence(data),
    )


class WeatherService:
    """Location weather for demand analysis."""

    def __init__(
        self,
        strategies: CacheStrategies,
        http_client: httpx.AsyncClient,
        settings: Settings,
    ) -> None:
        self.strategies = strategies
        self.http = http_client
        self.ttl = settings.cache_ttl_external_api
        self.base_url = settings.openweather_base_url.rstrip("/")
        self.timeout = settings.external_api_timeout_seconds
        self.api_key = (
            settings.openweather_api_key.get_secret_value()
            if settings.openweather_api_key
            else None
        )

    async def get_forecast(self, lat: float, lon: float, days: int = 5) -> WeatherData:
        """Current weather plus a days-long daily forecast for (lat, lon)."""
        if not self.api_key:
            logger.debug("No OpenWeatherMap key configured; serving fallback weather")
            return fallback_weather(lat, lon, days)

        key = external_api_key(
            "weather", canonical_digest({"kind": "forecast", "lat": lat, "lon": lon, "days": days})
        )

        async def produce() -> dict:
            return (await self._fetch(lat, lon, days)).to_cache()

        try:
            return await self.strategies.cache_aside(
                key, produce, self.ttl, validate=WeatherData.model_validate
            )
        except (httpx.HTTPError, WeatherUpstreamError) as e:
            logger.warning("OpenWeatherMap request failed, serving fallback: %s", e)
            return fallback_weather(lat, lon, days)

    async def _get_json(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        response = await self.http.get(
            f"{self.base_url}/{path}",
            params={**params, "appid": self.api_key, "units": "metric"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as e:
            raise WeatherUpstreamError(f"invalid JSON from {path}") from e

    async def _fetch(self, lat: float, lon: float, days: int) -> WeatherData:
        coords = {"lat": lat, "lon": lon}
        current_raw = await self._get_json("weather", coords)
        forecast_raw = await self._get_json("forecast", {**coords, "cnt": days * SAMPLES_PER_DAY})
        now = datetime.now(timezone.utc).isoformat()
        try:
            current = CurrentWeather(
                temperature=round(current_raw["main"]["temp"]),
                humidity=current_raw["main"]["humidity"],
                precipitation=current_raw.get("rain", {}).get("1h", 0),
                wind_speed=current_raw["wind"]["speed"],
                condition=current_raw["weather"][0]["main"],
                date=now,
                location=current_raw.get("name") or f"Location {lat:.2f}, {lon:.2f}",
            )
            forecast = process_forecast(forecast_raw["list"], days)
        except (KeyError, IndexError, TypeError) as e:
            raise WeatherUpstreamError(f"unexpected OpenWeatherMap payload: {e!r}") from e
        return WeatherData(
            current=current,
            forecast=forecast,
            location=GeoPoint(lat=lat, lon=lon),
            fetched_at=now,
        )
