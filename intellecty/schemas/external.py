"""Economic and weather data schemas."""

from intellecty.schemas.common import CamelModel


class EconomicIndicators(CamelModel):
    date: str
    gdp: float | None = None
    inflation: float | None = None
    unemployment: float | None = None
    consumer_confidence: float | None = None
    retail_sales: float | None = None
    manufacturing_pmi: float | None = None
    interest_rate: float | None = None
    exchange_rate: float | None = None


class Commodity(CamelModel):
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    date: str


class EconomicData(CamelModel):
    """Indicators and commodity quotes for one country."""

    indicators: EconomicIndicators
    commodities: list[Commodity]
    country: str
    fetched_at: str


class EconomicImpact(CamelModel):
    """Demand impact scores in [-1, 1] plus a confidence in [0.1, 0.8]."""

    gdp_impact: float
    inflation_impact: float
    consumer_confidence_impact: float
    retail_sales_impact: float
    commodity_impact: float
    overall_impact: float
    confidence: float


class EconomicReport(EconomicData):
    """Response data for GET /external-apis/economic."""

    impact: EconomicImpact | None = None


class CurrentWeather(CamelModel):
    temperature: float
    humidity: float
    precipitation: float
    wind_speed: float
    condition: str
    date: str
    location: str


class TemperatureRange(CamelModel):
    min: float
    max: float


class DailyWeather(CamelModel):
    date: str
    temperature: TemperatureRange
    humidity: float
    precipitation: float
    condition: str


class GeoPoint(CamelModel):
    lat: float
    lon: float


class WeatherData(CamelModel):
    """Current conditions plus a daily forecast for one location."""

    current: CurrentWeather
    forecast: list[DailyWeather]
    location: GeoPoint
    fetched_at: str
    source: str = "openweathermap"


class WeatherImpact(CamelModel):
    temperature_impact: float
    precipitation_impact: float
    seasonality_impact: float
    overall_impact: float
    confidence: float


class WeatherReport(WeatherData):
    """Response data for GET /external-apis/weather."""

    impact: WeatherImpact | None = None
