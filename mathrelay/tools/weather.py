"""Weather lookup — geocode a city name, then fetch current conditions.

Geocoding via Nominatim (OpenStreetMap), conditions via OpenWeatherMap.
"""

import logging

import requests

from ..config import config as default_config
from ..errors import UpstreamError

logger = logging.getLogger(__name__)


def _get_json(url, params, cfg, headers=None):
    try:
        resp = requests.get(url, params=params, headers=headers, timeout=cfg.http_timeout)
    except requests.exceptions.ConnectionError as e:
        raise UpstreamError(f"Cannot connect to {url}. Detail: {e}")
    except requests.exceptions.Timeout:
        raise UpstreamError(f"Request to {url} timed out ({cfg.http_timeout}s).")
    except requests.exceptions.RequestException as e:
        raise UpstreamError(f"Request to {url} failed: {e}")
    try:
        data = resp.json()
    except ValueError:
        raise UpstreamError(f"HTTP {resp.status_code} from {url}: invalid JSON body")
    return resp, data


def geocode(city: str, cfg=None) -> tuple:
    """Resolve a city name to (latitude, longitude)."""
    cfg = cfg or default_config
    try:
        resp, data = _get_json(
            cfg.geocode_url,
            {"format": "json", "q": city, "limit": 1},
            cfg,
            headers={"User-Agent": cfg.user_agent},
        )
        if not resp.ok:
            raise UpstreamError(f"HTTP {resp.status_code}")
        if not data:
            raise UpstreamError("City not found")
        return float(data[0]["lat"]), float(data[0]["lon"])
    except (UpstreamError, KeyError, TypeError, ValueError) as e:
        raise UpstreamError(f"Geocoding failed: {e}") from e


def current_weather(lat: float, lon: float, cfg=None) -> dict:
    cfg = cfg or default_config
    if not cfg.openweather_api_key:
        raise UpstreamError("OPENWEATHER_API_KEY is not configured")
    resp, data = _get_json(
        cfg.weather_url,
        {"lat": lat, "lon": lon, "appid": cfg.openweather_api_key, "units": "metric"},
        cfg,
    )
    if not resp.ok:
        message = data.get("message", resp.reason) if isinstance(data, dict) else resp.reason
        raise UpstreamError(f"Weather API error: {message}")
    return data


def format_report(data: dict, lat: float, lon: float) -> str:
    condition = data["weather"][0]
    main = data["main"]
    return "\n".join([
        f"Weather in {data['name']}, {data['sys']['country']}",
        f"Temperature: {main['temp']}°C (feels like {main['feels_like']}°C)",
        f"Condition: {condition['main']} - {condition['description']}",
        f"Humidity: {main['humidity']}%",
        f"Wind Speed: {data['wind']['speed']} m/s",
        f"Visibility: {data['visibility'] / 1000:g} km",
        f"Cloudiness: {data['clouds']['all']}%",
        f"Coordinates: {lat:.4f}, {lon:.4f}",
    ])


def weather_report(city: str, cfg=None) -> str:
    """Current-conditions summary for a city, or an error line. Never raises."""
    cfg = cfg or default_config
    try:
        lat, lon = geocode(city, cfg)
        data = current_weather(lat, lon, cfg)
        return format_report(data, lat, lon)
    except (UpstreamError, KeyError, IndexError, TypeError) as e:
        logger.warning("Weather lookup for %r failed: %s", city, e)
        return f"Error fetching weather for {city}: {e}"
