"""
Current conditions from OpenWeatherMap.
"""

import logging
from typing import Any, Dict, Optional

import requests

from .errors import WeatherError

logger = logging.getLogger(__name__)

API_URL = "https://api.openweathermap.org/data/2.5/weather"
UNKNOWN_ICON = "❓"

WEATHER_ICONS = {
    "01d": "☀️",
    "01n": "🌙",
    "02d": "⛅️",
    "02n": "🌙",
    "03d": "☁️",
    "03n": "☁️",
    "04d": "☁️",
    "04n": "☁️",
    "09d": "🌧️",
    "09n": "🌧️",
    "10d": "🌧️",
    "10n": "🌧️",
    "11d": "⛈️",
    "11n": "⛈️",
    "13d": "🌨️",
    "13n": "🌨️",
    "40d": "🌫️",
    "40n": "🌫️",
    "50d": "🌫️",
    "50n": "🌫️",
}


def weather_icon(code: str) -> str:
    return WEATHER_ICONS.get(code, UNKNOWN_ICON)


def degree_unit(units: str) -> str:
    return "F" if units == "imperial" else "C"


def format_weather(payload: Dict[str, Any], units: str) -> str:
    """Render an API payload as ``{icon} {condition} {temp}°{unit}``"""
    try:
        condition = payload["weather"][0]
        # Truncated towards zero, not rounded
        temp = int(float(payload["main"]["temp"]))
        icon = weather_icon(condition["icon"])
        main = condition["main"]
    except (KeyError, IndexError, TypeError, ValueError, OverflowError) as e:
        raise WeatherError(f"Could not fetch weather because: unexpected response ({e!r})") from e
    return f"{icon} {main} {temp}°{degree_unit(units)}"


class WeatherClient:
    """Synchronous client for the current weather endpoint"""

    def __init__(self, session: Optional[requests.Session] = None, url: str = API_URL):
        self.session = session or requests.Session()
        self.url = url

    def fetch(self, location: str, units: str, lang: str, api_key: str) -> Dict[str, Any]:
        """Fetch current conditions for a location"""
        params = {"q": location, "units": units, "lang": lang, "appid": api_key}
        logger.debug("Requesting weather for %s", location)
        try:
            response = self.session.get(self.url, params=params)
        except requests.RequestException as e:
            raise WeatherError(f"Could not fetch weather because: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.ok:
            message = None
            if isinstance(payload, dict):
                message = payload.get("message")
            raise WeatherError(
                f"Could not fetch weather because: {message or response.reason} ({response.status_code})"
            )

        if not isinstance(payload, dict):
            raise WeatherError("Could not fetch weather because: response is not a JSON object")
        return payload

    def current(self, location: str, units: str, lang: str, api_key: str) -> str:
        """Fetch and format the current weather line"""
        return format_weather(self.fetch(location, units, lang, api_key), units)
