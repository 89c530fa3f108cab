"""
Built-in tools for the ragllm package.
"""

from ragllm.tools.weather import WEATHER_DATA, WeatherReport, weather, weather_report

__all__ = [
    "WEATHER_DATA",
    "WeatherReport",
    "weather",
    "weather_report",
]
