"""
Weather tool - canned weather reports for a handful of cities.

Stands in for a real weather API in examples and tests.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ragllm.core import tool


class WeatherReport(BaseModel):
    city: str
    temperature: str
    conditions: str


WEATHER_DATA = {
    "London": WeatherReport(city="London", temperature="15°C", conditions="Rainy"),
    "Stockholm": WeatherReport(city="Stockholm", temperature="10°C", conditions="Sunny"),
    "Brno": WeatherReport(city="Brno", temperature="18°C", conditions="Clear skies"),
}


def weather_report(city: str) -> WeatherReport:
    """Look up the report for ``city``.

    Raises:
        ValueError: The city is not known.
    """
    report = WEATHER_DATA.get(city)
    if report is None:
        raise ValueError("city not found")
    return report


@tool(name="weather", description="Get weather report for a city")
def weather(
    city: str = Field(description="The city for which to get the weather report"),
) -> WeatherReport:
    return weather_report(city)
