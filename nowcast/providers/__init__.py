from .base import HttpProvider, RequestConfig
from .openweathermap import OpenWeatherMapClient

__all__ = ["HttpProvider", "OpenWeatherMapClient", "RequestConfig"]
