from .digipin import get_digipin, get_lat_lng_from_digipin

__all__ = ["get_digipin", "get_lat_lng_from_digipin"]
