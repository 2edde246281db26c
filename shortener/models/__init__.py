from shortener.models.url_mapping import UrlMapping

__all__ = ["UrlMapping"]
