"""adsmodel - Ads resource schemas with a tag-based wire codec."""

__version__ = "0.3.0"
