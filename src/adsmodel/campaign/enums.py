"""Closed enumerations referenced by the Campaign resource.

Wire values are the declared integers. Every enum reserves 0 for
UNSPECIFIED and 1 for UNKNOWN (a value the client version cannot name).
"""

from enum import IntEnum


class CampaignStatus(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    ENABLED = 2
    PAUSED = 3
    REMOVED = 4


class CampaignServingStatus(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    SERVING = 2
    NONE = 3
    ENDED = 4
    PENDING = 5
    SUSPENDED = 6


class AdServingOptimizationStatus(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    OPTIMIZE = 2
    CONVERSION_OPTIMIZE = 3
    ROTATE = 4
    ROTATE_INDEFINITELY = 5
    UNAVAILABLE = 6


class AdvertisingChannelType(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    SEARCH = 2
    DISPLAY = 3
    SHOPPING = 4
    HOTEL = 5
    VIDEO = 6


class AdvertisingChannelSubType(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    SEARCH_MOBILE_APP = 2
    DISPLAY_MOBILE_APP = 3
    SEARCH_EXPRESS = 4
    DISPLAY_EXPRESS = 5
    SHOPPING_SMART_ADS = 6
    DISPLAY_GMAIL_AD = 7
    DISPLAY_SMART_CAMPAIGN = 8
    VIDEO_OUTSTREAM = 9
    VIDEO_ACTION = 10
    VIDEO_NON_SKIPPABLE = 11


class BiddingStrategyType(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    ENHANCED_CPC = 2
    MANUAL_CPC = 3
    MANUAL_CPM = 4
    PAGE_ONE_PROMOTED = 5
    TARGET_CPA = 6
    TARGET_OUTRANK_SHARE = 7
    TARGET_ROAS = 8
    TARGET_SPEND = 9
    MAXIMIZE_CONVERSIONS = 10
    MAXIMIZE_CONVERSION_VALUE = 11
    PERCENT_CPC = 12
    MANUAL_CPV = 13
    TARGET_CPM = 14


class BrandSafetySuitability(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    EXPANDED_INVENTORY = 2
    STANDARD_INVENTORY = 3
    LIMITED_INVENTORY = 4


class VanityPharmaDisplayUrlMode(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    MANUFACTURER_WEBSITE_URL = 2
    WEBSITE_DESCRIPTION = 3


class VanityPharmaText(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    PRESCRIPTION_TREATMENT_WEBSITE_EN = 2
    PRESCRIPTION_TREATMENT_WEBSITE_ES = 3
    PRESCRIPTION_DEVICE_WEBSITE_EN = 4
    PRESCRIPTION_DEVICE_WEBSITE_ES = 5
    MEDICAL_DEVICE_WEBSITE_EN = 6
    MEDICAL_DEVICE_WEBSITE_ES = 7
    PREVENTATIVE_TREATMENT_WEBSITE_EN = 8
    PREVENTATIVE_TREATMENT_WEBSITE_ES = 9
    PRESCRIPTION_CONTRACEPTION_WEBSITE_EN = 10
    PRESCRIPTION_CONTRACEPTION_WEBSITE_ES = 11
    PRESCRIPTION_VACCINE_WEBSITE_EN = 12
    PRESCRIPTION_VACCINE_WEBSITE_ES = 13


class FrequencyCapLevel(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    AD_GROUP_AD = 2
    AD_GROUP = 3
    CAMPAIGN = 4


class FrequencyCapTimeUnit(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    DAY = 2
    WEEK = 3
    MONTH = 4


class FrequencyCapEventType(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    IMPRESSION = 2
    VIDEO_VIEW = 3


class TargetingDimension(IntEnum):
    UNSPECIFIED = 0
    UNKNOWN = 1
    KEYWORD = 2
    AUDIENCE = 3
    TOPIC = 4
    GENDER = 5
    AGE_RANGE = 6
    PLACEMENT = 7
    PARENTAL_STATUS = 8
    INCOME_RANGE = 9
