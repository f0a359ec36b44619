"""Pydantic models for adsmodel configuration."""

from pydantic import BaseModel, Field


class ValidatorConfig(BaseModel):
    """How strictly campaign invariants are enforced."""

    strict_subtypes: bool = True  # False reports sub-type mismatches as warnings
    strict_bidding: bool = True  # False reports bidding oneof conflicts as warnings
    max_name_length: int = Field(default=0, ge=0)  # 0 = no limit
    check_dates: bool = True


class CodecConfig(BaseModel):
    """Binary decoding behavior."""

    preserve_unknown_fields: bool = True
    max_depth: int = Field(default=100, ge=1)


class AdsModelConfig(BaseModel):
    """Top-level configuration file."""

    validator: ValidatorConfig = Field(default_factory=ValidatorConfig)
    codec: CodecConfig = Field(default_factory=CodecConfig)
