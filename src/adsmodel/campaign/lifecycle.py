"""Campaign lifecycle: creation, updates and removal.

A campaign is built client side, created, then updated through a restricted
set of fields. It is never deleted; removal is a transition to REMOVED,
which is final. Which fields may change when is recorded on each field as a
``FieldBehavior``.
"""

import logging
from typing import List, Optional

from adsmodel.validation import ValidationResult
from adsmodel.wire.message import FieldBehavior, WireMessage

from .bidding import active_kind, derived_strategy_type
from .enums import BiddingStrategyType, CampaignStatus
from .models import Campaign

logger = logging.getLogger(__name__)


def fields_with_behavior(
    message_cls: type[WireMessage], behavior: FieldBehavior
) -> List[str]:
    """Names of the fields of ``message_cls`` declared with ``behavior``."""
    return [
        name
        for name, spec in message_cls.__wire_fields__.items()
        if spec.behavior is behavior
    ]


def behavior_at(message_cls: type[WireMessage], path: str) -> FieldBehavior:
    """Behavior of the field at a dotted path.

    A field inherits the strictest behavior along its path, so everything
    under an immutable message is immutable too.
    """
    behavior = FieldBehavior.MUTABLE
    cls: Optional[type] = message_cls
    for part in path.split("."):
        if cls is None:
            break
        spec = cls.__wire_fields__[part]
        if spec.behavior is not FieldBehavior.MUTABLE:
            behavior = spec.behavior
        cls = spec.message if spec.kind == "message" and not spec.repeated else None
    return behavior


def changed_fields(current: WireMessage, proposed: WireMessage, prefix: str = "") -> List[str]:
    """Dotted paths of the fields that differ between two messages.

    Singular nested messages are compared field by field. When one side
    is absent it is compared against an empty message, so fields set
    inside a message that appears or disappears are reported by their
    own paths. Anything else is reported at its own path.
    """
    paths = []
    for name, spec in type(current).__wire_fields__.items():
        before = getattr(current, name)
        after = getattr(proposed, name)
        if before == after:
            continue
        path = f"{prefix}{name}"
        nested = spec.kind == "message" and not spec.repeated
        if nested:
            inner = changed_fields(
                before if before is not None else spec.message(),
                after if after is not None else spec.message(),
                f"{path}.",
            )
            paths.extend(inner or [path])
        else:
            paths.append(path)
    return paths


def prepare_for_create(campaign: Campaign) -> Campaign:
    """Copy of ``campaign`` ready to submit for creation.

    Output-only fields are cleared, the status defaults to ENABLED and
    ``bidding_strategy_type`` is derived from the bidding strategy.
    """
    prepared = campaign.model_copy(deep=True)
    for name in fields_with_behavior(Campaign, FieldBehavior.OUTPUT_ONLY):
        if prepared.has_field(name):
            logger.debug(f"Clearing output-only field {name} before create")
            prepared.clear_field(name)
    if prepared.status == CampaignStatus.UNSPECIFIED:
        prepared.status = CampaignStatus.ENABLED
    prepared.bidding_strategy_type = (
        derived_strategy_type(prepared) or BiddingStrategyType.UNSPECIFIED
    )
    return prepared


def check_update(current: Campaign, proposed: Campaign) -> ValidationResult:
    """Check that ``proposed`` only changes what may change after creation.

    Before an ``id`` has been assigned the campaign is still a draft and
    every field may change.
    """
    result = ValidationResult()
    if current.id is None:
        return result

    if (
        current.status == CampaignStatus.REMOVED
        and proposed.status != CampaignStatus.REMOVED
    ):
        result.add("status", "a removed campaign cannot be restored", "campaign_removed")

    for path in changed_fields(current, proposed):
        behavior = behavior_at(Campaign, path)
        if behavior is FieldBehavior.IMMUTABLE:
            result.add(path, "cannot be changed after creation", "immutable_field_changed")
        elif behavior is FieldBehavior.OUTPUT_ONLY:
            if path == "bidding_strategy_type" and _follows_strategy(current, proposed):
                continue
            result.add(path, "is read-only", "output_only_field_changed")
    return result


def _follows_strategy(current: Campaign, proposed: Campaign) -> bool:
    """Whether the proposed strategy type is explained by the bidding strategy."""
    if active_kind(current) != active_kind(proposed):
        return True
    expected = derived_strategy_type(proposed) or BiddingStrategyType.UNSPECIFIED
    return proposed.bidding_strategy_type == expected


def remove(campaign: Campaign) -> Campaign:
    """Copy of ``campaign`` transitioned to REMOVED."""
    removed = campaign.model_copy(deep=True)
    removed.status = CampaignStatus.REMOVED
    return removed
