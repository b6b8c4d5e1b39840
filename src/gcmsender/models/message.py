"""
Module: message.py
Description: Outbound message models for the GCM legacy HTTP protocol.

Defines the request body sent to the gateway. Field names match the
wire format so the model can be dumped straight to JSON.

Key Components:
- Message: Target list plus delivery options and payload
- Notification: Display payload shown by the device

Bounds on the target list and time_to_live are not enforced here;
delivery.validation rejects out-of-range messages before any I/O.

Dependencies: pydantic, typing
"""

from typing import Dict, Any, Optional, List
from pydantic import BaseModel, Field


class Notification(BaseModel):
    """
    Notification payload displayed by the client app.

    All fields are optional and passed through to the gateway unchanged.
    """

    title: Optional[str] = None
    body: Optional[str] = None
    icon: Optional[str] = None
    sound: Optional[str] = None
    badge: Optional[str] = None
    tag: Optional[str] = None
    color: Optional[str] = None
    click_action: Optional[str] = None
    body_loc_key: Optional[str] = None
    body_loc_args: Optional[List[str]] = None
    title_loc_key: Optional[str] = None
    title_loc_args: Optional[List[str]] = None


class Message(BaseModel):
    """
    Message sent to one or more registration ids.

    Attributes:
        registration_ids: Ordered target list (duplicates allowed)
        collapse_key: Groups messages so only the latest is delivered
        priority: Delivery priority, "normal" or "high"
        content_available: Wake an inactive iOS client app
        delay_while_idle: Hold the message until the device is active
        time_to_live: Seconds the gateway stores the message if offline
        restricted_package_name: Only deliver to this Android package
        dry_run: Validate the request without delivering it
        data: Custom key/value payload for the app
        notification: Display payload
    """

    registration_ids: List[str] = Field(
        default_factory=list,
        description="Registration ids of the target devices"
    )
    collapse_key: Optional[str] = Field(default=None, description="Collapse key")
    priority: Optional[str] = Field(
        default=None,
        pattern=r"^(normal|high)$",
        description="Message priority"
    )
    content_available: Optional[bool] = None
    delay_while_idle: Optional[bool] = None
    time_to_live: Optional[int] = Field(
        default=None,
        description="Storage time in seconds while the device is offline"
    )
    restricted_package_name: Optional[str] = None
    dry_run: Optional[bool] = None
    data: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Custom data payload"
    )
    notification: Optional[Notification] = None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the gateway's JSON body, omitting unset fields."""
        return self.model_dump(mode="json", exclude_none=True)

    def with_targets(self, registration_ids: List[str]) -> "Message":
        """Return a copy of this message addressed to other targets."""
        return self.model_copy(update={"registration_ids": list(registration_ids)})
