"""
Event relay services: the broadcast topic and the relay that owns it.
"""
from .broadcast import BroadcastTopic, Subscription, SubscriptionLagged, TopicClosed
from .event_relay import EventRelay

__all__ = [
    "BroadcastTopic",
    "Subscription",
    "SubscriptionLagged",
    "TopicClosed",
    "EventRelay",
]
