from eventhub.realtime.subscriptions import Subscription, SubscriptionManager

__all__ = ["Subscription", "SubscriptionManager"]
