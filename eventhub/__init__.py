"""eventhub: 活动/报名数据同步层"""

__version__ = "0.1.0"
