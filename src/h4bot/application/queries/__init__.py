"""Application Queries (CQRS Read Side)."""

from h4bot.application.queries.get_queue import GetQueueHandler, GetQueueQuery, QueueInfo

__all__ = ["GetQueueQuery", "GetQueueHandler", "QueueInfo"]
