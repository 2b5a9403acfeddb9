from .sqs import Message, QueueClient

__all__ = ["Message", "QueueClient"]
