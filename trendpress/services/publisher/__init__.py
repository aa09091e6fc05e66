"""Publishing of generated articles."""

from trendpress.services.publisher.json_publisher import JSONPublisher

__all__ = ["JSONPublisher"]
