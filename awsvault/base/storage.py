"""Object storage service blueprint."""

from abc import ABC, abstractmethod


class CloudStorageBlueprint(ABC):
    """Abstract interface for single-object storage operations.

    Maps to AWS S3.
    """

    @abstractmethod
    def put_object(self, bucket_name: str, object_name: str, data: bytes) -> None:
        """Store bytes under a key, replacing any existing object.

        Args:
            bucket_name: Target bucket.
            object_name: Destination object key.
            data: Object contents.
        """
        pass

    @abstractmethod
    def get_object(self, bucket_name: str, object_name: str) -> bytes:
        """Read the contents of an object.

        Args:
            bucket_name: Bucket containing the object.
            object_name: Object key to read.

        Returns:
            The raw object bytes.
        """
        pass
