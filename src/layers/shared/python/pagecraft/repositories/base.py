"""Base repository class for DynamoDB operations."""

import os
from typing import Any, Generic, TypeVar

import boto3
import structlog
from botocore.exceptions import ClientError

from pagecraft.models.base import BaseModel
from pagecraft.utils.exceptions import ConflictError, NotFoundError

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Base repository for the single-table content store.

    Documents and their versions share a partition (``CONTENT#{id}``);
    writes are conditional so concurrent writers surface as ConflictError.
    """

    def __init__(
        self,
        model_class: type[T],
        table_name: str | None = None,
    ):
        """Initialize repository.

        Args:
            model_class: The Pydantic model class for this repository.
            table_name: DynamoDB table name. Defaults to TABLE_NAME env var.
        """
        self.model_class = model_class
        self.table_name = table_name or os.environ.get("TABLE_NAME", "pagecraft-dev")
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Get DynamoDB resource (lazy initialization)."""
        if self._dynamodb is None:
            self._dynamodb = boto3.resource("dynamodb")
        return self._dynamodb

    @property
    def table(self):
        """Get DynamoDB table (lazy initialization)."""
        if self._table is None:
            self._table = self.dynamodb.Table(self.table_name)
        return self._table

    def _build_key(self, pk: str, sk: str) -> dict[str, str]:
        return {"PK": pk, "SK": sk}

    def get(self, pk: str, sk: str) -> T | None:
        """Get an item by its primary key.

        Args:
            pk: Partition key value.
            sk: Sort key value.

        Returns:
            Model instance or None if not found.
        """
        try:
            response = self.table.get_item(Key=self._build_key(pk, sk))
        except ClientError as e:
            logger.error("DynamoDB get_item failed", error=str(e), pk=pk, sk=sk)
            raise

        item = response.get("Item")
        if not item:
            return None
        return self.model_class.from_dynamodb(item)

    def get_or_raise(self, pk: str, sk: str, resource_type: str) -> T:
        """Get an item or raise NotFoundError.

        Raises:
            NotFoundError: If item not found.
        """
        item = self.get(pk, sk)
        if not item:
            resource_id = sk.split("#", 1)[-1] if "#" in sk else sk
            raise NotFoundError(resource_type, resource_id)
        return item

    def _write(self, item: T, **kwargs: Any) -> None:
        db_item = item.to_dynamodb()
        db_item.update(item.get_keys())
        self.table.put_item(Item=db_item, **kwargs)

    def create(self, item: T) -> T:
        """Create a new item (fails if it exists).

        Args:
            item: Model instance to create.

        Returns:
            The created model instance.

        Raises:
            ConflictError: If the item already exists.
        """
        item.update_timestamp()
        try:
            self._write(item, ConditionExpression="attribute_not_exists(PK)")
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ConflictError("Item already exists", conflict_type="duplicate")
            logger.error("DynamoDB put_item failed", error=str(e))
            raise

        logger.debug(
            "Item created",
            pk=item.get_pk(),
            sk=item.get_sk(),
            model=self.model_class.__name__,
        )
        return item

    def update(self, item: T) -> T:
        """Update an existing item with optimistic locking.

        Args:
            item: Model instance to update.

        Returns:
            The updated model instance.

        Raises:
            ConflictError: If the stored version no longer matches.
        """
        old_version = item.version
        item.increment_version()
        item.update_timestamp()

        try:
            self._write(
                item,
                ConditionExpression="version = :old_version",
                ExpressionAttributeValues={":old_version": old_version},
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ConflictError(
                    "Item was modified by another process", conflict_type="version_mismatch"
                )
            logger.error("DynamoDB update failed", error=str(e))
            raise

        logger.debug("Item updated", pk=item.get_pk(), sk=item.get_sk(), version=item.version)
        return item

    def query(
        self,
        pk: str,
        sk_prefix: str | None = None,
        limit: int | None = None,
        scan_forward: bool = True,
    ) -> list[T]:
        """Query items of one partition.

        Args:
            pk: Partition key value.
            sk_prefix: Optional sort key prefix.
            limit: Maximum items to return.
            scan_forward: Sort direction (True = ascending).

        Returns:
            List of model instances.
        """
        if sk_prefix:
            key_condition = "PK = :pk AND begins_with(SK, :sk_prefix)"
            expr_values = {":pk": pk, ":sk_prefix": sk_prefix}
        else:
            key_condition = "PK = :pk"
            expr_values = {":pk": pk}

        kwargs: dict[str, Any] = {
            "KeyConditionExpression": key_condition,
            "ExpressionAttributeValues": expr_values,
            "ScanIndexForward": scan_forward,
        }
        if limit:
            kwargs["Limit"] = limit

        items: list[T] = []
        try:
            while True:
                response = self.table.query(**kwargs)
                items.extend(
                    self.model_class.from_dynamodb(item) for item in response.get("Items", [])
                )
                last_key = response.get("LastEvaluatedKey")
                if not last_key or (limit and len(items) >= limit):
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as e:
            logger.error("DynamoDB query failed", error=str(e), pk=pk)
            raise

        return items[:limit] if limit else items
