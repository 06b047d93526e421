"""Storage adapters for transactions.

``TransactionRepository`` is the capability the service depends on.
``MongoTransactionRepository`` is the production adapter over a motor
collection; ``InMemoryTransactionRepository`` keeps records in a dict
for tests and Mongo-less local runs.
"""

from __future__ import annotations

import datetime
from typing import Dict, List, Optional, Protocol

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING

from finance_tracker.db.models.transaction_model import (
    TransactionModel,
    TransactionType,
    from_document,
    to_document,
)


class TransactionRepository(Protocol):
    async def save(self, txn: TransactionModel) -> TransactionModel:
        """Insert ``txn`` when it has no id, otherwise overwrite the stored record."""

    async def find_by_id(self, transaction_id: str) -> Optional[TransactionModel]:
        """Return the record with this id, or None."""

    async def find_all(self) -> List[TransactionModel]:
        """Return every record in storage order."""

    async def exists_by_id(self, transaction_id: str) -> bool:
        ...

    async def delete_by_id(self, transaction_id: str) -> None:
        ...

    async def count(self) -> int:
        ...

    async def find_by_type(self, txn_type: TransactionType) -> List[TransactionModel]:
        ...

    async def find_by_date_between(
        self, start: datetime.date, end: datetime.date
    ) -> List[TransactionModel]:
        """Return records dated within ``[start, end]``."""

    async def find_by_type_and_date_between(
        self, txn_type: TransactionType, start: datetime.date, end: datetime.date
    ) -> List[TransactionModel]:
        ...

    async def find_by_category(self, category: str) -> List[TransactionModel]:
        ...


def _parse_object_id(transaction_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(transaction_id)
    except (InvalidId, TypeError):
        return None


def _midnight(day: datetime.date) -> datetime.datetime:
    return datetime.datetime(day.year, day.month, day.day)


class MongoTransactionRepository:
    def __init__(self, collection: AsyncIOMotorCollection):
        """
        collection is a Motor collection object (async)
        e.g. collection = get_database()["transactions"]
        """
        self.collection = collection

    async def save(self, txn: TransactionModel) -> TransactionModel:
        doc = to_document(txn)
        if txn.id is None:
            result = await self.collection.insert_one(doc)
            return txn.model_copy(update={"id": str(result.inserted_id)})

        object_id = _parse_object_id(txn.id)
        if object_id is None:
            raise ValueError(f"Invalid transaction id: {txn.id}")
        await self.collection.replace_one({"_id": object_id}, doc, upsert=True)
        return txn

    async def find_by_id(self, transaction_id: str) -> Optional[TransactionModel]:
        object_id = _parse_object_id(transaction_id)
        if object_id is None:
            return None
        doc = await self.collection.find_one({"_id": object_id})
        return from_document(doc) if doc else None

    async def find_all(self) -> List[TransactionModel]:
        return await self._find({})

    async def exists_by_id(self, transaction_id: str) -> bool:
        object_id = _parse_object_id(transaction_id)
        if object_id is None:
            return False
        return await self.collection.count_documents({"_id": object_id}, limit=1) > 0

    async def delete_by_id(self, transaction_id: str) -> None:
        object_id = _parse_object_id(transaction_id)
        if object_id is None:
            return
        await self.collection.delete_one({"_id": object_id})

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def find_by_type(self, txn_type: TransactionType) -> List[TransactionModel]:
        return await self._find({"type": txn_type.value})

    async def find_by_date_between(self, start, end) -> List[TransactionModel]:
        return await self._find({"date": {"$gte": _midnight(start), "$lte": _midnight(end)}})

    async def find_by_type_and_date_between(self, txn_type, start, end) -> List[TransactionModel]:
        return await self._find({
            "type": txn_type.value,
            "date": {"$gte": _midnight(start), "$lte": _midnight(end)},
        })

    async def find_by_category(self, category: str) -> List[TransactionModel]:
        return await self._find({"category": category})

    # create helpful indexes (run at startup)
    async def ensure_indexes(self):
        await self.collection.create_index([("date", ASCENDING)])
        await self.collection.create_index([("type", ASCENDING), ("date", ASCENDING)])
        await self.collection.create_index([("category", ASCENDING)])

    async def _find(self, query: dict) -> List[TransactionModel]:
        cursor = self.collection.find(query)
        docs = await cursor.to_list(length=None)
        return [from_document(doc) for doc in docs]


class InMemoryTransactionRepository:
    """Process-local storage with generated ObjectId-style ids."""

    def __init__(self, transactions: Optional[List[TransactionModel]] = None):
        self._records: Dict[str, TransactionModel] = {}
        for txn in transactions or []:
            self._records[txn.id or str(ObjectId())] = txn

    async def save(self, txn: TransactionModel) -> TransactionModel:
        if txn.id is None:
            txn = txn.model_copy(update={"id": str(ObjectId())})
        self._records[txn.id] = txn.model_copy()
        return txn

    async def find_by_id(self, transaction_id: str) -> Optional[TransactionModel]:
        txn = self._records.get(transaction_id)
        return txn.model_copy() if txn else None

    async def find_all(self) -> List[TransactionModel]:
        return [txn.model_copy() for txn in self._records.values()]

    async def exists_by_id(self, transaction_id: str) -> bool:
        return transaction_id in self._records

    async def delete_by_id(self, transaction_id: str) -> None:
        self._records.pop(transaction_id, None)

    async def count(self) -> int:
        return len(self._records)

    async def find_by_type(self, txn_type: TransactionType) -> List[TransactionModel]:
        return [txn for txn in await self.find_all() if txn.type == txn_type]

    async def find_by_date_between(self, start, end) -> List[TransactionModel]:
        return [
            txn for txn in await self.find_all()
            if txn.date is not None and start <= txn.date <= end
        ]

    async def find_by_type_and_date_between(self, txn_type, start, end) -> List[TransactionModel]:
        return [txn for txn in await self.find_by_date_between(start, end) if txn.type == txn_type]

    async def find_by_category(self, category: str) -> List[TransactionModel]:
        return [txn for txn in await self.find_all() if txn.category == category]
